"""API tests — full request path through FastAPI with an in-memory Redis."""

from __future__ import annotations

API = "/api/v1"


def _payload(clients, workers, tasks, **extra) -> dict:
    return {"clients": clients, "workers": workers, "tasks": tasks, **extra}


class TestHealth:
    def test_healthy_with_redis(self, api_client) -> None:
        response = api_client.get(f"{API}/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["dependencies"]["redis"]["status"] == "healthy"

    def test_degraded_without_redis(self, api_client_without_redis) -> None:
        body = api_client_without_redis.get(f"{API}/health").json()

        assert body["status"] == "degraded"
        assert body["dependencies"]["redis"]["status"] == "unhealthy"

    def test_root(self, api_client) -> None:
        assert api_client.get("/").json()["name"] == "Data Alchemist"


class TestValidate:
    def test_clean_dataset(self, api_client, clean_clients, clean_workers, clean_tasks) -> None:
        response = api_client.post(f"{API}/validate", json=_payload(clean_clients, clean_workers, clean_tasks))

        assert response.status_code == 200
        body = response.json()
        assert body["can_export"] is True
        assert body["defects"] == []
        assert body["sequence"] is None

    def test_defects_and_sequence_echo(self, api_client, clean_clients, clean_workers, clean_tasks) -> None:
        clean_clients[0]["RequestedTaskIDs"] = ["T1", "T99"]
        payload = _payload(clean_clients, clean_workers, clean_tasks, sequence=17)

        body = api_client.post(f"{API}/validate", json=payload).json()

        assert body["sequence"] == 17
        assert body["can_export"] is False
        assert body["summary"]["error"] == 1
        defect = body["defects"][0]
        assert defect["type"] == "unknown_reference"
        assert defect["entity"] == "clients"
        assert defect["entity_id"] == "C1"
        assert defect["field"] == "RequestedTaskIDs"

    def test_validation_works_without_redis(
        self, api_client_without_redis, clean_clients, clean_workers, clean_tasks
    ) -> None:
        response = api_client_without_redis.post(
            f"{API}/validate", json=_payload(clean_clients, clean_workers, clean_tasks)
        )

        assert response.status_code == 200
        assert response.json()["can_export"] is True

    def test_numeric_ids_reach_the_engine(self, api_client) -> None:
        clients = [
            {"ClientID": 7, "ClientName": "Acme", "AttributesJSON": "{}"},
            {"ClientID": "7", "ClientName": "Acme again", "AttributesJSON": "{}"},
        ]

        response = api_client.post(f"{API}/validate", json=_payload(clients, [], []))

        assert response.status_code == 200
        assert [(d["type"], d["entity_id"]) for d in response.json()["defects"]] == [("duplicate_id", "7")]

    def test_absent_attributes_json_is_reported(self, api_client) -> None:
        clients = [{"ClientID": "C1", "ClientName": "Acme", "PriorityLevel": 3}]

        body = api_client.post(f"{API}/validate", json=_payload(clients, [], [])).json()

        assert [d["type"] for d in body["defects"]] == ["broken_json"]

    def test_empty_body_is_valid(self, api_client) -> None:
        body = api_client.post(f"{API}/validate", json={}).json()

        assert body["defects"] == []
        assert body["can_export"] is True


class TestIngest:
    def test_ingest_workers(self, api_client) -> None:
        response = api_client.post(
            f"{API}/ingest/workers",
            json={
                "headers": ["workerid", "WorkerName", "Skills", "AvailableSlots", "MaxLoadPerPhase"],
                "rows": [["W1", "Ann", "Python, SQL", "1,2,3", 2], ["", "", "", "", ""]],
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["entity"] == "workers"
        assert body["skipped_rows"] == 1
        assert body["unmapped_headers"] == ["WorkerGroup", "QualificationLevel"]
        record = body["records"][0]
        assert record["WorkerID"] == "W1"
        assert record["Skills"] == ["Python", "SQL"]
        assert record["AvailableSlots"] == [1, 2, 3]
        assert record["MaxLoadPerPhase"] == 2

    def test_infinite_cells_use_defaults(self, api_client) -> None:
        response = api_client.post(
            f"{API}/ingest/tasks",
            content='{"headers": ["TaskID", "TaskName", "Duration"], "rows": [["T1", "Build", Infinity]]}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        assert response.json()["records"][0]["Duration"] == 1

    def test_unknown_entity(self, api_client) -> None:
        response = api_client.post(f"{API}/ingest/projects", json={"headers": ["ID"], "rows": []})

        assert response.status_code == 404
        assert response.json()["error"] == "UnknownEntityError"

    def test_unrecognized_headers(self, api_client) -> None:
        response = api_client.post(f"{API}/ingest/tasks", json={"headers": ["foo"], "rows": [["1"]]})

        assert response.status_code == 400
        assert response.json()["error"] == "IngestionError"


class TestWorkspaces:
    def test_submit_read_and_export_status(self, api_client, clean_clients, clean_workers, clean_tasks) -> None:
        clean_tasks[0]["MaxConcurrent"] = 9
        payload = _payload(clean_clients, clean_workers, clean_tasks, sequence=1)

        put = api_client.put(f"{API}/workspaces/ws1", json=payload)
        assert put.status_code == 200
        assert put.json()["summary"] == {"error": 0, "warning": 1, "info": 0}

        workspace = api_client.get(f"{API}/workspaces/ws1").json()
        assert workspace["workspace_id"] == "ws1"
        assert workspace["sequence"] == 1
        assert workspace["report"]["defects"][0]["type"] == "max_concurrency"

        status = api_client.get(f"{API}/workspaces/ws1/export-status").json()
        assert status["can_export"] is True
        assert status["blocking_defects"] == 0

    def test_errors_block_export(self, api_client, clean_clients, clean_workers, clean_tasks) -> None:
        clean_clients.append(dict(clean_clients[0]))
        api_client.put(f"{API}/workspaces/ws1", json=_payload(clean_clients, clean_workers, clean_tasks, sequence=1))

        status = api_client.get(f"{API}/workspaces/ws1/export-status").json()

        assert status["can_export"] is False
        assert status["blocking_defects"] == 1

    def test_stale_submission_conflicts(self, api_client, clean_clients, clean_workers, clean_tasks) -> None:
        api_client.put(f"{API}/workspaces/ws1", json=_payload(clean_clients, clean_workers, clean_tasks, sequence=4))

        response = api_client.put(f"{API}/workspaces/ws1", json=_payload([], [], [], sequence=3))

        assert response.status_code == 409
        assert response.json()["current_sequence"] == 4
        assert api_client.get(f"{API}/workspaces/ws1").json()["sequence"] == 4

    def test_negative_sequence_is_rejected(self, api_client) -> None:
        response = api_client.put(f"{API}/workspaces/ws1", json=_payload([], [], [], sequence=-1))

        assert response.status_code == 422

    def test_unknown_workspace(self, api_client) -> None:
        assert api_client.get(f"{API}/workspaces/nope").status_code == 404
        assert api_client.get(f"{API}/workspaces/nope/export-status").status_code == 404
        assert api_client.delete(f"{API}/workspaces/nope").status_code == 404

    def test_delete(self, api_client, clean_clients, clean_workers, clean_tasks) -> None:
        api_client.put(f"{API}/workspaces/ws1", json=_payload(clean_clients, clean_workers, clean_tasks, sequence=1))

        assert api_client.delete(f"{API}/workspaces/ws1").status_code == 204
        assert api_client.get(f"{API}/workspaces/ws1").status_code == 404

    def test_unavailable_without_redis(self, api_client_without_redis) -> None:
        response = api_client_without_redis.put(f"{API}/workspaces/ws1", json=_payload([], [], [], sequence=1))

        assert response.status_code == 503
        assert response.json()["error"] == "StoreUnavailableError"
