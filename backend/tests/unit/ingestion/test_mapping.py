"""Unit tests for ingestion.mapping — header matching and row conversion."""

from __future__ import annotations

import pytest

from data_alchemist.exceptions import IngestionError, UnknownEntityError
from data_alchemist.ingestion import convert_rows, map_headers
from data_alchemist.validators import validate


def test_headers_match_case_insensitively_and_trimmed() -> None:
    mapping = map_headers([" clientid", "CLIENTNAME ", "Notes", "prioritylevel"], "clients")

    assert mapping == {"ClientID": 0, "ClientName": 1, "PriorityLevel": 3}


def test_first_matching_header_wins() -> None:
    assert map_headers(["TaskID", "taskid"], "tasks") == {"TaskID": 0}


def test_unknown_entity_is_rejected() -> None:
    with pytest.raises(UnknownEntityError):
        map_headers(["ClientID"], "projects")


def test_convert_clients() -> None:
    headers = ["ClientID", "ClientName", "PriorityLevel", "RequestedTaskIDs", "GroupTag", "AttributesJSON"]
    rows = [
        ["C1", "Acme Corp", "3", "T1, T2", "enterprise", '{"budget": 100}'],
        ["C2", "Globex", 5.0, '["T3"]', None, None],
    ]

    result = convert_rows(headers, rows, "clients")

    assert result.unmapped_headers == []
    first, second = (r.to_row() for r in result.records)
    assert first["PriorityLevel"] == 3
    assert first["RequestedTaskIDs"] == ["T1", "T2"]
    assert second["PriorityLevel"] == 5
    assert second["RequestedTaskIDs"] == ["T3"]
    assert second["GroupTag"] == ""
    assert second["AttributesJSON"] == "{}"


def test_missing_columns_get_defaults_and_are_reported() -> None:
    result = convert_rows(["WorkerName", "Skills"], [["Ann", "Python,SQL"], ["Bob", ""]], "workers")

    assert result.unmapped_headers == [
        "WorkerID",
        "AvailableSlots",
        "MaxLoadPerPhase",
        "WorkerGroup",
        "QualificationLevel",
    ]
    rows = [r.to_row() for r in result.records]
    assert [r["WorkerID"] for r in rows] == ["WORKER_1", "WORKER_2"]
    assert rows[0]["Skills"] == ["Python", "SQL"]
    assert rows[1]["Skills"] == []
    assert rows[0]["MaxLoadPerPhase"] == 1
    assert rows[0]["AvailableSlots"] == []


def test_blank_rows_are_skipped_and_numbering_stays_contiguous() -> None:
    rows = [["", "Alpha"], [None, None], ["  ", ""], ["", "Beta"]]

    result = convert_rows(["TaskID", "TaskName"], rows, "tasks")

    assert result.skipped_rows == 2
    assert [r.to_row()["TaskID"] for r in result.records] == ["TASK_1", "TASK_2"]


def test_short_rows_read_missing_cells_as_empty() -> None:
    result = convert_rows(["TaskID", "TaskName", "Duration"], [["T1"]], "tasks")

    row = result.records[0].to_row()
    assert row["TaskName"] == "Task 1"
    assert row["Duration"] == 1


def test_phase_ranges_are_expanded() -> None:
    result = convert_rows(["TaskID", "TaskName", "PreferredPhases"], [["T1", "Build", "1-3"]], "tasks")

    assert result.records[0].to_row()["PreferredPhases"] == [1, 2, 3]


def test_empty_header_row_is_an_error() -> None:
    with pytest.raises(IngestionError):
        convert_rows([], [["C1"]], "clients")


def test_unrecognized_headers_are_an_error() -> None:
    with pytest.raises(IngestionError, match="None of the headers match"):
        convert_rows(["foo", "bar"], [["1", "2"]], "clients")


def test_converted_records_feed_the_engine() -> None:
    workers = convert_rows(
        ["WorkerID", "WorkerName", "Skills", "AvailableSlots", "MaxLoadPerPhase"],
        [["W1", "Ann", "Python", "[1, 0]", "1"]],
        "workers",
    ).records
    tasks = convert_rows(
        ["TaskID", "TaskName", "Duration", "RequiredSkills", "PreferredPhases", "MaxConcurrent"],
        [["T1", "Build", "1", "Python", "1", "1"]],
        "tasks",
    ).records

    defects = validate([], workers, tasks)

    assert [d.type for d in defects] == ["malformed_list"]
