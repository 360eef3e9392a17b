"""Shared fixtures: a dataset that passes every check, plus an API client backed by fakeredis."""

from __future__ import annotations

import copy

import pytest
from fakeredis import FakeServer
from fakeredis import aioredis as fake_aioredis
from fastapi.testclient import TestClient

CLEAN_CLIENTS = [
    {
        "ClientID": "C1",
        "ClientName": "Acme Corp",
        "PriorityLevel": 3,
        "RequestedTaskIDs": ["T1", "T2"],
        "GroupTag": "enterprise",
        "AttributesJSON": '{"budget": 50000}',
    },
    {
        "ClientID": "C2",
        "ClientName": "Tech Solutions",
        "PriorityLevel": 5,
        "RequestedTaskIDs": ["T2"],
        "GroupTag": "standard",
        "AttributesJSON": "{}",
    },
]

CLEAN_WORKERS = [
    {
        "WorkerID": "W1",
        "WorkerName": "Alice Johnson",
        "Skills": ["Python", "SQL"],
        "AvailableSlots": [1, 2, 3],
        "MaxLoadPerPhase": 2,
        "WorkerGroup": "Data",
        "QualificationLevel": 5,
    },
    {
        "WorkerID": "W2",
        "WorkerName": "Bob Smith",
        "Skills": ["Python"],
        "AvailableSlots": [1, 2],
        "MaxLoadPerPhase": 1,
        "WorkerGroup": "Backend",
        "QualificationLevel": 3,
    },
]

CLEAN_TASKS = [
    {
        "TaskID": "T1",
        "TaskName": "ETL job",
        "Category": "Development",
        "Duration": 1,
        "RequiredSkills": ["Python"],
        "PreferredPhases": [1, 2],
        "MaxConcurrent": 2,
    },
    {
        "TaskID": "T2",
        "TaskName": "Reporting",
        "Category": "Analytics",
        "Duration": 2,
        "RequiredSkills": ["SQL"],
        "PreferredPhases": [2, 3],
        "MaxConcurrent": 1,
    },
]


@pytest.fixture
def clean_clients() -> list[dict]:
    return copy.deepcopy(CLEAN_CLIENTS)


@pytest.fixture
def clean_workers() -> list[dict]:
    return copy.deepcopy(CLEAN_WORKERS)


@pytest.fixture
def clean_tasks() -> list[dict]:
    return copy.deepcopy(CLEAN_TASKS)


@pytest.fixture
def api_client(monkeypatch):
    """TestClient whose lifespan connects to an isolated in-memory Redis."""
    from data_alchemist import main

    server = FakeServer()
    monkeypatch.setattr(
        main.aioredis,
        "from_url",
        lambda *args, **kwargs: fake_aioredis.FakeRedis(server=server, decode_responses=True),
    )
    with TestClient(main.app) as client:
        yield client


@pytest.fixture
def api_client_without_redis(monkeypatch):
    """TestClient whose lifespan fails to reach Redis."""
    from data_alchemist import main

    def _unreachable(*args, **kwargs):
        raise ConnectionError("redis unreachable")

    monkeypatch.setattr(main.aioredis, "from_url", _unreachable)
    with TestClient(main.app) as client:
        yield client
