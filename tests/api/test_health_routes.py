"""Health routes — liveness and readiness."""

import pytest

from taskboard.core.domain_types import Table
from taskboard.infrastructure import database
from taskboard.infrastructure.database import DatabaseSessionManager


@pytest.fixture
async def store(monkeypatch):
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    monkeypatch.setattr(database, "db_manager", manager)
    yield manager
    await manager.dispose()


async def test_liveness(client):
    response = await client.get("/api/v1/health/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_not_ready_without_store(client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", None)
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json()["reason"] == "database_unavailable"


async def test_ready_after_initial_load(client, store):
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["checks"] == {"database": "healthy", "board": "loaded"}


async def test_ready_reports_failed_load(client, store, gateway):
    gateway.fail("select", Table.TASKS)
    await client.post("/api/v1/board/reload")
    response = await client.get("/api/v1/health/ready")
    assert response.json()["checks"]["board"] == "load_failed"
