"""Health Probe tests — liveness always 200, readiness follows the database."""

import pytest

from multiblog.infrastructure import database


class _StubManager:
    def __init__(self, healthy: bool):
        self.healthy = healthy

    async def health_check(self) -> bool:
        return self.healthy


async def test_liveness_reports_app_version(client):
    resp = await client.get("/api/v1/health/")
    assert resp.status_code == 200
    assert resp.json() == {
        "status": "healthy", "service": "multiblog-api", "version": "1.0.0",
    }


async def test_readiness_ok(client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", _StubManager(True))
    resp = await client.get("/api/v1/health/ready")
    assert resp.status_code == 200
    assert resp.json()["checks"]["database"]["status"] == "healthy"


@pytest.mark.parametrize("manager, reason", [
    (None, "database_not_initialized"),
    (_StubManager(False), "database_unavailable"),
])
async def test_readiness_not_ready(client, monkeypatch, manager, reason):
    monkeypatch.setattr(database, "db_manager", manager)
    resp = await client.get("/api/v1/health/ready")
    assert resp.status_code == 503
    assert resp.json()["reason"] == reason


async def test_responses_carry_request_id(client):
    resp = await client.get(
        "/api/v1/health/", headers={"X-Request-ID": "req-123"},
    )
    assert resp.headers["x-request-id"] == "req-123"

    minted = await client.get("/api/v1/health/")
    assert len(minted.headers["x-request-id"]) == 32
