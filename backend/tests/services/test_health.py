"""Health & Readiness — liveness always 200, readiness reflects the database."""

from invoicing.config import get_settings
import invoicing.infrastructure.database as db_module


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    data = res.json()
    assert data["service"] == "invoicing-api"
    assert data["version"] == get_settings().service_version
    assert data["uptime_seconds"] >= 0


async def test_readiness_with_database(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"
    assert res.json()["database"] == "sqlite"


async def test_readiness_without_database_returns_503(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"
