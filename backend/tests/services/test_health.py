"""Health & Readiness Probes — liveness always up, readiness follows the store."""

import app.infrastructure.database as db_module
from app.api.dependencies import get_readiness_store
from app.config import Settings, get_settings
from app.main import app


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_ready_when_store_healthy(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json() == {
        "status": "ready",
        "checks": {"storage": "healthy", "backend": "memory"},
    }


async def test_not_ready_when_store_down(client, store):
    store.healthy = False

    res = await client.get("/api/v1/health/ready")

    assert res.status_code == 503
    assert res.json() == {"status": "not_ready", "reason": "storage_unavailable"}


async def test_not_ready_when_store_cannot_be_bound(client, monkeypatch):
    # database backend selected but the engine was never initialized
    monkeypatch.setattr(db_module, "db_manager", None)
    app.dependency_overrides.pop(get_readiness_store)
    app.dependency_overrides[get_settings] = lambda: Settings(storage_backend="database")

    res = await client.get("/api/v1/health/ready")

    assert res.status_code == 503
    assert res.json() == {"status": "not_ready", "reason": "storage_unavailable"}
