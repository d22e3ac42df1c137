"""Service test fixtures — recording artifact store + FastAPI test client.

Invariants:
    - Every test gets a fresh RecordingArtifactStore
    - get_artifact_store and get_readiness_store overridden to return that store
    - Overrides cleared after each test

Design Decisions:
    - httpx AsyncClient over ASGITransport: exercises the real app, handlers and
      dependencies in-process without a server
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_artifact_store, get_readiness_store
from app.main import app

from tests.services.fake_stores import RecordingArtifactStore


@pytest.fixture
def store():
    return RecordingArtifactStore()


@pytest.fixture
async def client(store):
    """FastAPI test client with the artifact store overridden."""
    app.dependency_overrides[get_artifact_store] = lambda: store
    app.dependency_overrides[get_readiness_store] = lambda: store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
