"""Request-scoped Dependencies — artifact store and orchestrator providers.

Invariants:
    - Every request receives its own ArtifactStore handle (never a module-level store)
    - Binding failures surface as StorageUnavailableError → opaque 500
    - The handle is shared read-only by the concurrent variant uploads of that request

Design Decisions:
    - Backend chosen from settings at request time: tests swap it with
      app.dependency_overrides[get_artifact_store]
    - Readiness binds through get_readiness_store, which reports a binding
      failure as None instead of raising
"""

import logging

from fastapi import Depends

from app.config import Settings, get_settings
from app.core.errors import StorageUnavailableError
from app.core.repository_protocols import ArtifactStore
from app.infrastructure import database
from app.infrastructure.artifact_stores import (
    DatabaseArtifactStore,
    InMemoryArtifactStore,
    MinioArtifactStore,
    StoredObject,
    create_minio_client,
)
from app.services.upload_orchestrator import UploadOrchestrator

logger = logging.getLogger(__name__)

# Backing dict of the memory backend, kept for the life of the process
_memory_objects: dict[str, StoredObject] = {}


def get_artifact_store(
    settings: Settings = Depends(get_settings),
) -> ArtifactStore:
    """Bind the configured artifact store for this request."""
    backend = settings.storage_backend
    if backend == "memory":
        return InMemoryArtifactStore(_memory_objects)

    if backend == "database":
        if database.db_manager is None:
            logger.error("failed to get bindings to the database artifact store")
            raise StorageUnavailableError("database not initialized")
        return DatabaseArtifactStore(database.db_manager)

    try:
        client = create_minio_client(
            settings.minio_endpoint,
            settings.minio_access_key,
            settings.minio_secret_key,
            secure=settings.minio_secure,
        )
    except Exception as e:
        logger.error(f"failed to get bindings to the MinIO bucket: {e}")
        raise StorageUnavailableError(str(e)) from e
    return MinioArtifactStore(client, settings.minio_bucket)


def get_upload_orchestrator(
    store: ArtifactStore = Depends(get_artifact_store),
    settings: Settings = Depends(get_settings),
) -> UploadOrchestrator:
    return UploadOrchestrator(
        store, put_timeout_seconds=settings.put_timeout_seconds,
    )


def get_readiness_store(
    settings: Settings = Depends(get_settings),
) -> ArtifactStore | None:
    """Bind the store for the readiness probe; None when binding fails."""
    try:
        return get_artifact_store(settings)
    except StorageUnavailableError:
        return None
