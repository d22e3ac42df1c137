"""Artifact Stores — ArtifactStore implementations for memory, database, and MinIO/S3.

Invariants:
    - put() either durably stores (key, data, content_type) or raises PersistenceError
    - Writing an existing key overwrites it (content-addressed keys make this idempotent)
    - No retries here; a failed put is reported once to the orchestrator
    - Store handles are cheap wrappers, built per request over process-level resources

Design Decisions:
    - Database backend uses a dialect upsert instead of session.merge(): two requests
      carrying identical bytes may race on the same key without an IntegrityError
    - MinIO client is synchronous; calls run in a worker thread so the five
      concurrent puts of one request do not block the event loop
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from io import BytesIO

from minio import Minio
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from app.core.domain_types import StorageKey
from app.core.errors import PersistenceError
from app.infrastructure.database import DatabaseSessionManager
from app.models.stored_artifact import StoredArtifact

logger = logging.getLogger(__name__)


# ─── In-memory ──────────────────────────────────────────────────

@dataclass(frozen=True)
class StoredObject:
    data: bytes
    content_type: str


class InMemoryArtifactStore:
    """Dict-backed store for local development and tests."""

    def __init__(self, objects: dict[str, StoredObject] | None = None):
        self.objects = objects if objects is not None else {}

    async def put(self, key: StorageKey, data: bytes, content_type: str) -> None:
        self.objects[key] = StoredObject(data=data, content_type=content_type)

    async def ping(self) -> bool:
        return True


# ─── Database (SQLAlchemy) ──────────────────────────────────────

class DatabaseArtifactStore:
    """Stores each variant as a row in the artifacts table."""

    def __init__(self, manager: DatabaseSessionManager):
        self._manager = manager

    def _upsert(self, key: StorageKey, data: bytes, content_type: str):
        dialect = self._manager.engine.dialect.name
        insert = pg_insert if dialect == "postgresql" else sqlite_insert
        values = {
            "key": key,
            "content_type": content_type,
            "data": data,
            "size_bytes": len(data),
            "updated_at": datetime.now(timezone.utc),
        }
        stmt = insert(StoredArtifact).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=[StoredArtifact.key],
            set_={k: v for k, v in values.items() if k != "key"},
        )

    async def put(self, key: StorageKey, data: bytes, content_type: str) -> None:
        try:
            async with self._manager.session() as db:
                await db.execute(self._upsert(key, data, content_type))
                await db.commit()
        except Exception as e:
            raise PersistenceError(str(e), key) from e

    async def ping(self) -> bool:
        return await self._manager.health_check()


# ─── MinIO / S3 ─────────────────────────────────────────────────

def create_minio_client(
    endpoint: str, access_key: str, secret_key: str, secure: bool = False,
) -> Minio:
    return Minio(
        endpoint,
        access_key=access_key,
        secret_key=secret_key,
        secure=secure,
    )


def ensure_bucket(client: Minio, bucket_name: str) -> None:
    """Create the bucket if missing. Called once on startup."""
    if not client.bucket_exists(bucket_name):
        client.make_bucket(bucket_name)
        logger.info(f"Created bucket {bucket_name}")


class MinioArtifactStore:
    """Stores each variant as an object in an S3-compatible bucket."""

    def __init__(self, client: Minio, bucket_name: str):
        self.client = client
        self.bucket_name = bucket_name

    def _put_blocking(self, key: str, data: bytes, content_type: str) -> None:
        self.client.put_object(
            self.bucket_name,
            key,
            BytesIO(data),
            len(data),
            content_type=content_type,
        )

    async def put(self, key: StorageKey, data: bytes, content_type: str) -> None:
        try:
            await asyncio.to_thread(self._put_blocking, key, data, content_type)
        except Exception as e:
            raise PersistenceError(str(e), key) from e

    async def ping(self) -> bool:
        try:
            return await asyncio.to_thread(self.client.bucket_exists, self.bucket_name)
        except Exception as e:
            logger.error(f"MinIO health check failed: {e}")
            return False
