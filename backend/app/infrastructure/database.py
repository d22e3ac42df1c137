"""Database Session Manager — async engine + sessions behind the database artifact backend.

Invariants:
    - Every session rolls back on a SQLAlchemy fault before the error leaves it
    - SQLAlchemy faults are re-raised as StorageUnavailableError (core/errors.py)
    - Server databases get a pre-pinged, recycled connection pool; SQLite keeps
      the dialect's default pool

Design Decisions:
    - Process-wide db_manager created by the FastAPI lifespan. The engine is
      process state; the ArtifactStore handle built on top of it is per request
    - expire_on_commit=False: rows are read after commit without lazy loads
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from app.core.errors import StorageUnavailableError

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors
_FAULT_REASONS: tuple[tuple[type[SQLAlchemyError], str], ...] = (
    (IntegrityError, "integrity constraint violated"),
    (OperationalError, "connection or operational error"),
    (DBAPIError, "database driver error"),
    (SQLAlchemyError, "database operation failed"),
)


def _fault_reason(exc: SQLAlchemyError) -> str:
    return next(reason for kind, reason in _FAULT_REASONS if isinstance(exc, kind))


class DatabaseSessionManager:
    """Owns the async engine and hands out sessions that map DB faults."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs = {}
        if not database_url.startswith("sqlite"):
            engine_kwargs = {
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_pre_ping": True,
                "pool_recycle": 3600,
            }
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            reason = _fault_reason(e)
            logger.error(f"Artifact DB {reason}: {e}")
            raise StorageUnavailableError(reason) from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """SELECT 1 through a fresh session; False on any failure."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Set by the lifespan when STORAGE_BACKEND=database
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> None:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def close_db() -> None:
    global db_manager
    if db_manager is not None:
        await db_manager.dispose()
        db_manager = None
