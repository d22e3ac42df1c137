"""upix API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UpixError → UserFacing / Opaque responses
    - CORS configured from settings (not hardcoded)
    - Storage backend resources initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - A MinIO bucket that cannot be prepared at startup is logged, not fatal:
      readiness reports it and uploads fail as opaque 500s
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import health, images
from app.config import Settings, get_settings
from app.infrastructure.artifact_stores import create_minio_client, ensure_bucket
from app.infrastructure.database import close_db, init_db
from app.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def _init_storage(settings: Settings) -> None:
    if settings.storage_backend == "database":
        init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
    elif settings.storage_backend == "minio":
        try:
            client = create_minio_client(
                settings.minio_endpoint,
                settings.minio_access_key,
                settings.minio_secret_key,
                secure=settings.minio_secure,
            )
            ensure_bucket(client, settings.minio_bucket)
        except Exception as e:
            logger.error(f"Could not prepare bucket {settings.minio_bucket}: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    _init_storage(settings)
    logger.info(f"upix API started (storage: {settings.storage_backend})")
    yield
    await close_db()
    logger.info("upix API shutting down")


app = FastAPI(title="upix API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(images.router)
