"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness)
    - GET /api/v1/health/ready returns 503 if the artifact store cannot be bound
      or does not answer ping (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - Readiness binds the store with the same settings as uploads, but a binding
      failure is a 503 rather than an opaque 500
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.dependencies import get_readiness_store
from app.config import Settings, get_settings
from app.core.repository_protocols import ArtifactStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "upix-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(
    store: ArtifactStore | None = Depends(get_readiness_store),
    settings: Settings = Depends(get_settings),
):
    """Readiness probe — includes artifact store binding and connectivity."""
    if store is None or not await store.ping():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "storage_unavailable",
            },
        )
    return {
        "status": "ready",
        "checks": {"storage": "healthy", "backend": settings.storage_backend},
    }
