"""Error Handlers — global exception handlers for the upix API.

Invariants:
    - UpixError → to_failure() → failure_response(): the only conversion to the wire
    - UserFacing → JSON {"message": ...}; Opaque → empty body, status only
    - RequestValidationError → 400 with a generic message
    - Exception (catch-all) → empty 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (UpixError), validation (Pydantic), catch-all (Exception)
    - Log level follows severity, not the failure variant: client faults (400, 413)
      at warning, internal faults at error with their code
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from app.core.errors import (
    ErrorSeverity, Failure, UpixError, UserFacing, to_failure,
)

logger = logging.getLogger(__name__)


def failure_response(failure: Failure) -> Response:
    """Render a failure variant as an HTTP response."""
    if isinstance(failure, UserFacing):
        return JSONResponse(
            status_code=failure.status, content={"message": failure.message},
        )
    return Response(status_code=failure.status)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_upix_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_upix_error_handler(app: FastAPI) -> None:

    @app.exception_handler(UpixError)
    async def upix_error_handler(request: Request, exc: UpixError):
        extra = {**exc.log_extra(), "path": request.url.path}
        if exc.severity == ErrorSeverity.WARNING:
            logger.warning(f"Rejected submission: {exc.message}", extra=extra)
        else:
            logger.error(f"UpixError: {exc.message}", extra=extra)
        return failure_response(to_failure(exc))


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return failure_response(
            UserFacing(status.HTTP_400_BAD_REQUEST, "Invalid request data"),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
