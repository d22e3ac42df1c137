"""Image Routes — liveness text and the single submission endpoint.

Invariants:
    - GET / returns a fixed short body with status 200
    - POST / reads at most max_body_bytes; one byte more → bare 413
    - 200 body is a JSON array of {"scale", "name"}, one entry per scale factor
    - Failures are raised as UpixError and rendered by api/error_handlers.py

Design Decisions:
    - Body streamed chunk by chunk so an oversized upload is rejected before it
      is buffered in full; a declared Content-Length over the cap short-circuits
    - Route stays thin: all pipeline logic lives in services/ingest_image.py
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from app.api.dependencies import get_upload_orchestrator
from app.config import Settings, get_settings
from app.core.enforce_format import resolve_image_format
from app.core.errors import PayloadTooLargeError
from app.schemas.upload import ErrorMessage, UploadedImage
from app.services.ingest_image import ingest_image
from app.services.upload_orchestrator import UploadOrchestrator

router = APIRouter(tags=["images"])


async def read_body_capped(request: Request, limit: int) -> bytes:
    """Read the request body, raising PayloadTooLargeError past limit bytes."""
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError(limit)

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise PayloadTooLargeError(limit)
    return bytes(body)


@router.get("/", response_class=PlainTextResponse)
async def index() -> str:
    return "upix API"


@router.post(
    "/",
    response_model=list[UploadedImage],
    responses={400: {"model": ErrorMessage}, 413: {}, 500: {}},
)
async def upload_image(
    request: Request,
    orchestrator: UploadOrchestrator = Depends(get_upload_orchestrator),
    settings: Settings = Depends(get_settings),
):
    """Validate an image, derive its 1x–16x variants and persist all of them."""
    # header is checked before the body is read
    image_format = resolve_image_format(request.headers.get("content-type"))
    body = await read_body_capped(request, settings.max_body_bytes)
    records = await ingest_image(body, image_format, orchestrator)
    return [UploadedImage.from_record(r) for r in records]
