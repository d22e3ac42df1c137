"""Image Ingestion — fingerprint, decode, check and persist one submission.

Invariants:
    - Called with a format already resolved from the Content-Type header
    - All user-input faults are raised before any persistence work starts
    - The fingerprint is taken over the body as received, before decoding
    - Order: hash → header dimensions → pixel decode → fan-out upload

Design Decisions:
    - Dimension checks run on the parsed header, so an oversized grid is
      rejected without allocating its pixels
"""

import logging

from app.core.content_hash import fingerprint
from app.core.decode_image import decode_image
from app.core.domain_types import ImageFormat, UploadRecord
from app.core.enforce_dimensions import validate_dimensions
from app.core.errors import ErrorContext, InternalDecodeError
from app.services.upload_orchestrator import UploadOrchestrator

logger = logging.getLogger(__name__)


async def ingest_image(
    body: bytes,
    image_format: ImageFormat,
    orchestrator: UploadOrchestrator,
) -> list[UploadRecord]:
    fp = fingerprint(body)

    try:
        decoded = decode_image(body, image_format, check_size=validate_dimensions)
    except InternalDecodeError as e:
        e.context = ErrorContext(fingerprint=fp)
        logger.error(e.message, extra=e.log_extra(), exc_info=e)
        raise

    logger.info(
        f"accepted {image_format.value} image {decoded.width}x{decoded.height}",
        extra={"fingerprint": fp, "size_bytes": len(body)},
    )
    return await orchestrator.upload_all(decoded, fp)
