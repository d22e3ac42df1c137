"""Upload Orchestrator — fan out one derive+encode+persist task per scale factor, join all.

Invariants:
    - Exactly one task per entry of SCALE_FACTORS, all launched together
    - Unconditional join: a failing task never cancels its siblings
    - Success → one UploadRecord per scale, ordered by scale factor
    - Any failure → a single UploadFailedError (opaque 500); partial results are dropped
    - Tasks share only read-only state (decoded image, fingerprint, store handle)

Design Decisions:
    - asyncio.gather(return_exceptions=True) over TaskGroup: TaskGroup cancels
      siblings on the first error, gather lets every put reach a terminal state
    - Variants already persisted when a sibling fails stay in storage. There is
      no rollback; callers retry by resubmitting, which rewrites the same keys
    - put_timeout_seconds is optional; when set, a timed-out put is that task's failure
"""

import asyncio
import logging

from app.core.derive_variants import CANONICAL_FORMAT, derive_variant
from app.core.domain_types import (
    SCALE_FACTORS, ContentFingerprint, DecodedImage, ImageFormat,
    ScaleFactor, UploadRecord,
)
from app.core.errors import ErrorContext, PersistenceError, UpixError, UploadFailedError
from app.core.repository_protocols import ArtifactStore
from app.core.storage_keys import storage_key

logger = logging.getLogger(__name__)


class UploadOrchestrator:
    """Persists every resolution variant of one decoded submission."""

    def __init__(
        self,
        store: ArtifactStore,
        dest_format: ImageFormat = CANONICAL_FORMAT,
        put_timeout_seconds: float | None = None,
    ):
        self.store = store
        self.dest_format = dest_format
        self.put_timeout_seconds = put_timeout_seconds

    async def upload_all(
        self, decoded: DecodedImage, fp: ContentFingerprint,
    ) -> list[UploadRecord]:
        """Run all variant uploads concurrently and aggregate the outcome."""
        results = await asyncio.gather(
            *(self._upload_variant(decoded, fp, scale) for scale in SCALE_FACTORS),
            return_exceptions=True,
        )

        failed: list[int] = []
        records: list[UploadRecord] = []
        for scale, result in zip(SCALE_FACTORS, results):
            if isinstance(result, BaseException):
                failed.append(int(scale))
                self._log_task_failure(fp, scale, result)
            else:
                records.append(result)

        if failed:
            err = UploadFailedError(
                failed, len(SCALE_FACTORS), ErrorContext(fingerprint=fp),
            )
            logger.error(err.message, extra=err.log_extra())
            raise err
        return records

    async def _upload_variant(
        self, decoded: DecodedImage, fp: ContentFingerprint, scale: ScaleFactor,
    ) -> UploadRecord:
        variant = derive_variant(decoded, scale, self.dest_format)
        key = storage_key(fp, scale, self.dest_format)
        logger.info(
            f"uploading image... (key: {key})",
            extra={"fingerprint": fp, "scale": int(scale), "size_bytes": len(variant.data)},
        )

        put = self.store.put(key, variant.data, variant.content_type)
        if self.put_timeout_seconds is None:
            await put
        else:
            try:
                await asyncio.wait_for(put, timeout=self.put_timeout_seconds)
            except asyncio.TimeoutError as e:
                raise PersistenceError(
                    f"put timed out after {self.put_timeout_seconds}s", key,
                ) from e

        if scale == ScaleFactor.ORIGINAL:
            logger.info(f"uploaded original image (name: {key})", extra={"storage_key": key})
        else:
            logger.info(
                f"uploaded {int(scale)}x upscaled image (name: {key})",
                extra={"storage_key": key, "scale": int(scale)},
            )
        return UploadRecord(scale=scale, name=key)

    def _log_task_failure(
        self, fp: ContentFingerprint, scale: ScaleFactor, exc: BaseException,
    ) -> None:
        if isinstance(exc, UpixError):
            extra = exc.log_extra()
            extra["fingerprint"] = fp
            extra["scale"] = int(scale)
            logger.error(f"Variant upload failed: {exc.message}", extra=extra)
        else:
            logger.error(
                f"Variant upload failed with unexpected error: {exc!r}",
                extra={"fingerprint": fp, "scale": int(scale)},
                exc_info=exc,
            )
