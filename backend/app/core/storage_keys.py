"""Storage Keys — content-addressed object names for derived variants.

Invariants:
    - Original:  {fingerprint}.{ext}
    - Upscaled:  {fingerprint}_{scale}x.{ext}
    - Pure function of (fingerprint, scale, format): resubmission maps to the same keys
"""

from app.core.domain_types import (
    ContentFingerprint, ImageFormat, ScaleFactor, StorageKey,
)


def storage_stem(fp: ContentFingerprint, scale: ScaleFactor) -> str:
    """File name without extension."""
    if scale == ScaleFactor.ORIGINAL:
        return fp
    return f"{fp}_{int(scale)}x"


def storage_key(
    fp: ContentFingerprint, scale: ScaleFactor, image_format: ImageFormat,
) -> StorageKey:
    return StorageKey(f"{storage_stem(fp, scale)}.{image_format.extension}")
