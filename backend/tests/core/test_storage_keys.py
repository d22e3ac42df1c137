"""Storage Keys — tests for content-addressed variant names."""

from app.core.domain_types import (
    SCALE_FACTORS, ContentFingerprint, ImageFormat, ScaleFactor,
)
from app.core.storage_keys import storage_key, storage_stem

FP = ContentFingerprint("ab" * 32)


def test_original_key_has_no_scale_suffix():
    assert storage_key(FP, ScaleFactor.ORIGINAL, ImageFormat.PNG) == f"{FP}.png"


def test_upscaled_keys_carry_scale_suffix():
    assert storage_key(FP, ScaleFactor.X2, ImageFormat.PNG) == f"{FP}_2x.png"
    assert storage_key(FP, ScaleFactor.X16, ImageFormat.PNG) == f"{FP}_16x.png"


def test_stem_without_extension():
    assert storage_stem(FP, ScaleFactor.X8) == f"{FP}_8x"


def test_keys_are_distinct_across_scales():
    keys = {storage_key(FP, s, ImageFormat.PNG) for s in SCALE_FACTORS}
    assert len(keys) == len(SCALE_FACTORS)
