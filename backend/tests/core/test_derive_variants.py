"""Variant Derivation — tests for block-replication upscaling and PNG encoding.

Tests cover:
    - Scale 1 keeps dimensions; scale s multiplies both sides by s
    - Every s×s output block replicates exactly one source pixel
    - Output is always PNG, independent of the input format
    - Encoding is deterministic
    - Encoder failure → EncodingError (opaque 500)
"""

import pytest
from PIL import Image

from app.core.decode_image import decode_image
from app.core.derive_variants import (
    CANONICAL_FORMAT, derive_variant, encode_image, upscale,
)
from app.core.domain_types import SCALE_FACTORS, ImageFormat, ScaleFactor
from app.core.errors import EncodingError, Opaque, to_failure

from tests.image_factory import image_bytes, make_image, open_png, pixel_at

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def test_original_scale_is_identity():
    img = make_image(5, 3)
    assert upscale(img, ScaleFactor.ORIGINAL) is img


@pytest.mark.parametrize("scale", SCALE_FACTORS)
def test_upscaled_size(scale):
    out = upscale(make_image(7, 3), scale)
    assert out.size == (7 * int(scale), 3 * int(scale))


def test_scale_four_blocks_replicate_source_pixels():
    width, height, s = 6, 4, 4
    out = upscale(make_image(width, height), ScaleFactor.X4)
    assert out.size == (width * s, height * s)
    for y in range(height * s):
        for x in range(width * s):
            assert out.getpixel((x, y)) == pixel_at(x // s, y // s)


def test_derive_variant_encodes_png_from_any_input():
    decoded = decode_image(image_bytes(10, 6, "BMP"), ImageFormat.BMP)
    variant = derive_variant(decoded, ScaleFactor.X2)
    assert variant.image_format is CANONICAL_FORMAT is ImageFormat.PNG
    assert variant.content_type == "image/png"
    assert variant.data.startswith(PNG_SIGNATURE)
    assert open_png(variant.data).size == (20, 12)


def test_derive_variant_round_trips_pixels():
    decoded = decode_image(image_bytes(4, 4), ImageFormat.PNG)
    variant = derive_variant(decoded, ScaleFactor.X8)
    out = open_png(variant.data)
    assert out.getpixel((8 * 3 + 5, 8 * 2 + 1))[:3] == pixel_at(3, 2)


def test_encoding_is_deterministic():
    decoded = decode_image(image_bytes(12, 12), ImageFormat.PNG)
    first = derive_variant(decoded, ScaleFactor.X4).data
    second = derive_variant(decoded, ScaleFactor.X4).data
    assert first == second


def test_encoder_failure_is_opaque():
    with pytest.raises(EncodingError) as exc_info:
        encode_image(Image.new("CMYK", (2, 2)), ImageFormat.PNG)
    assert to_failure(exc_info.value) == Opaque(500)
