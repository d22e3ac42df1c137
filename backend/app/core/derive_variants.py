"""Variant Derivation — block-replication upscaling and canonical encoding.

Invariants:
    - Scale 1 is the decoded image itself, re-encoded
    - Scale s > 1 yields exactly (w*s, h*s); every s×s block is one source pixel
    - All variants of a submission share one destination format, independent of input
    - Encoder failures → EncodingError (500, opaque)

Design Decisions:
    - NEAREST resampling at an integer factor is exact block replication:
      hard pixel edges are preserved, nothing is interpolated
"""

from io import BytesIO

from PIL import Image

from app.core.domain_types import (
    DecodedImage, DerivedVariant, ImageFormat, ScaleFactor,
)
from app.core.errors import EncodingError, ErrorContext

CANONICAL_FORMAT = ImageFormat.PNG


def upscale(image: Image.Image, scale: ScaleFactor) -> Image.Image:
    """Nearest-neighbour enlarge by an integer factor."""
    if scale == ScaleFactor.ORIGINAL:
        return image
    factor = int(scale)
    return image.resize(
        (image.width * factor, image.height * factor),
        Image.Resampling.NEAREST,
    )


def encode_image(
    image: Image.Image,
    image_format: ImageFormat,
    context: ErrorContext | None = None,
) -> bytes:
    buf = BytesIO()
    try:
        image.save(buf, format=image_format.pillow_format)
    except (OSError, ValueError, KeyError) as e:
        raise EncodingError(str(e), context) from e
    return buf.getvalue()


def derive_variant(
    decoded: DecodedImage,
    scale: ScaleFactor,
    dest_format: ImageFormat = CANONICAL_FORMAT,
) -> DerivedVariant:
    """Produce the encoded variant for one scale factor."""
    data = encode_image(
        upscale(decoded.image, scale), dest_format,
        ErrorContext(scale=int(scale)),
    )
    return DerivedVariant(scale=scale, data=data, image_format=dest_format)
