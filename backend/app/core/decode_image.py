"""Image Decoding — raw bytes + declared format → in-memory pixel grid.

Invariants:
    - Only the declared format's decoder is tried (no sniffing of other formats)
    - Malformed input → DecodeFailureError (400); any other fault → InternalDecodeError (500)
    - check_size sees the header dimensions before any pixel data is decoded
    - Returned image is fully loaded and detached from the input buffer
    - Output mode is one the canonical container can encode losslessly,
      16-bit grayscale included

Design Decisions:
    - Pillow as the decoding capability: same library the upscaler and OCR
      services use for in-memory image work
    - Animated GIF/WebP: first frame only — variants are still images
"""

import struct
from io import BytesIO
from typing import Callable

from PIL import Image, UnidentifiedImageError

from app.core.domain_types import DecodedImage, ImageFormat
from app.core.errors import DecodeFailureError, InternalDecodeError, UserInputError

# Modes written by the PNG encoder as-is; everything else goes through RGBA.
# I and I;16 are 16-bit grayscale PNGs, RGBA would clip them to 8 bits
_PASSTHROUGH_MODES = frozenset({"RGB", "RGBA", "L", "LA", "I", "I;16"})

SizeCheck = Callable[[int, int], None]


def _detach(img: Image.Image) -> Image.Image:
    if img.mode in _PASSTHROUGH_MODES:
        return img.copy()
    return img.convert("RGBA")


def decode_image(
    data: bytes,
    image_format: ImageFormat,
    check_size: SizeCheck | None = None,
) -> DecodedImage:
    """Decode data as image_format.

    check_size(width, height) runs on the parsed header; whatever it raises
    propagates unchanged and the pixel data is never decoded.
    """
    try:
        with Image.open(BytesIO(data), formats=[image_format.pillow_format]) as img:
            if check_size is not None:
                check_size(img.width, img.height)
            img.load()
            image = _detach(img)
    except UserInputError:
        raise
    except Image.DecompressionBombError as e:
        raise InternalDecodeError(str(e)) from e
    except (
        UnidentifiedImageError, OSError, SyntaxError, ValueError, EOFError, struct.error,
    ) as e:
        raise DecodeFailureError(image_format.value) from e
    except Exception as e:
        raise InternalDecodeError(f"{type(e).__name__}: {e}") from e

    return DecodedImage(image=image, source_format=image_format)
