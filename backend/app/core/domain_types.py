"""Domain Types — rich types that replace bare primitives across the pipeline.

Invariants:
    - ContentFingerprint is a lowercase hex SHA-256 (64 chars) of the raw body
    - StorageKey is derived only from (fingerprint, scale, format) — content-addressed
    - SCALE_FACTORS is fixed and ordered: 1, 2, 4, 8, 16
    - Supported formats encoded as an Enum — no raw MIME string matching downstream

Design Decisions:
    - NewType over dataclass wrappers for fingerprints/keys: zero runtime cost
    - int Enum for ScaleFactor: serializes to JSON as a plain number
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import NewType

from PIL import Image


# ─── Identity Types ──────────────────────────────────────────────

ContentFingerprint = NewType("ContentFingerprint", str)
StorageKey = NewType("StorageKey", str)


# ─── Enums ───────────────────────────────────────────────────────

class ImageFormat(str, Enum):
    """Raster formats known to the pipeline. Value is the MIME subtype."""
    PNG = "png"
    WEBP = "webp"
    BMP = "bmp"
    GIF = "gif"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def pillow_format(self) -> str:
        """Format name as registered in Pillow's plugin table."""
        return self.value.upper()


class ScaleFactor(IntEnum):
    """Integer upscaling factors. ORIGINAL is the unmodified image."""
    ORIGINAL = 1
    X2 = 2
    X4 = 4
    X8 = 8
    X16 = 16


SCALE_FACTORS: tuple[ScaleFactor, ...] = tuple(ScaleFactor)


# ─── Value Types ─────────────────────────────────────────────────

@dataclass
class DecodedImage:
    """Pixel grid owned by one pipeline run. Never shared across requests."""
    image: Image.Image
    source_format: ImageFormat

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height


@dataclass(frozen=True)
class DerivedVariant:
    """One encoded resolution variant, ready to persist."""
    scale: ScaleFactor
    data: bytes
    image_format: ImageFormat

    @property
    def content_type(self) -> str:
        return self.image_format.mime_type


@dataclass(frozen=True)
class UploadRecord:
    """Result of one successful persistence."""
    scale: ScaleFactor
    name: StorageKey
