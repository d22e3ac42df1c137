"""Format Enforcement — gate submissions on their declared media type.

Invariants:
    - Absent header → MissingContentTypeError
    - Non-image/* type → UnsupportedFormatError
    - image/* outside the allow-list → UnsupportedFormatError naming the subtype
    - Media-type parameters are ignored, comparison is case-insensitive

Design Decisions:
    - Decision is made on the header alone; the decoder later verifies the bytes
      actually match the declared format
"""

from app.core.domain_types import ImageFormat
from app.core.errors import MissingContentTypeError, UnsupportedFormatError

SUPPORTED_MEDIA_TYPES: frozenset[str] = frozenset(f.mime_type for f in ImageFormat)


def _media_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


def resolve_image_format(content_type: str | None) -> ImageFormat:
    """Map a Content-Type header value to a supported ImageFormat."""
    if content_type is None or not content_type.strip():
        raise MissingContentTypeError()

    media_type = _media_type(content_type)
    main_type, _, subtype = media_type.partition("/")
    if main_type != "image" or not subtype:
        raise UnsupportedFormatError(
            "Content-Type is not for an image", media_type,
        )

    try:
        image_format = ImageFormat(subtype)
    except ValueError:
        raise UnsupportedFormatError(
            f"unsupported image format: {subtype}", media_type,
        ) from None

    return image_format
