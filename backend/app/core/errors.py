"""Error Hierarchy — typed, categorized exceptions for every upix failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - User-input errors carry a public_message; infrastructure errors never do
    - to_failure() is the only path from an exception to a wire-level failure
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with UpixError base: FastAPI global handler catches all
    - Two failure variants, UserFacing and Opaque: the message field does not exist
      on Opaque, so internal detail cannot reach the response by accident
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Union


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    PAYLOAD = "payload"
    DECODE = "decode"
    ENCODE = "encode"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    fingerprint: str | None = None
    scale: int | None = None
    storage_key: str | None = None


class UpixError(Exception):
    """Base exception for all upix errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        public_message: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.public_message = public_message

    def log_extra(self) -> dict:
        """Fields surfaced by the JSON log formatter."""
        return {
            "error_code": self.code,
            "fingerprint": self.context.fingerprint,
            "scale": self.context.scale,
            "storage_key": self.context.storage_key,
        }


# ─── Wire-level failure variants ────────────────────────────────

@dataclass(frozen=True)
class UserFacing:
    """Failure reported with an explanatory message."""
    status: int
    message: str


@dataclass(frozen=True)
class Opaque:
    """Failure reported by status code only."""
    status: int


Failure = Union[UserFacing, Opaque]


def to_failure(exc: UpixError) -> Failure:
    """Convert a typed error into the failure variant sent to the caller."""
    if exc.public_message is None:
        return Opaque(exc.http_status)
    return UserFacing(exc.http_status, exc.public_message)


# ─── Input Errors (400-level) ───────────────────────────────────

class UserInputError(UpixError):
    """Base for faults in the submission itself. Message is shown to the caller."""
    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory = ErrorCategory.VALIDATION,
        context: ErrorContext | None = None,
        http_status: int = 400,
    ):
        super().__init__(
            message, code, category, ErrorSeverity.WARNING, context,
            http_status, public_message=message,
        )


class MissingContentTypeError(UserInputError):
    """Submission carries no Content-Type header."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "missing Content-Type header", "MISSING_CONTENT_TYPE", context=context,
        )


class UnsupportedFormatError(UserInputError):
    """Content-Type is not an image, or names an image format we do not accept."""
    def __init__(self, message: str, media_type: str, context: ErrorContext | None = None):
        super().__init__(message, "UNSUPPORTED_FORMAT", context=context)
        self.media_type = media_type


class DecodeFailureError(UserInputError):
    """Bytes are not a valid image of the declared format."""
    def __init__(self, image_format: str, context: ErrorContext | None = None):
        super().__init__(
            "failed to decode image", "DECODE_FAILURE",
            ErrorCategory.DECODE, context,
        )
        self.image_format = image_format


class TooManyPixelsError(UserInputError):
    def __init__(self, pixels: int, limit: int, context: ErrorContext | None = None):
        super().__init__(
            f"Image has too many pixels ({pixels} > {limit})",
            "TOO_MANY_PIXELS", context=context,
        )


class LongSideTooLargeError(UserInputError):
    def __init__(self, long_side: int, limit: int, context: ErrorContext | None = None):
        super().__init__(
            f"Long side of image is too long ({long_side} > {limit})",
            "LONG_SIDE_TOO_LARGE", context=context,
        )


class AspectRatioOutOfRangeError(UserInputError):
    def __init__(
        self, long_side: int, short_side: int, limit: float,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Aspect ratio of image is out of range "
            f"({long_side} : {short_side} > {limit:g} : 1)",
            "ASPECT_RATIO_OUT_OF_RANGE", context=context,
        )


class PayloadTooLargeError(UpixError):
    """Body exceeds the size cap. Reported as a bare 413."""
    def __init__(self, limit: int, context: ErrorContext | None = None):
        super().__init__(
            f"Request body exceeds {limit} bytes",
            "PAYLOAD_TOO_LARGE", ErrorCategory.PAYLOAD,
            ErrorSeverity.WARNING, context, 413,
        )
        self.limit = limit


# ─── Infrastructure Errors (500-level) ──────────────────────────

class InternalDecodeError(UpixError):
    """Decoder failed for a reason other than malformed input."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Image decoder fault: {message}",
            "INTERNAL_DECODE_ERROR", ErrorCategory.DECODE,
            ErrorSeverity.CRITICAL, context, 500,
        )


class EncodingError(UpixError):
    """Encoding a derived variant into the output container failed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to encode image: {message}",
            "ENCODING_FAILURE", ErrorCategory.ENCODE,
            ErrorSeverity.CRITICAL, context, 500,
        )


class StorageUnavailableError(UpixError):
    """The configured artifact store could not be bound for this request."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Artifact store unavailable: {message}",
            "STORAGE_UNAVAILABLE", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 500,
        )


class PersistenceError(UpixError):
    """A single put() to the artifact store failed."""
    def __init__(self, message: str, key: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.storage_key = key
        super().__init__(
            f"Failed to persist '{key}': {message}",
            "PERSISTENCE_FAILURE", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.key = key


class UploadFailedError(UpixError):
    """Aggregate failure: at least one of the variant uploads did not complete."""
    def __init__(
        self, failed_scales: list[int], total: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{len(failed_scales)} of {total} variant uploads failed "
            f"(scales: {', '.join(str(s) for s in failed_scales)})",
            "UPLOAD_FAILED", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.failed_scales = failed_scales
