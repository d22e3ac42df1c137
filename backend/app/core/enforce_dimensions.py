"""Dimension Enforcement — bound the pixel grid before any derivation runs.

Invariants:
    - Checks run in order: pixel count, long side, aspect ratio
    - The first failing check is reported; later checks are not evaluated
    - Largest derived grid is MAX_PIXELS * 16**2 pixels

Design Decisions:
    - Pure function over (width, height): no dependency on the decoder type
"""

from app.core.errors import (
    AspectRatioOutOfRangeError, LongSideTooLargeError, TooManyPixelsError,
)

MAX_PIXELS = 65536
MAX_LONG_SIDE = 1024
MAX_ASPECT_RATIO = 16.0


def validate_dimensions(width: int, height: int) -> None:
    """Raise the first dimension error that applies, else return None."""
    pixels = width * height
    if pixels > MAX_PIXELS:
        raise TooManyPixelsError(pixels, MAX_PIXELS)

    long_side, short_side = (width, height) if width > height else (height, width)
    if long_side > MAX_LONG_SIDE:
        raise LongSideTooLargeError(long_side, MAX_LONG_SIDE)
    # zero-width grids have an unbounded ratio
    if short_side == 0 or long_side / short_side > MAX_ASPECT_RATIO:
        raise AspectRatioOutOfRangeError(long_side, short_side, MAX_ASPECT_RATIO)
