"""
Size model for drawer entries.

Converts a discrete size offset plus a widget's natural height into the
height the drawer lays the entry out at. Pure functions, no state.

SIZE_DEFAULT is a reserved "no adjustment" value rather than the arithmetic
zero point: every other offset applies ``(offset + 1) * STEP``, so offsets
between SIZE_MIN and SIZE_DEFAULT shrink the entry and offsets above it grow
the entry.
"""

from typing import List

from .exceptions import SizeOffsetError

SIZE_MIN = -5
SIZE_DEFAULT = -1
SIZE_MAX = 4

# Height increment per offset unit, in pixels
STEP = 100


def rendered_height(natural_height: int, size_offset: int) -> int:
    """Return the rendered height for an entry.

    No clamping is done: a small natural height with a strongly negative
    offset yields a zero or negative result, and callers must handle it.

    Args:
        natural_height: Height the hosted widget measures at, in pixels
        size_offset: Discrete offset in [SIZE_MIN, SIZE_MAX]

    Returns:
        Rendered height in pixels
    """
    if size_offset == SIZE_DEFAULT:
        return natural_height
    return natural_height + (size_offset + 1) * STEP


def validate_size_offset(size_offset: int) -> int:
    """Return size_offset unchanged, or raise SizeOffsetError if out of range."""
    if isinstance(size_offset, bool) or not isinstance(size_offset, int):
        raise SizeOffsetError(f"Size offset must be an int, got {type(size_offset).__name__}")
    if not SIZE_MIN <= size_offset <= SIZE_MAX:
        raise SizeOffsetError(f"Size offset {size_offset} outside [{SIZE_MIN}, {SIZE_MAX}]")
    return size_offset


def clamp_size_offset(size_offset: int) -> int:
    """Pin an arbitrary offset to the legal range."""
    return max(SIZE_MIN, min(SIZE_MAX, size_offset))


def size_offsets() -> List[int]:
    """All legal offsets, smallest first."""
    return list(range(SIZE_MIN, SIZE_MAX + 1))


def dp_to_px(dp: int, density: float) -> int:
    """Convert a density-independent measurement to whole pixels."""
    return int(round(dp * density))
