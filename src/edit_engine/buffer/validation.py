"""Offset validation shared by the command layer."""

from __future__ import annotations

from typing import Tuple

from edit_engine.errors import IndexOutOfRange


def normalize_range(start: int, end: int) -> Tuple[int, int]:
    if start > end:
        start, end = end, start
    return start, end


def ensure_range(
    text: str, start: int, end: int, *, allow_empty: bool = False
) -> Tuple[int, int]:
    """Return ``(start, end)`` ordered and inside ``[0, len(text) - 1]``.

    With ``allow_empty`` the upper bound never drops below 0, so position 0
    stays addressable on an empty buffer (inserting into nothing).
    """

    start, end = normalize_range(start, end)
    upper = len(text) - 1
    if allow_empty:
        upper = max(upper, 0)
    if upper < 0:
        raise IndexOutOfRange("Buffer is empty", start=start, end=end, upper=upper)
    if start < 0 or end > upper:
        raise IndexOutOfRange(
            f"Range [{start}, {end}] outside [0, {upper}]",
            start=start,
            end=end,
            upper=upper,
        )
    return start, end


__all__ = ["normalize_range", "ensure_range"]
