"""Cursor coordinates and the ordering rule for mark/cursor regions."""

from __future__ import annotations

from typing import Tuple

Cursor = Tuple[int, int]  # (row, column)
Region = Tuple[Cursor, Cursor]


def ordered_span(mark: Cursor, cursor: Cursor) -> Region:
    """Return ``(start, end)`` in row-major order, whichever endpoint is first."""

    start, end = mark, cursor
    if start > end:
        start, end = end, start
    return start, end


def within_span(region: Region, position: Cursor) -> bool:
    """True when ``position`` lies in the half-open region ``[start, end)``."""

    start, end = region
    return start <= position < end


__all__ = ["Cursor", "Region", "ordered_span", "within_span"]
