"""Pure scroll reconciliation: cursor + offsets + size in, new offsets out."""

from __future__ import annotations

from dataclasses import dataclass

from hire.errors import SpecificError

MIN_LINENR_WIDTH = 4


@dataclass(frozen=True, slots=True)
class VerticalUpdate:
    offset: int
    cursor_row: int
    changed: bool


@dataclass(frozen=True, slots=True)
class HorizontalUpdate:
    offset: int
    changed: bool


def linenr_width(line_count: int) -> int:
    return max(MIN_LINENR_WIDTH, len(str(line_count)))


def gutter_width(line_count: int) -> int:
    """Columns taken by the line number plus padding and separator."""

    return linenr_width(line_count) + 2


def reconcile_vertical(
    *, row: int, offset: int, height: int, scrolling: bool
) -> VerticalUpdate:
    """Bring ``row`` into ``[offset, offset + height)``.

    Ordinary motion moves the window so the cursor sits at its midpoint.
    After an explicit scroll the window stays put and the cursor is pulled
    to the nearest edge instead.
    """

    height = max(1, height)
    if offset <= row < offset + height:
        return VerticalUpdate(offset=offset, cursor_row=row, changed=False)

    if scrolling:
        edge = offset if row < offset else offset + height - 1
        return VerticalUpdate(offset=offset, cursor_row=edge, changed=True)

    centered = max(0, row - height // 2)
    return VerticalUpdate(offset=centered, cursor_row=row, changed=True)


def reconcile_horizontal(
    *, column: int, offset: int, width: int, line_count: int
) -> HorizontalUpdate:
    content_width = width - gutter_width(line_count)
    if content_width <= 0:
        raise SpecificError("Window is too narrow to show the file")

    if offset > column:
        return HorizontalUpdate(offset=column, changed=True)
    if column - offset + 1 >= content_width:
        shifted = max(0, column - content_width // 2)
        return HorizontalUpdate(offset=shifted, changed=shifted != offset)
    return HorizontalUpdate(offset=offset, changed=False)


def clamp_scroll_offset(offset: int, *, height: int, line_count: int) -> int:
    upper = max(0, line_count - height)
    return max(0, min(offset, upper))


__all__ = [
    "VerticalUpdate",
    "HorizontalUpdate",
    "linenr_width",
    "gutter_width",
    "reconcile_vertical",
    "reconcile_horizontal",
    "clamp_scroll_offset",
]
