"""Cursor/viewport coordinate model."""

from .cursor import CursorMove, CursorViewport
from .reconcile import (
    clamp_scroll_offset,
    gutter_width,
    linenr_width,
    reconcile_horizontal,
    reconcile_vertical,
)

__all__ = [
    "CursorMove",
    "CursorViewport",
    "clamp_scroll_offset",
    "gutter_width",
    "linenr_width",
    "reconcile_horizontal",
    "reconcile_vertical",
]
