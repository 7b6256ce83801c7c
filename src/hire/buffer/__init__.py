"""Text buffer, line helpers and cursor ordering."""

from . import lines
from .document import TextBuffer, read_lines
from .state import Cursor, Region, ordered_span, within_span
from .validation import ensure_range

__all__ = [
    "TextBuffer",
    "read_lines",
    "lines",
    "Cursor",
    "Region",
    "ordered_span",
    "within_span",
    "ensure_range",
]
