"""Helpers for lines that carry their own trailing terminator."""

from __future__ import annotations

NEWLINE = "\n"
_TERMINATORS = ("\r\n", "\n")


def terminator(line: str) -> str:
    """Return the line's trailing terminator, or ``""`` for a final bare line."""

    for marker in _TERMINATORS:
        if line.endswith(marker):
            return marker
    return ""


def content(line: str) -> str:
    marker = terminator(line)
    return line[: len(line) - len(marker)] if marker else line


def content_length(line: str) -> int:
    return len(line) - len(terminator(line))


def last_column(line: str) -> int:
    """Highest column a Normal-mode cursor may rest on."""

    return max(0, content_length(line) - 1)


def split_at(line: str, column: int) -> tuple[str, str]:
    """Split ``line`` in two at ``column``; the head gains a newline terminator."""

    column = min(column, content_length(line))
    return line[:column] + NEWLINE, line[column:]


def join(upper: str, lower: str) -> str:
    """Merge ``lower`` onto the end of ``upper``, dropping ``upper``'s terminator."""

    return content(upper) + lower


__all__ = [
    "NEWLINE",
    "terminator",
    "content",
    "content_length",
    "last_column",
    "split_at",
    "join",
]
