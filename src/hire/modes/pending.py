"""Cross-keystroke continuation state.

Exactly one variant (or ``None``) is active at a time. Each variant names the
operation waiting for its argument key.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True, slots=True)
class PendingMark:
    name = "mark"


@dataclass(frozen=True, slots=True)
class PendingDelete:
    name = "delete"


@dataclass(frozen=True, slots=True)
class PendingChange:
    name = "change"


@dataclass(frozen=True, slots=True)
class PendingReplaceChar:
    name = "replace_char"


@dataclass(frozen=True, slots=True)
class PendingQuit:
    confirmed: bool = False
    name = "quit"


@dataclass(frozen=True, slots=True)
class PendingSearch:
    pattern: str = ""
    name = "search"


@dataclass(frozen=True, slots=True)
class PendingConfirmError:
    name = "confirm_error"


PendingCommand = Union[
    PendingMark,
    PendingDelete,
    PendingChange,
    PendingReplaceChar,
    PendingQuit,
    PendingSearch,
    PendingConfirmError,
]


def describe(pending: Optional[PendingCommand]) -> str:
    return "none" if pending is None else pending.name


__all__ = [
    "PendingCommand",
    "PendingMark",
    "PendingDelete",
    "PendingChange",
    "PendingReplaceChar",
    "PendingQuit",
    "PendingSearch",
    "PendingConfirmError",
    "describe",
]
