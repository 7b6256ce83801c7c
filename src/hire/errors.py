"""Error kinds surfaced to the user and the FIFO queue that holds them."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, Optional


class EditorError(Exception):
    """Base class for every recoverable editor failure."""

    def display(self) -> str:
        return f"[Error]: {self}!"


class BufferIOError(EditorError):
    """File open/read/write failure; wraps the underlying exception."""

    def __init__(self, cause: Exception, *, path: object | None = None) -> None:
        super().__init__(str(cause))
        self.cause = cause
        self.path = path

    @property
    def kind(self) -> str:
        return type(self.cause).__name__

    def display(self) -> str:
        return f"[IO Error]: {self.kind}\nCause: {self.cause}"


class BufferRangeError(EditorError):
    """Raised when a row range is inverted, out of bounds, or the buffer is empty."""

    def __init__(self, message: str, *, rows: tuple[int, int] | None = None) -> None:
        super().__init__(message)
        self.rows = rows


class InvalidCommand(EditorError):
    """Unbound key, or a wrong argument key for a pending operation."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def display(self) -> str:
        return f"[Error]: Invalid Command: {self.key}!"


class SpecificError(EditorError):
    """Any other user-facing failure, carrying its own message."""


class ConfigError(SpecificError):
    """Malformed keymap or options; fatal when raised at startup."""


class ErrorQueue:
    """FIFO of errors waiting to be shown, oldest first."""

    def __init__(self) -> None:
        self._errors: Deque[EditorError] = deque()

    def push(self, error: EditorError) -> None:
        self._errors.append(error)

    def current(self) -> Optional[EditorError]:
        return self._errors[0] if self._errors else None

    def pop(self) -> Optional[EditorError]:
        if not self._errors:
            return None
        return self._errors.popleft()

    def clear(self) -> None:
        self._errors.clear()

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[EditorError]:
        return iter(tuple(self._errors))


__all__ = [
    "EditorError",
    "BufferIOError",
    "BufferRangeError",
    "InvalidCommand",
    "SpecificError",
    "ConfigError",
    "ErrorQueue",
]
