"""Line-oriented text buffer with range read/replace and file persistence."""

from __future__ import annotations

import os
from typing import Iterable, List, Optional, Sequence

from hire.errors import BufferIOError, SpecificError
from hire.runtime import telemetry

from .validation import ensure_range

PathLike = str | os.PathLike[str]


def read_lines(path: PathLike) -> List[str]:
    """Read ``path`` line by line, keeping each line's own terminator.

    Raises ``BufferIOError`` on open, read or decode failure.
    """

    try:
        with open(path, "r", encoding="utf-8", newline="\n") as handle:
            return [line for line in handle]
    except (OSError, UnicodeDecodeError) as exc:
        raise BufferIOError(exc, path=path) from exc


class TextBuffer:
    """The document as an ordered list of lines.

    Lines keep their trailing terminator, so writing them back in order
    reproduces the original file. The list is never handed out: every read
    returns a copy.
    """

    def __init__(
        self,
        lines: Optional[Iterable[str]] = None,
        *,
        path: Optional[PathLike] = None,
    ) -> None:
        self._lines: List[str] = list(lines or ())
        self._path: Optional[PathLike] = path
        self._dirty = False
        self.version = 0

    @property
    def path(self) -> Optional[PathLike]:
        return self._path

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def is_dirty(self) -> bool:
        return self._dirty

    def line(self, row: int) -> str:
        ensure_range(len(self._lines), row, row)
        return self._lines[row]

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    def load(self, path: PathLike) -> None:
        """Replace the contents with the lines of ``path``.

        The buffer is untouched if reading fails.
        """

        with telemetry.span(
            "buffer::load", component="buffer", metadata={"path": path}
        ) as handle:
            lines = read_lines(path)
            handle.add_metadata("lines", len(lines))
            self.populate(lines, path=path)

    def populate(self, lines: Iterable[str], *, path: Optional[PathLike] = None) -> None:
        self._lines = list(lines)
        if path is not None:
            self._path = path
        self._dirty = False
        self.version += 1

    def get_range(self, from_row: int, to_row: int) -> List[str]:
        ensure_range(len(self._lines), from_row, to_row)
        return self._lines[from_row : to_row + 1]

    def replace_range(
        self, from_row: int, to_row: int, new_lines: Iterable[str]
    ) -> None:
        """Replace rows ``from_row..to_row`` (inclusive) with ``new_lines``.

        Rows are overwritten positionally; extra new lines are inserted after
        ``to_row`` and unmatched old rows are dropped. An empty ``new_lines``
        deletes the whole range.
        """

        replacement = list(new_lines)
        with telemetry.span(
            "buffer::replace_range",
            component="buffer",
            metadata={"from": from_row, "to": to_row, "count": len(replacement)},
        ):
            ensure_range(len(self._lines), from_row, to_row)
            self._lines[from_row : to_row + 1] = replacement
            self._dirty = True
            self.version += 1

    def insert_lines(self, row: int, new_lines: Iterable[str]) -> None:
        """Insert before ``row``; ``row == line_count`` appends."""

        replacement = list(new_lines)
        with telemetry.span(
            "buffer::insert_lines",
            component="buffer",
            metadata={"row": row, "count": len(replacement)},
        ):
            if not 0 <= row <= len(self._lines):
                ensure_range(len(self._lines), row, row)
            self._lines[row:row] = replacement
            self._dirty = True
            self.version += 1

    def save(self) -> None:
        """Rewrite the backing file from the current lines.

        A failed write leaves ``dirty`` set and the in-memory lines intact.
        """

        if self._path is None:
            raise SpecificError("No file name to save to")
        with telemetry.span(
            "buffer::save", component="buffer", metadata={"path": self._path}
        ):
            try:
                with open(self._path, "w", encoding="utf-8", newline="") as handle:
                    handle.writelines(self._lines)
            except OSError as exc:
                raise BufferIOError(exc, path=self._path) from exc
            self._dirty = False


__all__ = ["TextBuffer", "read_lines"]
