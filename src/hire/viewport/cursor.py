"""Cursor, mark and scroll offsets for the visible window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from hire.buffer import TextBuffer
from hire.buffer import lines as line_ops
from hire.buffer.state import Cursor
from hire.errors import SpecificError
from hire.runtime import telemetry

from .reconcile import (
    clamp_scroll_offset,
    reconcile_horizontal,
    reconcile_vertical,
)

MoveKind = Literal["relative", "start", "end"]


@dataclass(frozen=True, slots=True)
class CursorMove:
    kind: MoveKind
    amount: int = 0

    @classmethod
    def relative(cls, amount: int) -> "CursorMove":
        return cls("relative", amount)

    @classmethod
    def to_start(cls) -> "CursorMove":
        return cls("start")

    @classmethod
    def to_end(cls) -> "CursorMove":
        return cls("end")

    @classmethod
    def parse(cls, text: str) -> "CursorMove":
        """Parse ``start``, ``end`` or a signed integer such as ``+1``/``-3``."""

        value = text.strip().lower()
        if value == "start":
            return cls.to_start()
        if value == "end":
            return cls.to_end()
        try:
            return cls.relative(int(value))
        except ValueError as exc:
            raise ValueError(f"Invalid cursor motion '{text}'") from exc


def _clamp(value: int, upper: int) -> int:
    return max(0, min(value, upper))


class CursorViewport:
    """Absolute cursor, optional mark and the window scrolled over the buffer.

    ``height``/``width`` are unknown until the first ``reconcile``.
    """

    def __init__(self) -> None:
        self.cursor: Cursor = (0, 0)
        self.mark: Optional[Cursor] = None
        self.vertical_offset = 0
        self.horizontal_offset = 0
        self.height: Optional[int] = None
        self.width: Optional[int] = None
        self.scrolling = False

    def set_cursor(self, row: int, column: int) -> None:
        self.cursor = (row, column)

    def set_mark(self, position: Optional[Cursor] = None) -> None:
        self.mark = position if position is not None else self.cursor

    def clear_mark(self) -> bool:
        had_mark = self.mark is not None
        self.mark = None
        return had_mark

    def clamp_cursor(self, buffer: TextBuffer) -> Cursor:
        """Pull the cursor back inside the buffer after an edit."""

        if buffer.is_empty:
            self.cursor = (0, 0)
            return self.cursor
        row = _clamp(self.cursor[0], buffer.line_count - 1)
        column = _clamp(self.cursor[1], line_ops.content_length(buffer.line(row)))
        self.cursor = (row, column)
        return self.cursor

    def move_cursor(
        self,
        move: CursorMove,
        *,
        within_line: bool,
        buffer: TextBuffer,
        past_end: bool = False,
    ) -> Cursor:
        """Apply ``move`` along the line or across rows, clamping at the ends.

        With ``past_end`` the column may rest after the last character, as
        Insert mode needs for appending.
        """

        last = line_ops.content_length if past_end else line_ops.last_column

        if buffer.is_empty:
            self.cursor = (0, 0)
            return self.cursor

        row, column = self.clamp_cursor(buffer)
        if within_line:
            limit = last(buffer.line(row))
            column = self._target(move, column, limit)
        else:
            row = self._target(move, row, buffer.line_count - 1)
            column = min(column, last(buffer.line(row)))

        self.cursor = (row, column)
        return self.cursor

    @staticmethod
    def _target(move: CursorMove, current: int, limit: int) -> int:
        if move.kind == "start":
            return 0
        if move.kind == "end":
            return limit
        return _clamp(current + move.amount, limit)

    def page_scroll(self, delta_pages: int, *, line_count: int) -> int:
        """Shift the window by whole pages; the cursor follows on the next tick."""

        if self.height is None:
            raise SpecificError("Viewport size is not known yet")
        target = self.vertical_offset + delta_pages * self.height
        self.vertical_offset = clamp_scroll_offset(
            target, height=self.height, line_count=line_count
        )
        self.scrolling = True
        return self.vertical_offset

    def reconcile(self, height: int, width: int, *, buffer: TextBuffer) -> bool:
        """Fit the window around the cursor for a ``height`` x ``width`` view.

        Returns True when the visible window changed. Consumes the one-shot
        ``scrolling`` flag.
        """

        refresh = self.height is not None and self.height != height
        self.height = height
        self.width = width

        try:
            vertical = reconcile_vertical(
                row=self.cursor[0],
                offset=self.vertical_offset,
                height=height,
                scrolling=self.scrolling,
            )
            self.vertical_offset = vertical.offset
            if vertical.cursor_row != self.cursor[0]:
                self.cursor = (vertical.cursor_row, self.cursor[1])
                if not buffer.is_empty:
                    row = min(vertical.cursor_row, buffer.line_count - 1)
                    column = min(
                        self.cursor[1], line_ops.last_column(buffer.line(row))
                    )
                    self.cursor = (row, column)

            horizontal = reconcile_horizontal(
                column=self.cursor[1],
                offset=self.horizontal_offset,
                width=width,
                line_count=buffer.line_count,
            )
            self.horizontal_offset = horizontal.offset
        finally:
            self.scrolling = False

        refresh = refresh or vertical.changed or horizontal.changed
        if refresh:
            telemetry.record_event(
                "viewport.reconcile",
                level="debug",
                data={
                    "vertical_offset": self.vertical_offset,
                    "horizontal_offset": self.horizontal_offset,
                    "cursor": self.cursor,
                },
            )
        return refresh

    def visible_rows(self, line_count: int) -> range:
        height = self.height or 0
        return range(self.vertical_offset, min(line_count, self.vertical_offset + height))


__all__ = ["CursorMove", "CursorViewport", "MoveKind"]
