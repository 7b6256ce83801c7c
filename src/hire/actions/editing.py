"""Text-changing actions and the insert-mode primitives they share."""

from __future__ import annotations

from hire.buffer import lines as line_ops
from hire.buffer import ordered_span
from hire.errors import InvalidCommand, SpecificError
from hire.modes.base_mode import Invocation, ModeContext, ModeResult
from hire.modes.pending import PendingChange, PendingDelete, PendingReplaceChar
from hire.runtime.telemetry import record_event

LINE_DELETE_KEY = "d"
LINE_CHANGE_KEY = "c"


def _require_lines(context: ModeContext) -> tuple[int, int]:
    if context.buffer.is_empty:
        raise SpecificError("Cannot edit an empty file")
    return context.viewport.clamp_cursor(context.buffer)


def _edited(status: str, **extra: object) -> ModeResult:
    return ModeResult(refresh=True, status=status, **extra)


def insert_text(context: ModeContext, text: str) -> ModeResult:
    """Insert ``text`` at the cursor and move past it."""

    row, column = _require_lines(context)
    line = context.buffer.line(row)
    context.buffer.replace_range(row, row, [line[:column] + text + line[column:]])
    context.viewport.set_cursor(row, column + len(text))
    return _edited("insert")


def split_line(context: ModeContext) -> ModeResult:
    """Break the current line at the cursor; the cursor lands on the new line."""

    row, column = _require_lines(context)
    head, tail = line_ops.split_at(context.buffer.line(row), column)
    context.buffer.replace_range(row, row, [head, tail])
    context.viewport.set_cursor(row + 1, 0)
    return _edited("split_line")


def backward_char(context: ModeContext, invocation: Invocation | None = None) -> ModeResult:
    """Delete the character before the cursor, joining lines at column 0."""

    del invocation
    row, column = _require_lines(context)
    buffer = context.buffer
    if column == 0:
        if row == 0:
            return ModeResult(status="noop")
        upper, current = buffer.get_range(row - 1, row)
        buffer.replace_range(row - 1, row, [line_ops.join(upper, current)])
        context.viewport.set_cursor(row - 1, line_ops.content_length(upper))
        return _edited("join_lines")

    line = buffer.line(row)
    buffer.replace_range(row, row, [line[: column - 1] + line[column:]])
    context.viewport.set_cursor(row, column - 1)
    return _edited("backward_char")


def delete_char(context: ModeContext, invocation: Invocation) -> ModeResult:
    """Delete the character under the cursor."""

    del invocation
    row, column = _require_lines(context)
    line = context.buffer.line(row)
    if column >= line_ops.content_length(line):
        return ModeResult(status="noop")
    updated = line[:column] + line[column + 1 :]
    context.buffer.replace_range(row, row, [updated])
    context.viewport.set_cursor(row, min(column, line_ops.last_column(updated)))
    return _edited("delete_char")


def delete_marked_region(context: ModeContext) -> None:
    """Remove the text between mark and cursor, end excluded, in either order."""

    buffer = context.buffer
    viewport = context.viewport
    mark = viewport.mark
    if mark is None:
        return
    if buffer.is_empty:
        viewport.clear_mark()
        raise SpecificError("Cannot edit an empty file")

    start, end = ordered_span(_clamped(context, mark), viewport.clamp_cursor(buffer))
    viewport.clear_mark()
    if start == end:
        return

    (start_row, start_col), (end_row, end_col) = start, end
    rows = buffer.get_range(start_row, end_row)
    merged = rows[0][:start_col] + rows[-1][end_col:]
    buffer.replace_range(start_row, end_row, [merged])
    viewport.set_cursor(start_row, start_col)
    viewport.clamp_cursor(buffer)
    record_event(
        "edit.delete_region",
        level="debug",
        data={"start": start, "end": end, "rows": end_row - start_row + 1},
    )


def _clamped(context: ModeContext, position: tuple[int, int]) -> tuple[int, int]:
    buffer = context.buffer
    row = max(0, min(position[0], buffer.line_count - 1))
    column = max(0, min(position[1], line_ops.content_length(buffer.line(row))))
    return row, column


def _delete_line(context: ModeContext) -> None:
    row, _ = _require_lines(context)
    buffer = context.buffer
    buffer.replace_range(row, row, [])
    if buffer.is_empty:
        context.viewport.set_cursor(0, 0)
        return
    row = min(row, buffer.line_count - 1)
    column = min(context.viewport.cursor[1], line_ops.last_column(buffer.line(row)))
    context.viewport.set_cursor(row, column)


def delete(context: ModeContext, invocation: Invocation) -> ModeResult:
    """With a mark, delete the marked region; otherwise wait for ``d`` to
    delete the current line."""

    if invocation.key is None:
        if context.viewport.mark is not None:
            delete_marked_region(context)
            return _edited("delete_region")
        context.pending = PendingDelete()
        return ModeResult(status="pending", message="delete")

    token = invocation.key.token
    if token != LINE_DELETE_KEY:
        raise InvalidCommand(token)
    _delete_line(context)
    return _edited("delete_line")


def change(context: ModeContext, invocation: Invocation) -> ModeResult:
    """Delete, then continue in Insert mode.

    Without a mark the operation waits for ``c``, which empties the current
    line but keeps its terminator.
    """

    if invocation.key is None:
        result = delete(context, invocation)
        if isinstance(context.pending, PendingDelete):
            context.pending = PendingChange()
            return ModeResult(status="pending", message="change")
        result.switch_to = "insert"
        return result

    token = invocation.key.token
    if token != LINE_CHANGE_KEY:
        raise InvalidCommand(token)
    row, _ = _require_lines(context)
    line = context.buffer.line(row)
    context.buffer.replace_range(row, row, [line_ops.terminator(line)])
    context.viewport.set_cursor(row, 0)
    return _edited("change_line", switch_to="insert")


def replace_char(context: ModeContext, invocation: Invocation) -> ModeResult:
    if invocation.key is None:
        context.pending = PendingReplaceChar()
        return ModeResult(status="pending", message="replace_char")

    character = invocation.key.printable
    if character is None:
        raise InvalidCommand(invocation.key.token)
    row, column = _require_lines(context)
    line = context.buffer.line(row)
    if column >= line_ops.content_length(line):
        return ModeResult(status="noop")
    context.buffer.replace_range(
        row, row, [line[:column] + character + line[column + 1 :]]
    )
    return _edited("replace_char")


def newline(context: ModeContext, invocation: Invocation) -> ModeResult:
    """Open an empty line below (``down``) or above (``up``) and enter Insert."""

    direction = invocation.arg(0, "down")
    if direction not in ("down", "up"):
        raise SpecificError(f"Unknown newline direction '{direction}'")
    buffer = context.buffer
    viewport = context.viewport

    if buffer.is_empty:
        buffer.insert_lines(0, [line_ops.NEWLINE])
        viewport.set_cursor(0, 0)
        return _edited("newline", switch_to="insert")

    row, _ = viewport.clamp_cursor(buffer)
    line = buffer.line(row)
    if direction == "down":
        if line_ops.terminator(line):
            replacement = [line, line_ops.NEWLINE]
        else:
            replacement = [line + line_ops.NEWLINE, ""]
        buffer.replace_range(row, row, replacement)
        viewport.set_cursor(row + 1, 0)
    else:
        buffer.replace_range(row, row, [line_ops.NEWLINE, line])
        viewport.set_cursor(row, 0)
    return _edited("newline", switch_to="insert")


__all__ = [
    "LINE_DELETE_KEY",
    "LINE_CHANGE_KEY",
    "insert_text",
    "split_line",
    "backward_char",
    "delete_char",
    "delete_marked_region",
    "delete",
    "change",
    "replace_char",
    "newline",
]
