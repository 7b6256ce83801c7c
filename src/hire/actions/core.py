"""Core actions: motion, scrolling, mode entry, mark, save and quit."""

from __future__ import annotations

from hire.buffer import lines as line_ops
from hire.errors import InvalidCommand, SpecificError
from hire.modes.base_mode import Invocation, ModeContext, ModeResult
from hire.modes.pending import PendingMark, PendingQuit
from hire.runtime.telemetry import record_event
from hire.viewport import CursorMove

MARK_KEY = "m"
QUIT_CONFIRM_KEY = "y"
UNSAVED_CHANGES_PROMPT = "Unsaved changes, quit anyway? (y for yes)"

INSERT_POSITIONS = ("before", "after", "line_start", "line_end")


def move_cursor(context: ModeContext, invocation: Invocation) -> ModeResult:
    """``args = (scope, motion)`` with scope ``line``/``buffer`` and motion
    ``start``, ``end`` or a signed step."""

    scope = invocation.arg(0, "line")
    try:
        move = CursorMove.parse(invocation.arg(1, "+1"))
    except ValueError as exc:
        raise SpecificError(str(exc)) from exc
    before = context.viewport.cursor
    after = context.viewport.move_cursor(
        move,
        within_line=scope == "line",
        buffer=context.buffer,
        past_end=context.mode == "insert",
    )
    return ModeResult(refresh=before != after, status="move")


def page_scroll(context: ModeContext, invocation: Invocation) -> ModeResult:
    try:
        pages = int(invocation.arg(0, "1"))
    except ValueError as exc:
        raise SpecificError(f"Invalid page count: {exc}") from exc
    context.viewport.page_scroll(pages, line_count=context.buffer.line_count)
    return ModeResult(refresh=True, status="scroll")


def change_insert(context: ModeContext, invocation: Invocation) -> ModeResult:
    """Enter Insert mode with the cursor placed per ``args[0]``."""

    where = invocation.arg(0, "before")
    if where not in INSERT_POSITIONS:
        raise SpecificError(f"Unknown insert position '{where}'")
    buffer = context.buffer
    if buffer.is_empty:
        raise SpecificError("Cannot edit an empty file")

    viewport = context.viewport
    row, column = viewport.clamp_cursor(buffer)
    length = line_ops.content_length(buffer.line(row))
    if where == "after":
        column = min(column + 1, length)
    elif where == "line_start":
        column = 0
    elif where == "line_end":
        column = length
    viewport.set_cursor(row, column)
    return ModeResult(refresh=True, switch_to="insert", message="enter_insert")


def mark(context: ModeContext, invocation: Invocation) -> ModeResult:
    viewport = context.viewport
    if invocation.arg(0, "") == "cancel":
        return ModeResult(refresh=viewport.clear_mark(), status="mark_cleared")

    if invocation.key is None:
        context.pending = PendingMark()
        return ModeResult(status="pending", message="mark")

    if invocation.key.token != MARK_KEY:
        raise InvalidCommand(invocation.key.token)
    viewport.set_mark()
    record_event("mark.set", level="debug", data={"position": viewport.mark})
    return ModeResult(refresh=True, status="mark_set")


def escape_command(context: ModeContext, invocation: Invocation) -> ModeResult:
    """Drop the mark if one is set, otherwise forget the last search."""

    del invocation
    if context.viewport.clear_mark():
        return ModeResult(refresh=True, status="mark_cleared")
    if context.search.has_history():
        context.search.clear()
        return ModeResult(refresh=True, status="search_cleared")
    return ModeResult(status="noop")


def save(context: ModeContext, invocation: Invocation) -> ModeResult:
    del invocation
    context.buffer.save()
    path = str(context.buffer.path)
    context.bus.emit("buffer.saved", {"path": path})
    return ModeResult(refresh=True, status="saved", message=path)


def quit_editor(context: ModeContext, invocation: Invocation) -> ModeResult:
    if invocation.key is None:
        if context.buffer.is_dirty():
            context.pending = PendingQuit(confirmed=False)
            context.ask_message = UNSAVED_CHANGES_PROMPT
            return ModeResult(refresh=True, status="ask", message=UNSAVED_CHANGES_PROMPT)
        context.pending = PendingQuit(confirmed=True)
        return ModeResult(status="quit")

    context.ask_message = None
    if invocation.key.text == QUIT_CONFIRM_KEY:
        context.pending = PendingQuit(confirmed=True)
        return ModeResult(refresh=True, status="quit")
    return ModeResult(refresh=True, status="quit_cancelled")


__all__ = [
    "MARK_KEY",
    "QUIT_CONFIRM_KEY",
    "UNSAVED_CHANGES_PROMPT",
    "move_cursor",
    "page_scroll",
    "change_insert",
    "mark",
    "escape_command",
    "save",
    "quit_editor",
]
