from __future__ import annotations

from typing import Optional

import pytest

from hire.buffer import TextBuffer
from hire.errors import InvalidCommand, SpecificError
from hire.keymaps import Binding, KeymapRegistry, KeymapResolver, KeyStroke
from hire.keymaps.defaults import load_default_keymaps
from hire.modes import (
    KeyInput,
    NormalMode,
    PendingConfirmError,
    PendingDelete,
    PendingMark,
    PendingQuit,
    make_context,
)
from hire.modes.mode_manager import ModeManager


def make_manager(*rows: str, buffer: Optional[TextBuffer] = None) -> ModeManager:
    context = make_context(buffer if buffer is not None else TextBuffer(rows))
    return ModeManager.with_default_modes(context)


def key(name: str) -> KeyInput:
    if len(name) == 1:
        return KeyInput.char(name)
    return KeyInput(key=name)


def press(manager: ModeManager, *names: str) -> None:
    for name in names:
        manager.handle_key(key(name))


def lines_of(manager: ModeManager) -> tuple[str, ...]:
    return tuple(manager.context.buffer.snapshot())


def test_normal_mode_uses_keymap_binding() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    context = make_context(TextBuffer(["abc\n"]))
    context.extras["keymap_resolver"] = KeymapResolver(registry)
    mode = NormalMode(context)

    result = mode.handle_key(key("i"))

    assert result.switch_to == "insert"
    assert result.consumed is True


def test_normal_mode_unbound_key_is_invalid_command() -> None:
    manager = make_manager("abc\n")
    mode = manager.active_mode
    assert mode is not None

    with pytest.raises(InvalidCommand):
        mode.handle_key(key("Z"))


def test_unbound_key_is_queued_and_acknowledged() -> None:
    manager = make_manager("abc\n")

    result = manager.handle_key(key("Z"))

    assert result.status == "error"
    assert result.message == "[Error]: Invalid Command: Z!"
    assert isinstance(manager.context.pending, PendingConfirmError)
    assert len(manager.errors) == 1

    press(manager, "l")

    assert manager.context.pending is None
    assert len(manager.errors) == 0
    # The acknowledging key does nothing else.
    assert manager.context.viewport.cursor == (0, 0)


def test_multiple_errors_are_acknowledged_oldest_first() -> None:
    manager = make_manager("abc\n")
    manager.report(SpecificError("first"))
    manager.report(SpecificError("second"))

    assert manager.errors.current().display() == "[Error]: first!"
    press(manager, "x")
    assert isinstance(manager.context.pending, PendingConfirmError)
    assert manager.errors.current().display() == "[Error]: second!"
    press(manager, "x")
    assert manager.context.pending is None


def test_insert_mode_edits_and_escape_returns_to_normal() -> None:
    manager = make_manager("ac\n")

    press(manager, "a", "b", "ESC")

    assert lines_of(manager) == ("abc\n",)
    assert manager.mode_name == "normal"
    assert manager.context.viewport.cursor == (0, 2)


def test_insert_enter_splits_and_backspace_joins() -> None:
    manager = make_manager("abcd\n")
    manager.context.viewport.set_cursor(0, 2)

    press(manager, "i", "ENTER")
    assert lines_of(manager) == ("ab\n", "cd\n")
    assert manager.context.viewport.cursor == (1, 0)

    press(manager, "BACKSPACE")
    assert lines_of(manager) == ("abcd\n",)
    assert manager.context.viewport.cursor == (0, 2)


def test_insert_tab_uses_options() -> None:
    manager = make_manager("x\n")

    press(manager, "i", "TAB")

    assert lines_of(manager) == ("    x\n",)


def test_newline_on_empty_buffer_opens_single_line() -> None:
    manager = make_manager()

    press(manager, "O")

    assert lines_of(manager) == ("\n",)
    assert manager.context.viewport.cursor == (0, 0)
    assert manager.mode_name == "insert"


def test_newline_below_last_line_without_terminator() -> None:
    manager = make_manager("end")

    press(manager, "o", "z")

    assert lines_of(manager) == ("end\n", "z")
    assert manager.context.viewport.cursor == (1, 1)


def test_quit_on_dirty_buffer_asks_for_confirmation() -> None:
    manager = make_manager("abc\n")
    press(manager, "x")
    assert manager.context.buffer.is_dirty()

    press(manager, "q")
    assert manager.context.pending == PendingQuit(confirmed=False)
    assert manager.context.ask_message == "Unsaved changes, quit anyway? (y for yes)"

    press(manager, "y")
    assert manager.context.pending == PendingQuit(confirmed=True)
    assert manager.context.ask_message is None


def test_quit_confirmation_cancelled_by_other_key() -> None:
    manager = make_manager("abc\n")
    press(manager, "x", "q", "n")

    assert manager.context.pending is None
    assert manager.context.ask_message is None


def test_quit_on_clean_buffer_is_immediate() -> None:
    manager = make_manager("abc\n")

    press(manager, "q")

    assert manager.context.pending == PendingQuit(confirmed=True)


def test_delete_line_continuation() -> None:
    manager = make_manager("a\n", "b\n", "c\n")
    manager.context.viewport.set_cursor(2, 0)

    press(manager, "d")
    assert manager.context.pending == PendingDelete()

    press(manager, "d")
    assert lines_of(manager) == ("a\n", "b\n")
    assert manager.context.viewport.cursor == (1, 0)
    assert manager.context.pending is None


def test_wrong_continuation_key_is_invalid_command() -> None:
    manager = make_manager("a\n")

    press(manager, "d", "k")

    assert isinstance(manager.context.pending, PendingConfirmError)
    assert isinstance(manager.errors.current(), InvalidCommand)
    assert lines_of(manager) == ("a\n",)


@pytest.mark.parametrize("mark_first", [True, False])
def test_marked_region_delete_is_order_independent(mark_first: bool) -> None:
    manager = make_manager("hello\n", "big\n", "world\n")
    viewport = manager.context.viewport
    first, second = ((0, 2), (2, 3)) if mark_first else ((2, 3), (0, 2))

    viewport.set_cursor(*first)
    press(manager, "m")
    assert manager.context.pending == PendingMark()
    press(manager, "m")
    viewport.set_cursor(*second)
    press(manager, "d")

    assert lines_of(manager) == ("held\n",)
    assert viewport.mark is None
    assert viewport.cursor == (0, 2)


def test_mark_cancel_and_escape() -> None:
    manager = make_manager("abc\n")
    viewport = manager.context.viewport

    press(manager, "m", "m")
    assert viewport.mark == (0, 0)
    press(manager, "M")
    assert viewport.mark is None

    press(manager, "m", "m", "ESC")
    assert viewport.mark is None


def test_change_line_keeps_terminator_and_enters_insert() -> None:
    manager = make_manager("abc\n", "def\n")

    press(manager, "c", "c", "x")

    assert lines_of(manager) == ("x\n", "def\n")
    assert manager.mode_name == "insert"


def test_change_with_mark_deletes_region_and_enters_insert() -> None:
    manager = make_manager("abcdef\n")
    viewport = manager.context.viewport
    viewport.set_cursor(0, 1)
    press(manager, "m", "m")
    viewport.set_cursor(0, 4)

    press(manager, "c")

    assert lines_of(manager) == ("aef\n",)
    assert manager.mode_name == "insert"


def test_replace_char() -> None:
    manager = make_manager("abc\n")
    manager.context.viewport.set_cursor(0, 1)

    press(manager, "r", "Z")

    assert lines_of(manager) == ("aZc\n",)
    assert manager.mode_name == "normal"


def test_editing_an_empty_buffer_is_an_error() -> None:
    manager = make_manager()

    press(manager, "x")

    error = manager.errors.current()
    assert isinstance(error, SpecificError)
    assert error.display() == "[Error]: Cannot edit an empty file!"


def test_search_prompt_collects_pattern_then_jumps() -> None:
    manager = make_manager("alpha\n", "beta\n", "gamma\n")

    press(manager, "/", "m", "m", "ENTER")

    assert manager.context.prompt is None
    assert manager.context.pending is None
    assert manager.context.viewport.cursor == (2, 2)
    assert manager.context.search.summary() == (1, 1)


def test_search_prompt_escape_cancels() -> None:
    manager = make_manager("alpha\n")

    press(manager, "/", "a", "ESC")

    assert manager.context.prompt is None
    assert manager.context.pending is None
    assert not manager.context.search.has_history()


def test_search_jump_cycles_and_escape_clears_history() -> None:
    manager = make_manager("ab ab\n", "ab\n")

    press(manager, "/", "a", "b", "ENTER")
    assert manager.context.viewport.cursor == (0, 0)

    press(manager, "n")
    assert manager.context.viewport.cursor == (0, 3)
    press(manager, "N", "N")
    assert manager.context.viewport.cursor == (1, 0)

    press(manager, "ESC")
    assert not manager.context.search.has_history()


def test_user_binding_replaces_default() -> None:
    manager = make_manager("abc\n")
    manager.keymap_registry.register_binding(
        Binding(
            id="config.normal.x",
            mode="normal",
            key=KeyStroke("x"),
            action_id="core.move_cursor",
            args=("line", "end"),
        ),
        replace=True,
    )

    press(manager, "x")

    assert lines_of(manager) == ("abc\n",)
    assert manager.context.viewport.cursor == (0, 2)


def test_search_jump_after_line_delete_stays_inside_buffer() -> None:
    manager = make_manager("hello\n", "hello\n")
    press(manager, "/", "l", "ENTER")
    assert manager.context.viewport.cursor == (0, 2)

    press(manager, "j", "d", "d")
    assert lines_of(manager) == ("hello\n",)

    for _ in range(3):
        press(manager, "n")
        row, column = manager.context.viewport.cursor
        assert row < manager.context.buffer.line_count
        assert (row, column) in ((0, 2), (0, 3))
    assert manager.context.search.summary() == (2, 2)


def test_insert_right_arrow_reaches_end_of_line() -> None:
    manager = make_manager("abc\n")

    press(manager, "i", "RIGHT", "RIGHT", "RIGHT", "RIGHT", "d")

    assert manager.context.viewport.cursor == (0, 4)
    assert lines_of(manager) == ("abcd\n",)


def test_normal_right_arrow_stops_on_last_character() -> None:
    manager = make_manager("abc\n")

    press(manager, "RIGHT", "RIGHT", "RIGHT")

    assert manager.context.viewport.cursor == (0, 2)
    assert manager.context.mode == "normal"
