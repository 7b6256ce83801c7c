from __future__ import annotations

import pytest

from hire.buffer import TextBuffer
from hire.errors import SpecificError
from hire.viewport import (
    CursorMove,
    CursorViewport,
    clamp_scroll_offset,
    reconcile_horizontal,
    reconcile_vertical,
)


def make_buffer(count: int, text: str = "line") -> TextBuffer:
    return TextBuffer([f"{text}{index}\n" for index in range(count)])


def sized_viewport(buffer: TextBuffer, height: int = 10, width: int = 80) -> CursorViewport:
    viewport = CursorViewport()
    viewport.reconcile(height, width, buffer=buffer)
    return viewport


def test_relative_move_clamps_to_last_column() -> None:
    buffer = TextBuffer(["ab\n", "cd\n"])
    viewport = CursorViewport()

    viewport.move_cursor(CursorMove.relative(5), within_line=True, buffer=buffer)

    assert viewport.cursor == (0, 1)


def test_past_end_move_reaches_append_position() -> None:
    buffer = TextBuffer(["ab\n", "cdef\n"])
    viewport = CursorViewport()

    viewport.move_cursor(
        CursorMove.relative(5), within_line=True, buffer=buffer, past_end=True
    )
    assert viewport.cursor == (0, 2)

    viewport.move_cursor(CursorMove.to_end(), within_line=False, buffer=buffer, past_end=True)
    assert viewport.cursor == (1, 2)


def test_move_on_empty_line_keeps_column_zero() -> None:
    buffer = TextBuffer(["\n", "abc\n"])
    viewport = CursorViewport()

    viewport.move_cursor(CursorMove.relative(3), within_line=True, buffer=buffer)
    assert viewport.cursor == (0, 0)

    viewport.move_cursor(CursorMove.to_end(), within_line=True, buffer=buffer)
    assert viewport.cursor == (0, 0)


def test_vertical_move_clamps_column_to_shorter_row() -> None:
    buffer = TextBuffer(["abcdef\n", "xy\n", "z"])
    viewport = CursorViewport()
    viewport.set_cursor(0, 5)

    viewport.move_cursor(CursorMove.relative(1), within_line=False, buffer=buffer)
    assert viewport.cursor == (1, 1)

    viewport.move_cursor(CursorMove.relative(10), within_line=False, buffer=buffer)
    assert viewport.cursor == (2, 0)

    viewport.move_cursor(CursorMove.to_start(), within_line=False, buffer=buffer)
    assert viewport.cursor == (0, 0)


def test_move_on_empty_buffer_stays_at_origin() -> None:
    viewport = CursorViewport()

    viewport.move_cursor(CursorMove.relative(1), within_line=False, buffer=TextBuffer())

    assert viewport.cursor == (0, 0)


def test_cursor_move_parse() -> None:
    assert CursorMove.parse("+3") == CursorMove.relative(3)
    assert CursorMove.parse("-1") == CursorMove.relative(-1)
    assert CursorMove.parse("end") == CursorMove.to_end()
    with pytest.raises(ValueError):
        CursorMove.parse("sideways")


def test_page_scroll_requires_known_height() -> None:
    viewport = CursorViewport()

    with pytest.raises(SpecificError):
        viewport.page_scroll(1, line_count=100)


def test_page_scroll_clamps_past_either_end() -> None:
    buffer = make_buffer(100)
    viewport = sized_viewport(buffer, height=10)

    viewport.page_scroll(1000, line_count=buffer.line_count)
    assert viewport.vertical_offset == 90

    viewport.page_scroll(-1000, line_count=buffer.line_count)
    assert viewport.vertical_offset == 0


def test_page_scroll_on_short_buffer_stays_at_zero() -> None:
    buffer = make_buffer(3)
    viewport = sized_viewport(buffer, height=10)

    viewport.page_scroll(1, line_count=buffer.line_count)

    assert viewport.vertical_offset == 0


@pytest.mark.parametrize("deltas", [(1, 1, 1, 1), (-5, 3, 7), (20, -1, -30, 2)])
def test_page_scroll_offset_stays_in_bounds(deltas: tuple[int, ...]) -> None:
    buffer = make_buffer(35)
    viewport = sized_viewport(buffer, height=8)

    for delta in deltas:
        viewport.page_scroll(delta, line_count=buffer.line_count)
        assert 0 <= viewport.vertical_offset <= buffer.line_count - 8


def test_explicit_scroll_pulls_cursor_to_window_edge() -> None:
    buffer = make_buffer(100)
    viewport = sized_viewport(buffer, height=10)

    viewport.page_scroll(1, line_count=buffer.line_count)
    changed = viewport.reconcile(10, 80, buffer=buffer)

    assert changed is True
    assert viewport.vertical_offset == 10
    assert viewport.cursor == (10, 0)
    assert viewport.scrolling is False


def test_motion_outside_window_recenters() -> None:
    buffer = make_buffer(100)
    viewport = sized_viewport(buffer, height=10)
    viewport.set_cursor(50, 0)

    assert viewport.reconcile(10, 80, buffer=buffer) is True
    assert viewport.vertical_offset == 45
    assert list(viewport.visible_rows(buffer.line_count)) == list(range(45, 55))


def test_single_line_buffer_never_scrolls() -> None:
    buffer = TextBuffer(["only\n"])
    viewport = CursorViewport()

    assert viewport.reconcile(10, 80, buffer=buffer) is False
    assert viewport.reconcile(10, 80, buffer=buffer) is False
    assert viewport.vertical_offset == 0


def test_height_change_requests_refresh() -> None:
    buffer = make_buffer(5)
    viewport = sized_viewport(buffer, height=10)

    assert viewport.reconcile(12, 80, buffer=buffer) is True


def test_too_narrow_window_is_specific_error_and_clears_scroll_flag() -> None:
    buffer = make_buffer(5)
    viewport = sized_viewport(buffer, height=10)
    viewport.page_scroll(1, line_count=buffer.line_count)

    with pytest.raises(SpecificError):
        viewport.reconcile(10, 5, buffer=buffer)
    assert viewport.scrolling is False


def test_reconcile_vertical_is_pure() -> None:
    update = reconcile_vertical(row=3, offset=0, height=10, scrolling=False)
    assert (update.offset, update.cursor_row, update.changed) == (0, 3, False)

    update = reconcile_vertical(row=2, offset=10, height=10, scrolling=True)
    assert (update.offset, update.cursor_row, update.changed) == (10, 10, True)


def test_reconcile_horizontal_follows_cursor() -> None:
    # 20 columns minus a 6-column gutter leaves 14 for text.
    update = reconcile_horizontal(column=30, offset=0, width=20, line_count=10)
    assert update.offset == 23 and update.changed

    update = reconcile_horizontal(column=4, offset=23, width=20, line_count=10)
    assert update.offset == 4


def test_clamp_scroll_offset() -> None:
    assert clamp_scroll_offset(-3, height=10, line_count=50) == 0
    assert clamp_scroll_offset(45, height=10, line_count=50) == 40
    assert clamp_scroll_offset(5, height=10, line_count=4) == 0
