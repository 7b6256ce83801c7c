from __future__ import annotations

from pathlib import Path

import pytest

from hire.buffer import TextBuffer, lines, read_lines
from hire.errors import BufferIOError, BufferRangeError, SpecificError


def make_buffer(*rows: str) -> TextBuffer:
    return TextBuffer(rows)


def test_read_lines_keeps_terminators(tmp_path: Path) -> None:
    path = tmp_path / "sample.txt"
    path.write_bytes(b"one\r\ntwo\nthree")

    assert read_lines(path) == ["one\r\n", "two\n", "three"]


def test_read_lines_empty_file_has_no_lines(tmp_path: Path) -> None:
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")

    assert read_lines(path) == []


def test_load_missing_file_leaves_buffer_untouched(tmp_path: Path) -> None:
    buffer = make_buffer("keep\n")

    with pytest.raises(BufferIOError) as excinfo:
        buffer.load(tmp_path / "missing.txt")

    assert excinfo.value.kind == "FileNotFoundError"
    assert excinfo.value.display().startswith("[IO Error]: FileNotFoundError")
    assert buffer.snapshot() == ("keep\n",)


def test_get_range_returns_copy() -> None:
    buffer = make_buffer("a\n", "b\n", "c\n")

    rows = buffer.get_range(0, 1)
    rows.append("x\n")

    assert buffer.line_count == 3
    assert buffer.get_range(0, 2) == ["a\n", "b\n", "c\n"]


@pytest.mark.parametrize(
    ("from_row", "to_row"),
    [(1, 0), (-1, 0), (0, 3), (3, 3)],
)
def test_get_range_rejects_bad_ranges(from_row: int, to_row: int) -> None:
    buffer = make_buffer("a\n", "b\n", "c\n")

    with pytest.raises(BufferRangeError):
        buffer.get_range(from_row, to_row)


def test_empty_buffer_rejects_every_range() -> None:
    buffer = TextBuffer()

    with pytest.raises(BufferRangeError):
        buffer.get_range(0, 0)
    with pytest.raises(BufferRangeError):
        buffer.replace_range(0, 0, ["x"])


def test_replace_range_delete_at_first_row() -> None:
    buffer = make_buffer("a\n", "b\n", "c\n")

    buffer.replace_range(0, 0, [])

    assert buffer.snapshot() == ("b\n", "c\n")
    assert buffer.is_dirty()


def test_replace_range_delete_at_last_row() -> None:
    buffer = make_buffer("a\n", "b\n", "c\n")

    buffer.replace_range(1, 2, [])

    assert buffer.snapshot() == ("a\n",)


def test_replace_range_same_length_round_trips() -> None:
    buffer = make_buffer("a\n", "b\n", "c\n", "d\n")

    buffer.replace_range(1, 2, ["x\n", "y\n"])

    assert buffer.get_range(1, 2) == ["x\n", "y\n"]
    assert buffer.snapshot() == ("a\n", "x\n", "y\n", "d\n")


def test_replace_range_longer_inserts_after_range() -> None:
    buffer = make_buffer("a\n", "b\n", "c\n")

    buffer.replace_range(2, 2, ["x\n", "y\n", "z"])

    assert buffer.snapshot() == ("a\n", "b\n", "x\n", "y\n", "z")


def test_replace_range_shorter_drops_unmatched_rows() -> None:
    buffer = make_buffer("a\n", "b\n", "c\n", "d\n")

    buffer.replace_range(0, 2, ["x\n"])

    assert buffer.snapshot() == ("x\n", "d\n")


def test_insert_lines_into_empty_buffer() -> None:
    buffer = TextBuffer()

    buffer.insert_lines(0, [lines.NEWLINE])

    assert buffer.snapshot() == ("\n",)
    assert buffer.is_dirty()


def test_save_after_load_is_byte_identical(tmp_path: Path) -> None:
    original = b"first\r\nsecond\n\nlast without newline"
    path = tmp_path / "doc.txt"
    path.write_bytes(original)
    buffer = TextBuffer()
    buffer.load(path)

    path.write_bytes(b"")
    buffer.save()

    assert path.read_bytes() == original
    assert not buffer.is_dirty()


def test_save_writes_edits_and_clears_dirty(tmp_path: Path) -> None:
    path = tmp_path / "doc.txt"
    path.write_text("a\nb\n")
    buffer = TextBuffer()
    buffer.load(path)
    buffer.replace_range(1, 1, ["B\n"])

    buffer.save()

    assert path.read_text() == "a\nB\n"
    assert not buffer.is_dirty()


def test_failed_save_keeps_dirty_and_content(tmp_path: Path) -> None:
    target = tmp_path / "gone" / "doc.txt"
    buffer = TextBuffer(["a\n"], path=target)
    buffer.replace_range(0, 0, ["b\n"])

    with pytest.raises(BufferIOError):
        buffer.save()

    assert buffer.is_dirty()
    assert buffer.snapshot() == ("b\n",)


def test_save_without_path_is_specific_error() -> None:
    buffer = make_buffer("a\n")

    with pytest.raises(SpecificError):
        buffer.save()


def test_line_helpers_handle_crlf_and_bare_last_line() -> None:
    assert lines.terminator("ab\r\n") == "\r\n"
    assert lines.content_length("ab\r\n") == 2
    assert lines.last_column("") == 0
    assert lines.split_at("abcd\n", 2) == ("ab\n", "cd\n")
    assert lines.join("ab\r\n", "cd") == "abcd"
