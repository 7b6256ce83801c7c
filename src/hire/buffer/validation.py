"""Range checks shared by buffer reads and writes."""

from __future__ import annotations

from hire.errors import BufferRangeError


def ensure_range(line_count: int, from_row: int, to_row: int) -> None:
    if line_count == 0:
        raise BufferRangeError("Buffer is empty", rows=(from_row, to_row))
    if from_row < 0 or from_row > to_row:
        raise BufferRangeError(
            f"Invalid row range {from_row}..{to_row}", rows=(from_row, to_row)
        )
    if to_row >= line_count:
        raise BufferRangeError(
            f"Row {to_row} out of range ({line_count} lines)",
            rows=(from_row, to_row),
        )
