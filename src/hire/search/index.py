"""Pattern matches over the buffer and the selection cursor into them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence

from hire.buffer.state import Cursor


class SearchMatch(NamedTuple):
    """One occurrence: ``row`` plus the half-open column range ``[start, end)``."""

    row: int
    start: int
    end: int

    @property
    def position(self) -> Cursor:
        return (self.row, self.start)


def find_matches(lines: Sequence[str], pattern: str) -> List[SearchMatch]:
    """All non-overlapping occurrences, left to right, top to bottom."""

    if not pattern:
        return []
    width = len(pattern)
    found: List[SearchMatch] = []
    for row, line in enumerate(lines):
        column = line.find(pattern)
        while column != -1:
            found.append(SearchMatch(row, column, column + width))
            column = line.find(pattern, column + width)
    return found


@dataclass(slots=True)
class SearchIndex:
    pattern: str = ""
    matches: List[SearchMatch] = field(default_factory=list)
    selected: Optional[int] = None
    version: int = 0
    _by_row: Dict[int, List[SearchMatch]] = field(default_factory=dict, repr=False)

    def rebuild(
        self, pattern: str, matches: Iterable[SearchMatch], *, version: int = 0
    ) -> None:
        self.pattern = pattern
        self.version = version
        self.matches = sorted(matches)
        self.selected = None
        self._by_row = {}
        for match in self.matches:
            self._by_row.setdefault(match.row, []).append(match)

    def clear(self) -> None:
        self.rebuild("", ())

    def is_stale(self, version: int) -> bool:
        """True when the matches were found in an older buffer version."""

        return bool(self.pattern) and version != self.version

    def has_history(self) -> bool:
        return bool(self.pattern or self.matches or self.selected is not None)

    def current(self) -> Optional[SearchMatch]:
        if self.selected is None:
            return None
        return self.matches[self.selected]

    def nearest_next(self, cursor: Cursor) -> Optional[Cursor]:
        """Select the first match at or after ``cursor``, wrapping to the first."""

        if not self.matches:
            return None
        self.selected = 0
        for index, match in enumerate(self.matches):
            if match.position >= cursor:
                self.selected = index
                break
        return self.matches[self.selected].position

    def advance(self, forward: bool) -> Optional[Cursor]:
        """Step the selection circularly; with nothing selected the first
        match is the reference point, so N steps either way land back on it."""

        if not self.matches:
            return None
        step = 1 if forward else -1
        current = self.selected if self.selected is not None else 0
        self.selected = (current + step) % len(self.matches)
        return self.matches[self.selected].position

    def contains(self, position: Cursor) -> bool:
        row, column = position
        return any(
            match.start <= column < match.end for match in self._by_row.get(row, ())
        )

    def summary(self) -> Optional[tuple[int, int]]:
        """``(selected, total)`` with a one-based selected index, for status lines."""

        if self.selected is None:
            return None
        return self.selected + 1, len(self.matches)


__all__ = ["SearchIndex", "SearchMatch", "find_matches"]
