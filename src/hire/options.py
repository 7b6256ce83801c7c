"""User-tunable editing options."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EditorOptions:
    tab_indent: bool = False
    tab_width: int = 4

    def __post_init__(self) -> None:
        if self.tab_width < 1:
            raise ValueError("tab_width must be positive")

    def indent_text(self) -> str:
        """Text inserted by the Tab key."""

        return "\t" if self.tab_indent else " " * self.tab_width


__all__ = ["EditorOptions"]
