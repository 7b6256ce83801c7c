"""Single-line entry prompt that collects a search pattern."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Literal

from hire.runtime import telemetry

from .base_mode import KeyInput
from .pending import PendingSearch

PromptOutcome = Literal["editing", "cancel", "submit"]


class CommandLine:
    """Absorbs keys while open; the caller checks the outcome of each key.

    The prompt carries the pending search it was opened for and fills in the
    pattern on submit.
    """

    prefix = "/"

    def __init__(self, pending: PendingSearch) -> None:
        self.pending = pending
        self._typed: List[str] = list(pending.pattern)
        self.cursor = len(self._typed)
        self.logger = telemetry.get_logger("hire.modes.command_line")

    @property
    def text(self) -> str:
        return "".join(self._typed)

    def display(self) -> str:
        return f"{self.prefix}{self.text}"

    def finish(self) -> PendingSearch:
        return replace(self.pending, pattern=self.text)

    def handle_key(self, key: KeyInput) -> PromptOutcome:
        token = key.token
        if token == "ESC":
            return "cancel"
        if token == "ENTER":
            telemetry.record_event(
                "command_line.submit", level="debug", data={"text": self.text}
            )
            return "submit"
        if token == "BACKSPACE":
            if self.cursor > 0:
                self.cursor -= 1
                del self._typed[self.cursor]
            return "editing"
        if token == "LEFT":
            self.cursor = max(0, self.cursor - 1)
            return "editing"
        if token == "RIGHT":
            self.cursor = min(len(self._typed), self.cursor + 1)
            return "editing"

        character = key.printable
        if character is not None:
            self._typed.insert(self.cursor, character)
            self.cursor += 1
        return "editing"


__all__ = ["CommandLine", "PromptOutcome"]
