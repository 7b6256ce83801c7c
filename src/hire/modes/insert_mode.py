"""Insert mode: typed text goes straight into the buffer."""

from __future__ import annotations

from hire.actions.editing import backward_char, insert_text, split_line
from hire.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import execute_match, require_keymap_resolver


class InsertMode(Mode):
    name = "insert"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("hire.modes.insert")
        self._resolver = require_keymap_resolver(context)

    def handle_key(self, key: KeyInput) -> ModeResult:
        token = key.token
        if token == "ESC":
            return ModeResult(consumed=True, switch_to="normal", message="exit_insert")
        if token == "ENTER":
            return split_line(self.context)
        if token == "TAB":
            return insert_text(self.context, self.context.options.indent_text())
        if token == "BACKSPACE":
            return backward_char(self.context)

        character = key.printable
        if character is not None:
            return insert_text(self.context, character)

        # Remaining keys (arrows and the like) go through insert-mode bindings.
        result = self._resolver.resolve(self.name, token)
        if result.status == "match" and result.match:
            return execute_match(self.context, result.match)
        return ModeResult(consumed=False, status="ignored")


__all__ = ["InsertMode"]
