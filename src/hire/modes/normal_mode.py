"""Normal mode: keymap lookup plus pending-operation continuations."""

from __future__ import annotations

from typing import Dict

from hire.errors import InvalidCommand
from hire.runtime import telemetry

from .base_mode import Invocation, KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import execute_match, require_keymap_resolver
from .pending import (
    PendingChange,
    PendingCommand,
    PendingDelete,
    PendingMark,
    PendingQuit,
    PendingReplaceChar,
    PendingSearch,
)

# Action that consumes the argument key for each pending variant.
CONTINUATIONS: Dict[type, str] = {
    PendingMark: "core.mark",
    PendingDelete: "edit.delete",
    PendingChange: "edit.change",
    PendingReplaceChar: "edit.replace_char",
    PendingQuit: "core.quit",
    PendingSearch: "search.search",
}


class NormalMode(Mode):
    name = "normal"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("hire.modes.normal")
        self._resolver = require_keymap_resolver(context)

    def handle_key(self, key: KeyInput) -> ModeResult:
        pending = self.context.pending
        if pending is not None:
            # Cleared first; the continuation may arm a new one.
            self.context.pending = None
            return self._continue(pending, key)

        result = self._resolver.resolve(self.name, key.token)
        if result.status != "match" or result.match is None:
            raise InvalidCommand(key.token)
        return execute_match(self.context, result.match)

    def _continue(self, pending: PendingCommand, key: KeyInput) -> ModeResult:
        action_id = CONTINUATIONS.get(type(pending))
        if action_id is None:
            raise InvalidCommand(key.token)
        action = self._resolver.registry.get_action(action_id)
        if isinstance(pending, PendingSearch):
            invocation = Invocation(args=(pending.pattern,))
        else:
            invocation = Invocation(key=key)
        with telemetry.span(
            "keymaps::continue",
            component="keymaps",
            metadata={"pending": pending.name, "action": action_id, "key": key.token},
        ):
            outcome = action(self.context, invocation)
        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


__all__ = ["NormalMode", "CONTINUATIONS"]
