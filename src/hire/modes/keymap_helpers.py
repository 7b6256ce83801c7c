"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from hire.keymaps import KeymapResolver, ResolutionMatch
from hire.runtime import telemetry

from .base_mode import Invocation, ModeContext, ModeResult

RESOLVER_KEY = "keymap_resolver"


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get(RESOLVER_KEY)
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError(f"ModeContext.extras missing '{RESOLVER_KEY}'")
    return resolver


def execute_match(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Run a resolved binding with its bound arguments."""

    with telemetry.span(
        "keymaps::execute",
        component="keymaps",
        metadata={"binding_id": match.binding.id, "action": match.action.id},
    ):
        outcome = match.action(context, Invocation(args=match.binding.args))

    if isinstance(outcome, ModeResult):
        return outcome
    return ModeResult(consumed=True)


__all__ = ["RESOLVER_KEY", "require_keymap_resolver", "execute_match"]
