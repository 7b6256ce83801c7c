"""Search actions: open the prompt, run a pattern and step through matches."""

from __future__ import annotations

from hire.modes.base_mode import Invocation, ModeContext, ModeResult
from hire.modes.command_line import CommandLine
from hire.modes.pending import PendingSearch
from hire.runtime.telemetry import span
from hire.search import find_matches


def run_search(context: ModeContext, pattern: str) -> ModeResult:
    """Rebuild the match index for ``pattern`` and jump to the nearest match
    at or after the cursor. No match is not an error."""

    with span(
        "search::run", component="search", metadata={"pattern": pattern}
    ) as handle:
        matches = find_matches(context.buffer.snapshot(), pattern)
        context.search.rebuild(pattern, matches, version=context.buffer.version)
        handle.add_metadata("matches", len(matches))
        target = context.search.nearest_next(context.viewport.cursor)
        if target is None:
            return ModeResult(refresh=True, status="search_miss", message=pattern)
        context.viewport.set_cursor(*target)
        return ModeResult(refresh=True, status="search", message=pattern)


def refresh_matches(context: ModeContext) -> bool:
    """Re-run the current pattern if the buffer changed since it was found.

    A previous selection is re-anchored on the match nearest the cursor.
    """

    index = context.search
    buffer = context.buffer
    if not index.is_stale(buffer.version):
        return False
    had_selection = index.selected is not None
    index.rebuild(
        index.pattern, find_matches(buffer.snapshot(), index.pattern), version=buffer.version
    )
    if had_selection:
        index.nearest_next(context.viewport.cursor)
    return True


def search_prompt(context: ModeContext, invocation: Invocation) -> ModeResult:
    """Search for ``args[0]``, or open the search prompt when no pattern is bound."""

    if invocation.args:
        return run_search(context, invocation.args[0])
    pending = PendingSearch()
    context.pending = pending
    context.prompt = CommandLine(pending)
    return ModeResult(refresh=True, status="prompt", message="search")


def search_jump(context: ModeContext, invocation: Invocation) -> ModeResult:
    forward = invocation.arg(0, "next") != "prev"
    refreshed = refresh_matches(context)
    target = context.search.advance(forward)
    if target is None:
        return ModeResult(refresh=refreshed, status="noop")
    context.viewport.set_cursor(*target)
    context.viewport.clamp_cursor(context.buffer)
    return ModeResult(refresh=True, status="search_jump")


__all__ = ["refresh_matches", "run_search", "search_prompt", "search_jump"]
