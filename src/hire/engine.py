"""Editor facade tying buffer, viewport, search and dispatch together."""

from __future__ import annotations

import asyncio
import os
from typing import Optional

from hire.actions.search import refresh_matches
from hire.buffer import Cursor, TextBuffer, read_lines
from hire.errors import EditorError
from hire.highlight import DEFAULT_THEME, SyntaxHighlighter
from hire.keymaps.config import EditorConfig, load_config
from hire.modes.base_mode import KeyInput, ModeBus, ModeContext, ModeResult
from hire.modes.mode_manager import ModeManager
from hire.modes.pending import PendingCommand, PendingQuit
from hire.options import EditorOptions
from hire.runtime import telemetry
from hire.search import SearchIndex
from hire.viewport import CursorViewport

PathLike = str | os.PathLike[str]


class Editor:
    """One open file and everything needed to edit it.

    Hosts drive it with ``handle_key`` for each key event and ``tick`` once
    per frame, then read the accessors to draw.
    """

    def __init__(self, *, options: Optional[EditorOptions] = None) -> None:
        self.buffer = TextBuffer()
        self.viewport = CursorViewport()
        self.search = SearchIndex()
        self.bus = ModeBus()
        self.context = ModeContext(
            buffer=self.buffer,
            viewport=self.viewport,
            search=self.search,
            bus=self.bus,
            options=options or EditorOptions(),
        )
        self.manager = ModeManager.with_default_modes(self.context)
        self.highlighter: Optional[SyntaxHighlighter] = None
        self._tick_error: Optional[str] = None
        self.logger = telemetry.get_logger("hire.engine")

    async def init(
        self,
        path: PathLike,
        *,
        config_path: Optional[PathLike] = None,
        theme: str = DEFAULT_THEME,
    ) -> None:
        """Read the file, build the highlighter and parse the config
        concurrently. Nothing is applied unless all three succeed."""

        with telemetry.span(
            "editor::init", component="editor", metadata={"path": path}
        ) as handle:
            lines, highlighter, config = await asyncio.gather(
                asyncio.to_thread(read_lines, path),
                asyncio.to_thread(SyntaxHighlighter.for_path, path, theme),
                asyncio.to_thread(load_config, config_path),
            )
            self.apply_config(config)
            self.highlighter = highlighter
            self.buffer.populate(lines, path=path)
            self.viewport.set_cursor(0, 0)
            handle.add_metadata("lines", len(lines))

    def apply_config(self, config: EditorConfig) -> None:
        self.context.options = config.options
        registry = self.manager.keymap_registry
        for binding in config.bindings:
            registry.register_binding(binding, replace=True)

    def handle_key(self, key: KeyInput) -> ModeResult:
        return self.manager.handle_key(key)

    def tick(self, height: int, width: int) -> bool:
        """Reconcile the view for a ``height`` x ``width`` area.

        Returns True when the host should redraw. A reconcile error is queued
        once when it first appears, not on every tick while it persists.
        """

        matches_changed = refresh_matches(self.context)
        try:
            changed = self.viewport.reconcile(height, width, buffer=self.buffer)
        except EditorError as exc:
            message = exc.display()
            if message == self._tick_error:
                return matches_changed
            self._tick_error = message
            self.manager.report(exc)
            return True
        self._tick_error = None
        return changed or matches_changed

    def visible_rows(self) -> range:
        return self.viewport.visible_rows(self.buffer.line_count)

    @property
    def cursor(self) -> Cursor:
        return self.viewport.cursor

    @property
    def mark(self) -> Optional[Cursor]:
        return self.viewport.mark

    @property
    def mode(self) -> str:
        return self.manager.mode_name

    @property
    def pending(self) -> Optional[PendingCommand]:
        return self.context.pending

    @property
    def dirty(self) -> bool:
        return self.buffer.is_dirty()

    @property
    def current_error(self) -> Optional[EditorError]:
        return self.manager.errors.current()

    @property
    def ask_message(self) -> Optional[str]:
        return self.context.ask_message

    @property
    def prompt_text(self) -> Optional[str]:
        prompt = self.context.prompt
        return prompt.display() if prompt is not None else None

    @property
    def search_summary(self) -> Optional[tuple[int, int]]:
        return self.search.summary()

    @property
    def should_exit(self) -> bool:
        pending = self.context.pending
        return isinstance(pending, PendingQuit) and pending.confirmed


__all__ = ["Editor"]
