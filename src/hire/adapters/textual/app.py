"""Executable Textual app hosting the editor."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from typing import Optional, Sequence, Tuple

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Static

from hire.engine import Editor
from hire.errors import EditorError
from hire.highlight import DEFAULT_THEME
from hire.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks

POLL_INTERVAL = 0.05

SPECIAL_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "backspace": "BACKSPACE",
    "tab": "TAB",
    "up": "UP",
    "down": "DOWN",
    "left": "LEFT",
    "right": "RIGHT",
    "pageup": "PAGEUP",
    "pagedown": "PAGEDOWN",
}


def normalize_key(
    key: str, character: Optional[str]
) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
    """Map a Textual key name to ``(key, text, modifiers)``; None to ignore."""

    if key in SPECIAL_KEYS:
        return (SPECIAL_KEYS[key], None, ())
    if key.startswith("ctrl+"):
        name = key[len("ctrl+") :]
        if len(name) == 1:
            return (name, None, ("ctrl",))
        return None
    if character and len(character) == 1 and character.isprintable():
        return (character, character, ())
    return None


class HireApp(App[int]):
    """Full-screen editor view with a one-line status bar."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor-view {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
	}
	"""

    BINDINGS = [("ctrl+q", "quit", "Quit")]

    def __init__(self, editor: Editor, *, interval: float = POLL_INTERVAL) -> None:
        super().__init__()
        self.editor = editor
        self.adapter: TextualEditorAdapter | None = None
        self._interval = interval
        self._view_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._view_widget = Static("", id="editor-view")
        self._status_widget = Static("", id="status-line")
        yield self._view_widget
        yield self._status_widget

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            log=self.log.debug,
        )
        self.adapter = TextualEditorAdapter(self.editor, hooks)
        self.set_interval(self._interval, self._on_tick)

    def _on_tick(self) -> None:
        if not self.adapter or not self._view_widget:
            return
        size = self._view_widget.size
        if size.height <= 0 or size.width <= 0:
            return
        self.adapter.tick(size.height, size.width)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = normalize_key(event.key, event.character)
        if normalized is None:
            return
        key, text, modifiers = normalized
        event.stop()
        event.prevent_default()
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        if self.editor.should_exit:
            self.exit(0)

    def _update_view(self, view: Text) -> None:
        if self._view_widget:
            self._view_widget.update(view)

    def _update_status(self, status: Text) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="hire", description="Modal terminal text editor.")
    parser.add_argument("path", help="File to edit")
    parser.add_argument(
        "--config",
        default=os.environ.get("HIRE_CONFIG"),
        help="TOML file with key bindings and options",
    )
    parser.add_argument(
        "--theme",
        default=os.environ.get("HIRE_THEME", DEFAULT_THEME),
        help=f"Pygments style name (default: {DEFAULT_THEME})",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production"),
        default=None,
        help="telelog preset to use instead of the environment configuration",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)

    editor = Editor()
    try:
        asyncio.run(editor.init(args.path, config_path=args.config, theme=args.theme))
    except EditorError as exc:
        telemetry.record_event(
            "editor.startup_failed", level="error", data={"error": exc.display()}
        )
        print(exc.display(), file=sys.stderr)
        return 1

    HireApp(editor).run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    sys.exit(main())
