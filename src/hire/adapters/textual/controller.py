"""Textual adapter: feeds key events to the editor and composes rich text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from rich.text import Text

from hire.buffer import lines as line_ops
from hire.buffer import ordered_span, within_span
from hire.engine import Editor
from hire.errors import SpecificError
from hire.highlight import StyledSpan
from hire.modes import KeyInput, ModeResult
from hire.runtime import telemetry
from hire.viewport import gutter_width, linenr_width

CURSOR_STYLE = "reverse"
MARK_STYLE = "on #44475a"
MATCH_STYLE = "black on yellow"
SELECTED_MATCH_STYLE = "black on dark_orange"
GUTTER_STYLE = "dim"
ERROR_STYLE = "bold white on red"
ASK_STYLE = "bold yellow"


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[Text], None]
    update_status: Callable[[Text], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class StyleCache:
    """Highlighted spans per row, reused until the line text changes or the
    cache is invalidated."""

    def __init__(self) -> None:
        self._rows: Dict[int, tuple[str, List[StyledSpan]]] = {}

    def __len__(self) -> int:
        return len(self._rows)

    def invalidate(self) -> None:
        self._rows.clear()

    def spans(self, row: int, line: str, editor: Editor) -> List[StyledSpan]:
        cached = self._rows.get(row)
        if cached is not None and cached[0] == line:
            return cached[1]
        highlighter = editor.highlighter
        if highlighter is None:
            spans = [StyledSpan("", line)] if line else []
        else:
            spans = highlighter.highlight(line)
        self._rows[row] = (line, spans)
        return spans


def _char_styles(spans: Iterable[StyledSpan]) -> List[str]:
    styles: List[str] = []
    for span in spans:
        styles.extend(span.style for _ in span.text)
    return styles


class TextualEditorAdapter:
    """Bridges an ``Editor`` to Textual widgets through ``TextualUIHooks``."""

    def __init__(self, editor: Editor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        self.cache = StyleCache()
        self.needs_render = True
        self._width = 0
        self._subscribe_events()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).lower() for mod in modifiers)
        result = self.editor.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        if result.refresh:
            self.cache.invalidate()
        self.needs_render = True
        self._log_state(
            "key",
            key=key,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        return result

    def tick(self, height: int, width: int) -> bool:
        """Reconcile the viewport and redraw if anything changed."""

        changed = self.editor.tick(height, width)
        if changed:
            self.cache.invalidate()
        self._width = width
        if changed or self.needs_render:
            self.refresh()
            return True
        return False

    def refresh(self) -> None:
        self.hooks.update_view(self.render_view())
        self.hooks.update_status(self.render_status(self._width))
        self.needs_render = False

    def render_view(self) -> Text:
        editor = self.editor
        view = Text(
            no_wrap=True, overflow="crop", end="", style=self.background_style()
        )
        rows = editor.visible_rows()
        if not rows and editor.buffer.is_empty:
            view.append(" " * gutter_width(0))
            view.append(" ", style=CURSOR_STYLE)
            return view
        for index, row in enumerate(rows):
            if index:
                view.append("\n")
            view.append_text(self.render_row(row))
        return view

    def background_style(self) -> str:
        highlighter = self.editor.highlighter
        if highlighter is None:
            return ""
        try:
            return f"on {highlighter.background_color}"
        except SpecificError:
            # Themes without a background draw on the terminal default.
            return ""

    def render_row(self, row: int) -> Text:
        editor = self.editor
        viewport = editor.viewport
        line = editor.buffer.line(row)
        number_width = linenr_width(editor.buffer.line_count)
        rendered = Text(no_wrap=True, overflow="crop", end="")
        rendered.append(f"{row + 1:>{number_width}} |", style=GUTTER_STYLE)

        styles = _char_styles(self.cache.spans(row, line, editor))
        body = line_ops.content(line)
        region = None
        if viewport.mark is not None:
            region = ordered_span(viewport.mark, viewport.cursor)
        selected = editor.search.current()
        content_width = (viewport.width or 0) - gutter_width(editor.buffer.line_count)
        start = viewport.horizontal_offset
        stop = start + content_width if content_width > 0 else len(body) + 1
        tab = " " * editor.context.options.tab_width

        for column in range(start, min(len(body), stop)):
            char = body[column]
            position = (row, column)
            style = styles[column] if column < len(styles) else ""
            if selected is not None and selected.row == row and selected.start <= column < selected.end:
                style = SELECTED_MATCH_STYLE
            elif editor.search.contains(position):
                style = MATCH_STYLE
            if region is not None and within_span(region, position):
                style = f"{style} {MARK_STYLE}".strip()
            if position == viewport.cursor:
                style = f"{style} {CURSOR_STYLE}".strip()
            rendered.append(tab if char == "\t" else char, style=style)

        if viewport.cursor == (row, len(body)) and start <= len(body) < stop:
            rendered.append(" ", style=CURSOR_STYLE)
        return rendered

    def render_status(self, width: int = 0) -> Text:
        editor = self.editor
        error = editor.current_error
        if error is not None:
            return Text(error.display().replace("\n", " "), style=ERROR_STYLE)
        if editor.ask_message:
            return Text(editor.ask_message, style=ASK_STYLE)
        prompt = editor.prompt_text
        if prompt is not None:
            return Text(prompt)

        left = " --INSERT--" if editor.mode == "insert" else ""
        parts = []
        summary = editor.search_summary
        if summary is not None:
            parts.append(f"[{summary[0]}/{summary[1]}]")
        name = str(editor.buffer.path) if editor.buffer.path is not None else "[No Name]"
        parts.append(f"{name}{'*' if editor.dirty else ''}")
        row, column = editor.cursor
        parts.append(f"{row + 1}:{column + 1}")
        right = " ".join(parts)
        padding = max(1, width - len(left) - len(right))
        return Text(f"{left}{' ' * padding}{right}")

    def _subscribe_events(self) -> None:
        bus = self.editor.bus
        for event in ("buffer.saved",):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        self.needs_render = True

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "mode": self.editor.mode,
            "cursor": self.editor.cursor,
            "pending": self.editor.pending,
            "buffer_version": self.editor.buffer.version,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        line = " ".join([prefix] + [f"{key}={value!r}" for key, value in snapshot.items()])
        self.hooks.log(line)
        telemetry.record_event("adapter.state", level="debug", data=snapshot)


__all__ = ["TextualEditorAdapter", "TextualUIHooks", "StyleCache"]
