"""Per-line syntax highlighting backed by pygments."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, List

from pygments import lex
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.style import StyleMeta
from pygments.styles import get_style_by_name
from pygments.token import _TokenType
from pygments.util import ClassNotFound

from hire.buffer import lines as line_ops
from hire.errors import ConfigError, SpecificError
from hire.runtime import telemetry

DEFAULT_THEME = "monokai"


@dataclass(frozen=True, slots=True)
class StyledSpan:
    """A run of text and the rich style string it is drawn with."""

    style: str
    text: str


class SyntaxHighlighter:
    """Splits a line into styled spans whose texts concatenate back to it."""

    def __init__(self, lexer: Lexer, style: StyleMeta) -> None:
        self._lexer = lexer
        self._style = style
        self._styles: Dict[_TokenType, str] = {}

    @classmethod
    def for_path(
        cls, path: str | os.PathLike[str], style_name: str = DEFAULT_THEME
    ) -> "SyntaxHighlighter":
        with telemetry.span(
            "highlight::init",
            component="highlight",
            metadata={"path": path, "theme": style_name},
        ) as handle:
            try:
                style = get_style_by_name(style_name)
            except ClassNotFound as exc:
                raise ConfigError(f"Unknown theme '{style_name}'") from exc
            options = {"stripnl": False, "ensurenl": False}
            try:
                lexer = get_lexer_for_filename(os.fspath(path), **options)
            except ClassNotFound:
                lexer = TextLexer(**options)
            handle.add_metadata("language", lexer.name)
            return cls(lexer, style)

    @property
    def language(self) -> str:
        return self._lexer.name

    @property
    def background_color(self) -> str:
        color = getattr(self._style, "background_color", None)
        if not color:
            raise SpecificError("background color unavailable")
        return color

    def highlight(self, line: str) -> List[StyledSpan]:
        body = line_ops.content(line)
        spans: List[StyledSpan] = []
        for token_type, value in lex(body, self._lexer):
            if not value:
                continue
            style = self.style_for(token_type)
            if spans and spans[-1].style == style:
                spans[-1] = StyledSpan(style, spans[-1].text + value)
            else:
                spans.append(StyledSpan(style, value))

        # The lexer normalises some input; fall back to a plain run if so.
        if "".join(span.text for span in spans) != body:
            spans = [StyledSpan("", body)] if body else []
        ending = line_ops.terminator(line)
        if ending:
            spans.append(StyledSpan("", ending))
        return spans

    def style_for(self, token_type: _TokenType) -> str:
        cached = self._styles.get(token_type)
        if cached is not None:
            return cached
        info = self._style.style_for_token(token_type)
        parts = []
        if info.get("bold"):
            parts.append("bold")
        if info.get("italic"):
            parts.append("italic")
        if info.get("underline"):
            parts.append("underline")
        if info.get("color"):
            parts.append(f"#{info['color']}")
        style = " ".join(parts)
        self._styles[token_type] = style
        return style


__all__ = ["DEFAULT_THEME", "StyledSpan", "SyntaxHighlighter"]
