"""Textual host: adapter, rendering and the runnable app."""

from .controller import StyleCache, TextualEditorAdapter, TextualUIHooks

__all__ = ["StyleCache", "TextualEditorAdapter", "TextualUIHooks"]
