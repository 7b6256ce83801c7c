"""Editing verbs bound to keys through the keymap registry."""

from .core import (
    change_insert,
    escape_command,
    mark,
    move_cursor,
    page_scroll,
    quit_editor,
    save,
)
from .editing import (
    backward_char,
    change,
    delete,
    delete_char,
    insert_text,
    newline,
    replace_char,
    split_line,
)
from .search import refresh_matches, run_search, search_jump, search_prompt

__all__ = [
    "change_insert",
    "escape_command",
    "mark",
    "move_cursor",
    "page_scroll",
    "quit_editor",
    "save",
    "backward_char",
    "change",
    "delete",
    "delete_char",
    "insert_text",
    "newline",
    "replace_char",
    "split_line",
    "refresh_matches",
    "run_search",
    "search_prompt",
    "search_jump",
]
