"""Built-in actions and the default normal/insert key bindings."""

from __future__ import annotations

from typing import Iterable, Sequence

from hire.actions import core as core_actions
from hire.actions import editing as edit_actions
from hire.actions import search as search_actions

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="core.move_cursor",
        handler=core_actions.move_cursor,
        description="Move the cursor along the line or across rows",
    ),
    ActionRef(
        id="core.page_scroll",
        handler=core_actions.page_scroll,
        description="Scroll the view by whole pages",
    ),
    ActionRef(
        id="core.change_insert",
        handler=core_actions.change_insert,
        description="Enter insert mode",
    ),
    ActionRef(
        id="core.mark",
        handler=core_actions.mark,
        description="Set or cancel the selection mark",
    ),
    ActionRef(
        id="core.escape_command",
        handler=core_actions.escape_command,
        description="Clear the mark or the last search",
    ),
    ActionRef(
        id="core.save",
        handler=core_actions.save,
        description="Write the buffer to its file",
    ),
    ActionRef(
        id="core.quit",
        handler=core_actions.quit_editor,
        description="Quit, asking first if there are unsaved changes",
    ),
    ActionRef(
        id="edit.delete",
        handler=edit_actions.delete,
        description="Delete the marked region or the current line",
    ),
    ActionRef(
        id="edit.delete_char",
        handler=edit_actions.delete_char,
        description="Delete the character under the cursor",
    ),
    ActionRef(
        id="edit.backward_char",
        handler=edit_actions.backward_char,
        description="Delete the character before the cursor",
    ),
    ActionRef(
        id="edit.change",
        handler=edit_actions.change,
        description="Delete then enter insert mode",
    ),
    ActionRef(
        id="edit.replace_char",
        handler=edit_actions.replace_char,
        description="Replace the character under the cursor",
    ),
    ActionRef(
        id="edit.newline",
        handler=edit_actions.newline,
        description="Open a new line and enter insert mode",
    ),
    ActionRef(
        id="search.search",
        handler=search_actions.search_prompt,
        description="Search the buffer",
    ),
    ActionRef(
        id="search.search_jump",
        handler=search_actions.search_jump,
        description="Jump to the next or previous match",
    ),
)


def _bind(
    mode: str,
    key: str,
    action_id: str,
    *args: str,
    modifiers: tuple[str, ...] = (),
    description: str = "",
) -> Binding:
    stroke = KeyStroke(key, modifiers)
    return Binding(
        id=f"{mode}.{stroke.token}",
        mode=mode,
        key=stroke,
        action_id=action_id,
        args=args,
        description=description,
        source="defaults",
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("normal", "h", "core.move_cursor", "line", "-1", description="Left"),
    _bind("normal", "LEFT", "core.move_cursor", "line", "-1", description="Left"),
    _bind("normal", "l", "core.move_cursor", "line", "+1", description="Right"),
    _bind("normal", "RIGHT", "core.move_cursor", "line", "+1", description="Right"),
    _bind("normal", "j", "core.move_cursor", "buffer", "+1", description="Down"),
    _bind("normal", "DOWN", "core.move_cursor", "buffer", "+1", description="Down"),
    _bind("normal", "k", "core.move_cursor", "buffer", "-1", description="Up"),
    _bind("normal", "UP", "core.move_cursor", "buffer", "-1", description="Up"),
    _bind("normal", "0", "core.move_cursor", "line", "start", description="Line start"),
    _bind("normal", "$", "core.move_cursor", "line", "end", description="Line end"),
    _bind("normal", "g", "core.move_cursor", "buffer", "start", description="First line"),
    _bind("normal", "G", "core.move_cursor", "buffer", "end", description="Last line"),
    _bind("normal", "i", "core.change_insert", "before", description="Insert"),
    _bind("normal", "a", "core.change_insert", "after", description="Append"),
    _bind("normal", "I", "core.change_insert", "line_start", description="Insert at start"),
    _bind("normal", "A", "core.change_insert", "line_end", description="Append at end"),
    _bind("normal", "o", "edit.newline", "down", description="Open line below"),
    _bind("normal", "O", "edit.newline", "up", description="Open line above"),
    _bind("normal", "m", "core.mark", description="Mark"),
    _bind("normal", "M", "core.mark", "cancel", description="Cancel mark"),
    _bind("normal", "d", "edit.delete", description="Delete"),
    _bind("normal", "x", "edit.delete_char", description="Delete character"),
    _bind("normal", "X", "edit.backward_char", description="Delete previous character"),
    _bind("normal", "c", "edit.change", description="Change"),
    _bind("normal", "r", "edit.replace_char", description="Replace character"),
    _bind("normal", "/", "search.search", description="Search"),
    _bind("normal", "n", "search.search_jump", "next", description="Next match"),
    _bind("normal", "N", "search.search_jump", "prev", description="Previous match"),
    _bind("normal", "ESC", "core.escape_command", description="Clear mark or search"),
    _bind("normal", "s", "core.save", modifiers=("ctrl",), description="Save"),
    _bind("normal", "q", "core.quit", description="Quit"),
    _bind("normal", "f", "core.page_scroll", "1", modifiers=("ctrl",), description="Page down"),
    _bind("normal", "PAGEDOWN", "core.page_scroll", "1", description="Page down"),
    _bind("normal", "b", "core.page_scroll", "-1", modifiers=("ctrl",), description="Page up"),
    _bind("normal", "PAGEUP", "core.page_scroll", "-1", description="Page up"),
    _bind("insert", "LEFT", "core.move_cursor", "line", "-1", description="Left"),
    _bind("insert", "RIGHT", "core.move_cursor", "line", "+1", description="Right"),
    _bind("insert", "UP", "core.move_cursor", "buffer", "-1", description="Up"),
    _bind("insert", "DOWN", "core.move_cursor", "buffer", "+1", description="Down"),
    _bind("insert", "s", "core.save", modifiers=("ctrl",), description="Save"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings.

    ``extra_bindings`` are applied last and always replace a default bound to
    the same key.
    """

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        if not _selected(action.id, allowed_actions):
            continue
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        if not registry.has_action(binding.action_id):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=True)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
