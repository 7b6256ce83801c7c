"""TOML configuration: user key bindings and editing options.

::

    [config]
    keymap = [ { key = "h", run = "move_cursor line -1" } ]

    [config.options]
    tab_indent = false
    tab_width = 4
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

import toml

from hire.errors import ConfigError
from hire.options import EditorOptions
from hire.runtime import telemetry

from .models import Binding, KeyStroke

NAMED_KEYS: Dict[str, str] = {
    "Up": "UP",
    "Down": "DOWN",
    "Left": "LEFT",
    "Right": "RIGHT",
    "Tab": "TAB",
    "ESC": "ESC",
    "Enter": "ENTER",
    "Backspace": "BACKSPACE",
    "PageUp": "PAGEUP",
    "PageDown": "PAGEDOWN",
}

_SIGNED_STEP = re.compile(r"[+-]\d+")


def _no_args(args: Sequence[str]) -> bool:
    return not args


def _one_of(*choices: str, optional: bool = False) -> Callable[[Sequence[str]], bool]:
    def check(args: Sequence[str]) -> bool:
        if not args:
            return optional
        return len(args) == 1 and args[0] in choices

    return check


def _page_count(args: Sequence[str]) -> bool:
    return len(args) == 1 and re.fullmatch(r"[+-]?\d+", args[0]) is not None


def _motion(args: Sequence[str]) -> bool:
    if len(args) != 2 or args[0] not in ("line", "buffer"):
        return False
    return args[1] in ("start", "end") or _SIGNED_STEP.fullmatch(args[1]) is not None


# command name -> (action id, argument check)
COMMANDS: Dict[str, Tuple[str, Callable[[Sequence[str]], bool]]] = {
    "save": ("core.save", _no_args),
    "mark": ("core.mark", _one_of("cancel", optional=True)),
    "quit": ("core.quit", _no_args),
    "change": ("edit.change", _no_args),
    "replace_char": ("edit.replace_char", _no_args),
    "backward_char": ("edit.backward_char", _no_args),
    "delete_char": ("edit.delete_char", _no_args),
    "delete": ("edit.delete", _no_args),
    "escape_command": ("core.escape_command", _no_args),
    "search": ("search.search", _no_args),
    "search_jump": ("search.search_jump", _one_of("next", "prev")),
    "newline": ("edit.newline", _one_of("up", "down")),
    "change_insert": (
        "core.change_insert",
        _one_of("before", "after", "line_start", "line_end"),
    ),
    "page_scroll": ("core.page_scroll", _page_count),
    "move_cursor": ("core.move_cursor", _motion),
}

OPTION_TYPES: Dict[str, type] = {"tab_indent": bool, "tab_width": int}


@dataclass(frozen=True, slots=True)
class EditorConfig:
    options: EditorOptions = EditorOptions()
    bindings: Tuple[Binding, ...] = ()


def parse_key(text: str) -> KeyStroke:
    if text in NAMED_KEYS:
        return KeyStroke(NAMED_KEYS[text])
    if text.lower().startswith("ctrl+"):
        char = text[len("ctrl+") :]
        if len(char) == 1 and 32 <= ord(char) <= 126:
            return KeyStroke(char, ("ctrl",))
        raise ConfigError(f"Invalid key '{text}'")
    if len(text) == 1 and 32 <= ord(text) <= 126:
        return KeyStroke(text)
    raise ConfigError(f"Invalid key '{text}'")


def parse_command(text: str) -> Tuple[str, Tuple[str, ...]]:
    """Split ``run`` into an action id and its arguments."""

    parts = text.split()
    if not parts:
        raise ConfigError("Empty command")
    name, args = parts[0], tuple(parts[1:])
    try:
        action_id, check = COMMANDS[name]
    except KeyError as exc:
        raise ConfigError(f"Unknown command '{name}'") from exc
    if not check(args):
        raise ConfigError(f"Invalid arguments for '{name}': {' '.join(args) or '(none)'}")
    return action_id, args


def _parse_options(section: Any) -> EditorOptions:
    if not isinstance(section, Mapping):
        raise ConfigError("[config.options] must be a table")
    values: Dict[str, Any] = {}
    for name, value in section.items():
        expected = OPTION_TYPES.get(name)
        if expected is None:
            raise ConfigError(f"Unknown option '{name}'")
        # bool is an int subclass
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ConfigError(f"Option '{name}' must be {expected.__name__}")
        values[name] = value
    try:
        return EditorOptions(**values)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def _parse_keymap(entries: Any) -> Tuple[Binding, ...]:
    if not isinstance(entries, list):
        raise ConfigError("keymap must be an array of tables")
    bindings = []
    for entry in entries:
        if not isinstance(entry, Mapping) or set(entry) != {"key", "run"}:
            raise ConfigError(f"Invalid keymap entry: {entry!r}")
        key, run = entry["key"], entry["run"]
        if not isinstance(key, str) or not isinstance(run, str):
            raise ConfigError(f"Invalid keymap entry: {entry!r}")
        stroke = parse_key(key)
        action_id, args = parse_command(run)
        bindings.append(
            Binding(
                id=f"config.normal.{stroke.token}",
                mode="normal",
                key=stroke,
                action_id=action_id,
                args=args,
                description=run,
                source="config",
            )
        )
    return tuple(bindings)


def parse_config(document: Mapping[str, Any]) -> EditorConfig:
    unknown = set(document) - {"config"}
    if unknown:
        raise ConfigError(f"Unknown section '{sorted(unknown)[0]}'")
    section = document.get("config", {})
    if not isinstance(section, Mapping):
        raise ConfigError("[config] must be a table")
    extra = set(section) - {"keymap", "options"}
    if extra:
        raise ConfigError(f"Unknown config key '{sorted(extra)[0]}'")
    return EditorConfig(
        options=_parse_options(section.get("options", {})),
        bindings=_parse_keymap(section.get("keymap", [])),
    )


def load_config(path: Optional[str | os.PathLike[str]]) -> EditorConfig:
    """Read and validate the TOML file at ``path``; ``None`` means defaults."""

    if path is None:
        return EditorConfig()
    with telemetry.span(
        "config::load", component="config", metadata={"path": path}
    ) as handle:
        try:
            document = toml.load(path)
        except OSError as exc:
            raise ConfigError(f"Cannot read config file: {exc}") from exc
        except toml.TomlDecodeError as exc:
            raise ConfigError(f"Malformed config file: {exc}") from exc
        config = parse_config(document)
        handle.add_metadata("bindings", len(config.bindings))
        return config


__all__ = [
    "COMMANDS",
    "NAMED_KEYS",
    "EditorConfig",
    "parse_key",
    "parse_command",
    "parse_config",
    "load_config",
]
