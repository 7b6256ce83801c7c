"""Modes, pending-command state and the key dispatch pipeline."""

from .base_mode import (
    Invocation,
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
    make_context,
)
from .pending import (
    PendingChange,
    PendingCommand,
    PendingConfirmError,
    PendingDelete,
    PendingMark,
    PendingQuit,
    PendingReplaceChar,
    PendingSearch,
)
from .command_line import CommandLine
from .keymap_helpers import execute_match, require_keymap_resolver
from .normal_mode import NormalMode
from .insert_mode import InsertMode

__all__ = [
    "Invocation",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "make_context",
    "PendingChange",
    "PendingCommand",
    "PendingConfirmError",
    "PendingDelete",
    "PendingMark",
    "PendingQuit",
    "PendingReplaceChar",
    "PendingSearch",
    "CommandLine",
    "execute_match",
    "require_keymap_resolver",
    "NormalMode",
    "InsertMode",
]
