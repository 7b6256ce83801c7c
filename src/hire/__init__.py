"""Modal terminal text editor built around a UI-agnostic editing engine."""

from .engine import Editor
from .errors import (
    BufferIOError,
    BufferRangeError,
    ConfigError,
    EditorError,
    ErrorQueue,
    InvalidCommand,
    SpecificError,
)
from .modes import KeyInput, ModeResult
from .options import EditorOptions

__all__ = [
    "Editor",
    "EditorOptions",
    "KeyInput",
    "ModeResult",
    "EditorError",
    "BufferIOError",
    "BufferRangeError",
    "InvalidCommand",
    "SpecificError",
    "ConfigError",
    "ErrorQueue",
]

__version__ = "0.1.0"
