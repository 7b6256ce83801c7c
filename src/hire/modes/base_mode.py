"""Base classes and shared state for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from hire.buffer import TextBuffer
from hire.keymaps.models import make_token
from hire.options import EditorOptions
from hire.search import SearchIndex
from hire.viewport import CursorViewport

from .pending import PendingCommand

if TYPE_CHECKING:
    from .command_line import CommandLine


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes.

    ``key`` is a symbolic name (``ESC``, ``ENTER``, ``UP``...) or the
    character itself; ``text`` carries the produced character, if any.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @classmethod
    def char(cls, character: str) -> "KeyInput":
        return cls(key=character, text=character)

    @property
    def token(self) -> str:
        return make_token(self.key, self.modifiers)

    @property
    def printable(self) -> Optional[str]:
        if self.modifiers or not self.text or len(self.text) != 1:
            return None
        return self.text if self.text.isprintable() else None


@dataclass(slots=True)
class Invocation:
    """Arguments an action receives: binding args or the continuation key."""

    key: Optional[KeyInput] = None
    args: Tuple[str, ...] = ()

    def arg(self, index: int, default: str) -> str:
        return self.args[index] if len(self.args) > index else default


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key`` and from actions."""

    consumed: bool = True
    refresh: bool = False
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


class ModeBus:
    """Minimal event bus letting modes and hosts exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode and action can access."""

    buffer: TextBuffer
    viewport: CursorViewport
    search: SearchIndex
    bus: ModeBus
    options: EditorOptions = field(default_factory=EditorOptions)
    mode: str = "normal"
    pending: Optional[PendingCommand] = None
    prompt: Optional["CommandLine"] = None
    ask_message: Optional[str] = None
    extras: Dict[str, object] = field(default_factory=dict)


def make_context(
    buffer: Optional[TextBuffer] = None,
    *,
    options: Optional[EditorOptions] = None,
) -> ModeContext:
    return ModeContext(
        buffer=buffer if buffer is not None else TextBuffer(),
        viewport=CursorViewport(),
        search=SearchIndex(),
        bus=ModeBus(),
        options=options or EditorOptions(),
    )


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(
        self, previous: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError


__all__ = [
    "KeyInput",
    "Invocation",
    "ModeResult",
    "ModeBus",
    "ModeContext",
    "Mode",
    "make_context",
]
