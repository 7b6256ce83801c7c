"""Mode manager: owns the active mode, the error queue and key dispatch."""

from __future__ import annotations

from typing import Dict, Optional, Type

from hire.errors import EditorError, ErrorQueue
from hire.keymaps import KeymapRegistry, KeymapResolver
from hire.keymaps.defaults import load_default_keymaps
from hire.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .insert_mode import InsertMode
from .keymap_helpers import RESOLVER_KEY
from .normal_mode import NormalMode
from .pending import PendingConfirmError, describe


class ModeManager:
    """Dispatches each key through, in order: error acknowledgement, the open
    prompt, then the active mode.

    Any ``EditorError`` raised along the way is queued and the manager waits
    for a key to acknowledge it.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self.errors = ErrorQueue()
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.logger = telemetry.get_logger("hire.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="hire.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="hire.keymaps"
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault(RESOLVER_KEY, self.keymap_resolver)
        self.context.extras.setdefault("mode_manager", self)

    @classmethod
    def with_default_modes(cls, context: ModeContext, **kwargs: object) -> "ModeManager":
        manager = cls(context, **kwargs)
        manager.register_mode(NormalMode)
        manager.register_mode(InsertMode)
        return manager

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def mode_name(self) -> str:
        return self._active or "normal"

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            self.context.mode = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self.context.mode = name
        self._modes[name].on_enter(previous.name if previous else None)
        telemetry.record_event("mode.switch", data={"mode": name})

    def report(self, error: EditorError) -> None:
        """Queue ``error`` for display and wait for an acknowledging key."""

        self.errors.push(error)
        self.context.pending = PendingConfirmError()
        telemetry.record_event(
            "editor.error",
            level="warning",
            data={"kind": type(error).__name__, "message": error.display()},
        )

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={
                "key": key.token,
                "mode": mode.name,
                "pending": describe(self.context.pending),
            },
        ):
            try:
                return self._dispatch(mode, key)
            except EditorError as exc:
                self.report(exc)
                return ModeResult(
                    consumed=True, refresh=True, status="error", message=exc.display()
                )

    def _dispatch(self, mode: Mode, key: KeyInput) -> ModeResult:
        context = self.context
        if isinstance(context.pending, PendingConfirmError):
            self.errors.pop()
            context.pending = PendingConfirmError() if self.errors else None
            return ModeResult(consumed=True, refresh=True, status="error_ack")

        prompt = context.prompt
        if prompt is not None:
            outcome = prompt.handle_key(key)
            if outcome == "editing":
                return ModeResult(consumed=True, refresh=True, status="prompt")
            context.prompt = None
            if outcome == "cancel":
                context.pending = None
                return ModeResult(consumed=True, refresh=True, status="prompt_cancel")
            context.pending = prompt.finish()

        result = mode.handle_key(key)
        return self._after_mode_result(result)

    def _after_mode_result(self, result: ModeResult) -> ModeResult:
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result


__all__ = ["ModeManager"]
