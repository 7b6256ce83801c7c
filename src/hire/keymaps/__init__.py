"""Keymap models, registry and resolver.

Built-in bindings live in :mod:`hire.keymaps.defaults`; TOML overrides in
:mod:`hire.keymaps.config`.
"""

from .models import ActionRef, Binding, KeyStroke, make_token
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult

__all__ = [
    "ActionRef",
    "Binding",
    "KeyStroke",
    "make_token",
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionMatch",
    "ResolutionResult",
]
