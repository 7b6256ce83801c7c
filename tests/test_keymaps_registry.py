import pytest

from hire.keymaps import (
    ActionRef,
    Binding,
    KeymapConflictError,
    KeymapRegistry,
    KeyStroke,
)
from hire.keymaps.defaults import DEFAULT_ACTIONS, DEFAULT_BINDINGS, load_default_keymaps


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    mode: str = "normal",
    key: KeyStroke | None = None,
    action_id: str = "core.test",
    args: tuple[str, ...] = (),
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        key=key or KeyStroke("g"),
        action_id=action_id,
        args=args,
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    action = make_action()
    registry.register_action(action)
    binding = make_binding(binding_id="normal.g")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode="normal")) == [binding]
    assert registry.lookup("normal", "g") == binding


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="normal.g"))

    with pytest.raises(KeymapConflictError):
        registry.register_binding(make_binding(binding_id="normal.g.duplicate"))


def test_same_key_in_different_modes_does_not_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="normal.g"))
    registry.register_binding(make_binding(binding_id="insert.g", mode="insert"))

    assert registry.stats().modes == ("insert", "normal")


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="normal.g"))


def test_register_binding_with_replace_drops_old_key() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    first = make_binding(binding_id="normal.g")
    second = make_binding(binding_id="user.g", args=("end",))

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]
    assert registry.lookup("normal", "g") == second


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)
    before = registry.revision()

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert registry.stats().binding_count == 0
    assert registry.lookup("normal", "g") is None
    assert registry.revision() == before + 1


def test_key_stroke_tokens_are_normalized() -> None:
    assert KeyStroke("s", ("CTRL",)).token == "ctrl+s"
    assert KeyStroke("ESC").token == "ESC"
    with pytest.raises(ValueError):
        KeyStroke("")


def test_load_default_keymaps_registers_everything() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    stats = registry.stats()
    assert stats.action_count == len(DEFAULT_ACTIONS)
    assert stats.binding_count == len(DEFAULT_BINDINGS)
    assert registry.lookup("normal", "ctrl+s").action_id == "core.save"
    assert registry.lookup("normal", "M").args == ("cancel",)


def test_load_default_keymaps_include_filters() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(
        registry,
        include_actions=("core.change_insert",),
        include_bindings=("normal.i",),
    )

    assert registry.stats().binding_count == 1
    assert registry.get_binding("normal.i").action_id == "core.change_insert"


def test_load_default_keymaps_skips_bindings_of_excluded_actions() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, exclude_actions=("core.quit",))

    assert registry.lookup("normal", "q") is None
    assert registry.lookup("normal", "i") is not None


def test_load_default_keymaps_extra_bindings_override_defaults() -> None:
    registry = KeymapRegistry()
    custom = Binding(
        id="config.normal.q",
        mode="normal",
        key=KeyStroke("q"),
        action_id="core.save",
    )

    load_default_keymaps(registry, extra_bindings=(custom,))

    assert registry.lookup("normal", "q") == custom
