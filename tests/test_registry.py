from __future__ import annotations

import pytest

from core.errors import InvalidFactory, InvalidRegistry, UnknownScreen
from systems.registry import ScreenRegistry


class _Plain:
    pass


class _Factory:
    def __init__(self) -> None:
        self.built = 0

    def new(self) -> _Plain:
        self.built += 1
        return _Plain()


def test_accepts_classes_callables_and_new_objects() -> None:
    factory  = _Factory()
    registry = ScreenRegistry({
        "class":    _Plain,
        "callable": lambda: _Plain(),
        "object":   factory,
    })

    for screen_id in registry:
        assert isinstance(registry.create(screen_id), _Plain)
    assert factory.built == 1


def test_class_with_new_method_is_called_directly() -> None:
    class Screen:
        def new(self):
            raise AssertionError("instance method must not be used as factory")

    assert isinstance(ScreenRegistry({"s": Screen}).create("s"), Screen)


def test_registry_is_a_snapshot() -> None:
    screens  = {"menu": _Plain}
    registry = ScreenRegistry(screens)
    screens["game"] = _Plain
    assert registry.ids() == ("menu",)
    with pytest.raises(TypeError):
        registry._factories["game"] = _Plain


def test_rejects_non_mapping() -> None:
    with pytest.raises(InvalidRegistry):
        ScreenRegistry([("menu", _Plain)])


def test_unknown_id_lists_known_ids() -> None:
    registry = ScreenRegistry({"menu": _Plain, "game": _Plain})
    with pytest.raises(UnknownScreen) as excinfo:
        registry.validate("pause")
    error = excinfo.value
    assert error.screen_id == "pause"
    assert error.known == ("menu", "game")
    assert "{'menu', 'game'}" in str(error)


def test_unhashable_id_is_unknown() -> None:
    registry = ScreenRegistry({"menu": _Plain})
    with pytest.raises(UnknownScreen):
        registry.resolve(["menu"])


def test_invalid_factory_is_rejected() -> None:
    registry = ScreenRegistry({"menu": "not a factory"})
    with pytest.raises(InvalidFactory, match="'menu'"):
        registry.validate("menu")


def test_enum_ids_are_supported() -> None:
    import enum

    class Ids(enum.Enum):
        MENU = 1

    registry = ScreenRegistry({Ids.MENU: _Plain})
    assert Ids.MENU in registry
    assert isinstance(registry.create(Ids.MENU), _Plain)
