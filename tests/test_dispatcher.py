from __future__ import annotations

import pytest

from core.dispatcher import Dispatcher, validate_event_name


class Level:
    def __init__(self, name: str, log: list, *, through: bool, result=None) -> None:
        self.name    = name
        self.log     = log
        self.through = through
        self.result  = result

    def keypressed(self, propagate, *args):
        self.log.append((self.name, args))
        if self.through:
            return propagate()
        return self.result


class Silent:
    """No handlers at all."""


def test_propagating_top_reaches_bottom_with_same_args() -> None:
    log: list = []
    s1 = Level("s1", log, through=False, result="bottom")
    s2 = Level("s2", log, through=True)

    result = Dispatcher().delegate([s1, s2], "keypressed", ("a", 4, False))

    assert log == [("s2", ("a", 4, False)), ("s1", ("a", 4, False))]
    assert result == "bottom"


def test_swallowing_top_stops_delegation() -> None:
    log: list = []
    s1 = Level("s1", log, through=False)
    s2 = Level("s2", log, through=False, result="top")

    assert Dispatcher().delegate([s1, s2], "keypressed", ("a",)) == "top"
    assert log == [("s2", ("a",))]


def test_screen_without_handler_is_skipped() -> None:
    log: list = []
    bottom = Level("bottom", log, through=False, result=7)

    assert Dispatcher().delegate([bottom, Silent(), Silent()], "keypressed") == 7
    assert log == [("bottom", ())]


def test_propagate_past_bottom_returns_none() -> None:
    log: list = []
    only = Level("only", log, through=True)
    assert Dispatcher().delegate([only], "keypressed") is None


def test_explicit_start_level() -> None:
    log: list = []
    s1 = Level("s1", log, through=False, result=1)
    s2 = Level("s2", log, through=False, result=2)
    s3 = Level("s3", log, through=False, result=3)

    assert Dispatcher().delegate([s1, s2, s3], "keypressed", (), level=1) == 2
    assert log == [("s2", ())]


def test_start_level_above_top_reaches_nobody() -> None:
    log: list = []
    screens = [Level("s1", log, through=True), Level("s2", log, through=True)]

    assert Dispatcher().delegate(screens, "keypressed", (), level=2) is None
    assert Dispatcher().delegate(screens, "keypressed", (), level=10) is None
    assert log == []


def test_negative_start_level_raises() -> None:
    log: list = []
    with pytest.raises(ValueError):
        Dispatcher().delegate([Level("s1", log, through=True)], "keypressed", (), level=-1)
    assert log == []


def test_empty_stack_returns_none() -> None:
    assert Dispatcher().delegate([], "draw") is None


def test_propagate_can_be_called_after_own_work() -> None:
    order: list[str] = []

    class Below:
        def draw(self, propagate):
            order.append("below")

    class Overlay:
        def draw(self, propagate):
            propagate()
            order.append("overlay")
            return "drawn"

    assert Dispatcher().delegate([Below(), Overlay()], "draw") == "drawn"
    assert order == ["below", "overlay"]


def test_publish_is_bottom_to_top_and_skips_non_receivers() -> None:
    got: list = []

    class Receiver:
        def __init__(self, name):
            self.name = name

        def receive(self, event, *args):
            got.append((self.name, event, args))

    screens = [Receiver("a"), Silent(), Receiver("b")]
    assert Dispatcher().publish(screens, "ping", (1,)) == 2
    assert got == [("a", "ping", (1,)), ("b", "ping", (1,))]


@pytest.mark.parametrize("name", ["init", "close", "set_active", "receive", "_private", "not valid", ""])
def test_invalid_event_names(name) -> None:
    with pytest.raises(ValueError):
        validate_event_name(name)


def test_valid_event_name_is_returned() -> None:
    assert validate_event_name("keypressed") == "keypressed"
