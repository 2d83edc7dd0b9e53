from __future__ import annotations

from typing import Any, Callable

import pytest

from core.screen_manager import ScreenManager


class Recorder:
    """Shared, ordered log of every hook and handler call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, tuple]] = []

    def record(self, name: str, hook: str, *args: Any) -> None:
        self.calls.append((name, hook, args))

    def hooks(self, hook: str) -> list[tuple[str, tuple]]:
        return [(name, args) for name, h, args in self.calls if h == hook]

    def names(self, hook: str) -> list[str]:
        return [name for name, _ in self.hooks(hook)]

    def clear(self) -> None:
        self.calls.clear()


class RecordingScreen:
    """Screen implementing every lifecycle hook plus draw/update.

    ``propagate`` controls whether draw/update call through to the level
    below.  ``returns`` is what draw/update hand back.
    """

    def __init__(self, name: str, recorder: Recorder) -> None:
        self.name      = name
        self.recorder  = recorder
        self.propagate = True
        self.returns: Any = None
        recorder.record(name, "new")

    def init(self, *args: Any) -> None:
        self.recorder.record(self.name, "init", *args)

    def close(self) -> None:
        self.recorder.record(self.name, "close")

    def set_active(self, active: bool) -> None:
        self.recorder.record(self.name, "set_active", active)

    def receive(self, event: Any, *args: Any) -> None:
        self.recorder.record(self.name, "receive", event, *args)

    def draw(self, propagate, *args: Any) -> Any:
        self.recorder.record(self.name, "draw", *args)
        if self.propagate:
            below = propagate()
            return self.returns if self.returns is not None else below
        return self.returns

    def update(self, propagate, *args: Any) -> Any:
        self.recorder.record(self.name, "update", *args)
        if self.propagate:
            return propagate()
        return self.returns

    def __repr__(self) -> str:
        return f"<RecordingScreen {self.name}>"


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def factories(recorder: Recorder) -> dict[str, Callable[[], RecordingScreen]]:
    def factory(name: str) -> Callable[[], RecordingScreen]:
        return lambda: RecordingScreen(name, recorder)

    return {name: factory(name) for name in ("menu", "game", "pause", "options")}


@pytest.fixture
def manager(factories, recorder: Recorder) -> ScreenManager:
    manager = ScreenManager()
    manager.init(factories, "menu")
    recorder.clear()
    return manager
