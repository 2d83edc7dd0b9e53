"""
core/screen_manager.py
======================
Façade tying the registry, stack, change queue and dispatcher together.

Responsibilities
----------------
- Own one screen stack and one change queue per manager instance.
- Validate every switch/push/pop synchronously, then queue it.
- Apply queued changes once per tick, *after* the tick's delegation pass,
  so no screen receives an event while it is being removed.
- Expose one forwarding function per event name for host callback tables.
- Never look inside a screen; only its optional hooks and handlers.

Usage
-----
    manager = ScreenManager()
    manager.init({"menu": MenuScreen, "game": GameScreen}, "menu")

    # From inside a screen handler:
    manager.push("game", level_no)

    # Host loop, every frame:
    manager.update(dt)
    manager.draw(surface)      # drains the change queue afterwards

Frame order
-----------
    1. Input callbacks   : delegated, may queue changes.
    2. update(dt)        : delegated, may queue changes.
    3. draw(surface)     : delegated, then perform_changes().
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Hashable

import config
from core.dispatcher import Dispatcher, validate_event_name
from core.errors import NotInitialised
from core.host import register_callbacks
from core.screen_stack import ScreenStack
from systems.change_queue import ChangeKind, ChangeQueue, PendingChange
from systems.registry import ScreenRegistry

log = logging.getLogger(__name__)

__version__ = "2.0.1"


class ScreenManager:
    """Stack-based screen manager.

    Parameters
    ----------
    tick_callback:
        Event after whose delegation the change queue is drained.
        Defaults to ``config.TICK_CALLBACK`` (``"draw"``).

    Several managers can live side by side; none of them keeps module
    level state.
    """

    def __init__(self, tick_callback: str = config.TICK_CALLBACK) -> None:
        self.tick_callback: str = validate_event_name(tick_callback)

        self._registry:   ScreenRegistry | None = None
        self._stack:      ScreenStack | None    = None
        self._changes:    ChangeQueue           = ChangeQueue()
        self._dispatcher: Dispatcher            = Dispatcher()
        self._forwarders: dict[str, Callable[..., Any]] = {}

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init(self, screens: Mapping[Hashable, Any], screen_id: Hashable, *args: Any) -> Any:
        """Set up the screen table and switch to the first screen.

        The switch is applied before this method returns, so the stack
        holds exactly one screen afterwards.

        Parameters
        ----------
        screens:
            Mapping of screen ids to factories (classes, callables, or
            objects with a ``new`` method).
        screen_id:
            Key of the first screen.
        *args:
            Forwarded to the first screen's ``init()``.

        Returns
        -------
        Any
            The initial screen.

        Raises
        ------
        InvalidRegistry, UnknownScreen, InvalidFactory
        RuntimeError
            If called from a screen hook while queued changes are applied.
        """
        if self._changes.draining:
            raise RuntimeError("init() cannot be called while stack changes are being applied")

        registry = ScreenRegistry(screens)
        registry.validate(screen_id)

        if self._stack is not None:
            log.debug("Re-initialising; closing %d screen(s)", len(self._stack))
            self._stack.clear()

        self._registry = registry
        self._stack    = ScreenStack(registry)
        self._changes.reset()

        self.switch(screen_id, *args)
        self.perform_changes()
        log.info("Screen manager initialised with %r", screen_id)
        return self.peek()

    def shutdown(self) -> None:
        """Close every screen, top to bottom, and forget the screen table."""
        if self._stack is not None:
            self._stack.clear()
        self._changes.reset()
        self._stack    = None
        self._registry = None
        log.info("Screen manager shut down")

    @property
    def initialised(self) -> bool:
        """True between ``init()`` and ``shutdown()``."""
        return self._stack is not None

    # ------------------------------------------------------------------
    # Stack requests (deferred)
    # ------------------------------------------------------------------

    def switch(self, screen_id: Hashable, *args: Any) -> None:
        """Queue: close every screen, then push *screen_id*."""
        self._require_registry().validate(screen_id)
        self._changes.request_switch(screen_id, args)

    def push(self, screen_id: Hashable, *args: Any) -> None:
        """Queue: deactivate the top screen and push *screen_id* over it."""
        self._require_registry().validate(screen_id)
        self._changes.request_push(screen_id, args)

    def pop(self) -> None:
        """Queue: close the top screen and reactivate the one below.

        Raises
        ------
        IllegalPop
            If the pop would empty the stack once every queued change is
            applied.  Nothing is queued.
        """
        self._require_registry()
        self._changes.request_pop()

    def perform_changes(self) -> int:
        """Apply every queued change, oldest first.

        Changes requested while this runs wait for the next call.

        Returns
        -------
        int
            Number of changes applied.
        """
        if self._stack is None:
            return 0
        try:
            return self._changes.drain(self._apply)
        except Exception:
            self._changes.resync(len(self._stack))
            raise

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def peek(self) -> Any | None:
        """The live top screen; ``None`` before ``init()``.

        Queued changes that have not been applied yet are not reflected.
        """
        if self._stack is None:
            return None
        return self._stack.peek()

    def screens(self) -> tuple[Any, ...]:
        """Bottom-first snapshot of the live stack."""
        if self._stack is None:
            return ()
        return self._stack.snapshot()

    @property
    def height(self) -> int:
        """Live stack height."""
        return len(self._stack) if self._stack is not None else 0

    @property
    def requested_height(self) -> int:
        """Height the stack will have after the next drain."""
        return self._changes.requested_height

    @property
    def pending_changes(self) -> tuple[PendingChange, ...]:
        """Changes waiting for the next drain, oldest first."""
        return self._changes.pending()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def publish(self, event: Any, *args: Any) -> int:
        """Send ``receive(event, *args)`` to every screen that has it."""
        return self._dispatcher.publish(self.screens(), event, args)

    def dispatch(self, callback: str, *args: Any, level: int | None = None) -> Any:
        """Delegate *callback* through the stack and return the result.

        When *callback* is the tick callback the change queue is drained
        once the delegation pass has finished.
        """
        validate_event_name(callback)
        result = self._dispatcher.delegate(self.screens(), callback, args, level)
        if callback == self.tick_callback:
            self.perform_changes()
        return result

    def callback(self, name: str) -> Callable[..., Any]:
        """Return the cached forwarding function for event *name*."""
        forwarder = self._forwarders.get(name)
        if forwarder is None:
            validate_event_name(name)

            def forwarder(*args: Any) -> Any:
                return self.dispatch(name, *args)

            forwarder.__name__ = name
            self._forwarders[name] = forwarder
        return forwarder

    def update(self, *args: Any) -> Any:
        return self.dispatch("update", *args)

    def draw(self, *args: Any) -> Any:
        return self.dispatch("draw", *args)

    def register_callbacks(self, host: Any, callbacks: Iterable[str] | None = None) -> list[str]:
        """Bind this manager into *host*'s callback table.

        See ``core.host.register_callbacks``.
        """
        return register_callbacks(host, self, callbacks)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _require_registry(self) -> ScreenRegistry:
        if self._registry is None:
            raise NotInitialised("ScreenManager.init() must be called first")
        return self._registry

    def _apply(self, change: PendingChange) -> None:
        stack = self._stack
        if change.kind is ChangeKind.POP:
            stack.pop()
        elif change.kind is ChangeKind.SWITCH:
            log.debug("Switching to %r", change.screen_id)
            stack.switch(change.screen_id, change.args)
        elif change.kind is ChangeKind.PUSH:
            stack.push(change.screen_id, change.args)

    def __repr__(self) -> str:
        return (
            f"<ScreenManager height={self.height} "
            f"pending={self._changes.pending_count}>"
        )
