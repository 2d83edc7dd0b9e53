"""
core/screen_stack.py — Live stack of screen instances.

Stack semantics:
    - Index 0 is the bottom (first pushed), index -1 the TOP.
    - The top is the single active screen.  Screens underneath were told
      set_active(False) when they were covered and stay in memory.
    - push()  : deactivate the current top, build a new screen, init() it.
    - pop()   : close() the top, remove it, set_active(True) the new top.
    - clear() : close() every screen, top to bottom, leaving it empty.

Every lifecycle hook is optional: a screen that does not define close(),
set_active() or init() simply skips that step.

Only the manager calls these methods, and only while draining its change
queue, so a screen is never closed in the middle of handling an event.
"""

from __future__ import annotations

import logging
from typing import Any, Hashable, Iterator

from systems.registry import ScreenRegistry

log = logging.getLogger(__name__)


def call_hook(screen: Any, name: str, *args: Any) -> Any:
    """Call ``screen.<name>(*args)`` if that attribute is callable."""
    hook = getattr(screen, name, None)
    if callable(hook):
        return hook(*args)
    return None


class ScreenStack:
    """
    Ordered stack of live screens.

    Attributes:
        registry: Factory table used by push() to build new screens.
    """

    def __init__(self, registry: ScreenRegistry) -> None:
        self.registry = registry
        self._screens: list[Any] = []

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def push(self, screen_id: Hashable, args: tuple[Any, ...] = ()) -> Any:
        """
        Build the screen registered as *screen_id* and put it on top.

        The previous top is deactivated before the new screen is even
        constructed. The new screen is active by default and receives no
        set_active(True) call.

        Args:
            screen_id: Registry key of the screen to build.
            args:      Positional arguments for the screen's init().

        Returns:
            The new screen instance.
        """
        current = self.peek()
        if current is not None:
            log.debug("Deactivating screen %r", current)
            call_hook(current, "set_active", False)

        screen = self.registry.create(screen_id)
        self._screens.append(screen)
        call_hook(screen, "init", *args)
        log.debug("Pushed screen %r (height %d)", screen, len(self._screens))
        return screen

    def pop(self) -> Any:
        """
        Close and remove the top screen, then reactivate the one below.

        Returns:
            The removed screen.

        Raises:
            IndexError: if the stack is empty.
        """
        if not self._screens:
            raise IndexError("pop from an empty screen stack")

        leaving = self._screens[-1]
        call_hook(leaving, "close")
        self._screens.pop()
        log.debug("Popped screen %r (height %d)", leaving, len(self._screens))

        top = self.peek()
        if top is not None:
            log.debug("Reactivating screen %r", top)
            call_hook(top, "set_active", True)
        return leaving

    def clear(self) -> None:
        """Close and remove every screen, top to bottom."""
        while self._screens:
            screen = self._screens[-1]
            call_hook(screen, "close")
            self._screens.pop()
            log.debug("Cleared screen %r", screen)

    def switch(self, screen_id: Hashable, args: tuple[Any, ...] = ()) -> Any:
        """clear() followed by push()."""
        self.clear()
        return self.push(screen_id, args)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def peek(self) -> Any | None:
        """The top screen, or None when the stack is empty."""
        return self._screens[-1] if self._screens else None

    def level(self, index: int) -> Any:
        """The screen at *index* (0 = bottom)."""
        return self._screens[index]

    def snapshot(self) -> tuple[Any, ...]:
        """Bottom-first tuple of the live screens."""
        return tuple(self._screens)

    def __len__(self) -> int:
        return len(self._screens)

    def __iter__(self) -> Iterator[Any]:
        return iter(tuple(self._screens))

    def __repr__(self) -> str:
        names = [type(screen).__name__ for screen in self._screens]
        return f"<ScreenStack {names!r}>"
