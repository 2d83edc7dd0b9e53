"""
core/dispatcher.py
==================
Routes named events through the screen stack.

Delegation
----------
An event starts at the top screen (or an explicit level) and only moves
further down if the screens decide so.  Every handler is called as::

    screen.<event>(propagate, *args)

where ``propagate()`` forwards the same event and arguments to the level
underneath and returns whatever that level returned.  A pause overlay can
therefore swallow ``keypressed`` (never call ``propagate``) and still let
``draw`` fall through so the game below keeps rendering::

    class PauseScreen(Screen):
        def keypressed(self, propagate, key, scancode, is_repeat):
            ...                       # swallowed

        def draw(self, propagate, surface):
            propagate()               # game renders first
            surface.blit(self._dimmer, (0, 0))

A screen with no handler for the event is skipped and the event carries
on to the next level down.  The value returned by the handler that ends
the chain is handed back, unchanged, to the original caller.

Publishing
----------
``publish()`` is a plain broadcast: every screen with a ``receive`` method
gets the message, bottom to top.  There is no swallow/continue decision.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

import config

log = logging.getLogger(__name__)

Propagate = Callable[[], Any]


def validate_event_name(name: str) -> str:
    """Return *name* if it can be dispatched as an event, else raise.

    Raises
    ------
    ValueError
        For non-identifiers, private names and lifecycle hooks.
    """
    if not isinstance(name, str) or not name.isidentifier():
        raise ValueError(f"Event names must be identifiers, got {name!r}")
    if name.startswith("_"):
        raise ValueError(f"Event names cannot be private, got {name!r}")
    if name in config.RESERVED_NAMES:
        raise ValueError(f"{name!r} is a lifecycle hook, not an event")
    return name


class Dispatcher:
    """Delegates events to a bottom-first sequence of screens.

    The dispatcher holds no state of its own; the stack is passed in on
    every call so it always sees the live screens.
    """

    def delegate(
        self,
        screens: Sequence[Any],
        callback: str,
        args:     tuple[Any, ...] = (),
        level:    int | None = None,
    ) -> Any:
        """Deliver *callback* starting at *level* and return the result.

        Parameters
        ----------
        screens:
            Bottom-first screens (index 0 is the bottom of the stack).
        callback:
            Event name, looked up as a method on each screen.
        args:
            Positional event arguments, forwarded unchanged to every level.
        level:
            Index to start at.  Defaults to the top of the stack.  A level
            at or above the stack height reaches no screen and returns
            ``None``; a negative level raises ``ValueError``.

        Returns
        -------
        Any
            Whatever the handler that ended the chain returned, or ``None``
            if the event fell off the bottom of the stack.
        """
        if level is None:
            level = len(screens) - 1
        elif level < 0:
            raise ValueError(f"Delegation level must be non-negative, got {level}")
        elif level >= len(screens):
            return None

        while level >= 0:
            screen  = screens[level]
            handler = getattr(screen, callback, None)
            if callable(handler):
                return handler(self._propagate(screens, callback, args, level - 1), *args)
            level -= 1
        return None

    def publish(self, screens: Sequence[Any], event: Any, args: tuple[Any, ...] = ()) -> int:
        """Call ``receive(event, *args)`` on every screen, bottom to top.

        Returns
        -------
        int
            How many screens received the message.
        """
        delivered = 0
        for screen in tuple(screens):
            receive = getattr(screen, "receive", None)
            if callable(receive):
                receive(event, *args)
                delivered += 1
        log.debug("Published %r to %d screen(s)", event, delivered)
        return delivered

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _propagate(
        self,
        screens:  Sequence[Any],
        callback: str,
        args:     tuple[Any, ...],
        level:    int,
    ) -> Propagate:
        def propagate() -> Any:
            if level < 0:
                return None
            return self.delegate(screens, callback, args, level)
        return propagate
