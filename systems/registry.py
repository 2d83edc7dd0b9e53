"""
systems/registry.py
===================
Immutable table of screen factories, keyed by screen id.

Responsibilities
----------------
- Take a snapshot of the caller's ``id -> factory`` mapping at ``init``.
- Resolve ids to factories and build fresh screen instances.
- Fail fast, before anything is queued, on unknown ids or unusable
  factories.
- Never hold screen instances; the stack owns those.

Factories
---------
A factory is a screen class, an object exposing a callable ``new``
attribute, or any other zero-argument callable::

    registry = ScreenRegistry({
        "menu":  MenuScreen,            # class, called with no arguments
        "game":  GameScreenFactory(),   # object with .new()
    })

Constructor arguments are never passed to the factory; per-instance
arguments go to the screen's ``init()`` instead.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable, Hashable, Iterator

from core.errors import InvalidFactory, InvalidRegistry, UnknownScreen

log = logging.getLogger(__name__)


class ScreenRegistry(Mapping):
    """Read-only ``screen id -> factory`` mapping.

    Parameters
    ----------
    screens:
        Any ``Mapping``.  It is copied, so later changes to the caller's
        dict do not leak into the registry.

    Raises
    ------
    InvalidRegistry
        If *screens* is not a mapping.
    """

    def __init__(self, screens: Mapping[Hashable, Any]) -> None:
        if not isinstance(screens, Mapping):
            raise InvalidRegistry(
                "The screen table passed to init() should be a mapping of "
                f"screen ids to factories, got {type(screens).__name__}"
            )
        self._factories: Mapping[Hashable, Any] = MappingProxyType(dict(screens))
        log.debug("Registry built with %d screen(s)", len(self._factories))

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------

    def __getitem__(self, screen_id: Hashable) -> Any:
        return self._factories[screen_id]

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._factories)

    def __len__(self) -> int:
        return len(self._factories)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def ids(self) -> tuple[Hashable, ...]:
        """Every registered id, in registration order."""
        return tuple(self._factories)

    def validate(self, screen_id: Hashable) -> None:
        """Raise unless *screen_id* names a usable factory.

        Raises
        ------
        UnknownScreen
            The id is not registered.  The message lists every valid id.
        InvalidFactory
            The id is registered but its entry cannot build a screen.
        """
        self._constructor(screen_id)

    def resolve(self, screen_id: Hashable) -> Callable[[], Any]:
        """Return the zero-argument constructor registered for *screen_id*."""
        return self._constructor(screen_id)

    def create(self, screen_id: Hashable) -> Any:
        """Build and return a brand new screen instance for *screen_id*."""
        screen = self._constructor(screen_id)()
        log.debug("Created screen %r for id %r", screen, screen_id)
        return screen

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _constructor(self, screen_id: Hashable) -> Callable[[], Any]:
        try:
            factory = self._factories[screen_id]
        except (KeyError, TypeError):
            # TypeError covers unhashable ids such as lists.
            raise UnknownScreen(screen_id, self._factories) from None

        if isinstance(factory, type):
            return factory
        new = getattr(factory, "new", None)
        if callable(new):
            return new
        if callable(factory):
            return factory
        raise InvalidFactory(screen_id, factory)

    def __repr__(self) -> str:
        return f"<ScreenRegistry ids={list(self._factories)!r}>"
