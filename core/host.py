"""
core/host.py — Host callback table and manager registration.

A host runtime (the pygame loop in systems/pygame_host.py, or a test) keeps
a table of named callbacks: "update", "draw", "keypressed", ... and calls
them as events happen. register_callbacks() hooks a ScreenManager into such
a table without evicting whatever was bound before: the old handler runs
first, then the manager's forwarding function, and the manager's result is
what the host gets back.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, MutableMapping
from typing import TYPE_CHECKING, Any, Callable, Iterator

import config

if TYPE_CHECKING:
    # Imported only for type hints to avoid circular imports at runtime.
    from core.screen_manager import ScreenManager

log = logging.getLogger(__name__)

Callback = Callable[..., Any]


class HostCallbacks(MutableMapping):
    """
    Mutable ``name -> callable`` table standing in for a host's callbacks.

    Attributes:
        handlers: The raw table. Mutate through the mapping interface.
    """

    def __init__(self, handlers: dict[str, Callback] | None = None) -> None:
        self.handlers: dict[str, Callback] = dict(handlers or {})

    def __getitem__(self, name: str) -> Callback:
        return self.handlers[name]

    def __setitem__(self, name: str, handler: Callback) -> None:
        if not callable(handler):
            raise TypeError(f"Callback {name!r} must be callable, got {handler!r}")
        self.handlers[name] = handler

    def __delitem__(self, name: str) -> None:
        del self.handlers[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.handlers)

    def __len__(self) -> int:
        return len(self.handlers)

    def call(self, name: str, *args: Any) -> Any:
        """
        Invoke the handler bound to *name*.

        Returns:
            The handler's result, or None when nothing is bound.
        """
        handler = self.handlers.get(name)
        if handler is None:
            return None
        return handler(*args)


def register_callbacks(
    host:      MutableMapping,
    manager:   ScreenManager,
    callbacks: Iterable[str] | None = None,
) -> list[str]:
    """
    Bind *manager*'s forwarding functions into *host*.

    Args:
        host:      Any mutable mapping of callback names to callables.
        manager:   The screen manager to forward to.
        callbacks: Names to bind. Defaults to every name in config.CALLBACKS.

    Returns:
        The names that were bound, in binding order.
    """
    names = list(config.CALLBACKS if callbacks is None else callbacks)

    for name in names:
        if name not in config.CALLBACKS:
            log.warning("Binding non-standard callback %r", name)
        previous  = host.get(name)
        forwarder = manager.callback(name)
        host[name] = _chain(previous, forwarder)
        log.debug("Registered callback %r (wrapping %r)", name, previous)
    return names


def _chain(previous: Callback | None, forwarder: Callback) -> Callback:
    if previous is None:
        return forwarder

    def chained(*args: Any) -> Any:
        previous(*args)
        return forwarder(*args)

    chained.__name__ = getattr(forwarder, "__name__", "chained")
    return chained
