"""
core/errors.py
==============
Exception taxonomy for the screen manager.

Every error here is raised synchronously at the public call that caused it
(``init``, ``switch``, ``push``, ``pop``) and propagates to the caller.  The
manager never swallows or retries them.

Hierarchy
---------
    ScreenManagerError
    ├── UnknownScreen     (also a KeyError)
    ├── InvalidFactory    (also a TypeError)
    ├── InvalidRegistry   (also a TypeError)
    ├── IllegalPop
    └── NotInitialised    (also a RuntimeError)
"""

from __future__ import annotations

from typing import Hashable, Iterable


class ScreenManagerError(Exception):
    """Base class for every error raised by the screen manager."""


class UnknownScreen(ScreenManagerError, KeyError):
    """Raised when a screen id is not present in the registry.

    Parameters
    ----------
    screen_id:
        The id that failed to resolve.
    known:
        Every id the registry does know about.  Listed in the message so
        the caller can spot the typo without a debugger.
    """

    def __init__(self, screen_id: Hashable, known: Iterable[Hashable]) -> None:
        self.screen_id = screen_id
        self.known     = tuple(known)
        listing = ", ".join(repr(k) for k in self.known)
        message = (
            f"{screen_id!r} is not a valid screen!\n\n"
            "You will have to add a new one to your screen list or use one "
            f"of the existing screens:\n\n{{{listing}}}"
        )
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the whole message.
        return str(self.args[0])


class InvalidFactory(ScreenManagerError, TypeError):
    """Raised when a registry entry cannot construct a screen."""

    def __init__(self, screen_id: Hashable, factory: object) -> None:
        self.screen_id = screen_id
        self.factory   = factory
        super().__init__(
            f"Invalid screen {screen_id!r}: screens should be callables or "
            f"objects with a 'new' method, got {type(factory).__name__}"
        )


class InvalidRegistry(ScreenManagerError, TypeError):
    """Raised by ``init`` when the screen table is not a mapping."""


class IllegalPop(ScreenManagerError):
    """Raised by ``pop`` when it would leave the stack empty."""

    def __init__(self) -> None:
        super().__init__(
            "Can't close the last screen. Use switch() to clear the screen "
            "manager and add a new screen."
        )


class NotInitialised(ScreenManagerError, RuntimeError):
    """Raised when the stack is mutated before ``init`` was called."""
