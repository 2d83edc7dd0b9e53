"""
screens/base_screen.py — Convenience base class for screens.

Subclassing Screen is optional: the manager only ever checks whether an
attribute exists and is callable. Screen supplies no-op lifecycle hooks and
tracks activation so subclasses do not have to.

Lifecycle order for a screen:
    __init__()        → called by the registry factory, no arguments.
    init(*args)       → called once, right after construction.
    set_active(False) → another screen was pushed on top of this one.
    set_active(True)  → the screen above was popped; this one is on top again.
    close()           → called once when popped or cleared by a switch.

Event handlers are NOT defined here. A screen that does not implement e.g.
keypressed() lets the event fall through to the screen below it. Handlers
take the propagate continuation first:

    def keypressed(self, propagate, key, scancode, is_repeat):
        if key != pygame.K_ESCAPE:
            return propagate()
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    # Imported only for type hints to avoid circular imports at runtime.
    from core.screen_manager import ScreenManager


class Screen:
    """
    Base screen with optional lifecycle hooks.

    Attributes:
        manager: The ScreenManager this screen requests changes through.
                 May be None for screens that never change the stack.
        active:  True while this screen is the top of the stack.
        closed:  Set once close() has run.
    """

    def __init__(self, manager: ScreenManager | None = None) -> None:
        self.manager = manager
        self.active: bool = True
        self.closed: bool = False

    # ------------------------------------------------------------------
    # Lifecycle hooks — override as needed
    # ------------------------------------------------------------------

    def init(self, *args: Any) -> None:
        """
        Called once with the arguments given to switch()/push()/init().
        """

    def close(self) -> None:
        """
        Called once when this screen leaves the stack. Release anything
        acquired in init().
        """
        self.closed = True

    def set_active(self, active: bool) -> None:
        """
        Called when the screen is covered (False) or uncovered (True).

        Args:
            active: Whether the screen is now the top of the stack.
        """
        self.active = active

    def receive(self, event: Any, *args: Any) -> None:
        """Called by ScreenManager.publish(). Ignored by default."""

    def __repr__(self) -> str:
        state = "active" if self.active else "inactive"
        return f"<{type(self).__name__} {state}>"
