"""
screens/demo.py
===============
Three small screens showing the manager's stack operations.

Screens
-------
  menu   RETURN → switch("game")      ESC → post pygame.QUIT
  game   arrows move the player       ESC/P → push("pause")
  pause  ESC/P → pop()                Q → switch("menu")

The pause screen is an overlay: it swallows ``keypressed`` and ``update``
so the game underneath freezes, but calls through ``draw`` so the game is
still rendered, dimmed, beneath it.  ``keyreleased`` is passed down too,
otherwise a key held while pausing would stay stuck in the game.

Nothing here loads fonts or assets; everything is plain rectangles so the
screens can be driven headless.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable

import pygame

import config
from screens.base_screen import Screen

log = logging.getLogger(__name__)

_DIRECTIONS = {
    pygame.K_LEFT:  (-1,  0),
    pygame.K_RIGHT: ( 1,  0),
    pygame.K_UP:    ( 0, -1),
    pygame.K_DOWN:  ( 0,  1),
}

_PLAYER_SIZE = 24


# ---------------------------------------------------------------------------
# Menu
# ---------------------------------------------------------------------------

class MenuScreen(Screen):
    """Title screen.  The bottom of the stack whenever it is shown."""

    def keypressed(self, propagate, key: int, scancode: int, is_repeat: bool) -> bool:
        if key == pygame.K_RETURN:
            self.manager.switch("game", 1)
            return True
        if key == pygame.K_ESCAPE:
            pygame.event.post(pygame.event.Event(pygame.QUIT))
            return True
        return False

    def draw(self, propagate, surface: pygame.Surface) -> None:
        surface.fill(config.COLOR_BG)
        w, h  = surface.get_size()
        panel = pygame.Rect(0, 0, w // 3, h // 3)
        panel.center = (w // 2, h // 2)
        pygame.draw.rect(surface, config.COLOR_MENU, panel, width=4)


# ---------------------------------------------------------------------------
# Game
# ---------------------------------------------------------------------------

class GameScreen(Screen):
    """A player square moved with the arrow keys.

    ``init(level)`` sets the level number; ``publish("reset")`` recentres
    the player.
    """

    def init(self, level: int = 1) -> None:
        self.level = level
        self.position: list[float] = [config.DEFAULT_WIDTH / 2, config.DEFAULT_HEIGHT / 2]
        self._held: set[int] = set()
        log.debug("Game started at level %d", level)

    def set_active(self, active: bool) -> None:
        super().set_active(active)
        if not active:
            log.debug("Game paused")

    def receive(self, event: Any, *args: Any) -> None:
        if event == "reset":
            self.position = [config.DEFAULT_WIDTH / 2, config.DEFAULT_HEIGHT / 2]

    def keypressed(self, propagate, key: int, scancode: int, is_repeat: bool) -> bool:
        if key in (pygame.K_ESCAPE, pygame.K_p):
            self.manager.push("pause")
            return True
        if key in _DIRECTIONS:
            self._held.add(key)
            return True
        return False

    def keyreleased(self, propagate, key: int, scancode: int) -> None:
        self._held.discard(key)

    def update(self, propagate, dt: float) -> None:
        for key in self._held:
            dx, dy = _DIRECTIONS[key]
            self.position[0] += dx * config.PLAYER_SPEED * dt
            self.position[1] += dy * config.PLAYER_SPEED * dt

    def draw(self, propagate, surface: pygame.Surface) -> None:
        surface.fill(config.COLOR_GAME)
        player = pygame.Rect(0, 0, _PLAYER_SIZE, _PLAYER_SIZE)
        player.center = (int(self.position[0]), int(self.position[1]))
        pygame.draw.rect(surface, config.COLOR_PLAYER, player)


# ---------------------------------------------------------------------------
# Pause overlay
# ---------------------------------------------------------------------------

class PauseScreen(Screen):
    """Overlay pushed on top of the game."""

    def init(self) -> None:
        self._dimmer: pygame.Surface | None = None

    def keypressed(self, propagate, key: int, scancode: int, is_repeat: bool) -> bool:
        if key in (pygame.K_ESCAPE, pygame.K_p):
            self.manager.pop()
        elif key == pygame.K_q:
            self.manager.switch("menu")
        # Every key stops here; the game never sees it.
        return True

    def keyreleased(self, propagate, key: int, scancode: int) -> Any:
        return propagate()

    def update(self, propagate, dt: float) -> None:
        """Swallowed: the game below is frozen while paused."""

    def draw(self, propagate, surface: pygame.Surface) -> None:
        propagate()
        if self._dimmer is None or self._dimmer.get_size() != surface.get_size():
            self._dimmer = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
            self._dimmer.fill(config.COLOR_OVERLAY)
        surface.blit(self._dimmer, (0, 0))


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

def build_screens(manager) -> dict[str, Callable[[], Screen]]:
    """Screen table for ``manager.init()``; every screen gets *manager*."""
    return {
        "menu":  functools.partial(MenuScreen, manager),
        "game":  functools.partial(GameScreen, manager),
        "pause": functools.partial(PauseScreen, manager),
    }
