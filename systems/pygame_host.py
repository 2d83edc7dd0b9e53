"""
systems/pygame_host.py
======================
pygame runtime that drives a callback table.

Responsibilities
----------------
- Own the pygame display, the clock and the main loop.
- Translate raw pygame events into named callbacks with flat arguments
  (``keypressed(key, scancode, is_repeat)``, ``mousemoved(x, y, dx, dy)``).
- Call ``update(dt)`` and ``draw(surface)`` once per frame, in that order.
- Never know about screens; a ``ScreenManager`` is bound through
  ``register_callbacks()`` like any other handler.

Event mapping
-------------
    KEYDOWN             keypressed      key, scancode, is_repeat
    KEYUP               keyreleased     key, scancode
    TEXTINPUT           textinput       text
    MOUSEBUTTONDOWN     mousepressed    x, y, button
    MOUSEBUTTONUP       mousereleased   x, y, button
    MOUSEMOTION         mousemoved      x, y, dx, dy
    MOUSEWHEEL          wheelmoved      x, y
    VIDEORESIZE         resize          w, h
    WINDOWFOCUSGAINED   focus           True
    WINDOWFOCUSLOST     focus           False
    QUIT                quit            (loop stops unless the handler
                                         returns True)

Usage
-----
    host = PygameHost()
    manager.register_callbacks(host)
    host.run()
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

import pygame

import config
from core.host import HostCallbacks

log = logging.getLogger(__name__)

# pygame 2 still reports the wheel as buttons 4/5 alongside MOUSEWHEEL.
_WHEEL_BUTTONS = (4, 5)

Translated = tuple[str, tuple[Any, ...]]


class PygameHost(HostCallbacks):
    """Pygame application shell with a named callback table.

    Parameters
    ----------
    screen_width:
        Display width in pixels.
    screen_height:
        Display height in pixels.
    title:
        Window caption.
    fps:
        Frame-rate cap passed to ``pygame.time.Clock.tick``.
    """

    def __init__(
        self,
        screen_width:  int = config.DEFAULT_WIDTH,
        screen_height: int = config.DEFAULT_HEIGHT,
        title:         str = config.WINDOW_TITLE,
        fps:           int = config.DEFAULT_FPS,
    ) -> None:
        super().__init__()
        self._sw    = screen_width
        self._sh    = screen_height
        self._title = title
        self._fps   = fps

        self.surface: Optional[pygame.Surface] = None
        self.running: bool = False
        self._clock:  Optional[pygame.time.Clock] = None
        self._held:   set[int] = set()
        self._stopped: bool = False

    # ------------------------------------------------------------------
    # Display lifecycle
    # ------------------------------------------------------------------

    def open(self) -> pygame.Surface:
        """Initialise pygame and create the resizable display surface."""
        pygame.init()
        pygame.display.set_caption(self._title)
        self.surface = pygame.display.set_mode((self._sw, self._sh), pygame.RESIZABLE)
        self._clock  = pygame.time.Clock()
        log.info("Display opened at %dx%d", self._sw, self._sh)
        return self.surface

    def close(self) -> None:
        """Tear pygame down.  Safe to call more than once."""
        self.running = False
        self.surface = None
        pygame.quit()
        log.info("Display closed")

    def stop(self) -> None:
        """Signal the main loop to exit after the current frame."""
        self.running  = False
        self._stopped = True

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Open the display and loop until ``stop()``.  Blocks.

        Loop order each frame:
            1. Tick    — cap FPS, compute delta.
            2. Pump    — translate pygame events into callbacks.
            3. Update  — ``update(dt)``.
            4. Draw    — ``draw(surface)``.
            5. Flip    — present the frame.
        """
        self.open()
        self.running = True
        log.info("Main loop started")
        try:
            while self.running:
                dt = self._clock.tick(self._fps) / 1000.0  # seconds
                self.step(dt)
                pygame.display.flip()
        finally:
            self.close()

    def step(self, dt: float, events: Optional[Iterable[pygame.event.Event]] = None) -> None:
        """Run one frame: events, then ``update(dt)``, then ``draw(surface)``."""
        self._stopped = False
        self.pump(events)
        if self._stopped:
            # quit was accepted; skip the rest of the frame
            return
        self.call("update", dt)
        self.call("draw", self.surface)

    def pump(self, events: Optional[Iterable[pygame.event.Event]] = None) -> int:
        """Dispatch *events* (default: the pygame queue) as callbacks.

        Returns
        -------
        int
            Number of events that mapped to a callback.
        """
        if events is None:
            events = pygame.event.get()

        handled = 0
        for event in events:
            translated = self.translate(event)
            if translated is None:
                continue
            name, args = translated
            result = self.call(name, *args)
            handled += 1

            if event.type == pygame.QUIT and not result:
                self.stop()
            elif event.type == pygame.VIDEORESIZE:
                self._sw, self._sh = event.w, event.h
        return handled

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def translate(self, event: pygame.event.Event) -> Optional[Translated]:
        """Map one pygame event to ``(callback_name, args)``.

        Returns ``None`` for events with no callback equivalent.
        """
        etype = event.type

        if etype == pygame.KEYDOWN:
            is_repeat = event.key in self._held
            self._held.add(event.key)
            return "keypressed", (event.key, event.scancode, is_repeat)

        if etype == pygame.KEYUP:
            self._held.discard(event.key)
            return "keyreleased", (event.key, event.scancode)

        if etype == pygame.TEXTINPUT:
            return "textinput", (event.text,)

        if etype in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            if event.button in _WHEEL_BUTTONS:
                return None
            x, y = event.pos
            name = "mousepressed" if etype == pygame.MOUSEBUTTONDOWN else "mousereleased"
            return name, (x, y, event.button)

        if etype == pygame.MOUSEMOTION:
            x, y   = event.pos
            dx, dy = event.rel
            return "mousemoved", (x, y, dx, dy)

        if etype == pygame.MOUSEWHEEL:
            return "wheelmoved", (event.x, event.y)

        if etype == pygame.VIDEORESIZE:
            return "resize", (event.w, event.h)

        if etype == pygame.WINDOWFOCUSGAINED:
            return "focus", (True,)

        if etype == pygame.WINDOWFOCUSLOST:
            return "focus", (False,)

        if etype == pygame.QUIT:
            return "quit", ()

        return None

    @property
    def size(self) -> tuple[int, int]:
        """Current display size in pixels."""
        return self._sw, self._sh

    def __repr__(self) -> str:
        return f"<PygameHost {self._sw}x{self._sh} callbacks={sorted(self.handlers)!r}>"
