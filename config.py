"""
config.py — Global configuration for screenmanager.

All tunable constants live here. No manager logic; pure data.
Imported by any module that needs settings — never the other way around.
"""

import os

# ---------------------------------------------------------------------------
# Callback vocabulary
# ---------------------------------------------------------------------------

# Every named event the manager knows how to forward to its screens.
# register_callbacks() binds all of these when no explicit subset is given.
CALLBACKS = (
    "update",
    "draw",
    "keypressed",
    "keyreleased",
    "textinput",
    "mousepressed",
    "mousereleased",
    "mousemoved",
    "wheelmoved",
    "resize",
    "focus",
    "quit",
)

# The once-per-frame callback after which queued stack changes are applied.
TICK_CALLBACK = "draw"

# Screen attributes that belong to the lifecycle, never dispatched as events.
RESERVED_NAMES = frozenset({"init", "close", "set_active", "receive"})

# ---------------------------------------------------------------------------
# Display (pygame host)
# ---------------------------------------------------------------------------

DEFAULT_WIDTH  = 960
DEFAULT_HEIGHT = 540
DEFAULT_FPS    = 60
WINDOW_TITLE   = "screenmanager"

# ---------------------------------------------------------------------------
# Colour palette  (demo screens)
# ---------------------------------------------------------------------------

COLOR_BG          = (10,  10,  10)    # near-black background
COLOR_MENU        = (0,   180, 50)    # menu panel
COLOR_GAME        = (40,  90,  160)   # gameplay field
COLOR_PLAYER      = (255, 176, 0)     # player marker
COLOR_OVERLAY     = (0,   0,   0,  140)  # RGBA pause dimmer

# Pixels the demo player moves per second while a direction key is held.
PLAYER_SPEED = 240.0

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL  = os.environ.get("SCREENMANAGER_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
