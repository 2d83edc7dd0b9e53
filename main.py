"""
main.py
=======
Entry point for the screenmanager demo.

Desktop run:
    python main.py

Run from the project root; config, core, systems and screens are imported
as top-level packages.
"""

from __future__ import annotations

import logging

import config
from core.screen_manager import ScreenManager
from screens.demo import build_screens
from systems.pygame_host import PygameHost

logging.basicConfig(
    level  = config.LOG_LEVEL,
    format = config.LOG_FORMAT,
)


def main() -> None:
    """Build the host and manager, show the menu and loop until quit."""
    host    = PygameHost()
    manager = ScreenManager()

    manager.init(build_screens(manager), "menu")
    manager.register_callbacks(host)

    try:
        host.run()
    finally:
        manager.shutdown()


if __name__ == "__main__":
    main()
