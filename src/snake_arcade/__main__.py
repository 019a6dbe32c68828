"""Run the game with ``python -m snake_arcade`` or the ``snake-arcade`` script."""

from __future__ import annotations

import logging

from .app import SnakeArcade
from .config import LOG_LEVEL


def main() -> None:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    game = SnakeArcade()
    game.start()


if __name__ == "__main__":
    main()
