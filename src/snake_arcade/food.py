"""Food records and random food placement."""

from __future__ import annotations

import logging
import random
from collections.abc import Collection
from dataclasses import dataclass

from .errors import SpawnExhausted
from .grid import Cell, GridModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Food:
    """A food item on the board; bonus food is the temporary extra one."""

    cell: Cell
    is_bonus: bool = False


class FoodSpawner:
    """Pick food cells uniformly at random among the unoccupied ones."""

    def __init__(
        self,
        grid: GridModel,
        rng: random.Random | None = None,
        max_attempts: int = 64,
    ) -> None:
        self.grid = grid
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts

    def spawn(self, occupied: Collection[Cell]) -> Cell:
        """Return a random cell that is not in ``occupied``.

        Rejection sampling is tried first; once ``max_attempts`` draws have
        all landed on occupied cells the pick is made from the explicit list
        of free cells instead, which always terminates. Raises
        :class:`SpawnExhausted` when the board is full.
        """
        blocked = occupied if isinstance(occupied, (set, frozenset)) else set(occupied)
        size = self.grid.size
        for _ in range(self.max_attempts):
            cell = (self.rng.randrange(size), self.rng.randrange(size))
            if cell not in blocked:
                return cell

        free = [cell for cell in self.grid.cells() if cell not in blocked]
        if not free:
            raise SpawnExhausted(len(blocked), self.grid.cell_count)
        logger.debug(
            "Rejection sampling gave up after %d draws, picking from %d free cells",
            self.max_attempts,
            len(free),
        )
        return self.rng.choice(free)
