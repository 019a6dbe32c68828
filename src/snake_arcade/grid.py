"""Board coordinates, directions and bounds checks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

Cell = tuple[int, int]


class Direction(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def vector(self) -> Cell:
        return VECTORS[self]

    @property
    def opposite(self) -> Direction:
        return OPPOSITE[self]

    @classmethod
    def coerce(cls, value: Direction | str) -> Direction:
        """Accept a Direction or its name ("up", "LEFT", ...)."""
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"unknown direction: {value!r}") from None


# Screen coordinates: y grows downwards
VECTORS: dict[Direction, Cell] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}
OPPOSITE: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True, slots=True)
class GridModel:
    """Square board of ``size`` x ``size`` cells."""

    size: int

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    def cells(self) -> Iterator[Cell]:
        """Yield every cell, row by row."""
        for y in range(self.size):
            for x in range(self.size):
                yield (x, y)
