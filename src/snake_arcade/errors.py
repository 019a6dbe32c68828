"""Exception types raised by the Snake Arcade core."""

from __future__ import annotations


class SnakeArcadeError(RuntimeError):
    """Base class for every error the game core raises on purpose."""


class ConfigError(SnakeArcadeError, ValueError):
    """A configuration value is out of its legal range."""


class SpawnExhausted(SnakeArcadeError):
    """No free grid cell is left to place a food item on."""

    def __init__(self, occupied: int, total: int) -> None:
        super().__init__(f"no free cell for food: {occupied} of {total} cells occupied")
        self.occupied = occupied
        self.total = total
