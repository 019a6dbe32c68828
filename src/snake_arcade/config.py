"""Centralized configuration for Snake Arcade.

Every constant can be overridden through an environment variable so the
board size and pace can be tweaked without touching the code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ConfigError


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


GRID_SIZE: int = _env_int("SNAKE_ARCADE_GRID_SIZE", 20)
TICK_INTERVAL_MS: int = _env_int("SNAKE_ARCADE_TICK_MS", 150)
BONUS_PERIOD: int = _env_int("SNAKE_ARCADE_BONUS_PERIOD", 4)  # points per bonus
MAX_SPAWN_ATTEMPTS: int = 64  # random draws before falling back to free cells
LOG_LEVEL: str = os.getenv("SNAKE_ARCADE_LOG_LEVEL", "INFO").upper()

# Start layout of the classic 20x20 board
INITIAL_SNAKE: tuple[tuple[int, int], ...] = ((10, 10),)
INITIAL_FOOD: tuple[int, int] = (10, 5)


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Values the engine needs, validated once at construction."""

    grid_size: int = GRID_SIZE
    tick_interval_ms: int = TICK_INTERVAL_MS
    bonus_period: int = BONUS_PERIOD
    max_spawn_attempts: int = MAX_SPAWN_ATTEMPTS

    def __post_init__(self) -> None:
        if self.grid_size < 2:
            raise ConfigError(f"grid_size must be at least 2, got {self.grid_size}")
        if self.tick_interval_ms <= 0:
            raise ConfigError(
                f"tick_interval_ms must be positive, got {self.tick_interval_ms}"
            )
        if self.bonus_period <= 0:
            raise ConfigError(f"bonus_period must be positive, got {self.bonus_period}")
        if self.max_spawn_attempts <= 0:
            raise ConfigError(
                f"max_spawn_attempts must be positive, got {self.max_spawn_attempts}"
            )

    @property
    def start_cell(self) -> tuple[int, int]:
        """Snake start cell: the classic (10, 10), or the centre of other boards."""
        if self.grid_size == 20:
            return INITIAL_SNAKE[0]
        centre = self.grid_size // 2
        return (centre, centre)

    @property
    def initial_food(self) -> tuple[int, int] | None:
        """Fixed first food cell, only defined for the classic board."""
        if self.grid_size == 20:
            return INITIAL_FOOD
        return None
