"""Tick-driven game state machine: movement, eating, scoring and bonus food."""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .config import GameConfig
from .errors import SpawnExhausted
from .events import EventSink
from .food import Food, FoodSpawner
from .grid import Cell, Direction, GridModel
from .snake import SnakeState

logger = logging.getLogger(__name__)

INITIAL_DIRECTION = Direction.RIGHT


class GameStatus(str, Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Read-only view of one tick, handed to renderers."""

    snake: tuple[Cell, ...]
    foods: tuple[Food, ...]
    score: int
    level: int
    status: GameStatus
    direction: Direction
    ticks: int = 0

    @property
    def head(self) -> Cell:
        return self.snake[0]

    @property
    def bonus_active(self) -> bool:
        return any(food.is_bonus for food in self.foods)


class GameEngine:
    """Owns the snake, food, score and status; advanced one cell per ``tick``.

    Commands (``set_direction``, ``toggle_pause``, ``reset``) and ticks run
    under one re-entrant lock, so a tick never sees a half-applied command
    even when input arrives from another thread.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        rng: random.Random | None = None,
        events: EventSink | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.grid = GridModel(self.config.grid_size)
        self.spawner = FoodSpawner(
            self.grid, rng=rng, max_attempts=self.config.max_spawn_attempts
        )
        self.events = events or EventSink()
        self._lock = threading.RLock()
        self._reset_game_state(first_food=self.config.initial_food)

    @classmethod
    def from_state(
        cls,
        snake: Iterable[Cell],
        food: Cell,
        *,
        direction: Direction | str = INITIAL_DIRECTION,
        bonus: Cell | None = None,
        score: int = 0,
        status: GameStatus = GameStatus.RUNNING,
        config: GameConfig | None = None,
        rng: random.Random | None = None,
        events: EventSink | None = None,
    ) -> GameEngine:
        """Build an engine positioned on an explicit board layout.

        Used to restore a known position (tests, replays). The layout must
        satisfy the same invariants the engine keeps while playing.
        """
        engine = cls(config, rng=rng, events=events)
        body = SnakeState(snake)
        cells = set(body.cells)
        if not all(engine.grid.in_bounds(cell) for cell in cells):
            raise ValueError("snake cells must lie on the board")
        food = tuple(food)
        bonus = None if bonus is None else tuple(bonus)
        foods = [food] if bonus is None else [food, bonus]
        for cell in foods:
            if not engine.grid.in_bounds(cell):
                raise ValueError(f"food cell {cell} is off the board")
            if cell in cells:
                raise ValueError(f"food cell {cell} overlaps the snake")
        if bonus == food:
            raise ValueError("regular and bonus food cannot share a cell")
        if score < 0:
            raise ValueError("score cannot be negative")

        engine._snake = body
        engine._direction = engine._pending_direction = Direction.coerce(direction)
        engine._food = Food(food)
        engine._bonus = None if bonus is None else Food(bonus, is_bonus=True)
        engine._score = score
        engine._status = GameStatus(status)
        return engine

    # --- Read-only state ---------------------------------------------

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def score(self) -> int:
        return self._score

    @property
    def level(self) -> int:
        return self._score // self.config.bonus_period + 1

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def bonus_active(self) -> bool:
        return self._bonus is not None

    def snapshot(self) -> GameSnapshot:
        with self._lock:
            foods = (self._food,) if self._bonus is None else (self._food, self._bonus)
            return GameSnapshot(
                snake=self._snake.cells,
                foods=foods,
                score=self._score,
                level=self.level,
                status=self._status,
                direction=self._direction,
                ticks=self._ticks,
            )

    # --- Commands ------------------------------------------------------

    def set_direction(self, direction: Direction | str) -> bool:
        """Queue a turn for the next tick; reversals are ignored.

        The guard compares against the direction used by the last tick, so
        several quick turns between two ticks can never fold the head back
        onto the neck. The latest accepted request wins.
        """
        new_dir = Direction.coerce(direction)
        with self._lock:
            if self._status == GameStatus.GAME_OVER:
                return False
            if new_dir == self._direction.opposite:
                logger.debug(
                    "Ignoring reversal %s while moving %s", new_dir, self._direction
                )
                return False
            self._pending_direction = new_dir
            return True

    def toggle_pause(self) -> GameStatus:
        """Toggle between paused and running states (ignore game over)."""
        with self._lock:
            if self._status == GameStatus.RUNNING:
                self._status = GameStatus.PAUSED
            elif self._status == GameStatus.PAUSED:
                self._status = GameStatus.RUNNING
            logger.debug("Pause toggled, status is now %s", self._status.value)
            return self._status

    def reset(self) -> None:
        """Start a fresh round: new snake, direction, score and food."""
        with self._lock:
            self._reset_game_state()
            logger.info("Game reset")

    def end_round(self) -> None:
        """Finish the current round as if the snake had crashed."""
        with self._lock:
            if self._status == GameStatus.GAME_OVER:
                return
            self._status = GameStatus.GAME_OVER
            logger.info("Round ended, score %d", self._score)
            self.events.game_over(self._score)

    def tick(self) -> None:
        """Advance the game state by exactly one grid cell."""
        with self._lock:
            if self._status != GameStatus.RUNNING:
                return
            self._step()

    # --- Logic step ----------------------------------------------------

    def _reset_game_state(self, first_food: Cell | None = None) -> None:
        self._snake = SnakeState([self.config.start_cell])
        self._direction = INITIAL_DIRECTION
        self._pending_direction = INITIAL_DIRECTION
        self._bonus: Food | None = None
        self._score = 0
        self._ticks = 0
        self._status = GameStatus.RUNNING
        if first_food is None:
            first_food = self.spawner.spawn(set(self._snake.cells))
        self._food = Food(first_food)

    def _step(self) -> None:
        self._direction = self._pending_direction
        new_head = self._snake.step(self._direction)

        if not self.grid.in_bounds(new_head):
            self._game_over("wall", new_head)
            return
        if self._snake.collides(new_head):
            self._game_over("self", new_head)
            return

        ate_regular = new_head == self._food.cell
        ate_bonus = self._bonus is not None and new_head == self._bonus.cell
        grow = ate_regular or ate_bonus
        body = self._snake.cells if grow else self._snake.cells[:-1]

        # Every spawn is resolved before anything is committed, so a full
        # board leaves the tick unapplied.
        food = self._food
        if ate_regular:
            occupied = {new_head, *self._snake.cells}
            if self._bonus is not None:
                occupied.add(self._bonus.cell)
            food = Food(self.spawner.spawn(occupied))
        bonus = None if ate_bonus else self._bonus
        score = self._score + 1 if grow else self._score
        new_bonus = None
        if bonus is None and self._bonus_due(score):
            new_bonus = self._place_bonus({new_head, *body, food.cell})

        self._snake.advance(new_head, grow=grow)
        self._food = food
        self._bonus = bonus
        self._score = score
        self._ticks += 1

        if grow:
            logger.debug(
                "Ate %s food at %s, score %d",
                "bonus" if ate_bonus else "regular",
                new_head,
                self._score,
            )
            self.events.food_eaten(ate_bonus)

        if new_bonus is not None:
            self._bonus = new_bonus
            logger.debug("Bonus food appeared at %s", new_bonus.cell)
            self.events.bonus_appeared()

    def _bonus_due(self, score: int) -> bool:
        """True on every multiple of the bonus period."""
        return score > 0 and score % self.config.bonus_period == 0

    def _place_bonus(self, occupied: set[Cell]) -> Food | None:
        """Pick the bonus cell; no free cell means no bonus this tick."""
        try:
            return Food(self.spawner.spawn(occupied), is_bonus=True)
        except SpawnExhausted:
            logger.debug("No free cell for the bonus food, skipping it")
            return None

    def _game_over(self, reason: str, head: Cell) -> None:
        self._status = GameStatus.GAME_OVER
        logger.info(
            "Game over (%s collision at %s), score %d", reason, head, self._score
        )
        self.events.game_over(self._score)
