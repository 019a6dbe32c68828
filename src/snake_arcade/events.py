"""Typed notifications the engine fires for the UI and audio layers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FoodEaten:
    is_bonus: bool


@dataclass(frozen=True, slots=True)
class BonusAppeared:
    pass


@dataclass(frozen=True, slots=True)
class GameOver:
    score: int = 0


GameEvent = Union[FoodEaten, BonusAppeared, GameOver]
Listener = Callable[[GameEvent], None]


class EventSink:
    """Fan events out to subscribers, synchronously and in subscription order.

    The sink keeps no game state. Exceptions raised by a listener propagate
    to whoever fired the event.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Listener:
        if listener not in self._listeners:
            self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, event: GameEvent) -> None:
        logger.debug("Event %s -> %d listener(s)", event, len(self._listeners))
        for listener in list(self._listeners):
            listener(event)

    # --- Convenience emitters ------------------------------------------

    def food_eaten(self, is_bonus: bool) -> None:
        self.emit(FoodEaten(is_bonus=is_bonus))

    def bonus_appeared(self) -> None:
        self.emit(BonusAppeared())

    def game_over(self, score: int = 0) -> None:
        self.emit(GameOver(score=score))
