"""Tests for food placement, events and configuration."""

import random
from unittest.mock import Mock, call

import pytest

from snake_arcade.config import GameConfig
from snake_arcade.errors import ConfigError, SnakeArcadeError, SpawnExhausted
from snake_arcade.events import BonusAppeared, EventSink, FoodEaten, GameOver
from snake_arcade.food import Food, FoodSpawner
from snake_arcade.grid import GridModel


class TestFoodSpawner:
    """Tests for FoodSpawner.spawn()."""

    def test_spawn_avoids_occupied_cells(self, rng):
        """spawn() never returns an occupied cell."""
        spawner = FoodSpawner(GridModel(10), rng=rng)
        occupied = {(x, y) for x in range(10) for y in range(5)}

        for _ in range(100):
            cell = spawner.spawn(occupied)
            assert cell not in occupied
            assert GridModel(10).in_bounds(cell)

    def test_spawn_finds_last_free_cell(self, rng):
        """With one free cell left, the free-cell fallback returns it."""
        grid = GridModel(5)
        occupied = set(grid.cells()) - {(3, 2)}
        spawner = FoodSpawner(grid, rng=rng, max_attempts=4)

        assert spawner.spawn(occupied) == (3, 2)

    def test_spawn_on_full_board_raises(self, rng):
        """A full board raises SpawnExhausted instead of looping forever."""
        grid = GridModel(3)
        spawner = FoodSpawner(grid, rng=rng)

        with pytest.raises(SpawnExhausted) as excinfo:
            spawner.spawn(set(grid.cells()))

        assert excinfo.value.occupied == 9
        assert excinfo.value.total == 9
        assert isinstance(excinfo.value, SnakeArcadeError)

    def test_spawn_accepts_any_collection(self, rng):
        """Lists of occupied cells work as well as sets."""
        spawner = FoodSpawner(GridModel(2), rng=rng)
        assert spawner.spawn([(0, 0), (1, 0), (0, 1)]) == (1, 1)

    def test_food_defaults_to_regular(self):
        """Food is regular unless flagged as bonus."""
        assert Food((1, 2)).is_bonus is False
        assert Food((1, 2), is_bonus=True).is_bonus is True


class TestEventSink:
    """Tests for the EventSink notification channel."""

    def test_events_reach_all_listeners_in_order(self):
        """Each subscriber gets every event, in subscription order."""
        manager = Mock()
        sink = EventSink()
        sink.subscribe(manager.first)
        sink.subscribe(manager.second)

        sink.food_eaten(True)

        assert manager.mock_calls == [
            call.first(FoodEaten(is_bonus=True)),
            call.second(FoodEaten(is_bonus=True)),
        ]

    def test_typed_emitters(self, sink, listener):
        """Convenience emitters wrap arguments into event objects."""
        sink.food_eaten(False)
        sink.bonus_appeared()
        sink.game_over(7)

        assert listener.call_args_list == [
            call(FoodEaten(is_bonus=False)),
            call(BonusAppeared()),
            call(GameOver(score=7)),
        ]

    def test_subscribe_twice_delivers_once(self, listener):
        """Subscribing the same listener again is a no-op."""
        sink = EventSink()
        sink.subscribe(listener)
        sink.subscribe(listener)
        sink.bonus_appeared()
        assert listener.call_count == 1

    def test_unsubscribe_stops_delivery(self, sink, listener):
        """Unsubscribed listeners get nothing; unknown ones are ignored."""
        sink.unsubscribe(listener)
        sink.unsubscribe(Mock())
        sink.bonus_appeared()
        listener.assert_not_called()

    def test_listener_errors_propagate(self):
        """A failing listener surfaces to whoever emitted the event."""
        sink = EventSink()
        sink.subscribe(Mock(side_effect=RuntimeError("boom")))
        with pytest.raises(RuntimeError):
            sink.game_over()


class TestGameConfig:
    """Tests for GameConfig validation."""

    def test_defaults(self):
        """Defaults match the classic game."""
        config = GameConfig()
        assert config.grid_size == 20
        assert config.tick_interval_ms == 150
        assert config.bonus_period == 4
        assert config.start_cell == (10, 10)
        assert config.initial_food == (10, 5)

    def test_other_board_sizes_start_in_the_centre(self):
        """Non-classic boards centre the snake and spawn the first food randomly."""
        config = GameConfig(grid_size=9)
        assert config.start_cell == (4, 4)
        assert config.initial_food is None

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"grid_size": 1},
            {"tick_interval_ms": 0},
            {"bonus_period": 0},
            {"max_spawn_attempts": -1},
        ],
    )
    def test_invalid_values_raise(self, kwargs):
        """Out-of-range values raise ConfigError, a ValueError."""
        with pytest.raises(ConfigError):
            GameConfig(**kwargs)
        with pytest.raises(ValueError):
            GameConfig(**kwargs)


def test_spawner_uses_injected_rng():
    """Two spawners with the same seed make the same picks."""
    grid = GridModel(20)
    first = FoodSpawner(grid, rng=random.Random(7))
    second = FoodSpawner(grid, rng=random.Random(7))
    picks = [first.spawn(set()) for _ in range(5)]
    assert picks == [second.spawn(set()) for _ in range(5)]
