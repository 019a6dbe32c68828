"""Shared fixtures for the Snake Arcade tests."""

import os
import random
from unittest.mock import Mock

import pytest

# Headless pygame for the front-end tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from snake_arcade.events import EventSink  # noqa: E402


@pytest.fixture
def rng():
    """Seeded RNG so food placement is reproducible."""
    return random.Random(1234)


@pytest.fixture
def listener():
    """Mock subscriber recording every event it receives."""
    return Mock()


@pytest.fixture
def sink(listener):
    events = EventSink()
    events.subscribe(listener)
    return events
