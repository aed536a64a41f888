import random

import pytest

from token_rush.config import GameConfig
from token_rush.entities import Player
from token_rush.geometry import Bounds
from token_rush.session import Session


class FixedRandom:
    """random.Random stand-in: random() returns a constant, uniform() its low end."""

    def __init__(self, value=0.5):
        self.value = value
        self.uniform_calls = []

    def random(self):
        return self.value

    def uniform(self, a, b):
        self.uniform_calls.append((a, b))
        return a


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def quiet_config():
    """No stochastic spawning, so steps are fully deterministic."""
    return GameConfig(hazard_spawn_rate=0.0, pickup_spawn_rate=0.0)


@pytest.fixture
def empty_session():
    """800x500 canvas, centered player, no entities."""
    return Session(bounds=Bounds(800, 500), player=Player(x=400, y=250))


@pytest.fixture
def fixed_random():
    return FixedRandom
