"""Shared fixtures for the survivor tests."""

import pytest

from game.survivor.config import GameConfig
from game.survivor.entities import Hazard
from game.survivor.simulation import new_state, reset_state


def make_running_state(seed=1, **overrides):
    """A running arena with no hazards unless the test asks for them."""
    params = {"hazard_count": 0}
    params.update(overrides)
    state = new_state(GameConfig(**params), seed=seed)
    reset_state(state)
    return state


def hazard_on(rect, vx=0.0, vy=0.0):
    """A hazard sitting exactly on the given rect's top-left corner."""
    x, y, _, _ = rect
    return Hazard(x=x, y=y, w=40.0, h=40.0, vx=vx, vy=vy)


@pytest.fixture
def running_state():
    return make_running_state()
