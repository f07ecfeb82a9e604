"""Tests for entity placement."""

import random

import pytest

from game.survivor.config import GameConfig, HunterPolicy
from game.survivor.entities import Hunter, Pickup
from game.survivor.spawner import Spawner


@pytest.fixture
def config():
    return GameConfig()


def _spawner(config, seed=0):
    return Spawner(config, random.Random(seed))


def test_hazards_in_bounds_with_minimum_axis_speed(config):
    spawner = _spawner(config)
    for _ in range(50):
        hazards = spawner.spawn_hazards()
        assert len(hazards) == config.hazard_count
        for h in hazards:
            assert 0.0 <= h.x <= config.width - h.w
            assert 0.0 <= h.y <= config.height - h.h
            assert abs(h.vx) >= config.hazard_min_axis_speed
            assert abs(h.vy) >= config.hazard_min_axis_speed
            assert abs(h.vx) <= 120.0 and abs(h.vy) <= 120.0


def test_velocity_floor_keeps_sign():
    config = GameConfig(hazard_speed_range=(-10.0, -5.0), hazard_min_axis_speed=40.0)
    h = _spawner(config).spawn_hazard()
    assert h.vx == -40.0
    assert h.vy == -40.0


def test_pickup_respects_margins(config):
    spawner = _spawner(config, seed=5)
    pickup = Pickup(x=0.0, y=0.0, w=config.pickup_w, h=config.pickup_h)
    for _ in range(100):
        spawner.spawn_pickup(pickup)
        assert pickup.active
        assert config.pickup_margin_x <= pickup.x <= config.width - config.pickup_margin_x - pickup.w
        assert config.pickup_margin_y <= pickup.y <= config.height - config.pickup_margin_y - pickup.h


def test_hunter_spawns_just_outside_an_edge(config):
    spawner = _spawner(config, seed=9)
    hunter = Hunter(x=0.0, y=0.0, w=config.hunter_w, h=config.hunter_h)
    edges = set()
    for _ in range(200):
        spawner.spawn_hunter(hunter)
        assert hunter.active
        if hunter.x + hunter.w < 0:
            edges.add("left")
        elif hunter.x > config.width:
            edges.add("right")
        elif hunter.y + hunter.h < 0:
            edges.add("top")
        elif hunter.y > config.height:
            edges.add("bottom")
        else:
            pytest.fail(f"hunter spawned inside the arena at ({hunter.x}, {hunter.y})")
    assert edges == {"left", "right", "top", "bottom"}


def test_cross_hunter_uses_side_edges_only():
    config = GameConfig(hunter_policy=HunterPolicy.CROSS)
    spawner = _spawner(config, seed=2)
    hunter = Hunter(x=0.0, y=0.0, w=config.hunter_w, h=config.hunter_h)
    for _ in range(100):
        spawner.spawn_hunter(hunter)
        if hunter.heading > 0:
            assert hunter.x + hunter.w < 0
        else:
            assert hunter.heading == -1.0
            assert hunter.x > config.width
        assert config.hunter_edge_margin <= hunter.y <= config.height - config.hunter_edge_margin - hunter.h
