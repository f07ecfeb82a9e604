"""Tests for configuration validation."""

import argparse

import pytest

from game.survivor.config import GAME_CONFIG, GameConfig, HazardPolicy, HunterPolicy


def test_defaults_match_presets():
    config = GameConfig.from_dict(GAME_CONFIG)
    assert config.start_lives == 3
    assert config.max_lives == 5
    assert config.hazard_policy is HazardPolicy.BOUNCE
    assert config.hunter_policy is HunterPolicy.SEEK


def test_policies_accept_strings():
    config = GameConfig(hazard_policy="wrap", hunter_policy="cross")
    assert config.hazard_policy is HazardPolicy.WRAP
    assert config.hunter_policy is HunterPolicy.CROSS
    assert config.to_dict()["hazard_policy"] == "wrap"


def test_from_dict_ignores_unknown_keys():
    config = GameConfig.from_dict({"width": 640, "render_mode": "human"})
    assert config.width == 640


@pytest.mark.parametrize("params", [
    {"width": 0},
    {"start_lives": 6},
    {"pickup_period": 0},
    {"difficulty_step": -0.1},
    {"hazard_count": -1},
    {"hazard_policy": "teleport"},
])
def test_invalid_configs_rejected(params):
    with pytest.raises(ValueError):
        GameConfig(**params)


def test_cli_flags_resolve_into_config():
    from game.survivor.__main__ import build_config

    args = argparse.Namespace(width=640, height=480, hazard_policy="wrap", hunter_policy="seek")
    resolved = build_config(args).to_dict()
    assert resolved["width"] == 640
    assert resolved["height"] == 480
    assert resolved["hazard_policy"] == "wrap"
    assert resolved["hunter_policy"] == "seek"
    assert resolved["start_lives"] == GAME_CONFIG["start_lives"]
