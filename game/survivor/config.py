"""
Game configuration for the survivor arena
Tunables live on GameConfig; the dict presets below are passed as kwargs.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class HazardPolicy(Enum):
    BOUNCE = "bounce"  # reflect off arena edges
    WRAP = "wrap"      # belt-scroll: re-enter past the opposite edge


class HunterPolicy(Enum):
    SEEK = "seek"      # chase the player's center
    CROSS = "cross"    # cross the screen, drifting toward the player's y


@dataclass(frozen=True)
class GameConfig:
    """All simulation tunables. Immutable for a session."""

    # Arena
    width: float = 800.0
    height: float = 600.0

    # Player
    player_w: float = 80.0
    player_h: float = 95.0
    start_lives: int = 3
    max_lives: int = 5
    invincibility_duration: float = 1.0  # seconds, hazards only

    # Hazards (spikes)
    hazard_count: int = 8
    hazard_size: float = 40.0
    hazard_speed_range: Tuple[float, float] = (-120.0, 120.0)
    hazard_min_axis_speed: float = 40.0
    hazard_policy: HazardPolicy = HazardPolicy.BOUNCE
    wrap_gap: float = 120.0  # extra spacing when a hazard re-enters

    # Hunter
    hunter_w: float = 130.0
    hunter_h: float = 140.0
    hunter_base_speed: float = 150.0
    hunter_speed_increment: float = 30.0  # per hunter step
    hunter_policy: HunterPolicy = HunterPolicy.SEEK
    hunter_edge_margin: float = 40.0
    hunter_offscreen_gap: float = 20.0
    hunter_tracking: float = 1.5  # cross policy: vertical correction per second

    # Pickup
    pickup_w: float = 70.0
    pickup_h: float = 70.0
    pickup_margin_x: float = 40.0
    pickup_margin_y: float = 60.0
    pickup_ttl: Optional[float] = None

    # Cadence / difficulty (score units = seconds survived)
    pickup_period: float = 5.0
    hunter_period: float = 10.0
    difficulty_period: float = 10.0
    difficulty_step: float = 0.25

    # Input translation
    input_offset_y: float = 100.0

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"arena must have positive size, got {self.width}x{self.height}")
        if self.player_w > self.width or self.player_h > self.height:
            raise ValueError("player does not fit inside the arena")
        if not 0 <= self.start_lives <= self.max_lives:
            raise ValueError(f"start_lives must be in [0, {self.max_lives}], got {self.start_lives}")
        if self.hazard_count < 0:
            raise ValueError("hazard_count must be non-negative")
        for name in ("pickup_period", "hunter_period", "difficulty_period"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.difficulty_step < 0 or self.hunter_speed_increment < 0:
            raise ValueError("difficulty may only increase")
        if self.invincibility_duration < 0:
            raise ValueError("invincibility_duration must be non-negative")
        # Accept plain strings from dict presets / CLI flags
        object.__setattr__(self, "hazard_policy", HazardPolicy(self.hazard_policy))
        object.__setattr__(self, "hunter_policy", HunterPolicy(self.hunter_policy))

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "GameConfig":
        known = {k: v for k, v in params.items() if k in cls.__dataclass_fields__}
        return cls(**known)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["hazard_policy"] = self.hazard_policy.value
        d["hunter_policy"] = self.hunter_policy.value
        return d


# Default game parameters
GAME_CONFIG = {
    "width": 800,
    "height": 600,
    "start_lives": 3,
    "max_lives": 5,
    "hazard_count": 8,
    "hazard_policy": "bounce",
    "hunter_policy": "seek",
    "pickup_period": 5.0,
    "hunter_period": 10.0,
    "difficulty_period": 10.0,
}

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training
    "dt": 1 / 30,
    "max_steps": 1800,  # 60 seconds at 30 FPS
    "k_hazards": 4,
}

# Reward shaping for the agent adapter
REWARD_CONFIG = {
    "R_SURVIVE": 1.0,    # per second survived
    "R_LIFE": 1.0,       # per life gained from a pickup
    "R_DAMAGE": 2.0,     # per life lost to a hazard
    "R_DEATH": 10.0,     # game over penalty
}
