"""
Game entity dataclasses
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .utils import Rect


class SessionState(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass
class _Box:
    """Top-left positioned rectangle shared by all entities"""
    x: float
    y: float
    w: float
    h: float

    def rect(self) -> Rect:
        return (self.x, self.y, self.w, self.h)

    def center(self) -> Tuple[float, float]:
        return self.x + self.w / 2, self.y + self.h / 2


@dataclass
class Player(_Box):
    """Player character, steered by the input target"""
    invincible: bool = False
    invincibility_remaining: float = 0.0  # seconds


@dataclass
class Hazard(_Box):
    """Moving spike that costs a life on contact"""
    vx: float = 0.0
    vy: float = 0.0


@dataclass
class Hunter(_Box):
    """Enemy that hunts the player; contact ends the session"""
    speed: float = 150.0  # px/s before difficulty multiplier
    active: bool = False
    heading: float = 0.0  # cross policy: +1 rightward, -1 leftward


@dataclass
class Pickup(_Box):
    """Restorative item worth one life"""
    active: bool = False
    ttl: Optional[float] = None  # seconds left; None for infinite
