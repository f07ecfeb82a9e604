"""
Spawner - places hazards, hunter and pickup inside (or just outside) the arena
"""

from __future__ import annotations

import logging
import random
from typing import List

from .config import GameConfig, HunterPolicy
from .entities import Hazard, Hunter, Pickup
from .utils import rand_range

logger = logging.getLogger(__name__)


class Spawner:
    """Produces in-bounds, non-degenerate entity placements"""

    def __init__(self, config: GameConfig, rng: random.Random):
        self.config = config
        self.rng = rng

    # ----------------------------
    # Hazards
    # ----------------------------

    def _axis_velocity(self) -> float:
        lo, hi = self.config.hazard_speed_range
        v = rand_range(self.rng, lo, hi)
        floor = self.config.hazard_min_axis_speed
        if abs(v) < floor:
            v = -floor if v < 0 else floor
        return v

    def spawn_hazard(self) -> Hazard:
        c = self.config
        size = c.hazard_size
        return Hazard(
            x=rand_range(self.rng, 0, c.width - size),
            y=rand_range(self.rng, 0, c.height - size),
            w=size,
            h=size,
            vx=self._axis_velocity(),
            vy=self._axis_velocity(),
        )

    def spawn_hazards(self) -> List[Hazard]:
        return [self.spawn_hazard() for _ in range(self.config.hazard_count)]

    def rewrap_hazard(self, h: Hazard, axis: str, from_low_edge: bool):
        """Re-enter a hazard past the opposite edge with a fresh transverse coordinate"""
        c = self.config
        gap = rand_range(self.rng, 0, c.wrap_gap)
        if axis == "x":
            h.x = c.width + gap if from_low_edge else -h.w - gap
            h.y = rand_range(self.rng, 0, c.height - h.h)
        else:
            h.y = c.height + gap if from_low_edge else -h.h - gap
            h.x = rand_range(self.rng, 0, c.width - h.w)

    # ----------------------------
    # Pickup
    # ----------------------------

    def spawn_pickup(self, pickup: Pickup):
        c = self.config
        pickup.active = True
        pickup.x = rand_range(self.rng, c.pickup_margin_x, c.width - c.pickup_margin_x - pickup.w)
        pickup.y = rand_range(self.rng, c.pickup_margin_y, c.height - c.pickup_margin_y - pickup.h)
        pickup.ttl = c.pickup_ttl
        logger.debug("pickup spawned at (%.1f, %.1f)", pickup.x, pickup.y)

    # ----------------------------
    # Hunter
    # ----------------------------

    def spawn_hunter(self, hunter: Hunter):
        """Spawn just outside an arena edge so the hunter travels inward"""
        c = self.config
        gap = c.hunter_offscreen_gap
        m = c.hunter_edge_margin
        hunter.active = True

        if c.hunter_policy is HunterPolicy.CROSS:
            edge = self.rng.choice(["left", "right"])
        else:
            edge = self.rng.choice(["left", "right", "top", "bottom"])

        if edge == "left":
            hunter.x = -hunter.w - gap
            hunter.y = rand_range(self.rng, m, c.height - m - hunter.h)
        elif edge == "right":
            hunter.x = c.width + gap
            hunter.y = rand_range(self.rng, m, c.height - m - hunter.h)
        elif edge == "top":
            hunter.x = rand_range(self.rng, m, c.width - m - hunter.w)
            hunter.y = -hunter.h - gap
        else:
            hunter.x = rand_range(self.rng, m, c.width - m - hunter.w)
            hunter.y = c.height + gap

        # Cross-screen hunters keep the heading they entered with
        hunter.heading = 1.0 if edge == "left" else -1.0 if edge == "right" else 0.0
        logger.debug("hunter spawned on %s edge, speed %.1f", edge, hunter.speed)
