"""
Simulation step for the survivor arena
--------------------------------------
One SimulationState value owns every entity plus the session bookkeeping.
`update(state, dt, target)` advances it in place:

1. score accrual
2. difficulty tier / speed multiplier
3. invincibility decay
4. hazard motion (bounce or wrap)
5. score-gated spawns (edge-triggered, one spawn per crossing at most)
6. hunter motion (seek or cross)
7. collisions: hazards, then pickup, then hunter

Nothing in here raises during a step; degenerate input is clamped or ignored.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .config import GameConfig, HazardPolicy, HunterPolicy
from .entities import Hazard, Hunter, Pickup, Player, SessionState
from .spawner import Spawner
from .utils import clamp, normalize, rects_overlap, sanitize_dt

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

EVENT_KEYS = ("damage", "pickup", "life_gained", "pickup_spawn", "hunter_spawn", "game_over")


def _new_events() -> Dict[str, float]:
    return {k: 0.0 for k in EVENT_KEYS}


@dataclass
class SimulationState:
    """Everything the simulation owns for one arena"""
    config: GameConfig
    rng: random.Random
    player: Player
    hunter: Hunter
    pickup: Pickup
    hazards: List[Hazard] = field(default_factory=list)

    session: SessionState = SessionState.NOT_STARTED
    score: float = 0.0
    lives: int = 3
    high_score: float = 0.0

    # Last processed floor(score / period); -1 means "not yet crossed"
    last_pickup_step: int = -1
    last_hunter_step: int = -1

    events: Dict[str, float] = field(default_factory=_new_events)
    spawn_log: List[Tuple[str, int]] = field(default_factory=list)

    @property
    def spawner(self) -> Spawner:
        return Spawner(self.config, self.rng)

    @property
    def running(self) -> bool:
        return self.session is SessionState.RUNNING

    @property
    def tier(self) -> int:
        return int(math.floor(self.score / self.config.difficulty_period))

    @property
    def speed_multiplier(self) -> float:
        return 1.0 + self.tier * self.config.difficulty_step


def new_state(config: Optional[GameConfig] = None, seed: Optional[int] = None,
              high_score: float = 0.0) -> SimulationState:
    """Build a not-yet-started arena with hazards placed for the title screen"""
    config = config or GameConfig()
    rng = random.Random(seed)
    state = SimulationState(
        config=config,
        rng=rng,
        player=Player(
            x=config.width / 2 - config.player_w / 2,
            y=config.height / 2 - config.player_h / 2,
            w=config.player_w,
            h=config.player_h,
        ),
        hunter=Hunter(x=0.0, y=0.0, w=config.hunter_w, h=config.hunter_h,
                      speed=config.hunter_base_speed),
        pickup=Pickup(x=0.0, y=0.0, w=config.pickup_w, h=config.pickup_h),
        lives=config.start_lives,
        high_score=high_score,
    )
    state.hazards = state.spawner.spawn_hazards()
    return state


def reset_state(state: SimulationState):
    """Put the arena back to its session-start configuration and mark it running"""
    c = state.config
    state.session = SessionState.RUNNING
    state.score = 0.0
    state.lives = c.start_lives
    state.player.x = c.width / 2 - c.player_w / 2
    state.player.y = c.height / 2 - c.player_h / 2
    state.player.invincible = False
    state.player.invincibility_remaining = 0.0
    state.pickup.active = False
    state.pickup.ttl = None
    state.hunter.active = False
    state.hunter.speed = c.hunter_base_speed
    state.hunter.heading = 0.0
    state.last_pickup_step = -1
    state.last_hunter_step = -1
    state.events = _new_events()
    state.spawn_log = []
    state.hazards = state.spawner.spawn_hazards()


def apply_input_target(state: SimulationState, target: Optional[Point]):
    """Center the player on `target`, keeping the whole rect inside the arena"""
    if target is None:
        return
    try:
        tx, ty = float(target[0]), float(target[1])
    except (TypeError, ValueError, IndexError):
        return
    if not (math.isfinite(tx) and math.isfinite(ty)):
        return
    p = state.player
    c = state.config
    p.x = clamp(tx - p.w / 2, 0.0, c.width - p.w)
    p.y = clamp(ty - p.h / 2, 0.0, c.height - p.h)


def commit_high_score(state: SimulationState) -> bool:
    """Raise the in-memory high score if this session beat it"""
    if state.score > state.high_score:
        state.high_score = state.score
        return True
    return False


def _game_over(state: SimulationState):
    commit_high_score(state)
    state.session = SessionState.GAME_OVER
    state.events["game_over"] += 1.0
    logger.info("game over: score %.2f, high score %.2f", state.score, state.high_score)


# ----------------------------
# Motion
# ----------------------------

def _bounce(h: Hazard, width: float, height: float):
    if h.x < 0:
        h.x = 0.0
        h.vx = -h.vx
    elif h.x + h.w > width:
        h.x = width - h.w
        h.vx = -h.vx

    if h.y < 0:
        h.y = 0.0
        h.vy = -h.vy
    elif h.y + h.h > height:
        h.y = height - h.h
        h.vy = -h.vy


def _wrap(h: Hazard, spawner: Spawner, width: float, height: float):
    # Only once fully out of view; re-enters moving the same way
    if h.vx > 0 and h.x > width:
        spawner.rewrap_hazard(h, "x", from_low_edge=False)
    elif h.vx < 0 and h.x + h.w < 0:
        spawner.rewrap_hazard(h, "x", from_low_edge=True)

    if h.vy > 0 and h.y > height:
        spawner.rewrap_hazard(h, "y", from_low_edge=False)
    elif h.vy < 0 and h.y + h.h < 0:
        spawner.rewrap_hazard(h, "y", from_low_edge=True)


def move_hazards(state: SimulationState, dt: float, multiplier: float):
    c = state.config
    spawner = state.spawner
    for h in state.hazards:
        h.x += h.vx * dt * multiplier
        h.y += h.vy * dt * multiplier
        if c.hazard_policy is HazardPolicy.WRAP:
            _wrap(h, spawner, c.width, c.height)
        else:
            _bounce(h, c.width, c.height)


def move_hunter(state: SimulationState, dt: float, multiplier: float):
    k = state.hunter
    if not k.active:
        return
    c = state.config
    px, py = state.player.center()
    kx, ky = k.center()
    speed = k.speed * multiplier

    if c.hunter_policy is HunterPolicy.CROSS:
        k.x += k.heading * speed * dt
        correction = clamp((py - ky) * c.hunter_tracking, -speed, speed)
        k.y += correction * dt
        # Expires once fully past the far edge
        if (k.heading > 0 and k.x > c.width) or (k.heading < 0 and k.x + k.w < 0):
            k.active = False
            logger.debug("hunter left the arena")
        return

    nx, ny = normalize(px - kx, py - ky)
    k.x += nx * speed * dt
    k.y += ny * speed * dt


def _tick_pickup(state: SimulationState, dt: float):
    p = state.pickup
    if not p.active or p.ttl is None:
        return
    p.ttl -= dt
    if p.ttl <= 0:
        p.active = False
        p.ttl = None


# ----------------------------
# Spawns
# ----------------------------

def evaluate_spawns(state: SimulationState):
    """Edge-triggered: each crossing advances the marker, at most one spawn per kind"""
    c = state.config
    spawner = state.spawner

    pickup_step = int(math.floor(state.score / c.pickup_period))
    if pickup_step > state.last_pickup_step:
        state.last_pickup_step = pickup_step
        if not state.pickup.active and pickup_step > 0:
            spawner.spawn_pickup(state.pickup)
            state.events["pickup_spawn"] += 1.0
            state.spawn_log.append(("pickup", pickup_step))

    hunter_step = int(math.floor(state.score / c.hunter_period))
    if hunter_step > state.last_hunter_step:
        state.last_hunter_step = hunter_step
        if hunter_step > 0:
            state.hunter.speed = max(
                state.hunter.speed,
                c.hunter_base_speed + hunter_step * c.hunter_speed_increment,
            )
            if not state.hunter.active:
                spawner.spawn_hunter(state.hunter)
                state.events["hunter_spawn"] += 1.0
                state.spawn_log.append(("hunter", hunter_step))


# ----------------------------
# Collisions
# ----------------------------

def resolve_collisions(state: SimulationState):
    c = state.config
    player = state.player
    player_rect = player.rect()

    if not player.invincible:
        for h in state.hazards:
            if rects_overlap(player_rect, h.rect()):
                state.lives -= 1
                state.events["damage"] += 1.0
                player.invincible = True
                player.invincibility_remaining = c.invincibility_duration
                if state.lives < 0:
                    _game_over(state)
                    return
                break

    if state.pickup.active and rects_overlap(player_rect, state.pickup.rect()):
        state.pickup.active = False
        state.pickup.ttl = None
        state.events["pickup"] += 1.0
        if state.lives < c.max_lives:
            state.lives += 1
            state.events["life_gained"] += 1.0

    # Invincibility never protects against the hunter
    if state.hunter.active and rects_overlap(player_rect, state.hunter.rect()):
        _game_over(state)


# ----------------------------
# Step
# ----------------------------

def _step_is_finite(state: SimulationState, dt: float) -> bool:
    """False when advancing by `dt` would push score or a displacement past float range"""
    c = state.config
    score = state.score + dt
    tiers = score / c.difficulty_period
    hunter_steps = score / c.hunter_period
    pickup_steps = score / c.pickup_period
    if not all(math.isfinite(v) for v in (score, tiers, hunter_steps, pickup_steps)):
        return False
    multiplier = 1.0 + math.floor(tiers) * c.difficulty_step
    hunter_speed = max(
        state.hunter.speed,
        c.hunter_base_speed + math.floor(hunter_steps) * c.hunter_speed_increment,
    )
    top_speed = max(hunter_speed, *(abs(v) for v in c.hazard_speed_range))
    return math.isfinite(top_speed * multiplier * dt)


def update(state: SimulationState, dt: float, input_target: Optional[Point] = None) -> SimulationState:
    """Advance the arena by `dt` seconds. No-op unless the session is running."""
    dt = sanitize_dt(dt)
    if not state.running:
        return state

    if not _step_is_finite(state, dt):
        logger.debug("skipping step with dt=%r", dt)
        return state

    state.events = _new_events()
    apply_input_target(state, input_target)

    state.score += dt
    multiplier = state.speed_multiplier

    player = state.player
    if player.invincible:
        player.invincibility_remaining -= dt
        if player.invincibility_remaining <= 0:
            player.invincible = False
            player.invincibility_remaining = 0.0

    move_hazards(state, dt, multiplier)
    _tick_pickup(state, dt)
    evaluate_spawns(state)
    move_hunter(state, dt, multiplier)
    resolve_collisions(state)
    return state
