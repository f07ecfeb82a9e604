"""
Session controller and high-score persistence
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from .config import GameConfig
from .entities import SessionState
from .simulation import Point, SimulationState, new_state, reset_state, update
from .utils import Rect

logger = logging.getLogger(__name__)


# ----------------------------
# Persistence collaborators
# ----------------------------

class HighScoreStore(Protocol):
    def load(self) -> float: ...

    def commit(self, value: float) -> None: ...


class MemoryHighScoreStore:
    """Keeps the high score for the lifetime of the process"""

    def __init__(self, value: float = 0.0):
        self.value = value

    def load(self) -> float:
        return self.value

    def commit(self, value: float) -> None:
        self.value = value


class JsonHighScoreStore:
    """Stores {"highscore": value} in a JSON file"""

    def __init__(self, path: str = "highscore.json"):
        self.path = path

    def load(self) -> float:
        if not os.path.exists(self.path):
            return 0.0
        with open(self.path, "r") as f:
            data = json.load(f)
        return float(data.get("highscore", 0))

    def commit(self, value: float) -> None:
        with open(self.path, "w") as f:
            json.dump({"highscore": value}, f)


# ----------------------------
# Read-only view for renderers
# ----------------------------

@dataclass(frozen=True)
class Snapshot:
    state: SessionState
    player: Rect
    invincible: bool
    invincibility_remaining: float
    hazards: Tuple[Rect, ...]
    hunter: Optional[Rect]
    pickup: Optional[Rect]
    score: float
    lives: int
    display_lives: int
    high_score: float
    tier: int


class SessionController:
    """
    Owns one SimulationState and drives the session state machine:

        NOT_STARTED -> RUNNING -> GAME_OVER -> RUNNING -> ...

    The input collaborator reports a primary action (tap / press) and move
    targets; the frame driver calls `step(dt)` once per frame.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        store: Optional[HighScoreStore] = None,
        seed: Optional[int] = None,
    ):
        self.config = config or GameConfig()
        self.store = store if store is not None else MemoryHighScoreStore()
        self.state: SimulationState = new_state(self.config, seed=seed,
                                                high_score=self._load_high_score())
        self._committed_high = self.state.high_score
        self.dragging = False
        self._target: Optional[Point] = None

    def _load_high_score(self) -> float:
        try:
            return float(self.store.load())
        except Exception as e:  # store failures never stop the game
            logger.warning("could not load high score, starting from 0: %s", e)
            return 0.0

    def _commit_high_score(self):
        value = self.state.high_score
        if value <= self._committed_high:
            return
        try:
            self.store.commit(value)
            self._committed_high = value
        except Exception as e:  # store failures never stop the game
            logger.warning("could not persist high score %.2f: %s", value, e)

    # ----------------------------
    # Transitions
    # ----------------------------

    @property
    def session_state(self) -> SessionState:
        return self.state.session

    @property
    def running(self) -> bool:
        return self.state.running

    def begin_session(self) -> bool:
        """Enter RUNNING from NOT_STARTED or GAME_OVER. No-op while running."""
        if self.running:
            return False
        reset_state(self.state)
        self.dragging = False
        self._target = None
        logger.info("session started (high score %.2f)", self.state.high_score)
        return True

    restart_session = begin_session

    def primary_action(self, point: Optional[Point] = None) -> bool:
        """
        Tap / press. Starts a session when not running (returns True);
        otherwise begins a drag toward `point` (returns False).
        """
        if not self.running:
            return self.begin_session()
        self.dragging = True
        self._target = point
        return False

    def move_to(self, point: Point):
        if self.running and self.dragging:
            self._target = point

    def release(self):
        self.dragging = False

    def step(self, dt: float, target: Optional[Point] = None) -> SimulationState:
        """Advance one frame; an explicit `target` overrides the pending drag target"""
        was_running = self.running
        pending, self._target = self._target, None
        update(self.state, dt, target if target is not None else pending)
        if was_running and not self.running:
            self._commit_high_score()
            self.dragging = False
        return self.state

    # ----------------------------
    # Accessors
    # ----------------------------

    @property
    def score(self) -> float:
        return self.state.score

    @property
    def lives(self) -> int:
        return self.state.lives

    @property
    def high_score(self) -> float:
        return self.state.high_score

    def snapshot(self) -> Snapshot:
        s = self.state
        return Snapshot(
            state=s.session,
            player=s.player.rect(),
            invincible=s.player.invincible,
            invincibility_remaining=s.player.invincibility_remaining,
            hazards=tuple(h.rect() for h in s.hazards),
            hunter=s.hunter.rect() if s.hunter.active else None,
            pickup=s.pickup.rect() if s.pickup.active else None,
            score=s.score,
            lives=s.lives,
            display_lives=max(0, s.lives),
            high_score=s.high_score,
            tier=s.tier,
        )
