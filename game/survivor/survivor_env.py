"""
SurvivorEnv - gymnasium adapter around the survivor arena
---------------------------------------------------------
- Drives a SessionController with a fixed dt per step
- Action: normalized player-center target in [0, 1]^2
- Vector observation: player state + hunter + pickup + K nearest hazards
- Reward: time survived, lives gained, damage and death penalties
- Optional Arcade window ("human") or a numpy raster ("rgb_array")

Quick test:
    python -m game.survivor --random-agent
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import ENV_CONFIG, REWARD_CONFIG, GameConfig
from .session import HighScoreStore, MemoryHighScoreStore, SessionController
from .utils import clamp


class SurvivorEnv(gym.Env):
    """Survivor arena as a single-agent environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        config: Optional[GameConfig] = None,
        store: Optional[HighScoreStore] = None,
        dt: float = ENV_CONFIG["dt"],
        max_steps: int = ENV_CONFIG["max_steps"],
        k_hazards: int = ENV_CONFIG["k_hazards"],
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.config = config or GameConfig()
        self.store = store if store is not None else MemoryHighScoreStore()
        self.dt = dt
        self.max_steps = max_steps
        self.k_hazards = k_hazards
        self.rewards = dict(REWARD_CONFIG, **(reward_config or {}))

        # Action: where the player's center should be, normalized to the arena
        self.action_space = spaces.Box(low=0.0, high=1.0, shape=(2,), dtype=np.float32)

        # Observation space (vector)
        # Player: center(2) invincible(1) invincibility left(1) lives(1)
        # Hunter: rel pos(2) active(1)
        # Pickup: rel pos(2) active(1)
        # Each hazard: rel pos(2) vel(2)
        obs_dim = 5 + 3 + 3 + self.k_hazards * 4
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self.controller: SessionController = None  # type: ignore
        self._step_count = 0
        self._window = None

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        if seed is None:
            seed = int(self.np_random.integers(0, 2**31 - 1))

        self._step_count = 0
        self.controller = SessionController(self.config, store=self.store, seed=seed)
        self.controller.begin_session()
        if self._window is not None:
            self._window.driver.controller = self.controller

        return self._get_obs(), self._get_info()

    def step(self, action):
        a = np.clip(np.asarray(action, dtype=np.float64), 0.0, 1.0)
        target = (float(a[0]) * self.config.width, float(a[1]) * self.config.height)

        state = self.controller.step(self.dt, target)
        reward = self._compute_reward(state.events)

        terminated = not self.controller.running
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        s = self.controller.state
        c = self.config
        px, py = s.player.center()

        def rel(x, y):
            return [clamp((x - px) / c.width, -1, 1), clamp((y - py) / c.height, -1, 1)]

        inv_left = s.player.invincibility_remaining / max(1e-6, c.invincibility_duration)
        obs_parts = [
            px / c.width * 2 - 1, py / c.height * 2 - 1,  # map to [-1,1]
            1.0 if s.player.invincible else -1.0,
            clamp(inv_left * 2 - 1, -1, 1),
            clamp(max(0, s.lives) / c.max_lives * 2 - 1, -1, 1),
        ]

        if s.hunter.active:
            obs_parts += rel(*s.hunter.center()) + [1.0]
        else:
            obs_parts += [0.0, 0.0, -1.0]

        if s.pickup.active:
            obs_parts += rel(*s.pickup.center()) + [1.0]
        else:
            obs_parts += [0.0, 0.0, -1.0]

        # Hazards: top-K nearest
        max_speed = max(abs(v) for v in c.hazard_speed_range) * s.speed_multiplier
        hazards_sorted = sorted(
            s.hazards,
            key=lambda h: (h.center()[0] - px) ** 2 + (h.center()[1] - py) ** 2
        )
        for i in range(self.k_hazards):
            if i < len(hazards_sorted):
                h = hazards_sorted[i]
                obs_parts += rel(*h.center()) + [
                    clamp(h.vx / max(1e-6, max_speed), -1, 1),
                    clamp(h.vy / max(1e-6, max_speed), -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, events: Dict[str, float]) -> float:
        r = self.rewards
        reward = r["R_SURVIVE"] * self.dt
        reward += r["R_LIFE"] * events.get("life_gained", 0.0)
        reward -= r["R_DAMAGE"] * events.get("damage", 0.0)
        reward -= r["R_DEATH"] * events.get("game_over", 0.0)
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        s = self.controller.state
        return {
            "score": s.score,
            "lives": s.lives,
            "high_score": s.high_score,
            "tier": s.tier,
            "hunter_active": s.hunter.active,
            "pickup_active": s.pickup.active,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None
        if self.render_mode == "rgb_array":
            return self._render_rgb_array()

        if self._window is None:
            # Arcade is only needed for on-screen play
            from .frame_driver import FrameDriver
            from .window import SurvivorWindow
            self._window = SurvivorWindow(FrameDriver(self.controller),
                                          "SurvivorEnv - Arcade", drive=False)
        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def _render_rgb_array(self) -> np.ndarray:
        c = self.config
        frame = np.zeros((int(c.height), int(c.width), 3), dtype=np.uint8)
        frame[:] = (18, 18, 22)
        snap = self.controller.snapshot()

        def fill(rect, color):
            x, y, w, h = rect
            x0, y0 = max(0, int(x)), max(0, int(y))
            x1, y1 = min(frame.shape[1], int(x + w)), min(frame.shape[0], int(y + h))
            if x1 > x0 and y1 > y0:
                frame[y0:y1, x0:x1] = color

        for r in snap.hazards:
            fill(r, (255, 82, 82))
        if snap.pickup is not None:
            fill(snap.pickup, (240, 210, 80))
        if snap.hunter is not None:
            fill(snap.hunter, (220, 120, 40))
        fill(snap.player, (40, 100, 60) if snap.invincible else (80, 200, 120))
        return frame

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42,
                       config: Optional[GameConfig] = None):
    """Run a random episode for testing"""
    env = SurvivorEnv(render_mode="human" if render else None, config=config)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if render:
            time.sleep(env.dt)

    print(f"Random episode return: {total:.2f}  score: {info['score']:.2f}  "
          f"high score: {info['high_score']:.2f}")

    env.close()
    return total, info
