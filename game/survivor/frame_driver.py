"""
Frame driver: turns wall-clock timestamps into simulation steps
"""

from __future__ import annotations

import math
import time
from typing import Callable, Optional

from .session import SessionController
from .simulation import Point
from .utils import sanitize_dt


class FrameDriver:
    """
    Called once per display refresh. The first tick (and the first tick after
    a session starts) only establishes the time baseline and steps with dt=0.
    """

    def __init__(
        self,
        controller: SessionController,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.controller = controller
        self.clock = clock
        self._last: Optional[float] = None
        self.frames = 0

    def reset_baseline(self):
        self._last = None

    def tick(self, timestamp: Optional[float] = None) -> float:
        """Step the controller; returns the dt that was used"""
        now = self.clock() if timestamp is None else timestamp
        if not math.isfinite(now):
            dt = 0.0
        else:
            if self._last is None:
                self._last = now
            dt = sanitize_dt(now - self._last)
            self._last = now
        self.controller.step(dt)
        self.frames += 1
        return dt

    def primary_action(self, point: Optional[Point] = None) -> bool:
        started = self.controller.primary_action(point)
        if started:
            self.reset_baseline()
        return started
