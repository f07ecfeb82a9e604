"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Tuple

Rect = Tuple[float, float, float, float]  # x, y, w, h (top-left origin)


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length"""
    l = math.hypot(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def rects_overlap(a: Rect, b: Rect) -> bool:
    """Check if two axis-aligned rectangles overlap (touching edges count)"""
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return not (
        ax + aw < bx
        or ax > bx + bw
        or ay + ah < by
        or ay > by + bh
    )


def rand_range(rng: random.Random, lo: float, hi: float) -> float:
    """Uniform sample in [lo, hi); collapses to lo when the range is empty"""
    if hi <= lo:
        return lo
    return lo + rng.random() * (hi - lo)


def sanitize_dt(dt) -> float:
    """Negative, NaN or infinite frame deltas become 0"""
    try:
        dt = float(dt)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(dt) or dt < 0.0:
        return 0.0
    return dt



def to_arena_point(x: float, y: float, height: float, offset_y: float) -> Tuple[float, float]:
    """Window coords (y up) -> arena coords (y down), lifted above the contact point"""
    return x, (height - y) - offset_y
