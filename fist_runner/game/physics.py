# fist_runner/game/physics.py
from __future__ import annotations
import math
from .config import GRAVITY, JUMP_VELOCITY, SCROLL_SPEED, JUMP_SAFETY_MARGIN


def ticks_to_apex(gravity: float = GRAVITY, jump_velocity: float = JUMP_VELOCITY) -> int:
    """Integrations needed after a jump before vy turns non-negative."""
    return math.ceil(abs(jump_velocity) / gravity)


def air_time(gravity: float = GRAVITY, jump_velocity: float = JUMP_VELOCITY) -> float:
    """Ticks spent airborne on a flat jump (up and back down)."""
    return 2.0 * abs(jump_velocity) / gravity


def max_jump_distance(gravity: float = GRAVITY,
                      jump_velocity: float = JUMP_VELOCITY,
                      scroll_speed: float = SCROLL_SPEED) -> float:
    """Horizontal distance covered during one full jump arc.

    Time to peak = |v0| / g, total air time = 2 * |v0| / g, and the world
    scrolls at a constant speed meanwhile. With the default constants this is
    2.5 * 57.8 ≈ 144 units.
    """
    return scroll_speed * air_time(gravity, jump_velocity)


def max_safe_gap(gravity: float = GRAVITY,
                 jump_velocity: float = JUMP_VELOCITY,
                 scroll_speed: float = SCROLL_SPEED,
                 margin: float = JUMP_SAFETY_MARGIN) -> float:
    """Largest gap the generator may produce (exclusive bound)."""
    return max_jump_distance(gravity, jump_velocity, scroll_speed) - margin
