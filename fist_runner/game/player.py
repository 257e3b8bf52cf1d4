# fist_runner/game/player.py
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple
from .config import (
    PLAYER_X, PLAYER_SIZE, HITBOX_INSET, GRAVITY, JUMP_VELOCITY,
    LANDING_TOLERANCE, GROUND_Y, HEIGHT
)
from .level import Platform


@dataclass
class Player:
    """
    Runner at a fixed screen x. Only vertical motion is simulated:
    - y is the TOP edge, growing downward,
    - vy > 0 means falling.
    """
    y: float
    vy: float = 0.0
    grounded: bool = False
    x: float = float(PLAYER_X)

    @classmethod
    def standing(cls) -> "Player":
        """A player resting on the ground surface."""
        return cls(y=float(GROUND_Y - PLAYER_SIZE), vy=0.0, grounded=True)

    @property
    def bottom(self) -> float:
        return self.y + PLAYER_SIZE

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), PLAYER_SIZE, PLAYER_SIZE)

    def hitbox_x(self, scroll: float) -> Tuple[float, float]:
        """Horizontal hitbox in world coordinates (left, right)."""
        world_x = self.x + scroll
        return world_x + HITBOX_INSET, world_x + PLAYER_SIZE - HITBOX_INSET

    def try_jump(self, intent: bool, jump_velocity: float = JUMP_VELOCITY) -> bool:
        """Apply the jump impulse if asked to and standing. Returns True if performed."""
        if intent and self.grounded:
            self.vy = jump_velocity
            self.grounded = False
            return True
        return False

    def update_physics(self, gravity: float = GRAVITY):
        """Semi-implicit Euler, one step per tick."""
        self.vy += gravity
        self.y += self.vy

    def resolve_landing(self, platforms: Iterable[Platform], scroll: float,
                        tolerance: float = LANDING_TOLERANCE) -> Optional[Platform]:
        """
        Land on the first overlapping platform whose surface the player's
        bottom reached, allowing `tolerance` of downward slack. Platforms are
        checked in ascending world order; first match wins.
        Returns the platform landed on, or None (airborne).
        """
        left, right = self.hitbox_x(scroll)
        bottom = self.bottom
        for plat in platforms:
            if not plat.overlaps(left, right):
                continue
            top = plat.top
            if top <= bottom <= top + tolerance and self.vy >= 0.0:
                self.y = top - PLAYER_SIZE
                self.vy = 0.0
                self.grounded = True
                return plat

        self.grounded = False
        return None

    def fell_out(self, floor: float = HEIGHT) -> bool:
        """Top edge below the playfield bottom."""
        return self.y > floor
