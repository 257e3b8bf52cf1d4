# fist_runner/game/level.py
from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import List, Optional
import pygame
from .config import (
    GROUND_Y, HEIGHT, INITIAL_PLATFORM_W, GAP_MIN_W, GAP_MAX_W,
    PLATFORM_MIN_W, PLATFORM_MAX_W, PLATFORM_BUFFER,
    COLOR_GRASS, COLOR_DIRT
)
from .physics import max_safe_gap

logger = logging.getLogger(__name__)


@dataclass
class Platform:
    """A flat platform in world space. Every platform's top sits at GROUND_Y."""
    x: float
    width: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return float(GROUND_Y)

    def overlaps(self, left: float, right: float) -> bool:
        """Open-interval horizontal overlap with [left, right]."""
        return right > self.x and left < self.right

    def screen_rect(self, scroll: float) -> pygame.Rect:
        return pygame.Rect(int(self.x - scroll), int(GROUND_Y), int(self.width), HEIGHT - int(GROUND_Y))


class LevelGen:
    """
    Endless ribbon of platforms for a single run.
    - one long safe platform at x=0,
    - then random gap/width pairs, each gap jumpable under the fixed physics.
    """
    def __init__(self, seed: int | None,
                 gap_min: float = GAP_MIN_W,
                 gap_max: float = GAP_MAX_W,
                 width_min: float = PLATFORM_MIN_W,
                 width_max: float = PLATFORM_MAX_W,
                 buffer: int = PLATFORM_BUFFER,
                 safe_gap: float | None = None):
        assert 0 < gap_min <= gap_max, "gap range must be positive and ordered"
        assert 0 < width_min <= width_max, "width range must be positive and ordered"
        assert buffer >= 1, "buffer must be >= 1"
        bound = max_safe_gap() if safe_gap is None else float(safe_gap)
        assert gap_max < bound, f"gap_max={gap_max} is not jumpable (must be < {bound:.1f})"

        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self.gap_min = float(gap_min)
        self.gap_max = float(gap_max)
        self.width_min = float(width_min)
        self.width_max = float(width_max)
        self.buffer = int(buffer)

        self.platforms: List[Platform] = []
        self.frontier = 0.0   # world x where the last platform ends
        self._init_start()

    def _init_start(self):
        first = Platform(x=0.0, width=float(INITIAL_PLATFORM_W))
        self.platforms.append(first)
        self.frontier = first.right
        self.ensure_ahead()
        logger.debug("Level seeded (seed=%s, platforms=%d, frontier=%.1f)",
                     self.seed, len(self.platforms), self.frontier)

    def spawn_next(self) -> Platform:
        """Append one platform past the frontier and advance the frontier."""
        gap = self.rng.uniform(self.gap_min, self.gap_max)
        width = self.rng.uniform(self.width_min, self.width_max)
        plat = Platform(x=self.frontier + gap, width=width)
        self.platforms.append(plat)
        self.frontier = plat.right
        return plat

    def ensure_ahead(self, min_count: Optional[int] = None) -> int:
        """Top up the look-ahead buffer. Returns how many platforms were spawned."""
        target = self.buffer if min_count is None else int(min_count)
        spawned = 0
        while len(self.platforms) < target:
            self.spawn_next()
            spawned += 1
        return spawned

    def pop_passed(self, scroll: float) -> Optional[Platform]:
        """Remove the lead platform once its right edge is behind the viewport's left edge."""
        if self.platforms and self.platforms[0].right < scroll:
            return self.platforms.pop(0)
        return None

    def gaps(self) -> List[float]:
        """Gap widths between consecutive live platforms."""
        return [b.x - a.right for a, b in zip(self.platforms, self.platforms[1:])]

    def draw(self, surf: pygame.Surface, scroll: float):
        """Draw visible platforms: dirt body with a grass strip on top."""
        view_w = surf.get_width()
        for plat in self.platforms:
            rect = plat.screen_rect(scroll)
            if rect.right < 0 or rect.left > view_w:
                continue
            pygame.draw.rect(surf, COLOR_DIRT, rect.move(0, 10))
            pygame.draw.rect(surf, COLOR_GRASS, pygame.Rect(rect.x, rect.y, rect.w, 25), border_radius=5)
