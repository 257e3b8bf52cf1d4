# fist_runner/game/render.py
from __future__ import annotations
from typing import Optional
import pygame
from .config import (
    WIDTH, HEIGHT, PLAYER_SIZE,
    COLOR_SKY_TOP, COLOR_SKY_BOT, COLOR_PLAYER, COLOR_PLAYER_DEAD
)
from .level import LevelGen
from .player import Player

_sky_cache: Optional[pygame.Surface] = None


def _sky() -> pygame.Surface:
    """Vertical gradient, built once."""
    global _sky_cache
    if _sky_cache is None:
        surf = pygame.Surface((WIDTH, HEIGHT))
        for y in range(HEIGHT):
            t = y / (HEIGHT - 1)
            color = tuple(int(a + (b - a) * t) for a, b in zip(COLOR_SKY_TOP, COLOR_SKY_BOT))
            pygame.draw.line(surf, color, (0, y), (WIDTH, y))
        _sky_cache = surf
    return _sky_cache


def draw_world(surf: pygame.Surface, level: Optional[LevelGen], player: Player,
               scroll: float, alive: bool = True):
    """Background, platforms and player for the current tick."""
    surf.blit(_sky(), (0, 0))
    if level is not None:
        level.draw(surf, scroll)

    r = player.rect
    shadow = pygame.Rect(0, 0, 40, 10)
    shadow.center = (r.centerx, r.bottom + 5)
    pygame.draw.ellipse(surf, (90, 130, 150), shadow)
    body = pygame.Rect(r.x + 5, r.y + 10, PLAYER_SIZE - 10, PLAYER_SIZE - 10)
    pygame.draw.rect(surf, COLOR_PLAYER if alive else COLOR_PLAYER_DEAD, body, border_radius=10)
    pygame.draw.circle(surf, (255, 224, 178), (r.centerx, r.y + 15), 12)
    pygame.draw.circle(surf, (0, 0, 0), (r.centerx - 4, r.y + 13), 2)
    pygame.draw.circle(surf, (0, 0, 0), (r.centerx + 4, r.y + 13), 2)
