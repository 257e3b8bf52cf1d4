# fist_runner/env/observations.py
from __future__ import annotations
from typing import List, Optional, Sequence, Tuple
import numpy as np

from fist_runner.game.config import (
    WIDTH, HEIGHT, GAP_MAX_W, PLATFORM_MAX_W, JUMP_VELOCITY
)
from fist_runner.game.level import Platform

OBS_SIZE = 6
VY_SCALE = abs(JUMP_VELOCITY) * 2.0   # |vy| beyond this is clipped

def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)

def _ahead(platforms: Sequence[Platform], left: float, right: float
           ) -> Tuple[Optional[Platform], Optional[Platform], bool]:
    """
    (current, following, over_current) relative to the player's hitbox:
    - current  : first platform not yet fully behind the hitbox,
    - following: the one after it,
    - over_current: the hitbox overlaps `current` right now.
    """
    for i, plat in enumerate(platforms):
        if plat.right > left:
            nxt = platforms[i + 1] if i + 1 < len(platforms) else None
            return plat, nxt, plat.x < right
    return None, None, False

def build_observation(player, platforms: Sequence[Platform], scroll: float) -> np.ndarray:
    """
    Returns a fixed (6,) float32 vector:
      [ y_norm, vy_norm, grounded,
        edge_dist_norm, gap_w_norm, next_w_norm ]
    - y_norm        in [0,1]  top edge over playfield height
    - vy_norm       in [-1,1]
    - grounded      0.0/1.0
    - edge_dist_norm: distance to the end of the current platform / WIDTH
    - gap_w_norm    : width of the next gap / GAP_MAX_W
    - next_w_norm   : width of the platform after that gap / PLATFORM_MAX_W
    Missing platforms read as 0.0.
    """
    left, right = player.hitbox_x(scroll)
    cur, nxt, over = _ahead(platforms, left, right)

    if cur is None:
        edge, gap, nxt_w = 0.0, 0.0, 0.0
    elif over:
        edge = max(0.0, cur.right - right)
        gap = (nxt.x - cur.right) if nxt is not None else 0.0
        nxt_w = nxt.width if nxt is not None else 0.0
    else:
        # over a gap: the landing target is `cur`
        edge = 0.0
        gap = max(0.0, cur.x - right)
        nxt_w = cur.width

    feats: List[float] = [
        _clamp01(float(player.y) / float(HEIGHT)),
        max(-1.0, min(1.0, float(player.vy) / VY_SCALE)),
        1.0 if player.grounded else 0.0,
        _clamp01(edge / float(WIDTH)),
        _clamp01(gap / float(GAP_MAX_W)),
        _clamp01(nxt_w / float(PLATFORM_MAX_W)),
    ]
    return np.asarray(feats, dtype=np.float32)
