# fist_runner/gesture/classifier.py
from __future__ import annotations
from typing import Any, List, Optional, Sequence

import numpy as np

from fist_runner.game.config import (
    NUM_LANDMARKS, FINGERTIP_IDS, FINGER_MCP_IDS, FIST_MIN_FOLDED
)


def _landmark_y(lm: Any) -> Optional[float]:
    """
    Vertical coordinate of one landmark, or None if unreadable.
    Accepts MediaPipe landmarks (.y), dicts with "y", and (x, y[, z]) sequences.
    """
    y = getattr(lm, "y", None)
    if y is None:
        if isinstance(lm, dict):
            y = lm.get("y")
        elif isinstance(lm, (tuple, list, np.ndarray)) and len(lm) >= 2:
            y = lm[1]
    if y is None:
        return None
    try:
        y = float(y)
    except (TypeError, ValueError):
        return None
    return None if np.isnan(y) else y


def _as_landmark_list(landmarks: Any) -> Optional[Sequence]:
    """Unwrap a NormalizedLandmarkList / ndarray into an indexable sequence of 21 points."""
    if landmarks is None:
        return None
    inner = getattr(landmarks, "landmark", None)
    if inner is not None:
        landmarks = inner
    if isinstance(landmarks, np.ndarray):
        if landmarks.ndim != 2 or landmarks.shape[1] < 2:
            return None
        landmarks = list(landmarks)
    try:
        n = len(landmarks)
    except TypeError:
        return None
    if n < NUM_LANDMARKS:
        return None
    return landmarks


def count_folded(landmarks: Any) -> int:
    """
    Number of folded fingers among index/middle/ring/pinky.
    A finger is folded when its tip is lower on screen than its MCP knuckle
    (tip.y > mcp.y, y grows downward). Missing or malformed input counts as 0.
    """
    lms = _as_landmark_list(landmarks)
    if lms is None:
        return 0

    ys: List[float] = []
    for idx in FINGERTIP_IDS + FINGER_MCP_IDS:
        y = _landmark_y(lms[idx])
        if y is None:
            return 0
        ys.append(y)

    n = len(FINGERTIP_IDS)
    tips, mcps = ys[:n], ys[n:]
    return sum(1 for tip_y, mcp_y in zip(tips, mcps) if tip_y > mcp_y)


def is_fist(landmarks: Any, min_folded: int = FIST_MIN_FOLDED) -> bool:
    """True when a closed hand (at least `min_folded` of 4 fingers folded) is seen; no hand = open."""
    return count_folded(landmarks) >= min_folded
