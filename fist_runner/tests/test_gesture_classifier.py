"""
Fist classifier checks on synthetic 21-point hands.

Usage (from repo root):
  python -m pytest fist_runner/tests/test_gesture_classifier.py
  python -m fist_runner.tests.test_gesture_classifier
"""
from __future__ import annotations
from types import SimpleNamespace
from typing import Iterable, List, Tuple

import numpy as np

from fist_runner.gesture.classifier import count_folded, is_fist
from fist_runner.game.config import FINGERTIP_IDS, FINGER_MCP_IDS


def make_hand(folded: Iterable[int] = ()) -> List[Tuple[float, float, float]]:
    """
    21 (x, y, z) points. `folded` holds finger numbers 0..3 (index..pinky):
    a folded finger has its tip below (larger y) its MCP, an open one above.
    """
    folded = set(folded)
    pts = [(0.5, 0.5, 0.0) for _ in range(21)]
    for i, (tip, mcp) in enumerate(zip(FINGERTIP_IDS, FINGER_MCP_IDS)):
        pts[mcp] = (0.4 + 0.05 * i, 0.6, 0.0)
        pts[tip] = (0.4 + 0.05 * i, 0.7 if i in folded else 0.3, 0.0)
    return pts


def as_mediapipe(points) -> SimpleNamespace:
    """Mimic a NormalizedLandmarkList (object with .landmark of objects with .x/.y/.z)."""
    return SimpleNamespace(landmark=[SimpleNamespace(x=x, y=y, z=z) for x, y, z in points])


def test_fist_needs_three_of_four_folded():
    assert is_fist(make_hand([0, 1, 2, 3])), "4 folded must be a fist"
    for missing in range(4):
        three = [f for f in range(4) if f != missing]
        assert is_fist(make_hand(three)), f"3 folded {three} must be a fist"
    assert not is_fist(make_hand([0, 1])), "2 folded is an open hand"
    assert not is_fist(make_hand([3])), "1 folded is an open hand"
    assert not is_fist(make_hand()), "0 folded is an open hand"


def test_count_folded():
    assert count_folded(make_hand()) == 0
    assert count_folded(make_hand([2])) == 1
    assert count_folded(make_hand([0, 1, 3])) == 3


def test_no_hand_is_open():
    assert is_fist(None) is False
    assert is_fist([]) is False
    assert count_folded(None) == 0


def test_short_or_malformed_frames_are_open():
    hand = make_hand([0, 1, 2, 3])
    assert not is_fist(hand[:20]), "fewer than 21 points must read as open"

    broken = list(hand)
    broken[FINGERTIP_IDS[0]] = None
    assert not is_fist(broken), "unreadable landmark must read as open"

    nan_hand = list(hand)
    nan_hand[FINGER_MCP_IDS[1]] = (0.5, float("nan"), 0.0)
    assert not is_fist(nan_hand), "NaN coordinates must read as open"

    assert not is_fist(42), "non-sequence input must read as open"


def test_tip_level_with_knuckle_is_not_folded():
    hand = make_hand([0, 1])
    x, y, z = hand[FINGER_MCP_IDS[2]]
    hand[FINGERTIP_IDS[2]] = (x, y, z)   # ring tip exactly at its MCP height
    assert count_folded(hand) == 2, "folded requires tip.y strictly greater than mcp.y"
    assert not is_fist(hand)


def test_accepts_mediapipe_objects_dicts_and_arrays():
    pts = make_hand([0, 1, 2])
    assert is_fist(as_mediapipe(pts)), "NormalizedLandmarkList-like input"
    assert is_fist(as_mediapipe(pts).landmark), "plain list of landmark objects"
    assert is_fist([{"x": x, "y": y} for x, y, _ in pts]), "dict landmarks"
    assert is_fist(np.asarray(pts, dtype=np.float32)), "(21, 3) array"
    assert is_fist(np.asarray(pts)[:, :2]), "(21, 2) array"
    assert not is_fist(np.zeros((21,))), "1-D array is malformed"


def test_custom_threshold():
    hand = make_hand([0, 1])
    assert is_fist(hand, min_folded=2)
    assert not is_fist(hand, min_folded=3)


def main():
    test_fist_needs_three_of_four_folded()
    test_count_folded()
    test_no_hand_is_open()
    test_short_or_malformed_frames_are_open()
    test_tip_level_with_knuckle_is_not_folded()
    test_accepts_mediapipe_objects_dicts_and_arrays()
    test_custom_threshold()
    print("✓ gesture classifier checks passed")


if __name__ == "__main__":
    main()
