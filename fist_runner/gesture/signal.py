# fist_runner/gesture/signal.py
from __future__ import annotations
import threading
import time
from typing import Any, Optional

from .classifier import is_fist


class GestureSignal:
    """
    Most-recent fist/open level shared between the tracker thread and the game loop.

    The tracker publishes at its own cadence; the game reads `latest()` once
    per tick and never waits for a new frame. Old values are simply overwritten.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._fist = False
        self._hand_seen = False
        self._frames = 0
        self._updated_at: Optional[float] = None

    def publish(self, fist: bool, hand_seen: bool = True) -> None:
        with self._lock:
            self._fist = bool(fist) and hand_seen
            self._hand_seen = bool(hand_seen)
            self._frames += 1
            self._updated_at = time.monotonic()

    def publish_landmarks(self, landmarks: Any) -> bool:
        """Classify one landmark frame (None = no hand) and publish it. Returns the level."""
        fist = is_fist(landmarks)
        self.publish(fist, hand_seen=landmarks is not None)
        return fist

    def latest(self) -> bool:
        with self._lock:
            return self._fist

    def hand_seen(self) -> bool:
        with self._lock:
            return self._hand_seen

    def reset(self) -> None:
        self.publish(False, hand_seen=False)

    def get_stats(self) -> dict:
        with self._lock:
            age = None if self._updated_at is None else time.monotonic() - self._updated_at
            return {
                "frames": self._frames,
                "fist": self._fist,
                "hand_seen": self._hand_seen,
                "age_s": age,
            }
