"""
Camera hand tracker.

Reads webcam frames with OpenCV, runs MediaPipe Hands on them in a background
thread and publishes the fist/open level into a GestureSignal. The game loop
never waits on this thread: it reads `signal.latest()` once per tick.

Dependencies (optional extra):
    pip install "fist-runner[camera]"
"""
from __future__ import annotations
import logging
import threading
import time
from typing import Optional

import cv2
import mediapipe as mp

from fist_runner.game.config import (
    CAMERA_INDEX, CAMERA_W, CAMERA_H,
    HANDS_MAX_NUM, HANDS_MODEL_COMPLEXITY, HANDS_MIN_DETECTION, HANDS_MIN_TRACKING
)
from .signal import GestureSignal

logger = logging.getLogger(__name__)

PREVIEW_WINDOW = "Fist Runner - camera"


class HandTracker:
    """
    Background thread: capture frame -> detect hand -> classify -> publish.

    Typical usage:
        signal = GestureSignal()
        tracker = HandTracker(signal); tracker.start()
        ...
        jumping = signal.latest()
        ...
        tracker.stop()
    """

    def __init__(self,
                 signal: GestureSignal,
                 camera_index: int = CAMERA_INDEX,
                 width: int = CAMERA_W,
                 height: int = CAMERA_H,
                 show_preview: bool = False,
                 max_consecutive_failures: int = 30,
                 retry_delay: float = 0.01):
        self.signal = signal
        self.camera_index = camera_index
        self.width = width
        self.height = height
        self.show_preview = show_preview
        self.max_consecutive_failures = max_consecutive_failures
        self.retry_delay = retry_delay

        self.cap: Optional[cv2.VideoCapture] = None
        self.hands = None
        self._running = False
        self._th: Optional[threading.Thread] = None
        self._consecutive_failures = 0
        self._total_failures = 0

    def start(self) -> None:
        """Open the camera and MediaPipe, then begin the background loop."""
        if self._running:
            return
        self.cap = cv2.VideoCapture(self.camera_index)
        if not self.cap.isOpened():
            self.cap.release()
            self.cap = None
            raise RuntimeError(f"Cannot open camera index {self.camera_index}")
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)

        self.hands = self._open_hands()

        self._running = True
        self._consecutive_failures = 0
        self._th = threading.Thread(target=self._loop, args=(self.cap, self.hands),
                                    name="hand-tracker", daemon=True)
        self._th.start()
        logger.info("Hand tracker started (camera=%d, %dx%d)", self.camera_index, self.width, self.height)

    def stop(self) -> None:
        """Stop the loop and release camera/MediaPipe resources."""
        self._running = False
        th, self._th = self._th, None
        cap, hands = self.cap, self.hands
        self.cap = None
        self.hands = None
        if th is None:
            self._release(cap, hands)
        else:
            # the loop releases its own cap/hands on exit
            th.join(timeout=1.0)
            if th.is_alive():
                logger.warning("Hand tracker thread still blocked on the camera; it will release it on exit")
        if self.show_preview:
            cv2.destroyWindow(PREVIEW_WINDOW)
        self.signal.reset()
        logger.info("Hand tracker stopped (failures=%d)", self._total_failures)

    @staticmethod
    def _open_hands():
        return mp.solutions.hands.Hands(
            static_image_mode=False,
            max_num_hands=HANDS_MAX_NUM,
            model_complexity=HANDS_MODEL_COMPLEXITY,
            min_detection_confidence=HANDS_MIN_DETECTION,
            min_tracking_confidence=HANDS_MIN_TRACKING,
        )

    @staticmethod
    def _release(cap, hands) -> None:
        if hands is not None:
            hands.close()
        if cap is not None:
            cap.release()

    def _process(self, frame, hands) -> None:
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        try:
            results = hands.process(rgb)
        except Exception as e:
            self._consecutive_failures += 1
            self._total_failures += 1
            logger.warning("MediaPipe processing error: %s", e)
            self.signal.reset()
            return
        self._consecutive_failures = 0

        if results.multi_hand_landmarks:
            landmarks = results.multi_hand_landmarks[0]
            fist = self.signal.publish_landmarks(landmarks)
            if self.show_preview:
                mp.solutions.drawing_utils.draw_landmarks(
                    frame, landmarks, mp.solutions.hands.HAND_CONNECTIONS)
        else:
            fist = self.signal.publish_landmarks(None)

        if self.show_preview:
            preview = cv2.flip(frame, 1)
            label = "FIST (JUMP!)" if fist else "OPEN"
            cv2.putText(preview, label, (8, 22), cv2.FONT_HERSHEY_SIMPLEX, 0.6,
                        (0, 200, 0) if fist else (0, 0, 220), 2)
            cv2.imshow(PREVIEW_WINDOW, preview)
            cv2.waitKey(1)

    def _loop(self, cap, hands) -> None:
        try:
            while self._running:
                ok, frame = cap.read()
                if not ok or frame is None:
                    self._consecutive_failures += 1
                    self._total_failures += 1
                    if self._consecutive_failures == 1:
                        self.signal.reset()
                    if self._consecutive_failures == self.max_consecutive_failures:
                        logger.warning("Camera returned %d consecutive bad frames", self._consecutive_failures)
                    time.sleep(self.retry_delay)
                    continue
                self._process(frame, hands)
        finally:
            self._release(cap, hands)
