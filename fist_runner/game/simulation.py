# fist_runner/game/simulation.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from .config import SCROLL_SPEED, GRAVITY, JUMP_VELOCITY, JUMP_REQUIRES_RELEASE
from .level import LevelGen
from .player import Player

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    OVER = "over"


class GameListener:
    """Receives game events (audio, HUD, score keeping). Every hook is a no-op by default."""

    def on_start(self) -> None:
        pass

    def on_jump(self) -> None:
        pass

    def on_point(self, score: int) -> None:
        pass

    def on_game_over(self, final_score: int) -> None:
        pass


class LoggingListener(GameListener):
    def on_start(self) -> None:
        logger.info("Run started")

    def on_jump(self) -> None:
        logger.debug("Jump")

    def on_point(self, score: int) -> None:
        logger.debug("Point scored (score=%d)", score)

    def on_game_over(self, final_score: int) -> None:
        logger.info("Game over (final score=%d)", final_score)


class MultiListener(GameListener):
    """Fans every event out to several listeners, in order."""

    def __init__(self, listeners: Iterable[GameListener]):
        self.listeners: List[GameListener] = list(listeners)

    def on_start(self) -> None:
        for listener in self.listeners:
            listener.on_start()

    def on_jump(self) -> None:
        for listener in self.listeners:
            listener.on_jump()

    def on_point(self, score: int) -> None:
        for listener in self.listeners:
            listener.on_point(score)

    def on_game_over(self, final_score: int) -> None:
        for listener in self.listeners:
            listener.on_game_over(final_score)


@dataclass
class TickEvents:
    """What happened during one tick."""
    jumped: bool = False
    scored: bool = False
    game_over: bool = False
    final_score: Optional[int] = None


class Simulation:
    """
    Owns one run at a time: player, level, scroll and score.

    The host calls `tick(jump_intent)` once per rendered frame. Ticks are
    ignored unless the status is RUNNING, so nothing advances on the menu or
    on the game-over screen.
    """

    def __init__(self,
                 seed: Optional[int] = None,
                 listener: Optional[GameListener] = None,
                 require_release: bool = JUMP_REQUIRES_RELEASE):
        self.base_seed = seed
        self.listener = listener if listener is not None else GameListener()
        self.require_release = bool(require_release)

        self.status = GameStatus.IDLE
        self.high_score = 0
        self.score = 0
        self.scroll = 0.0
        self.ticks = 0
        self.player = Player.standing()
        self.level: Optional[LevelGen] = None
        self._prev_intent = False

    # -------------------- Commands --------------------

    def start(self, seed: Optional[int] = None) -> bool:
        """IDLE/OVER -> RUNNING. Returns False (and does nothing) while already running."""
        if self.status == GameStatus.RUNNING:
            return False
        self._reset_run(seed if seed is not None else self.base_seed)
        self.status = GameStatus.RUNNING
        logger.debug("Run started (seed=%s)", self.level.seed)
        self.listener.on_start()
        return True

    def restart(self, seed: Optional[int] = None) -> bool:
        """OVER -> RUNNING."""
        if self.status != GameStatus.OVER:
            return False
        return self.start(seed)

    def return_to_menu(self) -> bool:
        """OVER -> IDLE."""
        if self.status != GameStatus.OVER:
            return False
        self.status = GameStatus.IDLE
        return True

    @property
    def seed(self) -> Optional[int]:
        return self.level.seed if self.level is not None else None

    @property
    def distance(self) -> float:
        return self.scroll

    @property
    def platforms(self):
        return self.level.platforms if self.level is not None else []

    def _reset_run(self, seed: Optional[int]):
        self.level = LevelGen(seed)
        self.player = Player.standing()
        self.scroll = 0.0
        self.score = 0
        self.ticks = 0
        self._prev_intent = False

    # -------------------- Per-frame update --------------------

    def tick(self, jump_intent: bool) -> TickEvents:
        events = TickEvents()
        if self.status != GameStatus.RUNNING:
            return events
        assert self.level is not None

        intent = bool(jump_intent)
        wants_jump = intent and not (self.require_release and self._prev_intent)
        self._prev_intent = intent

        # 1) scroll, jump, integrate, land
        self.scroll += SCROLL_SPEED
        if self.player.try_jump(wants_jump, JUMP_VELOCITY):
            events.jumped = True
            self.listener.on_jump()
        self.player.update_physics(GRAVITY)
        self.player.resolve_landing(self.level.platforms, self.scroll)
        fell = self.player.fell_out()

        # 2) scoring, then refill the look-ahead
        if self.level.pop_passed(self.scroll) is not None:
            self.score += 1
            events.scored = True
            self.listener.on_point(self.score)
        self.level.ensure_ahead()
        self.ticks += 1

        # 3) terminal
        if fell:
            self.status = GameStatus.OVER
            self.high_score = max(self.high_score, self.score)
            events.game_over = True
            events.final_score = self.score
            logger.debug("Run over (score=%d, high=%d, ticks=%d, distance=%.0f)",
                         self.score, self.high_score, self.ticks, self.scroll)
            self.listener.on_game_over(self.score)

        return events
