# fist_runner/env/runner_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from fist_runner.game.config import WIDTH, HEIGHT, FPS
from fist_runner.game.render import draw_world
from fist_runner.game.simulation import Simulation, GameStatus
from fist_runner.env.observations import build_observation, OBS_SIZE


class RunnerEnv(gym.Env):
    """
    Fist Runner Gymnasium environment (vector observations).
    - One simulation tick per rendered frame (60 Hz reference).
    - Agent acts every `frame_skip` ticks; the action is the hand level held
      during those ticks: 0 = open hand, 1 = fist.
    - Observation: shape (6,), float32 (see build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0,
                 require_release: bool = False):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unknown render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.require_release = bool(require_release)

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(FPS * time_limit_seconds / self.frame_skip)

        # --- Gym spaces ---
        self.action_space = gym.spaces.Discrete(2)
        low = np.array([0.0, -1.0, 0.0, 0.0, 0.0, 0.0], dtype=np.float32)
        high = np.ones(OBS_SIZE, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.sim: Optional[Simulation] = None
        self.timestep: int = 0

        # Rendering
        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # A given seed drives the level directly; None lets the level pick one.
        level_seed = int(seed) if seed is not None else None

        self.sim = Simulation(seed=level_seed, require_release=self.require_release)
        self.sim.start()
        self.timestep = 0

        obs = self._get_obs()
        info = self._info(grounded=self.sim.player.grounded)
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.sim is not None, "Call reset() before step()"
        assert self.sim.status == GameStatus.RUNNING, "Episode is over; call reset()"

        fist = int(action) == 1
        scored = 0
        died = False
        for _ in range(self.frame_skip):
            ev = self.sim.tick(fist)
            scored += int(ev.scored)
            if ev.game_over:
                died = True
                break

        reward = -1.0 if died else 1.0 + float(scored)

        self.timestep += 1
        terminated = died
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions) and not died:
            truncated = True

        obs = self._get_obs()
        info = self._info(grounded=self.sim.player.grounded)

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.sim is not None
        return build_observation(self.sim.player, self.sim.platforms, self.sim.scroll)

    def _info(self, grounded: bool) -> Dict[str, Any]:
        assert self.sim is not None
        return {
            "seed": self.sim.seed,
            "score": self.sim.score,
            "distance": self.sim.distance,
            "grounded": bool(grounded),
            "timestep": self.timestep,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.sim is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Fist Runner - Gym Env")
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.clock = pygame.time.Clock()

        alive = self.sim.status != GameStatus.OVER
        draw_world(self.screen, self.sim.level, self.sim.player, self.sim.scroll, alive)

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata.get("render_fps", FPS))
            return None

        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
