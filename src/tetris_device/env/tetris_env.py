from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_device.device import TetrisSession, create
from tetris_device.game import BOARD_HEIGHT, BOARD_WIDTH, Action, TetrominoType


class TetrisDeviceEnv(gym.Env):
    """Gymnasium view of one session; actions are the numeric control codes."""

    metadata = {"render_modes": ["ansi", "rgb_array"], "render_fps": 10}

    def __init__(self, render_mode: Optional[str] = None, max_episode_steps: int = 10000) -> None:
        super().__init__()
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"unsupported render_mode: {render_mode!r}")
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.session: TetrisSession = create()

        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-1, high=1, shape=(BOARD_HEIGHT, BOARD_WIDTH), dtype=np.int8),
                "next_piece": spaces.Discrete(len(TetrominoType)),
            }
        )
        self.action_space = spaces.Discrete(len(Action))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        snap = self.session.snapshot()
        return {"board": snap.board, "next_piece": int(snap.next_piece)}

    def _get_info(self) -> Dict[str, Any]:
        return {"score": self.session.score, "steps": self._steps}

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.session.apply_control_code(Action.RESET)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        before = self.session.score
        self.session.apply_control_code(int(action))
        self._steps += 1

        reward = float(self.session.score - before)
        terminated = bool(self.session.game_over)
        truncated = self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[str | np.ndarray]:
        if self.render_mode == "ansi":
            return self.session.read().decode("utf-8")
        if self.render_mode == "rgb_array":
            grid = self.session.snapshot().board
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    if grid[y, x] < 0:
                        color = (240, 200, 60)
                    elif grid[y, x]:
                        color = (70, 200, 120)
                    else:
                        color = (30, 30, 36)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
