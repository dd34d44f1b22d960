from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_drop_rl.game import Action, BlockDropGame, FrameInput, GameConfig, GameGrid, GameState
from block_drop_rl.game.pieces import FILL_COLORS, TetrominoType


# One agent action per frame: the seven play actions plus "do nothing".
ENV_ACTIONS = (
    Action.LEFT,
    Action.RIGHT,
    Action.SOFT_DROP,
    Action.HARD_DROP,
    Action.ROTATE_CW,
    Action.ROTATE_CCW,
    Action.HOLD,
    Action.NONE,
)


class BlockDropEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 60}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 20000,
                 step_penalty: float = 0.0,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.game = BlockDropGame(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)

        n_kinds = len(TetrominoType) + 1
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=-7, high=7, shape=(GameGrid.HEIGHT, GameGrid.WIDTH), dtype=np.int8),
                "next": spaces.Discrete(n_kinds),
                "hold": spaces.Discrete(n_kinds),
            }
        )
        self.action_space = spaces.Discrete(len(ENV_ACTIONS))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        held = self.game.held_kind
        return {
            "grid": self.game.get_state().astype(np.int8),
            "next": int(self.game.next_kind),
            "hold": 0 if held is None else int(held),
        }

    def _get_info(self) -> Dict[str, Any]:
        info = self.game.info()
        info["steps"] = self._steps
        return info

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.start(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        score_before = self.game.score
        self.game.update(FrameInput(ENV_ACTIONS[int(action)]))
        self._steps += 1

        terminated = self.game.state is GameState.OVER
        truncated = not terminated and self._steps >= self.max_episode_steps

        reward = float(self.game.score - score_before) + self.step_penalty
        if terminated:
            reward += self.terminal_penalty

        info = self._get_info()
        info["engine_score_delta"] = self.game.score - score_before
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self.game.get_state()
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    v = abs(int(grid[y, x]))
                    color = FILL_COLORS[TetrominoType(v)] if v else (30, 30, 36)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        # human rendering delegated to visualization.human_play; noop
        return None

    def close(self) -> None:
        pass
