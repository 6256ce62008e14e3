from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Action, FallingBlocksGame, GameConfig, TetrominoType


# Agents only get the play commands; pause/reset belong to the env itself.
AGENT_ACTIONS = (
    Action.LEFT,
    Action.RIGHT,
    Action.ROTATE_CW,
    Action.SOFT_DROP,
    Action.HARD_DROP,
    Action.NONE,
)


class FallingBlocksEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 10}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        gravity_every: int = 1,
        step_penalty: float = 0.0,
        terminal_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        if gravity_every < 1:
            raise ValueError("gravity_every must be >= 1")
        self.game = FallingBlocksGame(config)
        self.render_mode = render_mode
        self.gravity_every = int(gravity_every)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)

        rows, cols = self.game.board.shape
        max_tag = max(int(t) for t in TetrominoType)
        # Board cells are tags >= 0; the falling piece is overlaid as negative tags
        self.observation_space = spaces.Box(low=-max_tag, high=max_tag, shape=(rows, cols), dtype=np.int8)
        self.action_space = spaces.Discrete(len(AGENT_ACTIONS))

        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.game.get_state().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines": self.game.lines,
            "steps": self._steps,
            "piece": self.game.piece.kind,
            "max_height": self.game.board.get_max_height(),
            "holes": self.game.board.count_holes(),
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.game.reset(rewind=True)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        score_before = self.game.score
        self.game.handle(AGENT_ACTIONS[int(action)])

        self._steps += 1
        if not self.game.game_over and self._steps % self.gravity_every == 0:
            self.game.down()

        terminated = bool(self.game.game_over)
        reward = float(self.game.score - score_before) + self.step_penalty
        if terminated:
            reward += self.terminal_penalty

        info = self._get_info()
        info["engine_score_delta"] = self.game.score - score_before
        return self._get_obs(), reward, terminated, False, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        # Lazy import keeps pygame out of headless training runs
        from falling_blocks.visualization.renderer import _color_for_value

        state = self.game.get_state()
        cell = 12
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = _color_for_value(int(state[y, x]))
        return img

    def close(self) -> None:
        pass
