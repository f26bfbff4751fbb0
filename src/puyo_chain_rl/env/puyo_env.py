from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from puyo_chain_rl.game import Action, GameConfig, PuyoGame, SessionState, move_pair, rotate_pair


# Env actions map onto the subset of session inputs that steer a pair.
ENV_ACTIONS: Tuple[Action, ...] = (
    Action.NONE,
    Action.MOVE_LEFT,
    Action.MOVE_RIGHT,
    Action.ROTATE,
    Action.SOFT_DROP,
)

_CELL_COLORS = {
    0: (30, 30, 36),
    1: (231, 76, 60),   # red
    2: (52, 152, 219),  # blue
    3: (46, 204, 113),  # green
    4: (241, 196, 15),  # yellow
    5: (155, 89, 182),  # purple
}


def _compute_action_mask(game: PuyoGame) -> np.ndarray:
    mask = np.zeros((len(ENV_ACTIONS),), dtype=np.bool_)
    if game.state is not SessionState.DROPPING or game.pair is None:
        mask[0] = True
        return mask
    pair, field = game.pair, game.field
    mask[0] = True
    mask[1] = move_pair(pair, field, 0, -1) is not pair
    mask[2] = move_pair(pair, field, 0, 1) is not pair
    mask[3] = rotate_pair(pair, field, wall_kick=game.config.wall_kick) is not pair
    mask[4] = move_pair(pair, field, 1, 0) is not pair
    return mask


class PuyoEnv(gym.Env):
    """One step applies an action, then one drop tick, then settles any landing."""

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 score_scale: float = 0.01,
                 invalid_action_penalty: float = 0.0,
                 terminal_penalty: float = -1.0,
                 max_episode_steps: int = 5000) -> None:
        super().__init__()
        self.game = PuyoGame(config)
        self.render_mode = render_mode

        self.score_scale = float(score_scale)
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)

        rows, cols = self.game.config.rows, self.game.config.cols
        n_colors = max(int(c) for c in self.game.config.palette)

        self.observation_space = spaces.Dict(
            {
                "field": spaces.Box(low=0, high=n_colors, shape=(rows, cols), dtype=np.int8),
                # parent row, parent col, child row, child col; -1 while no pair is active
                "pair": spaces.Box(low=-1, high=max(rows, cols), shape=(4,), dtype=np.int8),
                "pair_colors": spaces.Box(low=0, high=n_colors, shape=(2,), dtype=np.int8),
                "next_colors": spaces.Box(low=0, high=n_colors, shape=(2,), dtype=np.int8),
            }
        )
        self.action_space = spaces.Discrete(len(ENV_ACTIONS))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        pair = np.full((4,), -1, dtype=np.int8)
        pair_colors = np.zeros((2,), dtype=np.int8)
        if self.game.pair is not None and not self.game.game_over:
            (pr, pc), (cr, cc) = self.game.pair.positions
            pair[:] = (pr, pc, cr, cc)
            pair_colors[:] = [int(c) for c in self.game.pair.colors]
        next_colors = np.zeros((2,), dtype=np.int8)
        if self.game.next_pair is not None:
            next_colors[:] = [int(c) for c in self.game.next_pair.colors]
        return {
            "field": self.game.field.clone_state(),
            "pair": pair,
            "pair_colors": pair_colors,
            "next_colors": next_colors,
        }

    def _get_info(self) -> Dict[str, Any]:
        info = self.game.get_info()
        info["action_mask"] = _compute_action_mask(self.game)
        info["steps"] = self._steps
        return info

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        obs = self._get_obs()
        info = self._get_info()
        return obs, info

    def step(self, action: int):
        env_action = ENV_ACTIONS[int(action)]
        score_before = self.game.score

        reward_components: Dict[str, float] = {}
        changed = self.game.handle(env_action)
        if env_action != Action.NONE and not changed:
            reward_components["invalid"] = self.invalid_action_penalty

        self.game.tick()
        self.game.settle_now()
        self._steps += 1

        gained = self.game.score - score_before
        reward_components["score"] = self.score_scale * float(gained)

        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))

        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        info["engine_score_delta"] = gained
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        view = self.game.get_state()
        cell = 12
        h, w = view.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                color = _CELL_COLORS.get(abs(int(view[y, x])) % 8, (200, 200, 200))
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
