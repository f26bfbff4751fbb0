from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces


class ResampleInvalidActionWrapper(gym.Wrapper):
    """If a sampled action would be rejected, resample uniformly among valid ones.

    Useful when training with vanilla PPO (no action masking).
    """

    def step(self, action):  # type: ignore[override]
        if isinstance(self.action_space, spaces.Discrete):
            mask = self.get_action_mask()
            if 0 <= int(action) < mask.shape[0] and not bool(mask[int(action)]):
                valid_idxs = np.flatnonzero(mask)
                if valid_idxs.size > 0:
                    action = int(self.np_random.choice(valid_idxs))
        return self.env.step(action)

    def get_action_mask(self) -> np.ndarray:
        unwrapped = self.env.unwrapped
        if hasattr(unwrapped, "get_action_mask"):
            return getattr(unwrapped, "get_action_mask")()
        raise AttributeError("Underlying env does not provide get_action_mask")
