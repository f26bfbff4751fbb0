"""Gymnasium environments for Puyo Chain RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register default 6x12 four-color environment
register(
    id="PuyoChain-6x12-v0",
    entry_point="puyo_chain_rl.env.puyo_env:PuyoEnv",
)

__all__ = ["PuyoChain-6x12-v0"]
