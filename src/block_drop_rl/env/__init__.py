"""Gymnasium environments for Block Drop RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

# One step per game frame, 8 discrete actions
register(
    id="BlockDrop-v0",
    entry_point="block_drop_rl.env.block_drop_env:BlockDropEnv",
)

__all__ = ["BlockDrop-v0"]
