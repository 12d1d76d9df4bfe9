"""Gymnasium environment for the tetris device."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="TetrisDevice-v0",
    entry_point="tetris_device.env.tetris_env:TetrisDeviceEnv",
)
