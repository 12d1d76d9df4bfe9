from __future__ import annotations

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from tetris_device.game import TetrisGame


@pytest.fixture
def game() -> TetrisGame:
    g = TetrisGame()
    g.spawn_piece()
    return g
