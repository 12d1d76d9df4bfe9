from __future__ import annotations

import numpy as np

from tetris_device.game import Piece, TetrisGame, TetrominoType


def spawn(game: TetrisGame, kind: TetrominoType) -> Piece:
    """Replace the active piece with a fresh spawn of ``kind``."""
    game.current_piece = None
    game.next_piece_kind = kind
    game.spawn_piece()
    assert game.current_piece is not None
    return game.current_piece


def fill_row(game: TetrisGame, y: int, except_cols=()) -> None:
    row = np.ones(game.grid.width, dtype=np.bool_)
    for x in except_cols:
        row[x] = False
    game.grid.grid[y] = row
