from __future__ import annotations

from enum import IntEnum
from typing import Optional

import numpy as np

from .grid import GameGrid
from .pieces import Piece, TetrominoType
from .rules import ScoringRules


class Action(IntEnum):
    """Game transitions, valued by their numeric control code."""

    LEFT = 0
    RIGHT = 1
    DOWN = 2
    ROTATE = 3
    HARD_DROP = 4
    RESET = 5


# Fixed order used by the next-piece selector
PIECE_ORDER = (
    TetrominoType.I,
    TetrominoType.O,
    TetrominoType.T,
    TetrominoType.S,
    TetrominoType.Z,
    TetrominoType.J,
    TetrominoType.L,
)


class TetrisGame:
    """Single-board game state machine.

    A new game is empty: no active piece, score 0 and ``I`` queued as the
    next piece. Call :meth:`spawn_piece` (or :meth:`reset`) to start playing.
    Illegal transitions are refused by returning False, never by raising.
    """

    def __init__(self, rules: Optional[ScoringRules] = None) -> None:
        self.rules = rules or ScoringRules()
        self.grid = GameGrid()
        self.current_piece: Optional[Piece] = None
        self.score = 0
        self.game_over = False
        self.next_piece_kind = TetrominoType.I

    @property
    def spawn_x(self) -> int:
        return self.grid.width // 2 - 2

    def reset(self) -> None:
        self.grid.reset()
        self.current_piece = None
        self.score = 0
        self.game_over = False
        self.spawn_piece()

    def select_next_kind(self) -> TetrominoType:
        # Deliberately low entropy: repeats whenever score and the top-left
        # cell recur.
        seed = self.score + int(self.grid.grid[0, 0])
        return PIECE_ORDER[seed % len(PIECE_ORDER)]

    def spawn_piece(self) -> None:
        if self.game_over:
            return
        candidate = Piece(kind=self.next_piece_kind, x=self.spawn_x, y=0, rotation=0)
        if self.grid.collides(candidate):
            self.game_over = True
            return
        self.current_piece = candidate
        self.next_piece_kind = self.select_next_kind()

    def _try_commit(self, candidate: Piece) -> bool:
        if self.grid.collides(candidate):
            return False
        self.current_piece = candidate
        return True

    def move_left(self) -> bool:
        if self.current_piece is None:
            return False
        return self._try_commit(self.current_piece.moved(-1, 0))

    def move_right(self) -> bool:
        if self.current_piece is None:
            return False
        return self._try_commit(self.current_piece.moved(1, 0))

    def move_down(self) -> bool:
        """Step the piece down one row; lock it when the step is blocked."""
        if self.current_piece is None:
            return False
        if self._try_commit(self.current_piece.moved(0, 1)):
            return True
        self.lock_piece()
        return False

    def rotate(self) -> bool:
        if self.current_piece is None:
            return False
        return self._try_commit(self.current_piece.rotated())

    def hard_drop(self) -> None:
        while self.move_down():
            pass

    def lock_piece(self) -> None:
        if self.current_piece is None:
            return
        self.grid.lock(self.current_piece)
        self.current_piece = None
        self.clear_lines()
        self.spawn_piece()

    def clear_lines(self) -> int:
        # Removes every full row, adjacent ones included, in a single pass
        lines = self.grid.clear_full_lines()
        self.score += self.rules.score_for_lines(lines)
        return lines

    def step(self, action: Action) -> bool:
        """Apply one transition; returns whether it took effect."""
        if action == Action.LEFT:
            return self.move_left()
        if action == Action.RIGHT:
            return self.move_right()
        if action == Action.DOWN:
            return self.move_down()
        if action == Action.ROTATE:
            return self.rotate()
        if action == Action.HARD_DROP:
            self.hard_drop()
            return True
        if action == Action.RESET:
            self.reset()
            return True
        return False

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state().astype(np.int8)
        if self.current_piece is not None:
            for x, y in self.current_piece.cells_at():
                if self.grid.is_inside(x, y):
                    # Negative marks the falling piece
                    state[y, x] = -1
        return state
