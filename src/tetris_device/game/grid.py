from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from .pieces import Piece


BOARD_WIDTH = 10
BOARD_HEIGHT = 20

Coordinate = Tuple[int, int]


class GameGrid:
    """Fixed 20x10 occupancy grid of locked cells.

    ``grid[y, x]`` is True iff a locked piece occupies the cell. Row 0 is the
    top of the board. The falling piece is never stored here until it locks.
    """

    def __init__(self) -> None:
        self.width = BOARD_WIDTH
        self.height = BOARD_HEIGHT
        self.grid = np.zeros((self.height, self.width), dtype=np.bool_)

    def reset(self) -> None:
        self.grid.fill(False)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        for x, y in cells:
            if not self.is_inside(x, y):
                return False
            if self.grid[y, x]:
                return False
        return True

    def collides(self, piece: Piece) -> bool:
        return not self.can_place(piece.cells_at())

    def lock(self, piece: Piece) -> None:
        """Mark every in-bounds cell of ``piece`` as occupied."""
        for x, y in piece.cells_at():
            if self.is_inside(x, y):
                self.grid[y, x] = True

    def clear_full_lines(self) -> int:
        full_rows = np.where(np.all(self.grid, axis=1))[0]
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        # Drop full rows and push empty ones in at the top
        kept = np.delete(self.grid, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.bool_)
        self.grid = np.vstack((new_rows, kept))
        return num

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
