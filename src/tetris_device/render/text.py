from __future__ import annotations

from typing import Optional

import numpy as np

from tetris_device.game import BOARD_HEIGHT, BOARD_WIDTH, TetrisGame


TOP_LEFT = "╔".encode()
TOP_RIGHT = "╗\n".encode()
BOTTOM_LEFT = "╚".encode()
BOTTOM_RIGHT = "╝\n".encode()
HORIZONTAL = "═".encode()
VERTICAL = "║".encode()
FILLED = "██".encode()
EMPTY = b"  "
GAME_OVER = b"GAME OVER!\n"

# Worst case: two borders, every cell filled, a 32-bit score and the banner.
_BORDER_LEN = len(TOP_LEFT) + 2 * BOARD_WIDTH * len(HORIZONTAL) + len(TOP_RIGHT)
_ROW_LEN = len(VERTICAL) + BOARD_WIDTH * len(FILLED) + len(VERTICAL) + 1
MAX_SNAPSHOT_SIZE = (
    2 * _BORDER_LEN + BOARD_HEIGHT * _ROW_LEN + len(b"Score: \n") + 10 + len(GAME_OVER)
)


class BoundedWriter:
    """Byte sink that silently drops everything past ``capacity``."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        self.capacity = capacity
        self._buf = bytearray()

    @property
    def position(self) -> int:
        return len(self._buf)

    def write(self, data: bytes) -> int:
        room = self.capacity - len(self._buf)
        chunk = data[: max(room, 0)]
        self._buf.extend(chunk)
        return len(chunk)

    def getvalue(self) -> bytes:
        return bytes(self._buf)


def _border(writer: BoundedWriter, left: bytes, right: bytes) -> None:
    writer.write(left)
    writer.write(HORIZONTAL * (2 * BOARD_WIDTH))
    writer.write(right)


def render_board(
    writer: BoundedWriter, board: np.ndarray, score: int, game_over: bool
) -> int:
    """Write the framed board, score line and optional game-over banner.

    ``board`` is any (height, width) array; non-zero cells are drawn filled.
    Returns the number of bytes written.
    """
    start = writer.position
    _border(writer, TOP_LEFT, TOP_RIGHT)
    for row in board:
        writer.write(VERTICAL)
        for cell in row:
            writer.write(FILLED if cell else EMPTY)
        writer.write(VERTICAL + b"\n")
    _border(writer, BOTTOM_LEFT, BOTTOM_RIGHT)
    writer.write(f"Score: {score}\n".encode("ascii"))
    if game_over:
        writer.write(GAME_OVER)
    return writer.position - start


def render_text(game: TetrisGame, capacity: Optional[int] = None) -> bytes:
    """Serialize ``game`` into at most ``capacity`` bytes of UTF-8 text."""
    writer = BoundedWriter(MAX_SNAPSHOT_SIZE if capacity is None else capacity)
    # get_state overlays the active piece on a copy; the board is untouched
    render_board(writer, game.get_state(), game.score, game.game_over)
    return writer.getvalue()
