from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 0
    O = 1
    T = 2
    S = 3
    Z = 4
    J = 5
    L = 6


Shape = np.ndarray


def _shape(*rows: str) -> Shape:
    return np.array([[c == "#" for c in row] for row in rows], dtype=np.bool_)


# Base shapes at rotation 0, each inside a 4x4 bounding box.
BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _shape("....", "####", "....", "...."),
    TetrominoType.O: _shape("....", ".##.", ".##.", "...."),
    TetrominoType.T: _shape("....", ".#..", "###.", "...."),
    TetrominoType.S: _shape("....", ".##.", "##..", "...."),
    TetrominoType.Z: _shape("....", "##..", ".##.", "...."),
    TetrominoType.J: _shape("....", "#...", "###.", "...."),
    TetrominoType.L: _shape("....", "..#.", "###.", "...."),
}


def rotate_matrix(shape: Shape) -> Shape:
    """Rotate a square matrix 90 degrees clockwise.

    Cell ``(i, j)`` moves to ``(j, n - 1 - i)``.
    """
    return np.rot90(shape, 1, axes=(1, 0)).copy()


def _build_rotations() -> Dict[TetrominoType, Tuple[Shape, ...]]:
    table: Dict[TetrominoType, Tuple[Shape, ...]] = {}
    for kind, base in BASE_SHAPES.items():
        shapes: List[Shape] = []
        shape = base.copy()
        for _ in range(4):
            shape.setflags(write=False)
            shapes.append(shape)
            shape = rotate_matrix(shape)
        table[kind] = tuple(shapes)
    return table


_ROTATIONS = _build_rotations()


def shape_matrix(kind: TetrominoType, rotation: int) -> Shape:
    """Return the read-only 4x4 occupancy matrix of ``kind`` at ``rotation``."""
    return _ROTATIONS[TetrominoType(kind)][rotation % 4]


@dataclass(frozen=True)
class Piece:
    """The falling piece: anchor is the top-left corner of its 4x4 box."""

    kind: TetrominoType
    x: int
    y: int
    rotation: int = 0  # 0..3

    def shape(self) -> Shape:
        return shape_matrix(self.kind, self.rotation)

    def moved(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self) -> "Piece":
        return replace(self, rotation=(self.rotation + 1) % 4)

    def cells_at(self) -> List[Tuple[int, int]]:
        s = self.shape()
        cells: List[Tuple[int, int]] = []
        for dy, dx in zip(*np.nonzero(s)):
            cells.append((self.x + int(dx), self.y + int(dy)))
        return cells
