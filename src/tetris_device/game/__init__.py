"""Game engine for the tetris device.

Exports the core game engine and supporting classes:
- GameGrid: Fixed 10x20 board, collision checks and line clearing
- Piece: Falling tetromino with position and rotation
- TetrominoType: Enum of the seven piece kinds
- ScoringRules: Line-clear scoring table
- TetrisGame: Game state machine
"""

from .grid import BOARD_HEIGHT, BOARD_WIDTH, GameGrid
from .pieces import Piece, TetrominoType, rotate_matrix, shape_matrix
from .rules import ScoringRules
from .core import Action, TetrisGame

__all__ = [
    "BOARD_HEIGHT",
    "BOARD_WIDTH",
    "GameGrid",
    "Piece",
    "TetrominoType",
    "rotate_matrix",
    "shape_matrix",
    "ScoringRules",
    "TetrisGame",
    "Action",
]
