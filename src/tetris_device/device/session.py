from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Optional, Union

import numpy as np

from tetris_device.game import Action, TetrisGame, TetrominoType
from tetris_device.render import render_text


# Keyboard commands accepted on the write path
COMMAND_BYTES: Dict[int, Action] = {
    ord("a"): Action.LEFT,
    ord("A"): Action.LEFT,
    ord("d"): Action.RIGHT,
    ord("D"): Action.RIGHT,
    ord("s"): Action.DOWN,
    ord("S"): Action.DOWN,
    ord("w"): Action.ROTATE,
    ord("W"): Action.ROTATE,
    ord(" "): Action.HARD_DROP,
    ord("r"): Action.RESET,
    ord("R"): Action.RESET,
}


class InvalidControlCode(ValueError):
    """Raised for a numeric control code outside 0..5."""

    def __init__(self, code: int) -> None:
        super().__init__(f"invalid control code: {code!r}")
        self.code = code


@dataclass
class SessionConfig:
    render_capacity: int = 2048


@dataclass(frozen=True)
class GameSnapshot:
    """Point-in-time copy of a session's state for rendering."""

    board: np.ndarray
    score: int
    game_over: bool
    next_piece: TetrominoType


class TetrisSession:
    """One game behind a lock.

    Every command and every render holds the lock for its whole duration, so
    callers on different threads always observe complete transitions.
    """

    def __init__(self, config: Optional[SessionConfig] = None, game: Optional[TetrisGame] = None) -> None:
        self.config = config or SessionConfig()
        self._game = game or TetrisGame()
        self._lock = threading.Lock()

    def apply_command(self, data: Union[bytes, bytearray, int]) -> int:
        """Apply the first command byte of ``data``; returns bytes consumed."""
        if isinstance(data, int):
            byte = data
        else:
            if not data:
                return 0
            byte = data[0]
        action = COMMAND_BYTES.get(byte)
        if action is not None:
            with self._lock:
                self._game.step(action)
        return 1

    def apply_control_code(self, code: int) -> bool:
        try:
            action = Action(code)
        except ValueError:
            raise InvalidControlCode(code) from None
        with self._lock:
            self._game.step(action)
        return True

    def render_snapshot(self, capacity: int) -> bytes:
        with self._lock:
            return render_text(self._game, capacity)

    def read(self, size: int = -1) -> bytes:
        """Return a fresh frame, cut to ``size`` bytes when ``size`` >= 0."""
        frame = self.render_snapshot(self.config.render_capacity)
        if size < 0:
            return frame
        return frame[:size]

    def write(self, data: bytes) -> int:
        return self.apply_command(data)

    def snapshot(self) -> GameSnapshot:
        with self._lock:
            return GameSnapshot(
                board=self._game.get_state(),
                score=self._game.score,
                game_over=self._game.game_over,
                next_piece=self._game.next_piece_kind,
            )

    @property
    def score(self) -> int:
        with self._lock:
            return self._game.score

    @property
    def game_over(self) -> bool:
        with self._lock:
            return self._game.game_over


def create(config: Optional[SessionConfig] = None) -> TetrisSession:
    """Return a new session with its first piece already spawned."""
    session = TetrisSession(config)
    with session._lock:
        session._game.spawn_piece()
    return session
