"""Lock-guarded game sessions driven by command bytes and control codes."""

from .session import (
    COMMAND_BYTES,
    GameSnapshot,
    InvalidControlCode,
    SessionConfig,
    TetrisSession,
    create,
)

__all__ = [
    "COMMAND_BYTES",
    "GameSnapshot",
    "InvalidControlCode",
    "SessionConfig",
    "TetrisSession",
    "create",
]
