"""Falling-block puzzle engine behind a byte command/state interface."""

from .device import InvalidControlCode, TetrisSession, create

__all__ = ["InvalidControlCode", "TetrisSession", "create"]

__version__ = "0.1.0"
