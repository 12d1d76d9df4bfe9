"""Text serialization of the game state."""

from .text import MAX_SNAPSHOT_SIZE, BoundedWriter, render_board, render_text

__all__ = ["MAX_SNAPSHOT_SIZE", "BoundedWriter", "render_board", "render_text"]
