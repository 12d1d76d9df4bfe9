from __future__ import annotations

import pytest

from tetris_device.game import TetrisGame
from tetris_device.render import MAX_SNAPSHOT_SIZE, BoundedWriter, render_text

TOP = "╔" + "═" * 20 + "╗"
BOTTOM = "╚" + "═" * 20 + "╝"
EMPTY_ROW = "║" + " " * 20 + "║"


def test_empty_board_layout():
    out = render_text(TetrisGame())
    text = out.decode("utf-8")
    lines = text.split("\n")
    assert lines[0] == TOP
    assert lines[1:21] == [EMPTY_ROW] * 20
    assert lines[21] == BOTTOM
    assert text.endswith("Score: 0\n")
    assert "GAME OVER!" not in text
    assert len(out) == 2 * 67 + 20 * 27 + len("Score: 0\n")


def test_active_piece_is_drawn_but_not_stored(game):
    text = render_text(game).decode("utf-8")
    assert text.split("\n")[2] == "║" + "  " * 3 + "██" * 4 + "  " * 3 + "║"
    assert not game.grid.grid.any()


def test_game_over_banner(game):
    game.grid.grid[1, 3:7] = True
    game.current_piece = None
    game.score = 1200
    game.spawn_piece()
    assert render_text(game).endswith(b"Score: 1200\nGAME OVER!\n")


def test_truncates_at_capacity(game):
    full = render_text(game)
    assert render_text(game, 10) == full[:10]
    assert render_text(game, 0) == b""
    assert render_text(game, len(full) + 100) == full


def test_negative_capacity_is_rejected(game):
    with pytest.raises(ValueError):
        render_text(game, -1)


def test_worst_case_fits_max_size():
    g = TetrisGame()
    g.grid.grid[:] = True
    g.score = 2**32 - 1
    g.game_over = True
    assert len(render_text(g, 4096)) == MAX_SNAPSHOT_SIZE
    assert MAX_SNAPSHOT_SIZE <= 2048


def test_bounded_writer_reports_accepted_bytes():
    w = BoundedWriter(5)
    assert w.write(b"abc") == 3
    assert w.write(b"defg") == 2
    assert w.write(b"h") == 0
    assert w.getvalue() == b"abcde"
    assert w.position == 5
