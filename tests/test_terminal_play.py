from __future__ import annotations

import io
import os
import pty
import select
import signal
import termios
import threading

from tetris_device import create
from tetris_device.terminal_play import FOOTER, ESC_HOME, PlayerConfig, TerminalPlayer, build_parser


def _player(use_ansi=None) -> TerminalPlayer:
    return TerminalPlayer(create(), PlayerConfig(use_ansi=use_ansi), stdin=io.StringIO(), stdout=io.StringIO())


def test_ansi_disabled_without_tty():
    assert not _player().use_ansi


def test_keys_are_forwarded():
    player = _player()
    before = player.session.snapshot().board
    player.handle_key("a")
    assert not (player.session.snapshot().board == before).all()
    frame = player.session.read()
    player.handle_key("x")
    player.handle_key("\x1b")
    assert player.session.read() == frame
    assert player.running
    player.handle_key("Q")
    assert not player.running


def test_frame_composition():
    frame = create().read()
    plain = _player(use_ansi=False).compose_frame(frame)
    assert plain == frame.decode("utf-8") + "\n"

    fancy = _player(use_ansi=True).compose_frame(frame)
    assert fancy.startswith(ESC_HOME)
    assert fancy.endswith(FOOTER.ljust(81) + "\n")


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.auto_drop_interval == 5
    assert args.frame_delay == 0.1
    assert args.use_ansi is None
    assert build_parser().parse_args(["--no-ansi"]).use_ansi is False


def _pty_player(**config):
    master, slave = pty.openpty()
    stdin = os.fdopen(os.dup(slave), "rb", buffering=0)
    stdout = os.fdopen(os.dup(slave), "w")
    player = TerminalPlayer(create(), PlayerConfig(use_ansi=True, **config), stdin=stdin, stdout=stdout)
    saved = termios.tcgetattr(slave)
    return player, master, slave, saved


def _drain(master: int, stop) -> None:
    while not stop.is_set():
        ready, _, _ = select.select([master], [], [], 0.05)
        if ready:
            try:
                os.read(master, 65536)
            except OSError:
                return


def _close(player: TerminalPlayer, master: int, slave: int) -> None:
    player.stdin.close()
    player.stdout.close()
    os.close(slave)
    os.close(master)


def test_run_applies_gravity_and_quits_on_q():
    player, master, slave, saved = _pty_player(auto_drop_interval=2, frame_delay=0.01)
    stop = threading.Event()
    drainer = threading.Thread(target=_drain, args=(master, stop), daemon=True)
    drainer.start()
    before = signal.getsignal(signal.SIGINT)
    starter = threading.Timer(0.05, os.write, args=(master, b"x"))
    quitter = threading.Timer(0.4, os.write, args=(master, b"q"))
    starter.start()
    quitter.start()
    try:
        player.run()
    finally:
        starter.cancel()
        quitter.cancel()
        stop.set()
        drainer.join()

    assert not player.running
    board = player.session.snapshot().board
    # The spawned piece started on row 1; gravity moved or locked it
    assert (board == 1).any() or not (board[1] == -1).any()
    assert termios.tcgetattr(slave) == saved
    assert signal.getsignal(signal.SIGINT) is before
    _close(player, master, slave)


def test_sigint_aborts_the_start_prompt():
    player, master, slave, saved = _pty_player(frame_delay=0.01)
    stop = threading.Event()
    drainer = threading.Thread(target=_drain, args=(master, stop), daemon=True)
    drainer.start()
    before = signal.getsignal(signal.SIGINT)
    interrupt = threading.Timer(0.2, os.kill, args=(os.getpid(), signal.SIGINT))
    interrupt.start()
    frame = player.session.read()
    try:
        player.run()
    finally:
        interrupt.cancel()
        stop.set()
        drainer.join()

    assert not player.running
    # No key was pressed, so no frame ran and no gravity was applied
    assert player.session.read() == frame
    assert termios.tcgetattr(slave) == saved
    assert signal.getsignal(signal.SIGINT) is before
    _close(player, master, slave)
