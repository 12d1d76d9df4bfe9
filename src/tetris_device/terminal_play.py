"""Terminal front-end for a tetris device session.

Reads keys from a raw-mode terminal, forwards them as command bytes and
redraws the text frame every tick. A ``s`` command is injected every few
frames to provide gravity.
"""

from __future__ import annotations

import argparse
import os
import select
import signal
import sys
import termios
import time
from dataclasses import dataclass
from typing import Optional

from tetris_device.device import COMMAND_BYTES, TetrisSession, create


ESC_HOME = "\033[H"
ESC_CLEAR = "\033[2J\033[H"
ESC_HIDE_CURSOR = "\033[?25l"
ESC_SHOW_CURSOR = "\033[?25h\033[0m"
ESC_ALT_SCREEN_ON = "\033[?1049h"
ESC_ALT_SCREEN_OFF = "\033[?1049l"
FOOTER = "\nPress 'q' to quit"
FOOTER_WIDTH = 80

CONTROLS = """=== Tetris Device ===

Controls:
  a/A - Move left
  d/D - Move right
  s/S - Move down
  w/W - Rotate
  Space - Hard drop
  r/R - Reset game
  q/Q - Quit
"""


@dataclass
class PlayerConfig:
    auto_drop_interval: int = 5
    frame_delay: float = 0.1
    buffer_size: int = 16383
    use_ansi: Optional[bool] = None  # None: only when stdin and stdout are TTYs


def _is_serial_console() -> bool:
    # vt100/ansi terminals flicker with the alternate screen
    return os.environ.get("TERM") in ("vt100", "ansi")


class TerminalPlayer:
    def __init__(self, session: TetrisSession, config: Optional[PlayerConfig] = None,
                 stdin=None, stdout=None) -> None:
        self.session = session
        self.config = config or PlayerConfig()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        use_ansi = self.config.use_ansi
        if use_ansi is None:
            use_ansi = self.stdin.isatty() and self.stdout.isatty()
        self.use_ansi = use_ansi
        self.use_alt_screen = use_ansi and not _is_serial_console()
        self.running = True
        self._saved_tty = None

    def _write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def compose_frame(self, frame: bytes) -> str:
        text = frame.decode("utf-8", errors="replace")
        if not self.use_ansi:
            return text + "\n"
        # Home the cursor and overwrite in place; clearing flickers on serial consoles
        return ESC_HOME + text + FOOTER.ljust(FOOTER_WIDTH + 1) + "\n"

    def handle_key(self, key: str) -> None:
        if key in ("q", "Q"):
            self.running = False
            return
        data = key.encode("latin-1", errors="ignore")
        if data and data[0] in COMMAND_BYTES:
            self.session.write(data)

    def _enter_raw_mode(self) -> None:
        fd = self.stdin.fileno()
        self._saved_tty = termios.tcgetattr(fd)
        attrs = termios.tcgetattr(fd)
        attrs[3] &= ~(termios.ICANON | termios.ECHO)
        attrs[6][termios.VMIN] = 0
        attrs[6][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSANOW, attrs)

    def _restore(self) -> None:
        if self._saved_tty is not None:
            termios.tcsetattr(self.stdin.fileno(), termios.TCSANOW, self._saved_tty)
            self._saved_tty = None
        if self.use_ansi:
            if self.use_alt_screen:
                self._write(ESC_ALT_SCREEN_OFF)
            self._write(ESC_SHOW_CURSOR + ESC_CLEAR)

    def _read_key(self, timeout: float = 0) -> str:
        ready, _, _ = select.select([self.stdin.fileno()], [], [], timeout)
        if not ready:
            return ""
        return os.read(self.stdin.fileno(), 1).decode("latin-1")

    def _stop(self, signum, frame) -> None:
        self.running = False

    def print_controls(self) -> None:
        if self.use_ansi:
            if self.use_alt_screen:
                self._write(ESC_ALT_SCREEN_ON)
            self._write(ESC_HIDE_CURSOR + ESC_CLEAR)
        self._write(CONTROLS + "\n")
        if self.use_ansi:
            self._write(f"TERM={os.environ.get('TERM', '(unset)')}\n")
            self._write(f"ANSI rendering enabled. Alt screen: {'on' if self.use_alt_screen else 'off'}\n\n")
        self._write("Press any key to start...\n")

    def _wait_for_key(self) -> None:
        # Poll so a signal can end the wait
        while self.running:
            if self._read_key(self.config.frame_delay):
                return

    def run(self) -> None:
        previous = {sig: signal.signal(sig, self._stop) for sig in (signal.SIGINT, signal.SIGTERM)}
        try:
            self._enter_raw_mode()
            self.print_controls()
            self._wait_for_key()
            if self.use_ansi and self.running:
                self._write(ESC_CLEAR)
            frames = 0
            while self.running:
                self._write(self.compose_frame(self.session.read(self.config.buffer_size)))
                key = self._read_key()
                if key:
                    self.handle_key(key)
                frames += 1
                if frames >= self.config.auto_drop_interval:
                    frames = 0
                    self.session.write(b"s")
                time.sleep(self.config.frame_delay)
        finally:
            self._restore()
            for sig, handler in previous.items():
                signal.signal(sig, signal.SIG_DFL if handler is None else handler)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play the tetris device in a terminal")
    p.add_argument("--auto-drop-interval", type=int, default=5,
                   help="frames between automatic move-down commands")
    p.add_argument("--frame-delay", type=float, default=0.1, help="seconds per frame")
    ansi = p.add_mutually_exclusive_group()
    ansi.add_argument("--ansi", dest="use_ansi", action="store_true", default=None)
    ansi.add_argument("--no-ansi", dest="use_ansi", action="store_false")
    return p


def main() -> None:
    args = build_parser().parse_args()
    if args.auto_drop_interval < 1:
        print("--auto-drop-interval must be at least 1", file=sys.stderr)
        sys.exit(2)
    config = PlayerConfig(
        auto_drop_interval=args.auto_drop_interval,
        frame_delay=args.frame_delay,
        use_ansi=args.use_ansi,
    )
    session = create()
    player = TerminalPlayer(session, config)
    player.run()
    print(f"Final score: {session.score}")


if __name__ == "__main__":  # pragma: no cover
    main()
