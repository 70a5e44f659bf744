"""
Terminal abstraction.

Provides:
- Terminal: abstract base class (interface) used by the ANSI backend
- ProcessTerminal: real terminal using sys.stdout + raw mode on sys.stdin
"""
from __future__ import annotations

import logging
import os
import sys
from abc import ABC, abstractmethod
from typing import Callable

logger = logging.getLogger(__name__)

_ALT_SCREEN_ENABLE = "\x1b[?1049h"
_ALT_SCREEN_DISABLE = "\x1b[?1049l"
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"

# ─────────────────────────────────────────────────────────────────────────────
# Terminal ABC
# ─────────────────────────────────────────────────────────────────────────────

class Terminal(ABC):
    """Minimal terminal interface for the screen-update backend."""

    @abstractmethod
    def start(self, on_resize: Callable[[], None] | None = None) -> None:
        """Take over the terminal: raw mode, alternate screen, resize handler."""

    @abstractmethod
    def stop(self) -> None:
        """Give the terminal back in the state it was found."""

    @abstractmethod
    def write(self, data: str) -> None:
        """Write output to the terminal."""

    @property
    @abstractmethod
    def columns(self) -> int:
        """Terminal width in columns."""

    @property
    @abstractmethod
    def rows(self) -> int:
        """Terminal height in rows."""

    @abstractmethod
    def hide_cursor(self) -> None:
        """Hide the cursor."""

    @abstractmethod
    def show_cursor(self) -> None:
        """Show the cursor."""

    @abstractmethod
    def enable_raw_mode(self) -> None:
        """Put the input side in raw mode (no echo, no line buffering)."""

    @abstractmethod
    def disable_raw_mode(self) -> None:
        """Restore the terminal attributes saved by enable_raw_mode()."""


# ─────────────────────────────────────────────────────────────────────────────
# ProcessTerminal
# ─────────────────────────────────────────────────────────────────────────────

class ProcessTerminal(Terminal):
    """
    Real terminal using sys.stdin/sys.stdout.

    Every write is flushed immediately; when ``PI_CURSES_WRITE_LOG`` names a
    file, everything written is appended to it as well.
    """

    def __init__(self, write_log_path: str | None = None) -> None:
        self._write_log_path = (
            write_log_path if write_log_path is not None
            else os.environ.get("PI_CURSES_WRITE_LOG", "")
        )
        self._old_termios: list | None = None
        self._prev_sigwinch: object | None = None
        self._started = False

    def start(self, on_resize: Callable[[], None] | None = None) -> None:
        self.enable_raw_mode()
        self.write(_ALT_SCREEN_ENABLE)

        if on_resize is not None:
            import signal
            if hasattr(signal, "SIGWINCH"):
                self._prev_sigwinch = signal.signal(
                    signal.SIGWINCH,
                    lambda *_: on_resize(),
                )
        self._started = True

    def stop(self) -> None:
        if not self._started:
            return
        self.show_cursor()
        self.write(_ALT_SCREEN_DISABLE)

        if self._prev_sigwinch is not None:
            import signal
            signal.signal(signal.SIGWINCH, self._prev_sigwinch)
            self._prev_sigwinch = None

        self.disable_raw_mode()
        self._started = False

    def enable_raw_mode(self) -> None:
        import termios
        import tty
        fd = sys.stdin.fileno()
        if self._old_termios is None:
            self._old_termios = termios.tcgetattr(fd)
        tty.setraw(fd)

    def disable_raw_mode(self) -> None:
        import termios
        if self._old_termios is not None:
            fd = sys.stdin.fileno()
            termios.tcsetattr(fd, termios.TCSADRAIN, self._old_termios)
            self._old_termios = None

    def write(self, data: str) -> None:
        sys.stdout.write(data)
        sys.stdout.flush()
        if self._write_log_path:
            try:
                with open(self._write_log_path, "a", encoding="utf-8") as f:
                    f.write(data)
            except OSError:
                logger.warning("Could not append to write log %s", self._write_log_path)

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size().columns
        except OSError:
            return int(os.environ.get("COLUMNS", "80"))

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size().lines
        except OSError:
            return int(os.environ.get("LINES", "24"))

    def hide_cursor(self) -> None:
        self.write(_HIDE_CURSOR)

    def show_cursor(self) -> None:
        self.write(_SHOW_CURSOR)
