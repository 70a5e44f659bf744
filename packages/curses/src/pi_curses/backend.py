"""
Terminal-output backends.

Provides:
- Backend: the four capabilities the reconciler needs from a terminal driver
- AnsiBackend: VT100/xterm-style implementation writing through a Terminal

The reconciler decides *which* rows to flush; a backend decides *what bytes*
flush them and consumes the damage of whatever it has written.
"""
from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod

from .cell import BLANK, Cell, blank_grid
from .damage import NO_CHANGE
from .screen import PhysicalImage
from .terminal import Terminal

logger = logging.getLogger(__name__)

_SYNC_BEGIN = "\x1b[?2026h"
_SYNC_END = "\x1b[?2026l"
_SAVE_CURSOR = "\x1b7"
_RESTORE_CURSOR = "\x1b8"
_RESET_SGR = "\x1b[0m"
_CLEAR_SCREEN = "\x1b[2J"


def _cup(row: int, col: int) -> str:
    return f"\x1b[{row + 1};{col + 1}H"


def _render_run(cells: list[Cell]) -> str:
    """Glyphs of ``cells`` with SGR changes only where the rendition changes."""
    out: list[str] = []
    current = ""
    for cell in cells:
        if cell.is_continuation:
            continue
        if cell.attrs != current:
            out.append(f"\x1b[0;{cell.attrs}m" if cell.attrs else _RESET_SGR)
            current = cell.attrs
        out.append(cell.char)
    if current:
        out.append(_RESET_SGR)
    return "".join(out)


# ─────────────────────────────────────────────────────────────────────────────
# Backend ABC
# ─────────────────────────────────────────────────────────────────────────────

class Backend(ABC):
    """Low-level terminal driver used by ``Screen.reconcile``."""

    @abstractmethod
    def full_redraw(self, image: PhysicalImage) -> None:
        """Clear the terminal and repaint it from ``image``; consumes all damage."""

    @abstractmethod
    def transform_line(self, image: PhysicalImage, row: int) -> bool:
        """
        Flush the damaged span of ``row`` and consume its damage. A row in
        ``image.forced`` must be sent in full even if it looks unchanged.

        Returns True to let the reconciler continue with the next rows, False
        when this call already took care of the rest of the screen (e.g. by
        scrolling) and the row scan should stop.
        """

    @abstractmethod
    def move_cursor(self, row: int, col: int) -> None:
        """Put the hardware cursor at ``(row, col)``."""

    @abstractmethod
    def reinit_raw_mode(self) -> None:
        """Restore raw terminal mode after the terminal was handed back."""


# ─────────────────────────────────────────────────────────────────────────────
# AnsiBackend
# ─────────────────────────────────────────────────────────────────────────────

class AnsiBackend(Backend):
    """
    Backend emitting ANSI escape sequences.

    Keeps a shadow copy of what it has actually written so that a damaged
    span is narrowed to the cells that really differ before anything is sent.
    Rows in ``image.forced`` skip the narrowing and go out whole, since the
    terminal may no longer match the shadow.
    Content writes are wrapped in save/restore-cursor so the hardware cursor
    stays where the last ``move_cursor`` left it.
    """

    def __init__(self, terminal: Terminal, synchronized_output: bool | None = None) -> None:
        self.terminal = terminal
        if synchronized_output is None:
            synchronized_output = os.environ.get("PI_CURSES_SYNC_OUTPUT", "1") != "0"
        self._synchronized_output = synchronized_output
        self._shadow: list[list[Cell]] = []

    @property
    def shadow(self) -> list[list[Cell]]:
        return self._shadow

    def full_redraw(self, image: PhysicalImage) -> None:
        parts = [_RESET_SGR, _CLEAR_SCREEN]
        for row, cells in enumerate(image.grid):
            end = len(cells)
            while end > 0 and cells[end - 1] == BLANK:
                end -= 1
            if end == 0:
                continue
            parts.append(_cup(row, 0))
            parts.append(_render_run(cells[:end]))
        self._emit("".join(parts))

        self._shadow = [list(cells) for cells in image.grid]
        image.mark_all_clean()
        logger.debug("Full redraw of %dx%d image", image.rows, image.cols)

    def transform_line(self, image: PhysicalImage, row: int) -> bool:
        span = image.damage[row]
        if span is NO_CHANGE:
            return True
        self._ensure_shadow(image)

        old = self._shadow[row]
        new = image.grid[row]
        first, last = span
        if row not in image.forced:
            while first <= last and old[first] == new[first]:
                first += 1
            while last >= first and old[last] == new[last]:
                last -= 1

        if first <= last:
            # Never start mid-glyph: the left half carries the character.
            while first > 0 and new[first].is_continuation:
                first -= 1
            self._emit(_cup(row, first) + _render_run(new[first:last + 1]))
            old[first:last + 1] = new[first:last + 1]
            logger.debug("Row %d: wrote columns %d-%d", row, first, last)
        else:
            logger.debug("Row %d: damaged span %s already on screen", row, tuple(span))

        image.mark_clean(row)
        return True

    def move_cursor(self, row: int, col: int) -> None:
        self.terminal.write(_cup(row, col))

    def reinit_raw_mode(self) -> None:
        self.terminal.enable_raw_mode()

    def _ensure_shadow(self, image: PhysicalImage) -> None:
        if len(self._shadow) != image.rows or (self._shadow and len(self._shadow[0]) != image.cols):
            self._shadow = blank_grid(image.rows, image.cols)

    def _emit(self, body: str) -> None:
        data = _SAVE_CURSOR + body + _RESTORE_CURSOR
        if self._synchronized_output:
            data = _SYNC_BEGIN + data + _SYNC_END
        self.terminal.write(data)
