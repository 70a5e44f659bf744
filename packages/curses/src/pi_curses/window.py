"""
Window buffers.

Provides:
- WindowKind: normal windows vs. pads/subpads (never refreshed directly)
- Window: an in-memory cell grid placed at an origin on the screen, with
  per-row damage spans that the refresh core consumes on merge

Writes go through ``add_str``/``touch_line`` so that the damage span of every
row always covers the cells that changed since the window was last merged.
"""
from __future__ import annotations

import unicodedata
from enum import Enum

from wcwidth import wcwidth

from .cell import BLANK, Cell, blank_grid, cells_text
from .damage import NO_CHANGE, RowDamage, Span, full_span, union
from .errors import OutOfRangeError


class WindowKind(Enum):
    NORMAL = "normal"
    PAD = "pad"
    SUBPAD = "subpad"


class Window:
    """
    A rows x cols grid of cells positioned at ``origin`` on the screen.

    A freshly created window is fully damaged so that its first refresh draws
    it, blanks included.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        origin: tuple[int, int] = (0, 0),
        kind: WindowKind = WindowKind.NORMAL,
        leave_cursor: bool = False,
    ) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError(f"window size must be positive, got {rows}x{cols}")
        if origin[0] < 0 or origin[1] < 0:
            raise ValueError(f"window origin must be non-negative, got {origin}")
        self.rows = rows
        self.cols = cols
        self.origin = origin
        self.kind = kind
        self.leave_cursor = leave_cursor
        self.clear_pending = False
        self.cursor: tuple[int, int] = (0, 0)
        self.grid: list[list[Cell]] = blank_grid(rows, cols)
        self.damage: list[RowDamage] = [full_span(cols)] * rows
        # Rows to re-send even where the terminal should already match.
        self.forced_rows: set[int] = set()

    def __repr__(self) -> str:
        return (
            f"Window({self.rows}x{self.cols} at {self.origin}, "
            f"kind={self.kind.value})"
        )

    @property
    def size(self) -> tuple[int, int]:
        return self.rows, self.cols

    @property
    def is_pad(self) -> bool:
        return self.kind in (WindowKind.PAD, WindowKind.SUBPAD)

    # ─────────────────────────────────────────────────────────────────────────
    # Damage
    # ─────────────────────────────────────────────────────────────────────────

    def touch_line(self, row: int, first: int = 0, last: int | None = None) -> None:
        """Union ``[first, last]`` (default: the whole row) into the row's damage."""
        if last is None:
            last = self.cols - 1
        if not (0 <= row < self.rows) or not (0 <= first <= last < self.cols):
            raise OutOfRangeError(
                f"span ({first}, {last}) on row {row} outside {self.rows}x{self.cols} window"
            )
        self.damage[row] = union(self.damage[row], Span(first, last))

    def touch(self) -> None:
        self.damage = [full_span(self.cols)] * self.rows

    def is_line_touched(self, row: int) -> bool:
        return self.damage[row] is not NO_CHANGE

    # ─────────────────────────────────────────────────────────────────────────
    # Content
    # ─────────────────────────────────────────────────────────────────────────

    def move(self, row: int, col: int) -> None:
        self._check_position(row, col)
        self.cursor = (row, col)

    def add_str(self, row: int, col: int, text: str, attrs: str = "") -> None:
        """
        Write ``text`` starting at ``(row, col)``, clipped at the right edge.

        Double-width glyphs take two cells, the second one a continuation
        cell. A wide glyph that would straddle the edge stops the write.
        Combining marks join the glyph to their left; other zero-width or
        non-printable characters are dropped.
        """
        self._check_position(row, col)
        cells = self.grid[row]
        x = col
        lo: int | None = None
        hi = -1

        for ch in text:
            w = wcwidth(ch)
            if w < 0:
                continue
            if w == 0:
                if x == 0 or unicodedata.category(ch) not in ("Mn", "Me"):
                    continue
                base = x - 1
                if cells[base].is_continuation and base > 0:
                    base -= 1
                prev = cells[base]
                cells[base] = Cell(prev.char + ch, prev.attrs)
                lo = base if lo is None else min(lo, base)
                hi = max(hi, base)
                continue
            if x + w > self.cols:
                break
            start, end = self._split_wide(cells, x, x + w - 1)
            cells[x] = Cell(ch, attrs)
            if w == 2:
                cells[x + 1] = Cell("", attrs)
            lo = start if lo is None else min(lo, start)
            hi = max(hi, end)
            x += w

        if lo is not None:
            self.touch_line(row, lo, hi)
        self.cursor = (row, min(x, self.cols - 1))

    def erase(self) -> None:
        self.grid = blank_grid(self.rows, self.cols)
        self.touch()

    def clear(self) -> None:
        """Erase and ask for the whole terminal to be repainted on next refresh."""
        self.erase()
        self.clear_pending = True

    def cell(self, row: int, col: int) -> Cell:
        self._check_position(row, col)
        return self.grid[row][col]

    def line_text(self, row: int) -> str:
        return cells_text(self.grid[row])

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _check_position(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise OutOfRangeError(
                f"position ({row}, {col}) outside {self.rows}x{self.cols} window"
            )

    def _split_wide(self, cells: list[Cell], first: int, last: int) -> tuple[int, int]:
        """Blank the halves of wide glyphs cut by overwriting ``[first, last]``.

        Returns the column range that ends up modified.
        """
        if cells[first].is_continuation and first > 0:
            first -= 1
            cells[first] = BLANK
        if last + 1 < self.cols and cells[last + 1].is_continuation:
            last += 1
            cells[last] = BLANK
        return first, last
