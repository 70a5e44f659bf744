"""
Screen cells.

A cell is a glyph plus an opaque rendition string. The refresh core only ever
compares and copies cells; the backend is the one place that interprets
``attrs`` (as SGR parameters).
"""
from __future__ import annotations

from typing import NamedTuple


class Cell(NamedTuple):
    char: str = " "
    # SGR parameters without the CSI and "m" framing, e.g. "1;31". "" is default.
    attrs: str = ""

    @property
    def is_continuation(self) -> bool:
        """True for the right half of a double-width glyph."""
        return self.char == ""


BLANK = Cell()


def blank_row(cols: int) -> list[Cell]:
    return [BLANK] * cols


def blank_grid(rows: int, cols: int) -> list[list[Cell]]:
    return [blank_row(cols) for _ in range(rows)]


def cells_text(cells: list[Cell]) -> str:
    """Glyph text of a run of cells, continuation cells contribute nothing."""
    return "".join(c.char for c in cells)
