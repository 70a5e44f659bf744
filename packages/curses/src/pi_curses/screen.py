"""
Physical image and session state.

Provides:
- PhysicalImage: what the library believes the terminal currently shows,
  plus the damage accumulated since the last flush
- Session: terminal size and the liveness/shell-mode signals set by the
  terminal-mode switching code
"""
from __future__ import annotations

from dataclasses import dataclass, field

from .cell import Cell, blank_grid, cells_text
from .damage import NO_CHANGE, RowDamage, Span, clean_rows, union
from .terminal import Terminal


@dataclass
class PhysicalImage:
    rows: int
    cols: int
    grid: list[list[Cell]] = field(init=False)
    damage: list[RowDamage] = field(init=False)
    # Rows a backend must rewrite in full, bypassing any diffing it does.
    forced: set[int] = field(init=False, default_factory=set)
    cursor: tuple[int, int] = (0, 0)
    # The first flush after creation always repaints everything.
    full_redraw: bool = True
    last_flushed_cursor: tuple[int, int] | None = None

    def __post_init__(self) -> None:
        self.grid = blank_grid(self.rows, self.cols)
        self.damage = clean_rows(self.rows)

    def union_damage(self, row: int, span: Span) -> None:
        self.damage[row] = union(self.damage[row], span)

    def mark_clean(self, row: int) -> None:
        self.damage[row] = NO_CHANGE
        self.forced.discard(row)

    def mark_all_clean(self) -> None:
        self.damage = clean_rows(self.rows)
        self.forced.clear()

    def has_damage(self) -> bool:
        return any(span is not NO_CHANGE for span in self.damage)

    def line_text(self, row: int) -> str:
        return cells_text(self.grid[row])


@dataclass
class Session:
    """
    Process-level terminal state.

    The refresh core reads ``rows``/``cols`` and the two mode signals and only
    ever writes ``alive`` (when it takes the terminal back after a suspend).
    """

    rows: int
    cols: int
    alive: bool = True
    shell_mode: bool = False

    @classmethod
    def from_terminal(cls, terminal: Terminal) -> "Session":
        return cls(rows=terminal.rows, cols=terminal.columns)

    def was_suspended(self) -> bool:
        return not self.alive

    def suspend(self) -> None:
        """The terminal was handed back to the shell (endwin)."""
        self.alive = False

    def enter_shell_mode(self) -> None:
        self.shell_mode = True

    def enter_program_mode(self) -> None:
        self.shell_mode = False
