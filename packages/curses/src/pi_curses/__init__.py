"""
pi_curses — curses-style screen updates with damage tracking.

Windows are merged into one physical image, and the accumulated damage is
flushed to the terminal with as little output as possible.
"""
from .backend import AnsiBackend, Backend
from .cell import BLANK, Cell
from .damage import NO_CHANGE, Span
from .errors import (
    InvalidWindowError,
    NoPhysicalImageError,
    OutOfRangeError,
    RefreshError,
)
from .refresh import (
    RefreshTarget,
    Screen,
    force_redraw_lines,
    force_redraw_window,
)
from .screen import PhysicalImage, Session
from .terminal import ProcessTerminal, Terminal
from .window import Window, WindowKind

__all__ = [
    # Backends
    "AnsiBackend",
    "Backend",
    # Cells and damage
    "BLANK",
    "Cell",
    "NO_CHANGE",
    "Span",
    # Errors
    "InvalidWindowError",
    "NoPhysicalImageError",
    "OutOfRangeError",
    "RefreshError",
    # Refresh
    "RefreshTarget",
    "Screen",
    "force_redraw_lines",
    "force_redraw_window",
    # Physical image and session
    "PhysicalImage",
    "Session",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # Windows
    "Window",
    "WindowKind",
]
