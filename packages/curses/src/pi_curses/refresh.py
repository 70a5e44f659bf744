"""
Screen refresh: merging windows into the physical image and flushing it.

Provides:
- RefreshTarget: explicit tag for refreshing the physical image itself
- Screen: owns the physical image and the backend; merge_window() stages a
  window, reconcile() performs the one real terminal update, refresh()
  composes the two
- force_redraw_lines() / force_redraw_window(): re-damage rows whose on-screen
  content may have been corrupted from outside

Staging several windows with merge_window() and then calling reconcile() once
produces a single burst of output; refresh() per window is simpler but
flushes every time.
"""
from __future__ import annotations

import logging
import os
from enum import Enum

from .backend import Backend
from .damage import NO_CHANGE, Span, full_span, translate
from .errors import InvalidWindowError, NoPhysicalImageError, OutOfRangeError
from .screen import PhysicalImage, Session
from .window import Window

logger = logging.getLogger(__name__)


class RefreshTarget(Enum):
    # The physical image itself: nothing to merge, repaint everything.
    CANONICAL = "canonical"


class Screen:
    """
    A terminal screen: one physical image, one backend, one session.

    Not thread-safe. Hosts that call in from several threads must serialize
    merge_window()/reconcile() themselves.
    """

    def __init__(
        self,
        backend: Backend,
        session: Session,
        debug_redraw: bool | None = None,
    ) -> None:
        self.backend = backend
        self.session = session
        self.image: PhysicalImage | None = None
        self.stdscr: Window | None = None
        self._debug_redraw = (
            debug_redraw if debug_redraw is not None
            else os.environ.get("PI_CURSES_DEBUG_REDRAW") == "1"
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────────────

    def start(self) -> Window:
        """Create the physical image and a full-screen standard window."""
        self.image = PhysicalImage(self.session.rows, self.session.cols)
        self.stdscr = Window(self.session.rows, self.session.cols)
        self.session.alive = True
        logger.debug("Screen started at %dx%d", self.session.rows, self.session.cols)
        return self.stdscr

    def stop(self) -> None:
        """Hand the terminal back; the next reconcile() takes it over again."""
        self.session.suspend()

    # ─────────────────────────────────────────────────────────────────────────
    # Merge
    # ─────────────────────────────────────────────────────────────────────────

    def merge_window(self, window: Window | None) -> None:
        """Copy ``window``'s damaged cells into the physical image.

        Nothing is written to the terminal. On return every row of the window
        is clean and the physical damage covers what was copied.
        """
        if window is None or window.is_pad:
            raise InvalidWindowError(f"cannot refresh {window!r}")
        image = self._require_image()
        oy, ox = window.origin
        if oy + window.rows > image.rows or ox + window.cols > image.cols:
            raise InvalidWindowError(
                f"{window!r} does not fit on the {image.rows}x{image.cols} screen"
            )

        for i, span in enumerate(window.damage):
            if span is NO_CHANGE:
                continue
            j = oy + i
            image.grid[j][ox + span.first:ox + span.last + 1] = window.grid[i][span.first:span.last + 1]
            image.union_damage(j, translate(span, ox))
            if i in window.forced_rows:
                image.forced.add(j)
            window.damage[i] = NO_CHANGE
        window.forced_rows.clear()

        if window.clear_pending:
            window.clear_pending = False
            if window.size == (image.rows, image.cols):
                image.full_redraw = True

        if not window.leave_cursor:
            cy, cx = window.cursor
            image.cursor = (oy + cy, ox + cx)

        logger.debug("Merged %r, physical cursor %s", window, image.cursor)

    # ─────────────────────────────────────────────────────────────────────────
    # Reconcile
    # ─────────────────────────────────────────────────────────────────────────

    def reconcile(self) -> None:
        """Flush the physical image's pending damage through the backend."""
        image = self._require_image()

        if self.session.was_suspended():
            logger.debug("Terminal regained after suspend, repainting")
            self.backend.reinit_raw_mode()
            image.full_redraw = True
            self.session.alive = True
        if self.session.shell_mode:
            self.backend.reinit_raw_mode()

        if self._debug_redraw:
            image.full_redraw = True

        try:
            if image.full_redraw:
                self.backend.full_redraw(image)
                image.full_redraw = False
            else:
                for row in range(image.rows):
                    if image.damage[row] is NO_CHANGE:
                        continue
                    if not self.backend.transform_line(image, row):
                        logger.debug("Backend stopped the row scan at row %d", row)
                        break

            if image.cursor != image.last_flushed_cursor:
                self.backend.move_cursor(*image.cursor)
                image.last_flushed_cursor = image.cursor
        except Exception:
            logger.exception("Reconcile interrupted, unflushed damage is kept")
            raise

    # ─────────────────────────────────────────────────────────────────────────
    # Refresh
    # ─────────────────────────────────────────────────────────────────────────

    def refresh(self, target: Window | RefreshTarget) -> None:
        """Merge ``target`` (or repaint the physical image) and flush."""
        if target is RefreshTarget.CANONICAL:
            self._require_image().full_redraw = True
        else:
            self.merge_window(target)
        self.reconcile()

    def refresh_window(self, window: Window | None) -> None:
        self.refresh(window)

    def refresh_std_screen(self) -> None:
        """Merge the standard window and repaint the whole terminal."""
        image = self._require_image()
        self.merge_window(self.stdscr)
        image.full_redraw = True
        self.reconcile()

    def _require_image(self) -> PhysicalImage:
        if self.image is None:
            raise NoPhysicalImageError("screen not started")
        return self.image


# ─────────────────────────────────────────────────────────────────────────────
# Forced redraw
# ─────────────────────────────────────────────────────────────────────────────

def force_redraw_lines(window: Window | None, start: int, count: int) -> None:
    """Mark rows ``[start, start + count)`` of ``window`` fully damaged.

    The rows are re-sent on the next refresh even where the terminal is
    believed to show them already, which repairs output from other programs.
    """
    if window is None:
        raise InvalidWindowError("no window")
    if start < 0 or count < 0 or start > window.rows or start + count > window.rows:
        raise OutOfRangeError(
            f"rows {start}..{start + count} outside window of {window.rows} rows"
        )
    span: Span = full_span(window.cols)
    for row in range(start, start + count):
        window.damage[row] = span
        window.forced_rows.add(row)


def force_redraw_window(window: Window | None) -> None:
    if window is None:
        raise InvalidWindowError("no window")
    force_redraw_lines(window, 0, window.rows)
