"""
Refresh error taxonomy.

Every public refresh operation either returns normally or raises one of these.
None of them is fatal; callers decide whether to continue.
"""
from __future__ import annotations


class RefreshError(Exception):
    """Base class for failures reported by the refresh core."""


class InvalidWindowError(RefreshError):
    """The window is missing, is a pad/subpad, or does not fit on the screen."""


class OutOfRangeError(RefreshError):
    """A row/column span lies outside the window's bounds."""


class NoPhysicalImageError(RefreshError):
    """The screen has not been started, so there is no physical image yet."""
