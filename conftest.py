"""
Root conftest.py — registers the tty marker.

Markers:
  @pytest.mark.tty   — needs a real terminal on stdin/stdout; skipped unless
                       --tty is given or PI_CURSES_TTY_TESTS=1
"""
from __future__ import annotations

import os

import pytest


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "tty: test drives the real controlling terminal (raw mode, alternate screen)",
    )


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--tty",
        action="store_true",
        default=False,
        help="Also run tests that switch the controlling terminal into raw mode",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--tty") or os.environ.get("PI_CURSES_TTY_TESTS") == "1":
        return
    skip_tty = pytest.mark.skip(reason="needs a terminal; pass --tty or set PI_CURSES_TTY_TESTS=1")
    for item in items:
        if item.get_closest_marker("tty"):
            item.add_marker(skip_tty)
