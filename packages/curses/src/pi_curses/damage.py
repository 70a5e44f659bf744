"""
Per-row damage spans.

A row is either clean (``NO_CHANGE``) or carries one inclusive column span
``Span(first, last)`` covering everything believed dirty since the last flush.
Spans only ever grow by union until something consumes them.
"""
from __future__ import annotations

from typing import NamedTuple, Optional


class Span(NamedTuple):
    first: int
    last: int

    @property
    def width(self) -> int:
        return self.last - self.first + 1


NO_CHANGE = None

RowDamage = Optional[Span]


def union(existing: RowDamage, new: Span) -> Span:
    """Smallest span covering both ``existing`` (may be clean) and ``new``."""
    if existing is NO_CHANGE:
        return new
    return Span(min(existing.first, new.first), max(existing.last, new.last))


def translate(span: Span, offset: int) -> Span:
    return Span(span.first + offset, span.last + offset)


def full_span(cols: int) -> Span:
    return Span(0, cols - 1)


def clean_rows(rows: int) -> list[RowDamage]:
    return [NO_CHANGE] * rows
