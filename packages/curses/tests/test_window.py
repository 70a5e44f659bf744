"""Tests for pi_curses.window and pi_curses.damage"""
import pytest

from pi_curses.cell import BLANK, Cell
from pi_curses.damage import NO_CHANGE, Span, translate, union
from pi_curses.errors import OutOfRangeError
from pi_curses.window import Window, WindowKind


def _clean(win: Window) -> Window:
    win.damage = [NO_CHANGE] * win.rows
    return win


class TestSpanUnion:
    def test_union_with_clean_row(self):
        assert union(NO_CHANGE, Span(3, 5)) == Span(3, 5)

    def test_union_overlapping(self):
        assert union(Span(2, 6), Span(4, 9)) == Span(2, 9)

    def test_union_disjoint_covers_gap(self):
        assert union(Span(0, 1), Span(7, 8)) == Span(0, 8)

    def test_union_contained(self):
        assert union(Span(0, 9), Span(3, 4)) == Span(0, 9)

    def test_translate(self):
        assert translate(Span(1, 4), 3) == Span(4, 7)

    def test_width(self):
        assert Span(4, 7).width == 4


class TestWindowBasics:
    def test_new_window_is_fully_damaged(self):
        win = Window(3, 10)
        assert win.damage == [Span(0, 9)] * 3

    def test_new_window_is_blank(self):
        win = Window(2, 4)
        assert all(cell == BLANK for row in win.grid for cell in row)

    def test_size_and_defaults(self):
        win = Window(5, 10, origin=(2, 3))
        assert win.size == (5, 10)
        assert win.origin == (2, 3)
        assert win.cursor == (0, 0)
        assert win.kind is WindowKind.NORMAL
        assert not win.leave_cursor
        assert not win.clear_pending

    def test_pad_kinds(self):
        assert Window(2, 2, kind=WindowKind.PAD).is_pad
        assert Window(2, 2, kind=WindowKind.SUBPAD).is_pad
        assert not Window(2, 2).is_pad

    def test_rejects_empty_size(self):
        with pytest.raises(ValueError):
            Window(0, 10)

    def test_rejects_negative_origin(self):
        with pytest.raises(ValueError):
            Window(2, 2, origin=(-1, 0))


class TestTouch:
    def test_touch_line_whole_row(self):
        win = _clean(Window(3, 10))
        win.touch_line(1)
        assert win.damage[1] == Span(0, 9)
        assert win.is_line_touched(1)
        assert not win.is_line_touched(0)

    def test_touch_line_unions(self):
        win = _clean(Window(3, 10))
        win.touch_line(0, 2, 3)
        win.touch_line(0, 6, 7)
        assert win.damage[0] == Span(2, 7)

    def test_touch_line_out_of_range(self):
        win = Window(3, 10)
        with pytest.raises(OutOfRangeError):
            win.touch_line(3)
        with pytest.raises(OutOfRangeError):
            win.touch_line(0, 5, 10)
        with pytest.raises(OutOfRangeError):
            win.touch_line(0, 5, 4)

    def test_touch_marks_every_row(self):
        win = _clean(Window(4, 6))
        win.touch()
        assert win.damage == [Span(0, 5)] * 4


class TestAddStr:
    def test_writes_and_damages_written_cells(self):
        win = _clean(Window(3, 10))
        win.add_str(1, 2, "abc")
        assert win.line_text(1) == "  abc     "
        assert win.damage[1] == Span(2, 4)
        assert win.damage[0] is NO_CHANGE
        assert win.cursor == (1, 5)

    def test_attrs_are_stored(self):
        win = _clean(Window(1, 5))
        win.add_str(0, 0, "x", attrs="1;31")
        assert win.cell(0, 0) == Cell("x", "1;31")

    def test_clips_at_right_edge(self):
        win = _clean(Window(1, 10))
        win.add_str(0, 8, "hello")
        assert win.line_text(0) == "        he"
        assert win.damage[0] == Span(8, 9)
        assert win.cursor == (0, 9)

    def test_wide_glyph_takes_two_cells(self):
        win = _clean(Window(1, 10))
        win.add_str(0, 0, "中a")
        assert win.cell(0, 0) == Cell("中")
        assert win.cell(0, 1).is_continuation
        assert win.cell(0, 2) == Cell("a")
        assert win.damage[0] == Span(0, 2)
        assert win.cursor == (0, 3)

    def test_wide_glyph_not_split_at_edge(self):
        win = _clean(Window(1, 10))
        win.add_str(0, 9, "中")
        assert win.cell(0, 9) == BLANK
        assert win.damage[0] is NO_CHANGE

    def test_overwriting_right_half_blanks_left_half(self):
        win = Window(1, 10)
        win.add_str(0, 0, "中")
        _clean(win)
        win.add_str(0, 1, "x")
        assert win.cell(0, 0) == BLANK
        assert win.cell(0, 1) == Cell("x")
        assert win.damage[0] == Span(0, 1)

    def test_overwriting_left_half_blanks_right_half(self):
        win = Window(1, 10)
        win.add_str(0, 4, "中")
        _clean(win)
        win.add_str(0, 4, "x")
        assert win.cell(0, 5) == BLANK
        assert win.damage[0] == Span(4, 5)

    def test_combining_mark_joins_previous_cell(self):
        win = _clean(Window(1, 10))
        win.add_str(0, 0, "e\u0301x")
        assert win.cell(0, 0).char == "e\u0301"
        assert win.cell(0, 1) == Cell("x")

    def test_control_characters_dropped(self):
        win = _clean(Window(1, 10))
        win.add_str(0, 0, "a\x07b")
        assert win.line_text(0).rstrip() == "ab"

    def test_nul_is_dropped_not_combined(self):
        win = _clean(Window(1, 10))
        win.add_str(0, 0, "a\x00b")
        assert win.cell(0, 0) == Cell("a")
        assert win.cell(0, 1) == Cell("b")
        assert win.cursor == (0, 2)

    def test_zero_width_space_is_dropped(self):
        win = _clean(Window(1, 10))
        win.add_str(0, 0, "a\u200bb")
        assert win.cell(0, 0) == Cell("a")
        assert win.cell(0, 1) == Cell("b")

    def test_position_out_of_range(self):
        win = Window(2, 5)
        with pytest.raises(OutOfRangeError):
            win.add_str(2, 0, "x")
        with pytest.raises(OutOfRangeError):
            win.add_str(0, 5, "x")


class TestMoveEraseClear:
    def test_move(self):
        win = Window(3, 10)
        win.move(2, 9)
        assert win.cursor == (2, 9)

    def test_move_out_of_range(self):
        win = Window(3, 10)
        with pytest.raises(OutOfRangeError):
            win.move(3, 0)

    def test_erase_blanks_and_touches(self):
        win = Window(2, 5)
        win.add_str(0, 0, "hello")
        _clean(win)
        win.erase()
        assert win.line_text(0) == "     "
        assert win.damage == [Span(0, 4)] * 2
        assert not win.clear_pending

    def test_clear_sets_clear_pending(self):
        win = Window(2, 5)
        win.clear()
        assert win.clear_pending
        assert win.damage == [Span(0, 4)] * 2
