"""
Tests for Scroll Navigation
===========================
Tests for scroll-position lookup and cross-pane line correspondence.
"""

import pytest

from paratext.analysis.alignment import (
    align_with_needleman_wunsch,
    find_line_at_scroll_position,
    get_corresponding_line,
)


@pytest.fixture
def resynced_alignment(original_text, revised_text):
    """Rows: aligned(0,0), leftOnly(1,-1), aligned(2,1), aligned(3,2)."""
    return align_with_needleman_wunsch(original_text, revised_text, "line")


class TestFindLineAtScrollPosition:
    """Tests for find_line_at_scroll_position."""

    def test_first_sum_strictly_greater(self):
        assert find_line_at_scroll_position(125, [50, 50, 50]) == 2

    def test_boundary_is_not_inside_row(self):
        """Test that a scroll offset equal to a row's bottom edge selects the next row."""
        assert find_line_at_scroll_position(50, [50, 50, 50]) == 1

    def test_top(self):
        assert find_line_at_scroll_position(0, [50, 50, 50]) == 0

    def test_past_the_end_returns_last_index(self):
        assert find_line_at_scroll_position(1000, [50, 50, 50]) == 2

    def test_missing_heights_are_skipped(self):
        assert find_line_at_scroll_position(60, [None, 50, 50]) == 2
        assert find_line_at_scroll_position(10, [50, None, 50]) == 0

    def test_no_rows(self):
        assert find_line_at_scroll_position(10, []) == -1

    def test_monotonic_in_scroll_position(self):
        heights = [20, None, 35.5, 10, 0, 80]
        positions = [p * 2.5 for p in range(0, 80)]
        found = [find_line_at_scroll_position(p, heights) for p in positions]
        assert found == sorted(found)


class TestGetCorrespondingLine:
    """Tests for get_corresponding_line."""

    def test_from_left_uses_right_line_number(self, resynced_alignment):
        assert get_corresponding_line(2, resynced_alignment, True) == 1
        assert get_corresponding_line(3, resynced_alignment, True) == 2

    def test_from_right_uses_left_line_number(self, resynced_alignment):
        assert get_corresponding_line(2, resynced_alignment, False) == 2

    def test_one_sided_row_falls_back_to_index(self, resynced_alignment):
        assert get_corresponding_line(1, resynced_alignment, True) == 1
        assert get_corresponding_line(1, resynced_alignment, False) == 1

    def test_out_of_range_returns_index(self, resynced_alignment):
        assert get_corresponding_line(5, resynced_alignment, True) == 5
        assert get_corresponding_line(-1, resynced_alignment, False) == -1
