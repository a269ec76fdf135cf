"""
Tests for Alignment
===================
Tests for positional, prefix and Needleman-Wunsch alignment plus quality stats.
"""

import pytest

from paratext.analysis.alignment import (
    NWAlignmentConfig,
    align_line_by_line,
    align_texts,
    align_with_dp,
    align_with_needleman_wunsch,
    get_alignment_stats,
)
from paratext.util.types import AlignedLine, ParallelAlignment, TotalLines


def _row(i, confidence, line_type="aligned"):
    left_no = i if line_type != "rightOnly" else -1
    right_no = i if line_type != "leftOnly" else -1
    return AlignedLine(
        id=f"line-{i}",
        left_text="l" if left_no >= 0 else "",
        right_text="r" if right_no >= 0 else "",
        left_line_number=left_no,
        right_line_number=right_no,
        confidence=confidence,
        type=line_type,
    )


class TestAlignLineByLine:
    """Tests for positional alignment."""

    def test_two_translated_lines(self):
        """Test that equal-length texts pair row for row."""
        result = align_line_by_line("Hello\nWorld", "Hola\nMundo", "line")

        assert [line.type for line in result.lines] == ["aligned", "aligned"]
        first, second = result.lines
        assert (first.left_text, first.right_text) == ("Hello", "Hola")
        assert (second.left_text, second.right_text) == ("World", "Mundo")
        assert first.confidence == pytest.approx(0.32)
        assert second.confidence == pytest.approx(0.4)
        assert 0 < first.confidence < 1
        assert result.total_lines == TotalLines(left=2, right=2)
        assert result.strategy == "line"

    def test_extra_left_line_is_left_only(self):
        """Test the one-sided tail when the left side is longer."""
        result = align_line_by_line("A\nB\nC", "A\nB", "line")

        assert [line.type for line in result.lines] == ["aligned", "aligned", "leftOnly"]
        assert result.lines[0].confidence == 1.0
        assert result.lines[1].confidence == 1.0
        tail = result.lines[2]
        assert tail.left_line_number == 2
        assert tail.right_line_number == -1
        assert tail.confidence == 0
        assert tail.right_text == ""

    def test_extra_right_line_is_right_only(self):
        result = align_line_by_line("A", "A\nB", "line")
        tail = result.lines[1]
        assert tail.type == "rightOnly"
        assert (tail.left_line_number, tail.right_line_number) == (-1, 1)
        assert tail.left_text == ""

    def test_blank_on_both_sides_is_right_only(self):
        """Test that a shared blank row is never classified as aligned."""
        result = align_line_by_line("a\n\nb", "c\n\nd", "line")
        blank = result.lines[1]
        assert blank.type == "rightOnly"
        assert (blank.left_line_number, blank.right_line_number) == (-1, 1)
        assert blank.confidence == 0

    def test_auto_reports_resolved_strategy(self):
        result = align_line_by_line("One.\nTwo.", "Uno.\nDos.", "auto")
        assert result.strategy == "smart-line"

    def test_row_ids_follow_position(self):
        result = align_line_by_line("a\nb\nc", "x", "line")
        assert [line.id for line in result.lines] == ["line-0", "line-1", "line-2"]

    def test_total_lines_equal_segment_counts(self):
        """Test totals against segment counts rather than row counts."""
        result = align_line_by_line("P1\n\nP2\n\nP3", "Only one", "paragraph")
        assert result.total_lines == TotalLines(left=3, right=1)
        assert len(result.lines) == 3

    def test_does_not_resync_after_insertion(self, original_text, revised_text):
        """Test that a one-sided insertion shifts every later row."""
        result = align_line_by_line(original_text, revised_text, "line")
        assert result.lines[1].left_text == "Inserted extra line here."
        assert result.lines[1].right_text == "Delta epsilon zeta."


class TestAlignWithDp:
    """Tests for prefix alignment over smart-line segments."""

    def test_common_prefix_then_tail(self):
        result = align_with_dp("One.\nTwo.\nThree.", "Uno.\nDos.")

        assert [line.type for line in result.lines] == ["aligned", "aligned", "leftOnly"]
        assert result.lines[0].confidence == pytest.approx(0.4)
        tail = result.lines[2]
        assert tail.id == "line-2"
        assert (tail.left_line_number, tail.right_line_number) == (2, -1)
        assert result.total_lines == TotalLines(left=3, right=2)

    def test_right_tail(self):
        result = align_with_dp("One.", "Uno.\nDos.\nTres.")
        assert [line.type for line in result.lines] == ["aligned", "rightOnly", "rightOnly"]
        assert [line.right_line_number for line in result.lines] == [0, 1, 2]
        assert [line.left_line_number for line in result.lines] == [0, -1, -1]

    def test_strategy_is_reported_as_auto(self):
        assert align_with_dp("a.", "b.").strategy == "auto"

    def test_blank_segments_in_prefix_are_still_paired(self):
        result = align_with_dp("A.\n\nB.", "C.\nD.")
        row = result.lines[1]
        assert row.type == "aligned"
        assert (row.left_text, row.right_text) == ("", "D.")
        assert row.confidence == 0.0


class TestAlignWithNeedlemanWunsch:
    """Tests for global alignment that re-syncs after insertions."""

    def test_resyncs_after_left_insertion(self, original_text, revised_text):
        result = align_with_needleman_wunsch(original_text, revised_text, "line")

        assert [line.type for line in result.lines] == ["aligned", "leftOnly", "aligned", "aligned"]
        assert [(l.left_line_number, l.right_line_number) for l in result.lines] == [
            (0, 0), (1, -1), (2, 1), (3, 2)
        ]
        assert all(l.confidence == 1.0 for l in result.lines if l.type == "aligned")
        assert result.total_lines == TotalLines(left=4, right=3)
        assert result.strategy == "line"

    def test_resyncs_after_right_insertion(self, original_text, revised_text):
        result = align_with_needleman_wunsch(revised_text, original_text, "line")
        assert [line.type for line in result.lines] == ["aligned", "rightOnly", "aligned", "aligned"]

    def test_blank_segments_never_match(self):
        result = align_with_needleman_wunsch("A one.\n\nB two.", "A one.\nB two.", "line")
        assert [line.type for line in result.lines] == ["aligned", "leftOnly", "aligned"]
        assert result.lines[1].left_text == ""

    def test_line_numbers_non_decreasing_per_side(self, original_text, revised_text):
        result = align_with_needleman_wunsch(original_text + "\nExtra tail.", revised_text, "line")
        left = [l.left_line_number for l in result.lines if l.left_line_number >= 0]
        right = [l.right_line_number for l in result.lines if l.right_line_number >= 0]
        assert left == sorted(left)
        assert right == sorted(right)
        assert left == list(range(result.total_lines.left))
        assert right == list(range(result.total_lines.right))

    def test_banded_matches_unbanded(self, original_text, revised_text):
        plain = align_with_needleman_wunsch(original_text, revised_text, "line")
        banded = align_with_needleman_wunsch(
            original_text, revised_text, "line", NWAlignmentConfig(use_banded=True)
        )
        assert banded.to_dict() == plain.to_dict()

    def test_empty_inputs(self):
        result = align_with_needleman_wunsch("", "", "paragraph")
        assert result.lines == []
        assert result.total_lines == TotalLines(left=0, right=0)


class TestAlignTexts:
    """Tests for the method dispatcher."""

    def test_dispatches_by_method(self, original_text, revised_text):
        assert align_texts(original_text, revised_text, method="dp").strategy == "auto"
        nw = align_texts(original_text, revised_text, method="nw", strategy="line")
        assert nw.lines[1].type == "leftOnly"

    def test_unknown_method_raises(self):
        with pytest.raises(ValueError):
            align_texts("a", "b", method="fuzzy")


class TestAlignmentStats:
    """Tests for get_alignment_stats."""

    def test_counts_and_quality(self):
        stats = get_alignment_stats(align_line_by_line("A\nB\nC", "A\nB", "line"))
        assert stats.total_lines == 3
        assert stats.aligned_lines == 2
        assert stats.left_only_lines == 1
        assert stats.right_only_lines == 0
        assert stats.average_confidence == 1.0
        assert stats.alignment_quality == "excellent"

    def test_no_aligned_rows(self):
        alignment = ParallelAlignment(
            lines=[_row(0, 0.0, "leftOnly"), _row(1, 0.0, "rightOnly")],
            strategy="line",
            total_lines=TotalLines(1, 1),
        )
        stats = get_alignment_stats(alignment)
        assert stats.average_confidence == 0
        assert stats.alignment_quality == "poor"
        assert stats.right_only_lines == 1

    def test_empty_alignment(self):
        stats = get_alignment_stats(ParallelAlignment(lines=[], strategy="line"))
        assert stats.total_lines == 0
        assert stats.alignment_quality == "poor"

    def test_average_ignores_one_sided_rows(self):
        alignment = ParallelAlignment(
            lines=[_row(0, 0.5), _row(1, 0.7), _row(2, 0.0, "leftOnly")],
            strategy="line",
        )
        assert get_alignment_stats(alignment).average_confidence == pytest.approx(0.6)

    @pytest.mark.parametrize("confidence,quality", [
        (1.0, "excellent"),
        (0.8, "excellent"),
        (0.79, "good"),
        (0.6, "good"),
        (0.59, "fair"),
        (0.4, "fair"),
        (0.39, "poor"),
        (0.0, "poor"),
    ])
    def test_quality_thresholds(self, confidence, quality):
        alignment = ParallelAlignment(lines=[_row(0, confidence)], strategy="line")
        assert get_alignment_stats(alignment).alignment_quality == quality
