"""Parallel-text alignment for side-by-side reading.

This module pairs the segments of two versions of a text using:
- Positional alignment (row i pairs segment i on both sides)
- Prefix alignment over smart-line segments with a one-sided tail
- Needleman-Wunsch global alignment over a segment similarity matrix,
  which re-syncs after one-sided insertions
- Quality statistics and scroll-sync navigation helpers

Every function is total over its inputs: out-of-range lookups fall back to
documented values instead of raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from paratext.analysis.segmentation import SegmentationConfig, resolve_strategy, segment_text
from paratext.analysis.similarity import build_similarity_matrix, compute_similarity
from paratext.config import DEFAULT_GAP_PENALTY, DEFAULT_MIN_SIMILARITY, QUALITY_FLOOR, QUALITY_THRESHOLDS
from paratext.util.types import (
    NO_LINE,
    AlignedLine,
    AlignmentStats,
    ParallelAlignment,
    TotalLines,
)

logger = logging.getLogger(__name__)

ALIGNMENT_METHODS: tuple[str, ...] = ("positional", "dp", "nw")


@dataclass
class NWAlignmentConfig:
    """Configuration for Needleman-Wunsch segment alignment."""
    gap_penalty: float = DEFAULT_GAP_PENALTY
    min_similarity: float = DEFAULT_MIN_SIMILARITY  # Hard floor for match acceptance
    use_banded: bool = False
    band_margin_pct: float = 0.10


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _segment_at(segments: Sequence[str], i: int) -> Optional[str]:
    """Return segment ``i`` or None when the side has no segment there."""
    return segments[i] if 0 <= i < len(segments) else None


def _aligned_row(i: int, left: str, right: str, left_no: int, right_no: int, confidence: float) -> AlignedLine:
    return AlignedLine(
        id=f"line-{i}",
        left_text=left,
        right_text=right,
        left_line_number=left_no,
        right_line_number=right_no,
        confidence=confidence,
        type="aligned",
    )


def _left_only_row(i: int, text: str, left_no: int) -> AlignedLine:
    return AlignedLine(
        id=f"line-{i}",
        left_text=text,
        right_text="",
        left_line_number=left_no,
        right_line_number=NO_LINE,
        confidence=0.0,
        type="leftOnly",
    )


def _right_only_row(i: int, text: str, right_no: int) -> AlignedLine:
    return AlignedLine(
        id=f"line-{i}",
        left_text="",
        right_text=text,
        left_line_number=NO_LINE,
        right_line_number=right_no,
        confidence=0.0,
        type="rightOnly",
    )


def _calculate_band_width(m: int, n: int, config: NWAlignmentConfig) -> int:
    """Band width = |m - n| + margin, so the path can always reach (m, n)."""
    avg_length = (m + n) / 2.0
    return abs(m - n) + int(config.band_margin_pct * avg_length)


def _needleman_wunsch_align(
    S: np.ndarray,
    config: NWAlignmentConfig,
) -> Tuple[List[Tuple[Optional[int], Optional[int]]], Dict[str, Any]]:
    """Global alignment over a precomputed similarity matrix.

    A match scores its similarity and is only allowed when the similarity is
    positive and at least ``config.min_similarity``; gaps score
    ``config.gap_penalty``. Ties prefer match, then deletion, then insertion.

    Returns:
        (pairs, metadata) where pairs is an ordered list of (i, j), (i, None)
        or (None, j) tuples.
    """
    m, n = S.shape

    band_width = None
    if config.use_banded:
        band_width = _calculate_band_width(m, n, config)

    def in_band(i: int, j: int) -> bool:
        if band_width is None:
            return True
        return abs(i - j) <= band_width

    dp = np.full((m + 1, n + 1), -1e9, dtype=np.float64)
    bt_i = np.full((m + 1, n + 1), -1, dtype=np.int32)
    bt_j = np.full((m + 1, n + 1), -1, dtype=np.int32)
    dp[0, 0] = 0.0

    for i in range(1, m + 1):
        if in_band(i, 0):
            dp[i, 0] = dp[i - 1, 0] + config.gap_penalty
            bt_i[i, 0] = i - 1
            bt_j[i, 0] = 0
    for j in range(1, n + 1):
        if in_band(0, j):
            dp[0, j] = dp[0, j - 1] + config.gap_penalty
            bt_i[0, j] = 0
            bt_j[0, j] = j - 1

    for i in range(1, m + 1):
        if band_width is not None:
            j_start = max(1, i - band_width)
            j_end = min(n + 1, i + band_width + 1)
        else:
            j_start = 1
            j_end = n + 1

        for j in range(j_start, j_end):
            sim = float(S[i - 1, j - 1])
            allowed = sim > 0.0 and sim >= config.min_similarity
            match = dp[i - 1, j - 1] + sim if allowed else -1e12
            delete = dp[i - 1, j] + config.gap_penalty
            insert = dp[i, j - 1] + config.gap_penalty

            best = match
            pi, pj = i - 1, j - 1
            if delete > best:
                best = delete
                pi, pj = i - 1, j
            if insert > best:
                best = insert
                pi, pj = i, j - 1

            dp[i, j] = best
            bt_i[i, j] = pi
            bt_j[i, j] = pj

    i, j = m, n
    pairs: List[Tuple[Optional[int], Optional[int]]] = []
    while i > 0 or j > 0:
        pi, pj = int(bt_i[i, j]), int(bt_j[i, j])
        if pi == i - 1 and pj == j - 1:
            pairs.append((i - 1, j - 1))
        elif pi == i - 1 and pj == j:
            pairs.append((i - 1, None))
        else:
            pairs.append((None, j - 1))
        i, j = pi, pj
    pairs.reverse()

    metadata: Dict[str, Any] = {"score": float(dp[m, n])}
    if band_width is not None:
        metadata["band_width"] = band_width
    return pairs, metadata


# =============================================================================
# ALIGNMENT ENTRY POINTS
# =============================================================================

def align_line_by_line(
    left_text: str,
    right_text: str,
    strategy: str = "auto",
    config: Optional[SegmentationConfig] = None,
) -> ParallelAlignment:
    """Pair segment i on the left with segment i on the right.

    Rows with text on both sides are "aligned"; otherwise the row is
    "leftOnly" when the left has text and "rightOnly" in every other case,
    including a row that is blank on both sides. No attempt is made to
    re-sync after a one-sided insertion (see align_with_needleman_wunsch).
    """
    resolved = resolve_strategy(strategy)
    left_segments = segment_text(left_text, resolved, config)
    right_segments = segment_text(right_text, resolved, config)

    lines: List[AlignedLine] = []
    for i in range(max(len(left_segments), len(right_segments))):
        left = _segment_at(left_segments, i) or ""
        right = _segment_at(right_segments, i) or ""

        if left and right:
            lines.append(_aligned_row(i, left, right, i, i, compute_similarity(left, right)))
        elif left:
            lines.append(_left_only_row(i, left, i))
        else:
            lines.append(_right_only_row(i, right, i))

    logger.debug(
        "Positional alignment: %d rows from %d/%d segments (strategy=%s)",
        len(lines), len(left_segments), len(right_segments), resolved,
    )
    return ParallelAlignment(
        lines=lines,
        strategy=resolved,
        total_lines=TotalLines(left=len(left_segments), right=len(right_segments)),
    )


def align_with_dp(
    left_text: str,
    right_text: str,
    config: Optional[SegmentationConfig] = None,
) -> ParallelAlignment:
    """Align the common prefix of smart-line segments, then dump the tail.

    Segments 0..min(len)-1 are paired as "aligned" rows regardless of content;
    the longer side's remaining segments follow as one-sided rows. The
    strategy is reported as "auto" since this entry point takes none.
    """
    left_segments = segment_text(left_text, "smart-line", config)
    right_segments = segment_text(right_text, "smart-line", config)
    common = min(len(left_segments), len(right_segments))

    lines: List[AlignedLine] = []
    for i in range(common):
        left = left_segments[i]
        right = right_segments[i]
        lines.append(_aligned_row(i, left, right, i, i, compute_similarity(left, right)))

    for k in range(common, len(left_segments)):
        lines.append(_left_only_row(len(lines), left_segments[k], k))
    for k in range(common, len(right_segments)):
        lines.append(_right_only_row(len(lines), right_segments[k], k))

    return ParallelAlignment(
        lines=lines,
        strategy="auto",
        total_lines=TotalLines(left=len(left_segments), right=len(right_segments)),
    )


def align_with_needleman_wunsch(
    left_text: str,
    right_text: str,
    strategy: str = "auto",
    config: Optional[NWAlignmentConfig] = None,
    segmentation: Optional[SegmentationConfig] = None,
) -> ParallelAlignment:
    """Globally align segments so a one-sided insertion does not shift every later row.

    Blank segments never match and come out as one-sided rows. Line numbers
    are non-decreasing within each side.
    """
    if config is None:
        config = NWAlignmentConfig()

    resolved = resolve_strategy(strategy)
    left_segments = segment_text(left_text, resolved, segmentation)
    right_segments = segment_text(right_text, resolved, segmentation)

    S = build_similarity_matrix(left_segments, right_segments)
    pairs, metadata = _needleman_wunsch_align(S, config)
    logger.debug(
        "Needleman-Wunsch alignment: %dx%d matrix, %d pairs, metadata=%s",
        S.shape[0], S.shape[1], len(pairs), metadata,
    )

    lines: List[AlignedLine] = []
    for row, (i, j) in enumerate(pairs):
        if i is not None and j is not None:
            lines.append(_aligned_row(row, left_segments[i], right_segments[j], i, j, float(S[i, j])))
        elif i is not None:
            lines.append(_left_only_row(row, left_segments[i], i))
        else:
            lines.append(_right_only_row(row, right_segments[j], j))

    return ParallelAlignment(
        lines=lines,
        strategy=resolved,
        total_lines=TotalLines(left=len(left_segments), right=len(right_segments)),
    )


def align_texts(
    left_text: str,
    right_text: str,
    *,
    method: str = "positional",
    strategy: str = "auto",
    segmentation: Optional[SegmentationConfig] = None,
    nw_config: Optional[NWAlignmentConfig] = None,
) -> ParallelAlignment:
    """Dispatch to an alignment method by name ("positional", "dp" or "nw")."""
    if method == "positional":
        return align_line_by_line(left_text, right_text, strategy, segmentation)
    if method == "dp":
        return align_with_dp(left_text, right_text, segmentation)
    if method == "nw":
        return align_with_needleman_wunsch(left_text, right_text, strategy, nw_config, segmentation)
    raise ValueError(f"Unknown alignment method: {method!r}")


# =============================================================================
# STATISTICS AND NAVIGATION
# =============================================================================

def _quality_label(average_confidence: float) -> str:
    for label, threshold in QUALITY_THRESHOLDS:
        if average_confidence >= threshold:
            return label
    return QUALITY_FLOOR


def get_alignment_stats(alignment: ParallelAlignment) -> AlignmentStats:
    """Count rows by type and grade the mean confidence of aligned rows.

    The mean is taken over aligned rows only and is 0 when there are none.
    """
    confidences = [line.confidence for line in alignment.lines if line.type == "aligned"]
    left_only = sum(1 for line in alignment.lines if line.type == "leftOnly")
    right_only = sum(1 for line in alignment.lines if line.type == "rightOnly")
    average = sum(confidences) / len(confidences) if confidences else 0.0

    return AlignmentStats(
        total_lines=len(alignment.lines),
        aligned_lines=len(confidences),
        left_only_lines=left_only,
        right_only_lines=right_only,
        average_confidence=average,
        alignment_quality=_quality_label(average),
    )


def find_line_at_scroll_position(scroll_position: float, line_heights: Sequence[Optional[float]]) -> int:
    """Return the row under ``scroll_position`` given rendered row heights.

    The answer is the first index whose cumulative height is strictly greater
    than the scroll position. Missing (None) heights add nothing. Scrolling
    past the end yields the last index (-1 for no rows).
    """
    accumulated = 0.0
    for i, height in enumerate(line_heights):
        if height is None:
            continue
        accumulated += height
        if accumulated > scroll_position:
            return i
    return len(line_heights) - 1


def get_corresponding_line(line_index: int, alignment: ParallelAlignment, from_left: bool) -> int:
    """Map a row index in one pane to the matching line number in the other pane.

    Falls back to ``line_index`` when the row does not exist or has no
    segment on the other side.
    """
    if not 0 <= line_index < len(alignment.lines):
        return line_index

    line = alignment.lines[line_index]
    target = line.right_line_number if from_left else line.left_line_number
    return target if target >= 0 else line_index
