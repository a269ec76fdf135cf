"""Similarity scoring between two candidate counterpart segments.

The score blends a length ratio with word-set overlap, both computed on
normalized text:

    0.4 * min(len)/max(len) + 0.6 * |A ∩ B| / max(|A|, |B|)
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from paratext.analysis.normalization import normalize_text
from paratext.config import LENGTH_WEIGHT, OVERLAP_WEIGHT


def _length_ratio(a: str, b: str) -> float:
    longest = max(len(a), len(b))
    if longest == 0:
        return 0.0
    return min(len(a), len(b)) / longest


def _word_overlap(a: str, b: str) -> float:
    """Share of distinct words in common, relative to the larger word set."""
    words_a = set(a.split(" "))
    words_b = set(b.split(" "))
    largest = max(len(words_a), len(words_b))
    if largest == 0:
        return 0.0
    return len(words_a & words_b) / largest


def _score_normalized(a: str, b: str) -> float:
    """Score two already-normalized lines."""
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0
    return LENGTH_WEIGHT * _length_ratio(a, b) + OVERLAP_WEIGHT * _word_overlap(a, b)


def compute_similarity(a: str, b: str) -> float:
    """Return a [0, 1] confidence that two lines correspond.

    Either side normalizing to "" (empty or punctuation-only input) scores 0
    against anything, including another empty line. Identical normalized
    lines score 1.0.
    """
    return _score_normalized(normalize_text(a), normalize_text(b))


def build_similarity_matrix(left: Sequence[str], right: Sequence[str]) -> np.ndarray:
    """Score every left segment against every right segment.

    Returns:
        float64 array of shape (len(left), len(right)); entry [i, j] equals
        compute_similarity(left[i], right[j])
    """
    S = np.zeros((len(left), len(right)), dtype=np.float64)

    # Normalize once per segment rather than once per pair
    norm_left: List[str] = [normalize_text(t) for t in left]
    norm_right: List[str] = [normalize_text(t) for t in right]

    for i, a in enumerate(norm_left):
        if not a:
            continue
        for j, b in enumerate(norm_right):
            S[i, j] = _score_normalized(a, b)
    return S
