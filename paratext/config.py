"""Project-level defaults for segmentation, scoring and alignment quality.

Defaults can be overridden via environment variables:
- PARATEXT_MIN_LINE_LENGTH: minimum buffered length before a smart-line flush (defaults to 50)
- PARATEXT_STRATEGY: segmentation strategy used when none is given (defaults to "auto")
"""

import os
from typing import Final, Tuple


def _env_int(name: str, default: int) -> int:
	"""Read an integer from the environment, falling back to ``default`` on bad values."""
	raw = os.getenv(name)
	if raw is None or not raw.strip():
		return default
	try:
		return int(raw)
	except ValueError:
		return default


DEFAULT_MIN_LINE_LENGTH: Final[int] = _env_int("PARATEXT_MIN_LINE_LENGTH", 50)
DEFAULT_STRATEGY: Final[str] = os.getenv("PARATEXT_STRATEGY", "auto")

# Similarity blend: length ratio vs. word-set overlap
LENGTH_WEIGHT: Final[float] = 0.4
OVERLAP_WEIGHT: Final[float] = 0.6

# Checked in order; lower bound inclusive
QUALITY_THRESHOLDS: Final[Tuple[Tuple[str, float], ...]] = (
	("excellent", 0.8),
	("good", 0.6),
	("fair", 0.4),
)
QUALITY_FLOOR: Final[str] = "poor"

# Needleman-Wunsch scoring
DEFAULT_GAP_PENALTY: Final[float] = -0.4
DEFAULT_MIN_SIMILARITY: Final[float] = 0.3
