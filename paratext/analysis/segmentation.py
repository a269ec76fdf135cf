"""Splitting raw text into ordered segments.

Four strategies are supported:
- line: split on "\\n" verbatim, keeping empty lines
- smart-line: merge short wrapped lines into sentence-ish units
- paragraph: split on blank lines
- sentence: split after ., ! or ? followed by whitespace

"auto" is accepted wherever a strategy is taken and resolves to smart-line.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from paratext.config import DEFAULT_MIN_LINE_LENGTH

logger = logging.getLogger(__name__)

AUTO_STRATEGY = "auto"
SEGMENTATION_STRATEGIES: tuple[str, ...] = ("line", "smart-line", "paragraph", "sentence")

_PARAGRAPH_BREAK_RE = re.compile(r"\n\n+")
_SENTENCE_END_RE = re.compile(r"[.!?]+\s+")
_TERMINAL_PUNCTUATION = (".", "!", "?")


@dataclass
class SegmentationConfig:
    """Configuration for segmentation."""
    min_line_length: int = DEFAULT_MIN_LINE_LENGTH  # smart-line flush length


def resolve_strategy(strategy: str) -> str:
    """Resolve the "auto" sentinel to a concrete segmentation strategy.

    Concrete strategies resolve to themselves. Unknown names raise ValueError.
    """
    if strategy == AUTO_STRATEGY:
        return "smart-line"
    if strategy not in SEGMENTATION_STRATEGIES:
        raise ValueError(f"Unknown segmentation strategy: {strategy!r}")
    return strategy


def split_by_lines(text: str) -> List[str]:
    """Split on newlines, keeping every line untouched (empty lines included)."""
    return text.split("\n")


def split_into_smart_lines(text: str, min_line_length: int = DEFAULT_MIN_LINE_LENGTH) -> List[str]:
    """Merge consecutive short lines into segments.

    Non-empty trimmed lines are joined with single spaces into a buffer that
    is flushed once it reaches ``min_line_length`` characters or the last
    appended line ends in ., ! or ?. A blank line flushes the buffer and
    emits one "" segment to keep the paragraph break visible.

    Example:
        "Short.\\nAnother short line.\\n\\nLong paragraph ..."
        → ["Short.", "Another short line.", "", "Long paragraph ..."]
    """
    segments: List[str] = []
    buffer = ""

    for raw_line in text.split("\n"):
        line = raw_line.strip()

        if not line:
            if buffer:
                segments.append(buffer)
                buffer = ""
            segments.append("")
            continue

        buffer = f"{buffer} {line}" if buffer else line

        if len(buffer) >= min_line_length or line.endswith(_TERMINAL_PUNCTUATION):
            segments.append(buffer)
            buffer = ""

    if buffer:
        segments.append(buffer)

    return segments


def split_by_paragraphs(text: str) -> List[str]:
    """Split on one or more blank lines, dropping empty blocks."""
    blocks = (block.strip() for block in _PARAGRAPH_BREAK_RE.split(text))
    return [block for block in blocks if block]


def split_by_sentences(text: str) -> List[str]:
    """Split after runs of ., ! or ? followed by whitespace, dropping empty results.

    The punctuation run is consumed by the split: "Hi! Bye." → ["Hi", "Bye."]
    """
    sentences = (s.strip() for s in _SENTENCE_END_RE.split(text))
    return [s for s in sentences if s]


def segment_text(
    text: str,
    strategy: str = "smart-line",
    config: Optional[SegmentationConfig] = None,
) -> List[str]:
    """Split ``text`` into segments with the given strategy ("auto" allowed)."""
    if config is None:
        config = SegmentationConfig()

    resolved = resolve_strategy(strategy)
    splitters: Dict[str, Callable[[str], List[str]]] = {
        "line": split_by_lines,
        "smart-line": lambda t: split_into_smart_lines(t, config.min_line_length),
        "paragraph": split_by_paragraphs,
        "sentence": split_by_sentences,
    }
    segments = splitters[resolved](text)
    logger.debug("Segmented %d chars into %d segments (strategy=%s)", len(text), len(segments), resolved)
    return segments
