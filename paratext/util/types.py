"""Core data types for the parallel-text alignment pipeline.

This module defines the structures produced by the aligner and consumed by
the dual-pane reading view: one ``AlignedLine`` per rendered row, grouped in
a ``ParallelAlignment`` together with the strategy used and per-side segment
counts.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal

LineType = Literal["aligned", "leftOnly", "rightOnly"]

LINE_TYPES: tuple[str, ...] = ("aligned", "leftOnly", "rightOnly")

# Line number used when a row has no segment on that side
NO_LINE = -1


@dataclass
class AlignedLine:
    """A single row of a parallel alignment.

    Attributes:
        id: Stable identifier derived from the row position ("line-<i>")
        left_text: Segment text on the left side, "" when absent
        right_text: Segment text on the right side, "" when absent
        left_line_number: Index into the left segments, or -1 when absent
        right_line_number: Index into the right segments, or -1 when absent
        confidence: Similarity in [0, 1]; 0 for one-sided rows
        type: "aligned", "leftOnly" or "rightOnly"

    Invariant: aligned rows have both line numbers >= 0.
    """
    id: str
    left_text: str
    right_text: str
    left_line_number: int
    right_line_number: int
    confidence: float
    type: LineType

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "leftText": self.left_text,
            "rightText": self.right_text,
            "leftLineNumber": self.left_line_number,
            "rightLineNumber": self.right_line_number,
            "confidence": self.confidence,
            "type": self.type,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AlignedLine":
        """Build a row from its camelCase dict, rejecting rows that break the invariant."""
        if not isinstance(data, dict):
            raise ValueError(f"Alignment row must be an object, got {type(data).__name__}")
        line_type = data.get("type", "aligned")
        if line_type not in LINE_TYPES:
            raise ValueError(f"Unknown line type: {line_type}")
        line = cls(
            id=str(data.get("id", "")),
            left_text=data.get("leftText", ""),
            right_text=data.get("rightText", ""),
            left_line_number=int(data.get("leftLineNumber", NO_LINE)),
            right_line_number=int(data.get("rightLineNumber", NO_LINE)),
            confidence=float(data.get("confidence", 0.0)),
            type=line_type,
        )
        if line_type == "aligned" and (line.left_line_number < 0 or line.right_line_number < 0):
            raise ValueError(f"Aligned row {line.id!r} needs line numbers on both sides")
        return line


@dataclass
class TotalLines:
    """Segment counts per side, fixed at segmentation time."""
    left: int
    right: int


@dataclass
class ParallelAlignment:
    """Complete alignment between two texts.

    Attributes:
        lines: Rows in rendering/scroll order
        strategy: Segmentation strategy actually used (after "auto" resolution)
        total_lines: Number of segments produced on each side
    """
    lines: List[AlignedLine]
    strategy: str
    total_lines: TotalLines = field(default_factory=lambda: TotalLines(0, 0))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lines": [line.to_dict() for line in self.lines],
            "strategy": self.strategy,
            "totalLines": {"left": self.total_lines.left, "right": self.total_lines.right},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParallelAlignment":
        if not isinstance(data, dict):
            raise ValueError(f"Alignment must be an object, got {type(data).__name__}")
        totals = data.get("totalLines") or {}
        return cls(
            lines=[AlignedLine.from_dict(row) for row in data.get("lines", [])],
            strategy=data.get("strategy", "auto"),
            total_lines=TotalLines(int(totals.get("left", 0)), int(totals.get("right", 0))),
        )


@dataclass
class AlignmentStats:
    """Summary quality metrics over a ParallelAlignment."""
    total_lines: int
    aligned_lines: int
    left_only_lines: int
    right_only_lines: int
    average_confidence: float
    alignment_quality: Literal["excellent", "good", "fair", "poor"]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalLines": self.total_lines,
            "alignedLines": self.aligned_lines,
            "leftOnlyLines": self.left_only_lines,
            "rightOnlyLines": self.right_only_lines,
            "averageConfidence": self.average_confidence,
            "alignmentQuality": self.alignment_quality,
        }
