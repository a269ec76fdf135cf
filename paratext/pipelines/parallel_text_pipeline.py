"""Parallel-text alignment pipeline.

This pipeline takes two text files (e.g. an original and its translation),
loads them with encoding detection, aligns their segments and reports
quality statistics as JSON or a console table.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console
from rich.table import Table

from ..analysis.alignment import (
    ALIGNMENT_METHODS,
    NWAlignmentConfig,
    align_texts,
    get_alignment_stats,
)
from ..analysis.segmentation import SegmentationConfig
from ..config import (
    DEFAULT_GAP_PENALTY,
    DEFAULT_MIN_LINE_LENGTH,
    DEFAULT_MIN_SIMILARITY,
    DEFAULT_STRATEGY,
)
from ..parsers.text import read_text_file
from ..util.types import AlignmentStats, ParallelAlignment


@dataclass
class ParallelTextPipelineConfig:
    """Configuration for the parallel-text pipeline."""
    left_path: str
    right_path: str
    method: str = "positional"  # positional, dp, nw
    strategy: str = DEFAULT_STRATEGY
    min_line_length: int = DEFAULT_MIN_LINE_LENGTH
    gap_penalty: float = DEFAULT_GAP_PENALTY
    min_similarity: float = DEFAULT_MIN_SIMILARITY
    output_format: str = "table"  # table, json
    output_file: Optional[str] = None
    row_limit: int = 50


class ParallelTextPipeline:
    """Pipeline for aligning two text files."""

    def __init__(self, config: ParallelTextPipelineConfig, console: Optional[Console] = None):
        self.config = config
        self.console = console or Console()
        self.metadata: Dict[str, Any] = {}

    def run(self) -> Dict[str, Any]:
        """Run the complete alignment pipeline."""
        start_time = time.time()

        try:
            if self.config.method not in ALIGNMENT_METHODS:
                raise ValueError(f"Unknown alignment method: {self.config.method!r}")

            # Phase 1: Load texts
            self._log_progress("Loading texts...")
            left_text = read_text_file(self.config.left_path)
            right_text = read_text_file(self.config.right_path)

            # Phase 2: Align
            self._log_progress(f"Aligning with method={self.config.method}, strategy={self.config.strategy}...")
            alignment = align_texts(
                left_text,
                right_text,
                method=self.config.method,
                strategy=self.config.strategy,
                segmentation=SegmentationConfig(min_line_length=self.config.min_line_length),
                nw_config=NWAlignmentConfig(
                    gap_penalty=self.config.gap_penalty,
                    min_similarity=self.config.min_similarity,
                ),
            )

            # Phase 3: Statistics
            stats = get_alignment_stats(alignment)

            # Phase 4: Prepare and emit output
            processing_time = time.time() - start_time
            result = self._prepare_output(alignment, stats, processing_time)
            self._output_results(alignment, stats, result)

            return result

        except Exception as e:
            self._log_error(f"Pipeline failed: {str(e)}")
            raise

    def _log_progress(self, message: str) -> None:
        """Log progress message."""
        if self.console:
            self.console.print(f"[blue]{message}[/blue]")

    def _log_error(self, message: str) -> None:
        """Log error message."""
        if self.console:
            self.console.print(f"[red]{message}[/red]")

    def _prepare_output(
        self,
        alignment: ParallelAlignment,
        stats: AlignmentStats,
        processing_time: float,
    ) -> Dict[str, Any]:
        """Assemble the JSON-serializable result."""
        self.metadata = {
            "left_file": self.config.left_path,
            "right_file": self.config.right_path,
            "method": self.config.method,
            "requested_strategy": self.config.strategy,
            "min_line_length": self.config.min_line_length,
            "processing_time_seconds": round(processing_time, 3),
        }
        return {
            "alignment": alignment.to_dict(),
            "stats": stats.to_dict(),
            "metadata": self.metadata,
        }

    def _output_results(self, alignment: ParallelAlignment, stats: AlignmentStats, result: Dict[str, Any]) -> None:
        """Write JSON to a file and/or print to the console."""
        if self.config.output_file:
            out = Path(self.config.output_file)
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text(json.dumps(result, indent=2, ensure_ascii=False), encoding="utf-8")
            self._log_progress(f"Results saved to {out}")

        if self.config.output_format == "json":
            self.console.print_json(json.dumps(result, ensure_ascii=False))
        else:
            self.console.print(render_alignment_table(alignment, limit=self.config.row_limit))
            self.console.print(render_stats_table(stats))


def _clip(s: str, width: int = 40) -> str:
    s = s.replace("\n", " ")
    return (s[: width - 1] + "…") if len(s) > width else s


def render_alignment_table(alignment: ParallelAlignment, limit: int = 50) -> Table:
    """Build a rich table of the first ``limit`` alignment rows."""
    shown = min(limit, len(alignment.lines))
    table = Table(title=f"Parallel Alignment ({alignment.strategy}, showing {shown} of {len(alignment.lines)} rows)")
    table.add_column("Row")
    table.add_column("L#")
    table.add_column("Left text")
    table.add_column("Conf")
    table.add_column("R#")
    table.add_column("Right text")
    table.add_column("Type")

    for line in alignment.lines[:limit]:
        table.add_row(
            line.id,
            str(line.left_line_number) if line.left_line_number >= 0 else "—",
            _clip(line.left_text),
            f"{line.confidence:.3f}" if line.type == "aligned" else "—",
            str(line.right_line_number) if line.right_line_number >= 0 else "—",
            _clip(line.right_text),
            line.type,
        )
    return table


def render_stats_table(stats: AlignmentStats) -> Table:
    table = Table(title="Alignment Quality")
    table.add_column("Metric")
    table.add_column("Value")
    for key, value in stats.to_dict().items():
        table.add_row(key, f"{value:.3f}" if isinstance(value, float) else str(value))
    return table
