"""paratext CLI - Command-line interface for parallel-text alignment.

Primary Commands:
  - align: Align two text files (positional, prefix or Needleman-Wunsch)
  - segment: Show how a text file is split under a strategy
  - stats: Quality statistics of a saved alignment JSON
  - navigate: Map a row in one pane to the matching line in the other pane
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from rich import print
from rich.table import Table

from .analysis.alignment import ALIGNMENT_METHODS, get_alignment_stats, get_corresponding_line
from .analysis.segmentation import SEGMENTATION_STRATEGIES, SegmentationConfig, resolve_strategy, segment_text
from .config import DEFAULT_GAP_PENALTY, DEFAULT_MIN_LINE_LENGTH, DEFAULT_MIN_SIMILARITY, DEFAULT_STRATEGY
from .parsers.text import read_text_file
from .pipelines import ParallelTextPipeline, ParallelTextPipelineConfig
from .pipelines.parallel_text_pipeline import render_stats_table
from .util.types import ParallelAlignment


logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
	"""Align two versions of a text for side-by-side reading."""
	if verbose:
		logging.getLogger().setLevel(logging.DEBUG)


def _check_strategy(strategy: str) -> str:
	try:
		return resolve_strategy(strategy)
	except ValueError:
		choices = ", ".join(("auto",) + SEGMENTATION_STRATEGIES)
		raise typer.BadParameter(f"Unknown strategy {strategy!r}; choose from: {choices}")


def _load_alignment(path: str) -> ParallelAlignment:
	p = Path(path)
	if not p.is_file():
		raise typer.BadParameter(f"Alignment file not found: {path}")
	try:
		data = json.loads(p.read_text(encoding="utf-8"))
		if not isinstance(data, dict):
			raise ValueError("top level must be a JSON object")
		# Accept both a bare alignment and the pipeline's {"alignment": ..., "stats": ...} output
		if "alignment" in data:
			data = data["alignment"]
		return ParallelAlignment.from_dict(data)
	except (ValueError, TypeError) as e:
		raise typer.BadParameter(f"Invalid alignment file {path}: {e}") from e


@app.command(name="align")
def align_cmd(
	left: str = typer.Argument(..., help="Left text file (e.g. original)"),
	right: str = typer.Argument(..., help="Right text file (e.g. translation)"),
	strategy: str = typer.Option(DEFAULT_STRATEGY, help="Segmentation: auto, line, smart-line, paragraph, sentence"),
	method: str = typer.Option("positional", help="Alignment: positional, dp, nw"),
	min_line_length: int = typer.Option(DEFAULT_MIN_LINE_LENGTH, help="Smart-line flush length"),
	gap_penalty: float = typer.Option(DEFAULT_GAP_PENALTY, help="Gap penalty for NW alignment"),
	min_sim: float = typer.Option(DEFAULT_MIN_SIMILARITY, help="Hard floor for NW match acceptance (0..1)"),
	limit: int = typer.Option(50, help="Max alignment rows to show"),
	as_json: bool = typer.Option(False, "--json", help="Print JSON instead of tables"),
	out: str | None = typer.Option(None, "--out", help="Write JSON result to this file"),
) -> None:
	"""Align two text files and report alignment quality."""
	_check_strategy(strategy)
	if method not in ALIGNMENT_METHODS:
		raise typer.BadParameter(f"Unknown method {method!r}; choose from: {', '.join(ALIGNMENT_METHODS)}")
	for path in (left, right):
		if not Path(path).is_file():
			raise typer.BadParameter(f"Text file not found: {path}")

	config = ParallelTextPipelineConfig(
		left_path=left,
		right_path=right,
		method=method,
		strategy=strategy,
		min_line_length=min_line_length,
		gap_penalty=gap_penalty,
		min_similarity=min_sim,
		output_format="json" if as_json else "table",
		output_file=out,
		row_limit=limit,
	)
	ParallelTextPipeline(config).run()


@app.command(name="segment")
def segment_cmd(
	file: str = typer.Argument(..., help="Text file to segment"),
	strategy: str = typer.Option(DEFAULT_STRATEGY, help="Segmentation: auto, line, smart-line, paragraph, sentence"),
	min_line_length: int = typer.Option(DEFAULT_MIN_LINE_LENGTH, help="Smart-line flush length"),
	limit: int = typer.Option(100, help="Max segments to show"),
) -> None:
	"""Show the segments a text file is split into."""
	resolved = _check_strategy(strategy)
	if not Path(file).is_file():
		raise typer.BadParameter(f"Text file not found: {file}")

	segments = segment_text(read_text_file(file), resolved, SegmentationConfig(min_line_length=min_line_length))
	table = Table(title=f"Segments ({resolved}, showing {min(limit, len(segments))} of {len(segments)})")
	table.add_column("#")
	table.add_column("Len")
	table.add_column("Text")
	for i, seg in enumerate(segments[:limit]):
		table.add_row(str(i), str(len(seg)), seg if seg else "[dim]<blank>[/dim]")
	print(table)


@app.command(name="stats")
def stats_cmd(
	alignment_file: str = typer.Argument(..., help="Alignment JSON written by 'align --out'"),
	as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
) -> None:
	"""Compute quality statistics for a saved alignment."""
	stats = get_alignment_stats(_load_alignment(alignment_file))
	if as_json:
		print(json.dumps(stats.to_dict(), indent=2))
	else:
		print(render_stats_table(stats))


@app.command(name="navigate")
def navigate_cmd(
	alignment_file: str = typer.Argument(..., help="Alignment JSON written by 'align --out'"),
	index: int = typer.Argument(..., help="Row index in the source pane"),
	from_right: bool = typer.Option(False, "--from-right", help="Source pane is the right one"),
) -> None:
	"""Print the line in the other pane that corresponds to a row."""
	alignment = _load_alignment(alignment_file)
	target = get_corresponding_line(index, alignment, not from_right)
	print(json.dumps({"index": index, "fromLeft": not from_right, "correspondingLine": target}))


if __name__ == "__main__":
	app()
