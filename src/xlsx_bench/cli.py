"""Command-line interface for fixture synthesis and reader benchmarking."""

from collections.abc import Callable
import logging
from pathlib import Path
import sys
from typing import Any

import numpy as np
import typer

from xlsx_bench.aggregate import summarize
from xlsx_bench.config import DEFAULT_SEED, DEFAULT_SHEETS, BenchmarkConfig
from xlsx_bench.dataset import derive_records, load_source, make_source
from xlsx_bench.harness import run_benchmark
from xlsx_bench.readers import available_readers, get_reader
from xlsx_bench.report import PLOT_STATISTICS, format_summary, plot_summary
from xlsx_bench.synthesizer import synthesize

app = typer.Typer(add_completion=False)

logger = logging.getLogger(__name__)


def _build_config(
    columns: list[int] | None,
    rows: list[int] | None,
    sheets: int,
    seed: int,
) -> BenchmarkConfig:
    options: dict[str, Any] = {"sheets": sheets, "seed": seed}
    if columns:
        options["columns"] = tuple(columns)
    if rows:
        options["rows"] = tuple(rows)
    return BenchmarkConfig(**options)


def _run_guarded(ctx: typer.Context, action: Callable[[], None]) -> None:
    """Run a command body, turning failures into a message and exit code 1."""
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    try:
        action()
    except FileNotFoundError as e:
        typer.echo(f"Error: File not found: {e}", err=True)
        raise typer.Exit(code=1) from None
    except ImportError as e:
        typer.echo(
            f"Error: Missing dependency: {e}\nInstall with: pip install xlsx-bench",
            err=True,
        )
        raise typer.Exit(code=1) from None
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        if verbose:
            import traceback

            traceback.print_exc(file=sys.stderr)
        raise typer.Exit(code=1) from None


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """Benchmark Python XLSX readers on reproducible synthetic workbooks."""
    # Configure logging
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)
    ctx.obj = {"verbose": verbose}


@app.command("synthesize")
def synthesize_command(
    ctx: typer.Context,
    out_dir: Path = typer.Argument(..., help="Directory to write the fixtures to"),
    source: Path | None = typer.Option(
        None,
        help="Source CSV dataset (default: generate a synthetic supermarket table)",
    ),
    demo_rows: int = typer.Option(
        20000,
        help="Rows of the synthetic source table when no --source is given",
    ),
    seed: int = typer.Option(DEFAULT_SEED, help="Seed of the sampling generator"),
    columns: list[int] | None = typer.Option(None, "--columns", help="Column count (repeatable)"),
    rows: list[int] | None = typer.Option(None, "--rows", help="Row count (repeatable)"),
    sheets: int = typer.Option(DEFAULT_SHEETS, help="Sheets per workbook"),
) -> None:
    """Write one multi-sheet workbook per (column count, row count) pair."""

    def action() -> None:
        config = _build_config(columns, rows, sheets, seed)
        if source is not None:
            records = derive_records(load_source(source))
        else:
            logger.info("No source dataset given, generating %d synthetic rows", demo_rows)
            records = derive_records(make_source(np.random.default_rng(seed), demo_rows))

        written = synthesize(records, config, out_dir)
        typer.echo(f"{len(written)} fixtures written to: {out_dir}", err=True)

    _run_guarded(ctx, action)


@app.command("run")
def run_command(
    ctx: typer.Context,
    fixture_dir: Path = typer.Argument(..., help="Directory holding the fixtures"),
    reader: list[str] | None = typer.Option(
        None,
        "--reader",
        "-r",
        help="Reader to benchmark (repeatable, default: all)",
    ),
    columns: list[int] | None = typer.Option(None, "--columns", help="Column count (repeatable)"),
    rows: list[int] | None = typer.Option(None, "--rows", help="Row count (repeatable)"),
    sheets: int = typer.Option(DEFAULT_SHEETS, help="Sheets per workbook"),
    keep_going: bool = typer.Option(
        False,
        "--keep-going",
        help="Record failed reads instead of aborting",
    ),
    plot_dir: Path | None = typer.Option(
        None,
        help="Directory to write median.png and mean.png to",
    ),
) -> None:
    """Time every reader on every fixture sheet and print the summary."""

    def action() -> None:
        config = _build_config(columns, rows, sheets, DEFAULT_SEED)
        readers = [get_reader(name) for name in (reader or available_readers())]
        for instance in readers:
            logger.info("Reader %s", instance.get_metadata())

        observations = run_benchmark(readers, config, fixture_dir, keep_going=keep_going)
        summary = summarize(observations)
        typer.echo(format_summary(summary))

        if plot_dir is not None:
            for statistic in PLOT_STATISTICS:
                plot_summary(summary, statistic, plot_dir / f"{statistic}.png")
            typer.echo(f"Charts written to: {plot_dir}", err=True)

    _run_guarded(ctx, action)


@app.command("readers")
def readers_command() -> None:
    """List the available readers."""
    for name in available_readers():
        typer.echo(name)


if __name__ == "__main__":
    app()
