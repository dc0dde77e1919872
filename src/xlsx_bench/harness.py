"""Wall-clock timing of spreadsheet readers over the fixture grid."""

from collections.abc import Iterable
from dataclasses import asdict, dataclass
import logging
import math
from pathlib import Path
import time

import pandas as pd

from xlsx_bench.config import BenchmarkConfig
from xlsx_bench.readers.base import SpreadsheetReader
from xlsx_bench.synthesizer import fixture_path, iter_sample_specs

logger = logging.getLogger(__name__)

OBSERVATION_COLUMNS = ["reader", "columns", "rows", "sheet", "elapsed", "error"]


@dataclass(frozen=True)
class TimingObservation:
    """
    Elapsed time of one reader on one sheet of one fixture.

    A failed read carries NaN ``elapsed`` and the failure message in ``error``.
    """

    reader: str
    columns: int
    rows: int
    sheet: int
    elapsed: float
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def time_read(reader: SpreadsheetReader, path: str | Path, sheet: int) -> float:
    """Time a single ``reader.read`` call with ``time.perf_counter``."""
    start = time.perf_counter()
    reader.read(path, sheet)
    return time.perf_counter() - start


def check_fixtures(config: BenchmarkConfig, directory: str | Path) -> list[Path]:
    """
    Return the fixture paths for ``config``, all of which must exist.

    Raises:
        FileNotFoundError: If any fixture is missing.
    """
    paths = [fixture_path(directory, columns, rows) for columns in config.columns for rows in config.rows]
    missing = [str(path) for path in paths if not path.is_file()]
    if missing:
        raise FileNotFoundError(f"Missing fixtures: {', '.join(missing)}")
    return paths


def run_reader(
    reader: SpreadsheetReader,
    config: BenchmarkConfig,
    directory: str | Path,
    keep_going: bool = False,
) -> list[TimingObservation]:
    """
    Time ``reader`` once on every (fixture, sheet) pair of the grid.

    Args:
        reader: Reader to measure.
        config: Grid of column counts, row counts and sheets.
        directory: Directory holding the fixtures.
        keep_going: Record read failures as observations with NaN elapsed
            time instead of aborting.

    Returns:
        list[TimingObservation]: One observation per (fixture, sheet), in
            visiting order.

    Raises:
        OSError: If a read fails and ``keep_going`` is false.
    """
    observations: list[TimingObservation] = []
    for spec in iter_sample_specs(config):
        path = fixture_path(directory, spec.columns, spec.rows)
        try:
            elapsed = time_read(reader, path, spec.sheet)
        except Exception as e:
            if not keep_going:
                logger.exception("Error reading %s sheet %d with %s: %s", path, spec.sheet, reader.name, e)
                raise OSError(
                    f"Reader '{reader.name}' failed on {path.name} sheet {spec.sheet}: {e}"
                ) from e
            logger.warning("Reader %s failed on %s sheet %d: %s", reader.name, path.name, spec.sheet, e)
            observations.append(
                TimingObservation(reader.name, spec.columns, spec.rows, spec.sheet, math.nan, str(e))
            )
            continue

        logger.debug("%s %s sheet %d: %.6fs", reader.name, path.name, spec.sheet, elapsed)
        observations.append(
            TimingObservation(reader.name, spec.columns, spec.rows, spec.sheet, elapsed)
        )

    return observations


def run_benchmark(
    readers: Iterable[SpreadsheetReader],
    config: BenchmarkConfig,
    directory: str | Path,
    keep_going: bool = False,
) -> pd.DataFrame:
    """
    Measure every reader in sequence and collect the raw observation table.

    Readers are never interleaved. Each reader's observations are gathered in
    a local list and the table is built once at the end.

    Returns:
        pd.DataFrame: Columns ``reader, columns, rows, sheet, elapsed, error``.

    Raises:
        FileNotFoundError: If a fixture is missing.
        OSError: If a read fails and ``keep_going`` is false.
    """
    check_fixtures(config, directory)

    observations: list[TimingObservation] = []
    for reader in readers:
        logger.info("Benchmarking %s (%d reads)", reader.name, config.total_samples)
        started = time.perf_counter()
        measured = run_reader(reader, config, directory, keep_going=keep_going)
        failures = sum(observation.failed for observation in measured)
        logger.info(
            "Finished %s in %.2fs (%d failures)",
            reader.name,
            time.perf_counter() - started,
            failures,
        )
        observations.extend(measured)

    return pd.DataFrame([asdict(observation) for observation in observations], columns=OBSERVATION_COLUMNS)
