"""Tests for the timing harness."""

import math
from pathlib import Path
import tempfile
from typing import Any

import numpy as np
import pytest
from typing_extensions import override

from xlsx_bench.config import BenchmarkConfig
from xlsx_bench.dataset import derive_records, make_source
from xlsx_bench.harness import (
    OBSERVATION_COLUMNS,
    TimingObservation,
    check_fixtures,
    run_benchmark,
    run_reader,
    time_read,
)
from xlsx_bench.readers import OpenpyxlReader, SpreadsheetReader
from xlsx_bench.synthesizer import fixture_path, synthesize

CONFIG = BenchmarkConfig(columns=(2, 3), rows=(4, 5, 6), sheets=10)


class RecordingReader(SpreadsheetReader):
    """Reader that records every call instead of parsing."""

    distribution = "pytest"

    def __init__(self, name: str = "recording", fail_on: int | None = None) -> None:
        self.name = name
        self.fail_on = fail_on
        self.calls: list[tuple[str, int]] = []

    @override
    def read(self, path: str | Path, sheet: int) -> Any:
        self.calls.append((Path(path).name, sheet))
        if sheet == self.fail_on:
            raise ValueError(f"cannot read sheet {sheet}")
        return []


def _touch_fixtures(directory: str, config: BenchmarkConfig) -> None:
    for columns in config.columns:
        for rows in config.rows:
            fixture_path(directory, columns, rows).touch()


def test_time_read_measures_call() -> None:
    """Test time_read returns a non-negative duration and calls the reader once."""
    reader = RecordingReader()

    elapsed = time_read(reader, "file.xlsx", 3)

    assert elapsed >= 0
    assert reader.calls == [("file.xlsx", 3)]


def test_run_reader_visits_grid_in_order() -> None:
    """Test fixtures are visited column count outer, row count middle, sheet inner."""
    reader = RecordingReader()

    with tempfile.TemporaryDirectory() as tmpdir:
        _touch_fixtures(tmpdir, CONFIG)
        observations = run_reader(reader, CONFIG, tmpdir)

    assert len(observations) == CONFIG.total_samples
    assert reader.calls[:2] == [("2col4row.xlsx", 1), ("2col4row.xlsx", 2)]
    assert reader.calls[10] == ("2col5row.xlsx", 1)
    assert reader.calls[-1] == ("3col6row.xlsx", 10)
    assert observations[0] == TimingObservation("recording", 2, 4, 1, observations[0].elapsed)
    assert not any(observation.failed for observation in observations)


def test_run_benchmark_row_count() -> None:
    """Test the raw table has readers x column counts x row counts x sheets rows."""
    readers = [RecordingReader("first"), RecordingReader("second")]

    with tempfile.TemporaryDirectory() as tmpdir:
        _touch_fixtures(tmpdir, CONFIG)
        observations = run_benchmark(readers, CONFIG, tmpdir)

    assert list(observations.columns) == OBSERVATION_COLUMNS
    assert len(observations) == 2 * 2 * 3 * 10
    # Readers are measured in sequence, never interleaved
    assert observations["reader"].tolist() == ["first"] * 60 + ["second"] * 60
    assert observations["error"].isna().all()
    assert (observations["elapsed"] >= 0).all()


def test_run_benchmark_aborts_on_read_failure() -> None:
    """Test a failed read aborts the pass by default."""
    reader = RecordingReader(fail_on=2)

    with tempfile.TemporaryDirectory() as tmpdir:
        _touch_fixtures(tmpdir, CONFIG)
        with pytest.raises(OSError, match="2col4row.xlsx sheet 2"):
            run_benchmark([reader], CONFIG, tmpdir)

    assert len(reader.calls) == 2


def test_run_benchmark_keep_going_records_failures() -> None:
    """Test failed reads are recorded with NaN elapsed and the error message."""
    reader = RecordingReader(fail_on=2)

    with tempfile.TemporaryDirectory() as tmpdir:
        _touch_fixtures(tmpdir, CONFIG)
        observations = run_benchmark([reader], CONFIG, tmpdir, keep_going=True)

    assert len(observations) == CONFIG.total_samples
    failed = observations[observations["error"].notna()]
    assert len(failed) == CONFIG.workbook_count
    assert failed["sheet"].unique().tolist() == [2]
    assert failed["elapsed"].isna().all()
    assert "cannot read sheet 2" in failed["error"].iloc[0]
    assert not math.isnan(observations.loc[0, "elapsed"])


def test_run_benchmark_missing_fixture() -> None:
    """Test missing fixtures abort before any read is timed."""
    reader = RecordingReader()

    with tempfile.TemporaryDirectory() as tmpdir:
        fixture_path(tmpdir, 2, 4).touch()
        with pytest.raises(FileNotFoundError, match="3col6row.xlsx"):
            run_benchmark([reader], CONFIG, tmpdir)

    assert reader.calls == []


def test_check_fixtures_returns_paths() -> None:
    """Test check_fixtures returns one path per (column count, row count)."""
    with tempfile.TemporaryDirectory() as tmpdir:
        _touch_fixtures(tmpdir, CONFIG)
        paths = check_fixtures(CONFIG, tmpdir)

    assert [path.name for path in paths] == [
        "2col4row.xlsx",
        "2col5row.xlsx",
        "2col6row.xlsx",
        "3col4row.xlsx",
        "3col5row.xlsx",
        "3col6row.xlsx",
    ]


def test_run_benchmark_with_real_fixtures() -> None:
    """Test the harness against synthesized workbooks and a real reader."""
    config = BenchmarkConfig(columns=(3,), rows=(5, 8), sheets=10)
    records = derive_records(make_source(np.random.default_rng(0), 100))

    with tempfile.TemporaryDirectory() as tmpdir:
        synthesize(records, config, tmpdir)
        observations = run_benchmark([OpenpyxlReader()], config, tmpdir)

    assert len(observations) == 20
    assert set(observations["rows"]) == {5, 8}
    assert (observations["elapsed"] > 0).all()
