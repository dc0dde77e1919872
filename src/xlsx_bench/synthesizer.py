"""Reproducible workbook fixtures sampled from the derived records."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
import datetime
import logging
import math
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd
import xlsxwriter
from xlsxwriter.exceptions import XlsxWriterException

from xlsx_bench.config import BenchmarkConfig

logger = logging.getLogger(__name__)

FIXTURE_SUFFIX = ".xlsx"
TABLE_STYLE = "Table Style Light 9"

# Pinned document timestamp so the written bytes depend only on the sampled data
FIXTURE_CREATED = datetime.datetime(2020, 1, 1, 0, 0, 0)


@dataclass(frozen=True)
class SampleSpec:
    """One sampled subset: column count, row count and 1-based sheet index."""

    columns: int
    rows: int
    sheet: int

    @property
    def sheet_name(self) -> str:
        return sheet_name(self.sheet)


def sheet_name(index: int) -> str:
    """Worksheet name for a 1-based sheet index."""
    return f"Sheet{index}"


def fixture_path(directory: str | Path, columns: int, rows: int) -> Path:
    """Path of the fixture holding samples of ``columns`` x ``rows``."""
    return Path(directory) / f"{columns}col{rows}row{FIXTURE_SUFFIX}"


def iter_sample_specs(config: BenchmarkConfig) -> Iterator[SampleSpec]:
    """
    Yield every sample specification in the fixed visiting order.

    Column count is the outer loop, row count the middle loop and the sheet
    index the inner loop.
    """
    for columns in config.columns:
        for rows in config.rows:
            for sheet in range(1, config.sheets + 1):
                yield SampleSpec(columns=columns, rows=rows, sheet=sheet)


def sample_frame(
    records: pd.DataFrame,
    columns: int,
    rows: int,
    rng: np.random.Generator,
) -> pd.DataFrame:
    """
    Draw a random projection of ``records``.

    Column positions are drawn first, then row positions, both without
    replacement and both from ``rng``. The draw order is part of the
    reproducibility contract.

    Raises:
        ValueError: If more columns or rows are requested than available.
    """
    n_rows, n_columns = records.shape
    if columns > n_columns:
        raise ValueError(f"Cannot sample {columns} columns from a table of {n_columns}")
    if rows > n_rows:
        raise ValueError(f"Cannot sample {rows} rows from a table of {n_rows}")

    column_positions = rng.choice(n_columns, size=columns, replace=False)
    row_positions = rng.choice(n_rows, size=rows, replace=False)
    return records.iloc[row_positions, column_positions].reset_index(drop=True)


def _cell_value(value: Any) -> Any:
    """Convert a pandas/numpy scalar into a value XlsxWriter can write."""
    if pd.isna(value):
        return None
    if isinstance(value, np.generic):
        value = value.item()
    # Excel has no infinity; a zero-spend basket yields one in the share column
    if isinstance(value, float) and math.isinf(value):
        return None
    return value


def write_workbook(path: str | Path, sheets: Sequence[pd.DataFrame]) -> Path:
    """
    Write each frame as a worksheet holding an Excel table with a header row.

    Missing and infinite values are written as blank cells. Text is stored
    verbatim, never converted to formulas or hyperlinks.

    Raises:
        OSError: If the workbook cannot be written.
    """
    target = Path(path)
    try:
        workbook = xlsxwriter.Workbook(
            str(target),
            {"in_memory": True, "strings_to_formulas": False, "strings_to_urls": False},
        )
        workbook.set_properties({"created": FIXTURE_CREATED})

        for index, frame in enumerate(sheets, 1):
            worksheet = workbook.add_worksheet(sheet_name(index))
            data = [
                [_cell_value(value) for value in row]
                for row in frame.itertuples(index=False, name=None)
            ]
            worksheet.add_table(
                0,
                0,
                len(frame),
                frame.shape[1] - 1,
                {
                    "data": data,
                    "columns": [{"header": str(name)} for name in frame.columns],
                    "style": TABLE_STYLE,
                },
            )

        workbook.close()
    except (OSError, XlsxWriterException) as e:
        logger.exception("Error writing fixture %s: %s", target, e)
        raise OSError(f"Failed to write fixture {target}: {e}") from e

    logger.debug("Wrote %s (%d sheets)", target, len(sheets))
    return target


def synthesize(
    records: pd.DataFrame,
    config: BenchmarkConfig,
    directory: str | Path,
    rng: np.random.Generator | None = None,
) -> list[Path]:
    """
    Write one fixture per (column count, row count) pair of ``config``.

    A single generator seeded from ``config.seed`` is created when ``rng`` is
    not given and is threaded through every draw, so the whole pass is
    reproducible from the seed alone. Any write failure aborts the pass.

    Returns:
        list[Path]: The written fixtures in visiting order.
    """
    if rng is None:
        rng = np.random.default_rng(config.seed)

    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)

    logger.info(
        "Synthesizing %d workbooks x %d sheets into %s (seed=%d)",
        config.workbook_count,
        config.sheets,
        out_dir,
        config.seed,
    )

    written: list[Path] = []
    for columns in config.columns:
        for rows in config.rows:
            sheets = [
                sample_frame(records, columns, rows, rng) for _ in range(config.sheets)
            ]
            written.append(write_workbook(fixture_path(out_dir, columns, rows), sheets))
            logger.info("Fixture %s written", written[-1].name)

    return written
