"""Tests for the spreadsheet readers."""

from pathlib import Path
import tempfile
from typing import Any

import pandas as pd
import pytest
from typing_extensions import override

from xlsx_bench.readers import (
    CalamineReader,
    OpenpyxlReader,
    PandasReader,
    SpreadsheetReader,
    available_readers,
    get_reader,
)
from xlsx_bench.synthesizer import write_workbook


def _write_fixture(directory: str) -> Path:
    first = pd.DataFrame({"A": [1, 2, 3], "B": ["x", "y", "z"]})
    second = pd.DataFrame({"C": [1.5, 2.5], "D": [10, 20], "E": ["p", "q"]})
    return write_workbook(Path(directory) / "readers.xlsx", [first, second])


def test_spreadsheet_reader_is_abstract() -> None:
    """Test that SpreadsheetReader cannot be instantiated."""
    with pytest.raises(TypeError):
        SpreadsheetReader()  # type: ignore[abstract]


def test_spreadsheet_reader_metadata() -> None:
    """Test base metadata reports name, library and version."""

    class NullReader(SpreadsheetReader):
        name = "null"
        distribution = "no-such-distribution-xyz"

        @override
        def read(self, path: str | Path, sheet: int) -> Any:
            return None

    metadata = NullReader().get_metadata()
    assert metadata == {"name": "null", "library": "no-such-distribution-xyz", "version": "unknown"}


@pytest.mark.parametrize("reader_cls", [OpenpyxlReader, CalamineReader])
def test_row_readers_read_each_sheet(reader_cls: type[SpreadsheetReader]) -> None:
    """Test row-based readers return header plus data rows for a 1-based sheet."""
    reader = reader_cls()

    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write_fixture(tmpdir)

        first = [list(row) for row in reader.read(path, 1)]
        second = [list(row) for row in reader.read(path, 2)]

    assert first[0] == ["A", "B"]
    assert len(first) == 4
    assert [row[1] for row in first[1:]] == ["x", "y", "z"]
    assert second[0] == ["C", "D", "E"]
    assert len(second) == 3
    assert second[1][0] == pytest.approx(1.5)


def test_pandas_reader_reads_sheet() -> None:
    """Test the pandas reader returns a frame with the header as columns."""
    reader = PandasReader()

    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write_fixture(tmpdir)
        frame = reader.read(path, 2)

    assert list(frame.columns) == ["C", "D", "E"]
    assert frame.shape == (2, 3)
    assert frame["D"].tolist() == [10, 20]


def test_pandas_reader_metadata_includes_engine() -> None:
    """Test the pandas reader reports its engine."""
    metadata = PandasReader(engine="openpyxl").get_metadata()

    assert metadata["name"] == "pandas"
    assert metadata["engine"] == "openpyxl"


@pytest.mark.parametrize("reader_cls", [OpenpyxlReader, CalamineReader, PandasReader])
@pytest.mark.parametrize("sheet", [0, 3])
def test_readers_reject_missing_sheet(reader_cls: type[SpreadsheetReader], sheet: int) -> None:
    """Test out-of-range sheet positions raise ValueError."""
    reader = reader_cls()

    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write_fixture(tmpdir)
        with pytest.raises(ValueError):
            reader.read(path, sheet)


@pytest.mark.parametrize("reader_cls", [OpenpyxlReader, CalamineReader, PandasReader])
def test_readers_fail_on_invalid_file(reader_cls: type[SpreadsheetReader]) -> None:
    """Test a corrupt workbook surfaces as an exception, never as a table."""
    reader = reader_cls()

    with tempfile.NamedTemporaryFile(mode="wb", suffix=".xlsx", delete=False) as f:
        f.write(b"not a valid xlsx file")
        invalid_path = f.name

    try:
        with pytest.raises(Exception):
            reader.read(invalid_path, 1)
    finally:
        Path(invalid_path).unlink()


def test_registry_lists_readers_in_order() -> None:
    """Test the registry exposes the readers in measurement order."""
    assert available_readers() == ["openpyxl", "pandas", "calamine"]


def test_get_reader_creates_instances() -> None:
    """Test readers are created by name as independent instances."""
    first = get_reader("openpyxl")
    second = get_reader("openpyxl")

    assert isinstance(first, OpenpyxlReader)
    assert first is not second
    assert isinstance(get_reader("pandas"), PandasReader)
    assert isinstance(get_reader("calamine"), CalamineReader)


def test_get_reader_unknown_name() -> None:
    """Test unknown reader names are rejected."""
    with pytest.raises(ValueError, match="Unknown reader"):
        get_reader("xlrd")
