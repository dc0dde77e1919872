"""Spreadsheet readers under comparison."""

from collections.abc import Callable

from xlsx_bench.readers.base import SpreadsheetReader
from xlsx_bench.readers.calamine_reader import CalamineReader
from xlsx_bench.readers.openpyxl_reader import OpenpyxlReader
from xlsx_bench.readers.pandas_reader import PandasReader

# Registration order is the default measurement order
READERS: dict[str, Callable[[], SpreadsheetReader]] = {
    OpenpyxlReader.name: OpenpyxlReader,
    PandasReader.name: PandasReader,
    CalamineReader.name: CalamineReader,
}


def available_readers() -> list[str]:
    """Names of the registered readers in measurement order."""
    return list(READERS)


def get_reader(name: str) -> SpreadsheetReader:
    """
    Create a registered reader by name.

    Raises:
        ValueError: If no reader is registered under ``name``.
    """
    try:
        factory = READERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown reader: {name}. Expected one of: {', '.join(READERS)}"
        ) from None
    return factory()


__all__ = [
    "READERS",
    "CalamineReader",
    "OpenpyxlReader",
    "PandasReader",
    "SpreadsheetReader",
    "available_readers",
    "get_reader",
]
