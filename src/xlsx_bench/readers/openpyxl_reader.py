"""openpyxl read-only reader."""

import logging
from pathlib import Path
from typing import Any

import openpyxl
from typing_extensions import override

from xlsx_bench.readers.base import SpreadsheetReader

logger = logging.getLogger(__name__)


class OpenpyxlReader(SpreadsheetReader):
    """Load a worksheet with openpyxl in read-only, values-only mode."""

    name = "openpyxl"
    distribution = "openpyxl"

    @override
    def read(self, path: str | Path, sheet: int) -> list[tuple[Any, ...]]:
        """
        Read all rows of a worksheet, header included.

        Returns:
            list[tuple[Any, ...]]: One tuple of cell values per row.
        """
        workbook = openpyxl.load_workbook(path, read_only=True, data_only=True, keep_links=False)
        try:
            position = self._sheet_position(sheet, len(workbook.worksheets))
            rows = list(workbook.worksheets[position].values)
        finally:
            workbook.close()

        logger.debug("openpyxl read %d rows from %s sheet %d", len(rows), path, sheet)
        return rows
