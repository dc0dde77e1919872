"""python-calamine reader."""

import logging
from pathlib import Path
from typing import Any

from typing_extensions import override

from xlsx_bench.readers.base import SpreadsheetReader

logger = logging.getLogger(__name__)


class CalamineReader(SpreadsheetReader):
    """Load a worksheet with the Rust calamine parser through python-calamine."""

    name = "calamine"
    distribution = "python-calamine"

    def __init__(self) -> None:
        """
        Initialize the reader.

        Raises:
            ImportError: If python-calamine is not installed.
        """
        try:
            import python_calamine
        except ImportError as e:
            raise ImportError(
                "python-calamine is required for CalamineReader. "
                "Install with: pip install python-calamine"
            ) from e

        self._workbook_cls = python_calamine.CalamineWorkbook

    @override
    def read(self, path: str | Path, sheet: int) -> list[list[Any]]:
        """
        Read all rows of a worksheet, header included.

        Returns:
            list[list[Any]]: One list of cell values per row.
        """
        workbook = self._workbook_cls.from_path(str(path))
        position = self._sheet_position(sheet, len(workbook.sheet_names))
        rows = workbook.get_sheet_by_index(position).to_python()

        logger.debug("calamine read %d rows from %s sheet %d", len(rows), path, sheet)
        return rows
