"""pandas.read_excel reader."""

import logging
from pathlib import Path
from typing import Any

import pandas as pd
from typing_extensions import override

from xlsx_bench.readers.base import SpreadsheetReader

logger = logging.getLogger(__name__)


class PandasReader(SpreadsheetReader):
    """
    Load a worksheet into a DataFrame with ``pandas.read_excel``.

    The header row becomes the column index.
    """

    name = "pandas"
    distribution = "pandas"

    def __init__(self, engine: str = "openpyxl") -> None:
        """
        Initialize the reader.

        Args:
            engine: Parsing engine passed to ``pandas.read_excel``.
        """
        self.engine = engine

    @override
    def read(self, path: str | Path, sheet: int) -> pd.DataFrame:
        """Read a worksheet into a DataFrame."""
        if sheet < 1:
            raise ValueError(f"Sheet {sheet} out of range (sheets are numbered from 1)")

        frame = pd.read_excel(path, sheet_name=sheet - 1, engine=self.engine)
        logger.debug("pandas read %d rows from %s sheet %d", len(frame), path, sheet)
        return frame

    @override
    def get_metadata(self) -> dict[str, Any]:
        metadata = super().get_metadata()
        metadata["engine"] = self.engine
        return metadata
