"""Abstract base class for spreadsheet readers under comparison."""

from abc import ABC, abstractmethod
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any


class SpreadsheetReader(ABC):
    """
    Abstract base class for spreadsheet readers.

    A reader is a stateless capability: ``read`` loads one sheet of one
    workbook into an in-memory table. Instances share no mutable configuration
    with each other, so the harness can time them back to back.
    """

    #: Identifier used in timing observations and summaries.
    name: str = ""

    #: Distribution whose version is reported in the metadata.
    distribution: str = ""

    @abstractmethod
    def read(self, path: str | Path, sheet: int) -> Any:
        """
        Read one worksheet into memory.

        Args:
            path: Path to the workbook.
            sheet: 1-based worksheet position.

        Returns:
            Any: The reader's native table representation.

        Raises:
            ValueError: If the sheet position does not exist.
            OSError: If the workbook cannot be opened.
        """
        ...

    def get_metadata(self) -> dict[str, Any]:
        """
        Return metadata about the reader.

        Returns:
            dict[str, Any]: Reader name, backing distribution and its version.
        """
        try:
            library_version = version(self.distribution)
        except (PackageNotFoundError, ValueError):
            library_version = "unknown"

        return {
            "name": self.name,
            "library": self.distribution,
            "version": library_version,
        }

    @staticmethod
    def _sheet_position(sheet: int, sheet_count: int) -> int:
        """Convert a 1-based sheet index into a 0-based position, validating range."""
        if not 1 <= sheet <= sheet_count:
            raise ValueError(f"Sheet {sheet} out of range (workbook has {sheet_count} sheets)")
        return sheet - 1
