"""Fixed parameters of a benchmark run."""

from dataclasses import dataclass

DEFAULT_COLUMNS: tuple[int, ...] = (5, 10, 15, 20)
DEFAULT_ROWS: tuple[int, ...] = (100, 500, 1000, 5000, 10000)
DEFAULT_SHEETS = 10
DEFAULT_SEED = 123


@dataclass(frozen=True)
class BenchmarkConfig:
    """
    Grid of sample specifications shared by the synthesizer and the harness.

    Column counts form the outer loop, row counts the middle loop and sheet
    indices (1-based) the inner loop. The seed drives every random draw of a
    synthesis pass.
    """

    columns: tuple[int, ...] = DEFAULT_COLUMNS
    rows: tuple[int, ...] = DEFAULT_ROWS
    sheets: int = DEFAULT_SHEETS
    seed: int = DEFAULT_SEED

    def __post_init__(self) -> None:
        # Accept lists from callers but store tuples so the config stays hashable
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "rows", tuple(self.rows))

        if not self.columns:
            raise ValueError("At least one column count is required")
        if not self.rows:
            raise ValueError("At least one row count is required")
        if any(count <= 0 for count in self.columns):
            raise ValueError(f"Column counts must be positive: {self.columns}")
        if any(count <= 0 for count in self.rows):
            raise ValueError(f"Row counts must be positive: {self.rows}")
        if self.sheets <= 0:
            raise ValueError(f"Sheet count must be positive: {self.sheets}")

    @property
    def workbook_count(self) -> int:
        """Number of fixtures, one per (column count, row count) pair."""
        return len(self.columns) * len(self.rows)

    @property
    def total_samples(self) -> int:
        """Number of sampled sheets across all fixtures."""
        return self.workbook_count * self.sheets
