"""Printable tables and charts of summarized timings."""

import logging
import math
from pathlib import Path

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
import pandas as pd

logger = logging.getLogger(__name__)

PLOT_STATISTICS = ("median", "mean")


def format_summary(summary: pd.DataFrame) -> str:
    """Render a summary table as fixed-width text."""
    if summary.empty:
        return "No observations."
    return summary.to_string(index=False, float_format=lambda value: f"{value:.6f}")


def build_figure(summary: pd.DataFrame, statistic: str) -> Figure:
    """
    Draw one statistic of the elapsed time against the row count.

    One panel per column count, one line per reader. The figure renders with
    the Agg canvas and leaves the global matplotlib backend untouched.

    Raises:
        ValueError: If the statistic is not plottable or the summary is empty.
    """
    if statistic not in PLOT_STATISTICS:
        raise ValueError(f"Cannot plot '{statistic}'. Expected one of: {', '.join(PLOT_STATISTICS)}")
    if summary.empty:
        raise ValueError("Cannot plot an empty summary")

    column_counts = list(dict.fromkeys(summary["columns"]))
    row_counts = sorted(set(summary["rows"]))
    n_panels = len(column_counts)
    n_cols = min(2, n_panels)
    n_rows = math.ceil(n_panels / n_cols)

    fig = Figure(figsize=(6 * n_cols, 4 * n_rows))
    FigureCanvasAgg(fig)
    axes = fig.subplots(n_rows, n_cols, squeeze=False, sharey=True)
    for ax, columns in zip(axes.flat, column_counts):
        panel = summary[summary["columns"] == columns]
        for reader, lines in panel.groupby("reader", sort=False):
            # Row counts are categories, so they are evenly spaced like the original facets
            points = sorted(
                (row_counts.index(rows), value) for rows, value in zip(lines["rows"], lines[statistic])
            )
            ax.plot(
                [position for position, _ in points],
                [value for _, value in points],
                marker="o",
                label=reader,
            )
        ax.set_title(f"cols: {columns}")
        ax.set_xticks(range(len(row_counts)))
        ax.set_xticklabels([str(rows) for rows in row_counts])
        ax.set_xlabel("Rows")
        ax.set_ylabel("Time (second)")
        ax.grid(True, alpha=0.3)

    for ax in list(axes.flat)[n_panels:]:
        ax.set_visible(False)

    handles, labels = axes.flat[0].get_legend_handles_labels()
    fig.legend(handles, labels, title="Reader", loc="upper right")
    fig.suptitle(f"Elapsed Time ({statistic.capitalize()})")
    fig.tight_layout()
    return fig


def plot_summary(summary: pd.DataFrame, statistic: str, path: str | Path) -> Path:
    """
    Save the chart of one statistic as an image.

    Args:
        summary: Output of ``summarize``.
        statistic: ``median`` or ``mean``.
        path: Image file to write.

    Returns:
        Path: The written image.

    Raises:
        ValueError: If the statistic is not plottable or the summary is empty.
    """
    fig = build_figure(summary, statistic)

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(target, dpi=150)

    logger.info("Saved %s chart to %s", statistic, target)
    return target
