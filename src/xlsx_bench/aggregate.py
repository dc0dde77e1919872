"""Reduction of raw timing observations into summary statistics."""

import logging

import pandas as pd

logger = logging.getLogger(__name__)

GROUP_KEYS = ["reader", "columns", "rows"]
STATISTICS = ["mean", "std", "min", "median", "max"]
SUMMARY_COLUMNS = GROUP_KEYS + STATISTICS + ["failures"]


def summarize(observations: pd.DataFrame) -> pd.DataFrame:
    """
    Summarize elapsed times per (reader, column count, row count).

    Groups appear in first-seen order and only keys present in the input get
    a row. ``std`` is the sample standard deviation (n-1), so a group with a
    single observation yields NaN rather than an error. Failed reads carry NaN
    elapsed times; they are left out of the statistics and counted in
    ``failures``.

    Args:
        observations: Table with at least ``reader``, ``columns``, ``rows``
            and ``elapsed`` columns.

    Returns:
        pd.DataFrame: One row per key with ``mean, std, min, median, max`` and
            ``failures``.
    """
    missing = [name for name in GROUP_KEYS + ["elapsed"] if name not in observations]
    if missing:
        raise ValueError(f"Observation table is missing columns: {missing}")

    if observations.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    grouped = observations.groupby(GROUP_KEYS, sort=False, observed=True)["elapsed"]
    summary = grouped.agg(STATISTICS)
    summary["failures"] = grouped.apply(lambda elapsed: int(elapsed.isna().sum()))
    summary = summary.reset_index()

    logger.debug("Summarized %d observations into %d groups", len(observations), len(summary))
    return summary[SUMMARY_COLUMNS]
