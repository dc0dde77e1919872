"""Source and derived record tables for fixture synthesis."""

import logging
from pathlib import Path

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

# Column layout of the supermarket transaction extract the benchmark was designed around
SOURCE_COLUMNS: tuple[str, ...] = (
    "SHOP_WEEK",
    "SHOP_DATE",
    "SHOP_WEEKDAY",
    "SHOP_HOUR",
    "QUANTITY",
    "SPEND",
    "PROD_CODE",
    "PROD_CODE_10",
    "PROD_CODE_20",
    "PROD_CODE_30",
    "PROD_CODE_40",
    "CUST_CODE",
    "CUST_PRICE_SENSITIVITY",
    "CUST_LIFESTAGE",
    "BASKET_ID",
    "BASKET_SIZE",
    "BASKET_PRICE_SENSITIVITY",
    "BASKET_TYPE",
    "BASKET_DOMINANT_MISSION",
    "STORE_CODE",
    "STORE_FORMAT",
    "STORE_REGION",
)

QUANTITY_STATISTICS: tuple[tuple[str, str], ...] = (
    ("MEAN", "mean"),
    ("STDEV", "std"),
    ("MIN", "min"),
    ("MAX", "max"),
)


def load_source(path: str | Path) -> pd.DataFrame:
    """
    Load the source transaction table from a CSV file.

    Empty strings and ``NA`` are read as missing values.

    Args:
        path: Path to the CSV file.

    Returns:
        pd.DataFrame: The source records, one row per transaction line.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    csv_path = Path(path)
    if not csv_path.is_file():
        raise FileNotFoundError(f"Source dataset not found: {path}")

    source = pd.read_csv(csv_path, na_values=["", "NA"], keep_default_na=False)
    logger.info("Loaded source dataset %s (%d rows, %d columns)", csv_path, *source.shape)
    return source


def derive_records(
    source: pd.DataFrame,
    basket_key: str = "BASKET_ID",
    value: str = "SPEND",
    product_key: str = "PROD_CODE",
    quantity: str = "QUANTITY",
) -> pd.DataFrame:
    """
    Extend the source records with per-basket spend share and per-product quantity stats.

    Adds ``TOTAL_SPEND_PER_BASKET`` and ``PERCENT_SPEND_PER_BASKET`` grouped by
    ``basket_key``, then ``MEAN_``/``STDEV_``/``MIN_``/``MAX_`` columns of
    ``quantity`` grouped by ``product_key``. The standard deviation is the
    sample one, so a product seen once gets NaN. A missing value anywhere in a
    group makes that group's aggregates missing. Row order is preserved.

    Raises:
        ValueError: If any of the named columns is missing.
    """
    missing = [name for name in (basket_key, value, product_key, quantity) if name not in source]
    if missing:
        raise ValueError(f"Source dataset is missing required columns: {missing}")

    derived = source.copy()
    totals = source.groupby(basket_key, dropna=False)[value].transform(
        lambda spend: spend.sum(skipna=False)
    )
    derived["TOTAL_SPEND_PER_BASKET"] = totals
    derived["PERCENT_SPEND_PER_BASKET"] = source[value] / totals

    quantities = source.groupby(product_key, dropna=False)[quantity]
    stats = pd.DataFrame(
        {
            f"{label}_{quantity}": quantities.agg(
                lambda group, func=func: getattr(group, func)(skipna=False)
            )
            for label, func in QUANTITY_STATISTICS
        }
    )
    derived = derived.merge(stats, how="left", left_on=product_key, right_index=True)
    derived = derived.reset_index(drop=True)

    logger.info(
        "Derived %d records with %d columns (%d baskets, %d products)",
        len(derived),
        derived.shape[1],
        source[basket_key].nunique(dropna=False),
        len(stats),
    )
    return derived


def make_source(rng: np.random.Generator, n_rows: int) -> pd.DataFrame:
    """
    Build a synthetic transaction table with the supermarket column layout.

    Every random draw comes from ``rng``, so the same generator state always
    yields the same table.
    """
    if n_rows <= 0:
        raise ValueError(f"Row count must be positive: {n_rows}")

    n_baskets = max(1, n_rows // 5)
    n_products = max(1, n_rows // 20)
    n_customers = max(1, n_rows // 10)

    weeks = rng.integers(200607, 200819, size=n_rows)
    products = rng.integers(0, n_products, size=n_rows)
    baskets = rng.integers(0, n_baskets, size=n_rows)

    source = pd.DataFrame(
        {
            "SHOP_WEEK": weeks,
            "SHOP_DATE": 20060000 + weeks % 100 * 100 + rng.integers(1, 29, size=n_rows),
            "SHOP_WEEKDAY": rng.integers(1, 8, size=n_rows),
            "SHOP_HOUR": rng.integers(8, 22, size=n_rows),
            "QUANTITY": rng.integers(1, 13, size=n_rows),
            "SPEND": np.round(rng.gamma(2.0, 1.5, size=n_rows), 2),
            "PROD_CODE": [f"PRD{code:010d}" for code in products],
            "PROD_CODE_10": [f"CL{code % 250:08d}" for code in products],
            "PROD_CODE_20": [f"DEP{code % 90:08d}" for code in products],
            "PROD_CODE_30": [f"G{code % 30:08d}" for code in products],
            "PROD_CODE_40": [f"D{code % 10:08d}" for code in products],
            "CUST_CODE": [f"CUST{code:010d}" for code in rng.integers(0, n_customers, size=n_rows)],
            "CUST_PRICE_SENSITIVITY": rng.choice(["LA", "MM", "UM", "XX"], size=n_rows),
            "CUST_LIFESTAGE": rng.choice(["YA", "OA", "YF", "OF", "PE", "OT", "XX"], size=n_rows),
            "BASKET_ID": 994100100000000 + baskets,
            "BASKET_SIZE": rng.choice(["S", "M", "L"], size=n_rows),
            "BASKET_PRICE_SENSITIVITY": rng.choice(["LA", "MM", "UM"], size=n_rows),
            "BASKET_TYPE": rng.choice(
                ["Small Shop", "Top Up", "Full Shop", "Nursery"], size=n_rows
            ),
            "BASKET_DOMINANT_MISSION": rng.choice(["Fresh", "Grocery", "Mixed", "Nonfood"], size=n_rows),
            "STORE_CODE": [f"STORE{code:05d}" for code in rng.integers(0, 800, size=n_rows)],
            "STORE_FORMAT": rng.choice(["LS", "MS", "SS", "XLS"], size=n_rows),
            "STORE_REGION": rng.choice(["E01", "E02", "N01", "N02", "S01", "W01"], size=n_rows),
        },
        columns=list(SOURCE_COLUMNS),
    )
    logger.debug("Generated synthetic source table with %d rows", n_rows)
    return source
