"""WHO immunization coverage files (wide CSV, one column per year).

The files come from the WHO immunization coverage dataset as mirrored on
Kaggle (https://www.kaggle.com/datasets/lsind18/who-immunization-coverage):
a ``Country`` column followed by one integer-percentage column per year.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

COUNTRY_COLUMN = "Country"

#: Location below the store's reference tier
COVERAGE_INPUT = Path("immunizations/PAB.csv")


def read_wide_coverage(path: Path) -> pd.DataFrame:
    """
    Read a wide coverage CSV.

    Args:
        path: Local CSV path (e.g. ``PAB.csv``).

    Returns:
        DataFrame with ``Country`` plus one column per year, values in percent.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the ``Country`` column is missing.
    """
    if not path.exists():
        msg = f"Coverage file not found: {path}"
        raise FileNotFoundError(msg)

    wide = pd.read_csv(path, dtype={COUNTRY_COLUMN: str}, encoding="utf-8")
    if COUNTRY_COLUMN not in wide.columns:
        msg = f"{path} has no {COUNTRY_COLUMN!r} column (got {list(wide.columns)})"
        raise ValueError(msg)
    return wide


def reshape_coverage(wide: pd.DataFrame, value_name: str = "prop_pab") -> pd.DataFrame:
    """Pivot a wide coverage table to one row per ``(country, year)``.

    Percentages become proportions (``value / 100``).  Blank cells are kept as
    missing proportions rather than dropped.  Rows come out in input row
    order, then year-column order.

    Args:
        wide: Output of ``read_wide_coverage``.
        value_name: Name of the proportion column.

    Returns:
        DataFrame with columns ``country``, ``year`` (int), ``value_name``.
    """
    year_columns = [c for c in wide.columns if c != COUNTRY_COLUMN]
    try:
        years = [int(str(c).strip()) for c in year_columns]
    except ValueError as e:
        msg = f"Non-year column in coverage table: {e}"
        raise ValueError(msg) from None

    n_countries = len(wide)
    values = wide[year_columns].apply(pd.to_numeric, errors="coerce").to_numpy(dtype="float64")

    long = pd.DataFrame(
        {
            "country": wide[COUNTRY_COLUMN].repeat(len(years)).to_numpy(),
            "year": years * n_countries,
            value_name: values.reshape(-1) / 100,
        }
    )
    return long.astype({"year": "int64"})
