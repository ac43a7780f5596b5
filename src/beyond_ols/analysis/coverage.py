"""Join immunization coverage with World Bank indicators.

Turns the long coverage table (one row per country-year) into the
``tetanus_pab`` snapshot: each row gets an ISO3 code from its country name
and, where one exists, the World Bank row for the same ``(year, iso3c)``.

The join is a left join.  Every coverage row survives with at most one
indicator row attached; rows whose name has no ISO3 code keep null economic
fields.  Those rows are listed by ``unmatched_countries`` so the flow can
report them, but they are not dropped and not treated as errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd

from beyond_ols.reference.countries import to_iso3c
from beyond_ols.schemas import CoverageRecord

if TYPE_CHECKING:
    from collections.abc import Mapping

JOIN_KEYS = ["year", "iso3c"]

# Column order of the snapshot
COVERAGE_COLUMNS = list(CoverageRecord.model_fields)


def attach_indicators(coverage: pd.DataFrame, indicators: pd.DataFrame) -> pd.DataFrame:
    """Left-join coverage rows to indicator rows on ``(year, iso3c)``.

    Args:
        coverage: Long coverage table with ``country``, ``year`` and a
            proportion column.
        indicators: Table from ``worldbank.fetch_indicators``, unique on
            ``(iso3c, year)``.  Its ``country`` column is kept as
            ``wb_country``.

    Returns:
        One row per coverage row, in the same order.

    Raises:
        pandas.errors.MergeError: If ``indicators`` has duplicate keys.
    """
    left = coverage.copy()
    left.insert(1, "iso3c", left["country"].map(to_iso3c).astype(object))

    # pandas matches null keys to each other; indicator rows without a
    # code must never pick up unresolved coverage rows.
    right = indicators.rename(columns={"country": "wb_country"})
    right = right.loc[right["iso3c"].notna()]

    return left.merge(right, on=JOIN_KEYS, how="left", validate="many_to_one")


def apply_region_overrides(frame: pd.DataFrame, overrides: Mapping[str, str]) -> pd.DataFrame:
    """Set ``region`` for joined rows whose country name appears in ``overrides``.

    Both the coverage-file name (``country``) and the World Bank name
    (``wb_country``) are checked.  Rows that matched no indicator row keep a
    null region like their other joined fields.
    """
    out = frame.copy()
    if "wb_country" not in out.columns:
        return out

    matched = out["wb_country"].notna()
    out["region"] = out["region"].astype(object)
    for name, region in overrides.items():
        mask = matched & ((out["country"] == name) | (out["wb_country"] == name))
        out.loc[mask, "region"] = region
    return out


def unmatched_countries(frame: pd.DataFrame) -> list[str]:
    """Country names that did not resolve to an ISO3 code, sorted."""
    missing = frame.loc[frame["iso3c"].isna(), "country"]
    return sorted(missing.dropna().unique().tolist())


def validate_coverage(frame: pd.DataFrame) -> pd.DataFrame:
    """Check every row against ``CoverageRecord`` and keep the snapshot columns.

    Raises:
        pydantic.ValidationError: On the first row that breaks a rule.
    """
    out = frame.reindex(columns=COVERAGE_COLUMNS)
    cleaned = out.astype(object).where(out.notna(), None)
    for record in cleaned.to_dict(orient="records"):
        CoverageRecord.model_validate(record)
    return out.reset_index(drop=True)
