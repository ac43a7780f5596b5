"""
Prefect flow that prepares the workshop datasets.

Builds both snapshots the example documents read:
  - derived/equality.json      state equality-law counts (Poisson example)
  - derived/tetanus_pab.json   PAB coverage + World Bank indicators (Beta/ZOIB)

plus the raw indicator pull at historical/worldbank/wdi.json.

Nothing is written until every step has succeeded, so a failed World Bank
request leaves the previous snapshots untouched.  Each run overwrites them.

Run locally:
    python -m beyond_ols.flows.prepare

Run with Prefect dashboard:
    prefect server start &
    python -m beyond_ols.flows.prepare
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd
from prefect import flow, task

from beyond_ols.analysis import coverage
from beyond_ols.config import DEFAULT_END_YEAR, DEFAULT_EXCLUDED_STATE, DEFAULT_START_YEAR
from beyond_ols.datasources import equality, immunization, worldbank
from beyond_ols.reference.regions import REGION_OVERRIDES
from beyond_ols.store import DataStore

# Relative paths within the store
EQUALITY_PATH = Path("derived/equality.json")
TETANUS_PAB_PATH = Path("derived/tetanus_pab.json")
WDI_PATH = Path("historical/worldbank/wdi.json")


@task(name="load-equality")
def load_equality(equality_csv: Path, excluded_state: str) -> pd.DataFrame:
    """Load state law counts and drop the excluded state."""
    frame = equality.load_equality_index(equality_csv)
    kept = equality.exclude_state(frame, excluded_state)
    print(f"Loaded {len(frame)} states, kept {len(kept)} after excluding {excluded_state!r}")
    return kept


@task(name="fetch-indicators")
def fetch_indicators(start_year: int, end_year: int) -> pd.DataFrame:
    """Fetch population and GDP per capita for all economies from the World Bank."""
    table = worldbank.fetch_indicators(worldbank.INDICATORS, start_year, end_year)
    print(
        f"Fetched {len(table)} country-years for {table['iso3c'].nunique()} economies "
        f"({start_year}-{end_year})"
    )
    return table


@task(name="load-coverage")
def load_coverage(coverage_csv: Path) -> pd.DataFrame:
    """Read the wide PAB coverage file and reshape it to country-years."""
    wide = immunization.read_wide_coverage(coverage_csv)
    long = immunization.reshape_coverage(wide, value_name="prop_pab")
    print(f"Reshaped {len(wide)} countries into {len(long)} country-years")
    return long


@task(name="build-tetanus-pab")
def build_tetanus_pab(pab: pd.DataFrame, indicators: pd.DataFrame) -> pd.DataFrame:
    """Attach indicators, fix region labels, and validate every row."""
    joined = coverage.attach_indicators(pab, indicators)

    unmatched = coverage.unmatched_countries(joined)
    if unmatched:
        print(
            f"{len(unmatched)} country names have no ISO3 code and keep null "
            f"indicators: {', '.join(unmatched)}"
        )

    fixed = coverage.apply_region_overrides(joined, REGION_OVERRIDES)
    return coverage.validate_coverage(fixed)


@task(name="save-snapshots")
def save_snapshots(
    data_dir: Path,
    equality_table: pd.DataFrame,
    tetanus_pab: pd.DataFrame,
    indicators: pd.DataFrame,
    start_year: int,
    end_year: int,
) -> dict[str, Path]:
    """Write all three tables, replacing whatever was there."""
    store = DataStore(data_dir)
    years = {"start_year": start_year, "end_year": end_year}
    return {
        "wdi": store.write_frame(
            WDI_PATH,
            indicators,
            source="api.worldbank.org",
            indicators=worldbank.INDICATORS,
            **years,
        ),
        "equality": store.write_frame(
            EQUALITY_PATH,
            equality_table,
            source="bayesrules::equality_index",
        ),
        "tetanus_pab": store.write_frame(
            TETANUS_PAB_PATH,
            tetanus_pab,
            source="WHO immunization coverage (PAB) + api.worldbank.org",
            **years,
        ),
    }


@flow(name="prepare-data", log_prints=True)
def prepare_all(
    data_dir: Path = Path("data"),
    coverage_csv: Path | None = None,
    start_year: int = DEFAULT_START_YEAR,
    end_year: int = DEFAULT_END_YEAR,
    equality_csv: Path | None = None,
    excluded_state: str = DEFAULT_EXCLUDED_STATE,
) -> dict[str, Any]:
    """
    Build the equality and tetanus_pab snapshots.

    This is the main Prefect flow.  Any failure (missing input file, World
    Bank error, invalid row) aborts the run before the store is touched.
    Input CSVs default to their places in the store's reference tier.
    """
    if start_year > end_year:
        msg = f"start_year ({start_year}) is after end_year ({end_year})"
        raise ValueError(msg)

    reference = DataStore(data_dir).reference
    coverage_csv = coverage_csv or reference / immunization.COVERAGE_INPUT
    equality_csv = equality_csv or reference / equality.EQUALITY_INPUT

    equality_table = load_equality(equality_csv, excluded_state)

    print(f"Fetching World Bank indicators {start_year}-{end_year}...")
    indicators = fetch_indicators(start_year, end_year)

    pab = load_coverage(coverage_csv)
    tetanus_pab = build_tetanus_pab(pab, indicators)

    paths = save_snapshots(
        data_dir, equality_table, tetanus_pab, indicators, start_year, end_year
    )
    for name, path in paths.items():
        print(f"Saved {name} to {path}")

    return {
        "equality_rows": len(equality_table),
        "tetanus_pab_rows": len(tetanus_pab),
        "indicator_rows": len(indicators),
        "unmatched_countries": len(coverage.unmatched_countries(tetanus_pab)),
        "paths": {name: str(path) for name, path in paths.items()},
    }


if __name__ == "__main__":
    result = prepare_all()
    print(f"Flow complete: {result}")
