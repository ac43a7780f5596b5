"""Indicator time series (population, GDP per capita) from the World Bank."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import pandas as pd

from beyond_ols.datasources.worldbank import client
from beyond_ols.datasources.worldbank.countries import (
    COUNTRY_COLUMNS,
    countries_to_frame,
    fetch_countries,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from beyond_ols.datasources.worldbank.countries import CountryInfo


@dataclass
class IndicatorValue:
    """A single country-year observation of one indicator."""

    iso3c: str
    country: str
    year: int
    value: float | None


def parse_indicator_value(record: dict[str, Any]) -> IndicatorValue | None:
    """Parse one ``/v2/country/all/indicator/{code}`` record.

    Returns None for records without an ISO3 code (a few aggregates), since
    they can never be join keys.
    """
    iso3c = (record.get("countryiso3code") or "").strip()
    if not iso3c:
        return None
    raw = record.get("value")
    return IndicatorValue(
        iso3c=iso3c,
        country=(record.get("country") or {}).get("value", ""),
        year=int(record["date"]),
        value=float(raw) if raw is not None else None,
    )


def fetch_indicator(code: str, start: int, end: int) -> list[IndicatorValue]:
    """
    Fetch one indicator for all countries over a year range.

    Args:
        code: World Bank indicator code (e.g. ``"SP.POP.TOTL"``).
        start: First year (inclusive).
        end: Last year (inclusive).

    Returns:
        Observations for every economy and year the API returns.
    """
    records = client.get_all_pages(
        f"country/all/indicator/{code}",
        params={"date": f"{start}:{end}"},
    )
    parsed = (parse_indicator_value(r) for r in records)
    return [v for v in parsed if v is not None]


def build_indicator_table(
    values: Mapping[str, list[IndicatorValue]],
    countries: list[CountryInfo],
) -> pd.DataFrame:
    """Combine per-indicator series into one row per ``(iso3c, year)``.

    Each key of ``values`` becomes a column.  Country metadata is attached by
    ISO3 code; the country name falls back to the one on the indicator
    records when the economy is missing from the metadata listing.
    """
    keys = ["iso3c", "year"]
    names: dict[str, str] = {}
    table: pd.DataFrame | None = None

    for column, series in values.items():
        for v in series:
            names.setdefault(v.iso3c, v.country)
        frame = pd.DataFrame(
            [(v.iso3c, v.year, v.value) for v in series],
            columns=[*keys, column],
        ).astype({column: "float64"})
        frame = frame.drop_duplicates(subset=keys)
        table = frame if table is None else table.merge(frame, on=keys, how="outer")

    if table is None:
        table = pd.DataFrame(columns=keys)

    meta = countries_to_frame(countries)
    table = table.merge(meta, on="iso3c", how="left", validate="many_to_one")
    table["country"] = table["country"].fillna(table["iso3c"].map(names))
    table["year"] = table["year"].astype("int64")

    ordered = [
        "iso3c",
        "iso2c",
        "country",
        "year",
        *values.keys(),
        *(c for c in COUNTRY_COLUMNS if c not in {"iso3c", "iso2c", "country"}),
    ]
    return table[ordered].sort_values(keys, kind="stable").reset_index(drop=True)


def fetch_indicators(
    indicators: Mapping[str, str] | None = None,
    start: int = 1980,
    end: int = 2020,
) -> pd.DataFrame:
    """
    Fetch several indicators plus country metadata as one wide table.

    Args:
        indicators: Column name -> indicator code (default ``client.INDICATORS``).
        start: First year (inclusive).
        end: Last year (inclusive).

    Returns:
        DataFrame keyed by ``(iso3c, year)`` with one column per indicator and
        the country metadata columns (region, income, ...).
    """
    indicators = indicators or client.INDICATORS
    values = {name: fetch_indicator(code, start, end) for name, code in indicators.items()}
    return build_indicator_table(values, fetch_countries())
