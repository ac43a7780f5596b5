"""Country metadata (region, income group, capital) from the World Bank."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import pandas as pd

from beyond_ols.datasources.worldbank import client

COUNTRY_COLUMNS = [
    "iso3c",
    "iso2c",
    "country",
    "region",
    "capital",
    "longitude",
    "latitude",
    "income",
    "lending",
]


@dataclass
class CountryInfo:
    """One economy as listed by ``/v2/country``. Aggregates have region "Aggregates"."""

    iso3c: str
    iso2c: str | None
    country: str
    region: str | None
    capital: str | None
    longitude: float | None
    latitude: float | None
    income: str | None
    lending: str | None


def _label(record: dict[str, Any], key: str) -> str | None:
    value = (record.get(key) or {}).get("value")
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _coordinate(raw: Any) -> float | None:
    try:
        return float(raw) if raw not in (None, "") else None
    except (TypeError, ValueError):
        return None


def parse_country(record: dict[str, Any]) -> CountryInfo:
    """Parse a single ``/v2/country`` record."""
    return CountryInfo(
        iso3c=record.get("id", ""),
        iso2c=record.get("iso2Code") or None,
        country=record.get("name", ""),
        region=_label(record, "region"),
        capital=record.get("capitalCity") or None,
        longitude=_coordinate(record.get("longitude")),
        latitude=_coordinate(record.get("latitude")),
        income=_label(record, "incomeLevel"),
        lending=_label(record, "lendingType"),
    )


def fetch_countries() -> list[CountryInfo]:
    """Fetch metadata for every economy the API knows, aggregates included."""
    return [parse_country(r) for r in client.get_all_pages("country")]


def countries_to_frame(countries: list[CountryInfo]) -> pd.DataFrame:
    """Tabulate country metadata, one row per ISO3 code."""
    frame = pd.DataFrame([asdict(c) for c in countries], columns=COUNTRY_COLUMNS)
    return frame.drop_duplicates(subset="iso3c").reset_index(drop=True)
