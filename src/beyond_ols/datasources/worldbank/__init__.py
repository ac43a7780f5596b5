"""World Bank Open Data source (World Development Indicators).

Fetches economic indicators and country metadata from the World Bank API v2
(free, no API key).  Transient failures are retried by the shared HTTP
session; anything else propagates and aborts the run.

Public API:
  - client: API URL, INDICATORS, WorldBankError, paginated GET
  - countries: CountryInfo, fetch_countries
  - indicators: IndicatorValue, fetch_indicator, fetch_indicators
"""

from beyond_ols.datasources.worldbank.client import (
    INDICATORS,
    WORLD_BANK_API,
    WorldBankError,
)
from beyond_ols.datasources.worldbank.countries import CountryInfo, fetch_countries
from beyond_ols.datasources.worldbank.indicators import (
    IndicatorValue,
    build_indicator_table,
    fetch_indicator,
    fetch_indicators,
)

__all__ = [
    "INDICATORS",
    "WORLD_BANK_API",
    "CountryInfo",
    "IndicatorValue",
    "WorldBankError",
    "build_indicator_table",
    "fetch_countries",
    "fetch_indicator",
    "fetch_indicators",
]
