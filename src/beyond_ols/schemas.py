"""
Domain models for the workshop datasets.

Pydantic models for the rows of both snapshots. Loaders and the assembly step
validate against these before anything is written, so a bad row fails the
whole run instead of leaking into the documents.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

# =============================================================================
# Equality laws (Poisson example)
# =============================================================================


class Historical(StrEnum):
    """Historical presidential voting lean of a state."""

    DEM = "dem"
    GOP = "gop"
    SWING = "swing"


class StateLaws(BaseModel):
    """One state's count of enacted LGBTQ+ equality laws."""

    model_config = {"frozen": True, "str_strip_whitespace": True}

    state: str = Field(..., min_length=1, description="Lower-case state name")
    region: str = Field(..., description="Census region")
    gop_2016: float = Field(..., ge=0, le=100, description="2016 GOP vote share (%)")
    laws: int = Field(..., ge=0, description="Number of enacted equality laws")
    historical: Historical
    percent_urban: float = Field(..., ge=0, le=100)


# =============================================================================
# Tetanus protection at birth (Beta / ZOIB examples)
# =============================================================================


class CoverageRecord(BaseModel):
    """A country-year of PAB coverage joined with World Bank indicators.

    ``prop_pab`` may be exactly 0 or 1; squeezing boundary values is left to
    the documents that fit Beta models.
    """

    model_config = {"frozen": True}

    country: str = Field(..., description="Country name as written in the coverage file")
    iso3c: str | None = Field(default=None, min_length=3, max_length=3)
    year: int
    prop_pab: float | None = Field(default=None, ge=0, le=1)
    population: float | None = Field(default=None, ge=0)
    gdp_per_cap: float | None = None
    region: str | None = None
    iso2c: str | None = None
    income: str | None = None
    lending: str | None = None
    capital: str | None = None
    longitude: float | None = None
    latitude: float | None = None
