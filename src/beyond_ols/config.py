"""
Application settings.

Values come from the environment (``BEYOND_OLS_`` prefix) or a local ``.env``
file.  Only the CLI reads settings; the preparation flow takes everything as
explicit parameters.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# World Bank indicators are requested for this window
DEFAULT_START_YEAR = 1980
DEFAULT_END_YEAR = 2020

# Outlier with disproportionately many pre-existing laws
DEFAULT_EXCLUDED_STATE = "california"


class Settings(BaseSettings):
    """Runtime configuration for the dataset preparation step."""

    model_config = SettingsConfigDict(
        env_prefix="BEYOND_OLS_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    app_name: str = "beyond-ols"
    app_env: str = "development"
    debug: bool = False

    # Paths; None = the file's place under data_dir/reference/
    data_dir: Path = Path("data")
    coverage_csv: Path | None = None
    equality_csv: Path | None = None

    excluded_state: str = DEFAULT_EXCLUDED_STATE
    start_year: int = DEFAULT_START_YEAR
    end_year: int = DEFAULT_END_YEAR

    @model_validator(mode="after")
    def _check_year_range(self) -> Settings:
        if self.start_year > self.end_year:
            msg = f"start_year ({self.start_year}) is after end_year ({self.end_year})"
            raise ValueError(msg)
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings (read once)."""
    return Settings()
