"""WHO immunization coverage (local CSV files).

Public API:
  - coverage: read_wide_coverage, reshape_coverage, COVERAGE_INPUT
"""

from beyond_ols.datasources.immunization.coverage import (
    COUNTRY_COLUMN,
    COVERAGE_INPUT,
    read_wide_coverage,
    reshape_coverage,
)

__all__ = ["COUNTRY_COLUMN", "COVERAGE_INPUT", "read_wide_coverage", "reshape_coverage"]
