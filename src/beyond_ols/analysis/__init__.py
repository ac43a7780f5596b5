"""Cross-datasource joins.

Each module combines outputs from 2+ datasources into the tables the
workshop documents read.  This is the domain logic layer.

Dependency rule: analysis/ imports from datasources/ and reference/ only.
It never fetches data, touches the store, or uses Prefect.

Modules:
  - coverage: WHO coverage + World Bank indicators -> tetanus_pab table
"""

from beyond_ols.analysis.coverage import (
    COVERAGE_COLUMNS,
    apply_region_overrides,
    attach_indicators,
    unmatched_countries,
    validate_coverage,
)

__all__ = [
    "COVERAGE_COLUMNS",
    "apply_region_overrides",
    "attach_indicators",
    "unmatched_countries",
    "validate_coverage",
]
