"""beyond-ols - dataset preparation for the "Move beyond OLS!" workshop.

Architecture::

    datasources/   Inputs (equality counts and WHO coverage CSVs, World Bank API)
    reference/     Static lookups (country name -> ISO3, region corrections)
    analysis/      Cross-datasource joins (coverage + indicators)
    store.py       Snapshot files with sidecar metadata
    flows/         Prefect orchestration (prepare builds every snapshot)
    services/      Shared utilities (HTTP client with retry)

Data flow: datasources -> analysis -> store (derived/*.json) -> documents
"""

__version__ = "0.1.0"

from beyond_ols.config import Settings
from beyond_ols.schemas import CoverageRecord, StateLaws

__all__ = ["CoverageRecord", "Settings", "StateLaws", "__version__"]
