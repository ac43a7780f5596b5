"""State-level equality law counts (bayesrules ``equality_index``).

Public API:
  - loader: load_equality_index, exclude_state, EQUALITY_INPUT
"""

from beyond_ols.datasources.equality.loader import (
    EQUALITY_INPUT,
    exclude_state,
    load_equality_index,
)

__all__ = ["EQUALITY_INPUT", "exclude_state", "load_equality_index"]
