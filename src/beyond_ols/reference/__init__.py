"""Static lookup data.

Reference data that doesn't change with API calls: the country-name lookup
used to key coverage rows, and hand-made region corrections.

Adding a new module:
1. Create ``reference/{name}.py`` with constants/functions
2. Re-export from this ``__init__.py``
"""

from beyond_ols.reference.countries import to_iso3c as to_iso3c
from beyond_ols.reference.regions import REGION_OVERRIDES as REGION_OVERRIDES
