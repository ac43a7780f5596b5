"""Hand-made corrections to World Bank region labels."""

from __future__ import annotations

# Country name -> region it should carry. Matched against both the name in
# the coverage file and the World Bank country name.
REGION_OVERRIDES: dict[str, str] = {
    "Viet Nam": "East Asia & Pacific",
}
