"""Country name -> ISO 3166-1 alpha-3 lookup.

Coverage files spell countries the WHO way ("Viet Nam", "Iran (Islamic
Republic of)", "Côte d'Ivoire") while World Bank tables are keyed by ISO3
code.  ``to_iso3c`` bridges the two with ``country_converter``'s regex
classification, the Python counterpart of R's ``countrycode`` dictionary.

Unrecognized names map to None; they are kept in the data and simply never
match a join key.
"""

from __future__ import annotations

from functools import lru_cache

import country_converter as coco

# Returned by coco for unmatched names; never a valid code
_NOT_FOUND = ""


@lru_cache(maxsize=1)
def _converter() -> coco.CountryConverter:
    # Loads coco's country table once per process
    return coco.CountryConverter()


@lru_cache(maxsize=1024)
def to_iso3c(name: str | None) -> str | None:
    """
    Map a country name to its ISO3 code.

    Args:
        name: Country name in any common spelling.

    Returns:
        Three-letter code, or None when no regex matches.
    """
    if not name or not isinstance(name, str) or not name.strip():
        return None
    code = _converter().convert(names=name, src="regex", to="ISO3", not_found=_NOT_FOUND)
    if isinstance(code, list):
        code = code[0] if code else _NOT_FOUND
    return code or None
