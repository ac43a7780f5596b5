"""Input data sources.

Each subdirectory is one source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, pagination (remote sources)
    └── {feature}.py      # Load/fetch functions (one per endpoint/concept)

Current sources:
  - equality/     bayesrules equality_index export (Poisson example)
  - immunization/ Local WHO coverage CSVs (Beta / ZOIB examples)
  - worldbank/    World Bank indicators and country metadata (remote)

Adding a new datasource
-----------------------
1. Create ``datasources/{name}/`` with the files above.  Remote sources build
   their own session in ``client.py`` with a retry policy for that service::

       from beyond_ols.services.http import create_session

       session = create_session(retry=SOURCE_RETRY, timeout=30)

       def fetch_something(...) -> dict[str, Any]:
           resp = session.get(API_URL, params={...})
           resp.raise_for_status()
           return resp.json()

2. Return DataFrames (or dataclasses that ``analysis/`` turns into them).

3. Re-export public API in ``__init__.py`` with ``__all__``.

4. Wire into ``flows/prepare.py``: add a ``@task`` for the load/fetch and
   write the result with ``store.write_frame(...)`` at the end of the flow.

5. Add tests in ``tests/test_{name}.py``.
"""
