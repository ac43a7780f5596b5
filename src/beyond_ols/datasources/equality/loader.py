"""State equality-law counts (Poisson example data).

The table is the ``equality_index`` dataset from the bayesrules R package:
one row per state with the number of enacted LGBTQ+ equality laws, the
state's historical voting lean, and its urban population share.  It lives in
the store's reference tier as a CSV exported from R::

    Rscript -e 'write.csv(bayesrules::equality_index,
        "data/reference/equality/equality_index.csv", row.names = FALSE)'
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from beyond_ols.schemas import StateLaws

#: Location below the store's reference tier
EQUALITY_INPUT = Path("equality/equality_index.csv")

COLUMNS = list(StateLaws.model_fields)


def load_equality_index(path: Path) -> pd.DataFrame:
    """
    Load and validate the state equality-law table.

    Args:
        path: CSV export of ``bayesrules::equality_index``.

    Returns:
        DataFrame with the ``StateLaws`` columns, one row per state.

    Raises:
        FileNotFoundError: If the CSV is absent.
        pydantic.ValidationError: If any row breaks the ``StateLaws`` rules.
    """
    if not path.exists():
        msg = f"Equality dataset not found: {path} (export bayesrules::equality_index there)"
        raise FileNotFoundError(msg)

    raw = pd.read_csv(path, dtype={"state": str})
    rows = [StateLaws.model_validate(r) for r in raw.to_dict(orient="records")]

    frame = pd.DataFrame([r.model_dump(mode="json") for r in rows], columns=COLUMNS)
    return frame.astype({"laws": "int64", "gop_2016": "float64", "percent_urban": "float64"})


def exclude_state(frame: pd.DataFrame, state: str) -> pd.DataFrame:
    """Drop the row(s) whose ``state`` equals ``state`` exactly."""
    return frame.loc[frame["state"] != state].reset_index(drop=True)
