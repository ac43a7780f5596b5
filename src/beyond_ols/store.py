"""Snapshot store for the prepared datasets.

Tables are written as JSON records under a base directory organized by tier:
  - reference/: Local inputs read by the flow (coverage and equality CSVs)
  - historical/: Raw pulls from remote sources (World Bank indicator table)
  - derived/: Snapshots the workshop documents read (equality, tetanus_pab)

The data file holds only the table so that identical inputs give
byte-identical files.  Run metadata (source, ``fetched_at``, query params,
row count) lives in a sidecar ``.meta.json`` next to it.  Writes overwrite
whatever was there; there is no versioning.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from io import StringIO
from typing import TYPE_CHECKING, Any

import pandas as pd

if TYPE_CHECKING:
    from pathlib import Path

# Decimal places kept for floats; pandas allows at most 15
JSON_DOUBLE_PRECISION = 15


class DataStore:
    """Manages read/write of table snapshots with sidecar metadata."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.reference = base_dir / "reference"

    def write_frame(
        self,
        path: Path,
        frame: pd.DataFrame,
        source: str,
        **params: Any,
    ) -> Path:
        """Write a table as JSON records plus a ``.meta.json`` sidecar.

        Args:
            path: Relative path under base_dir (e.g. ``derived/equality.json``).
            frame: Table to serialize. Missing values become ``null``.
            source: Data source identifier (e.g. ``"api.worldbank.org"``).
            **params: Extra metadata fields (year range, indicators, etc.).

        Returns:
            Absolute path of the written data file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)

        text = frame.to_json(
            orient="records",
            indent=2,
            double_precision=JSON_DOUBLE_PRECISION,
            force_ascii=False,
        )
        full.write_text(f"{text}\n", encoding="utf-8")

        meta: dict[str, Any] = {
            "source": source,
            "fetched_at": datetime.now(UTC).isoformat(),
            "rows": len(frame),
            "columns": list(frame.columns),
        }
        if params:
            meta.update(params)

        with self._sidecar(full).open("w", encoding="utf-8") as f:
            json.dump({"meta": meta}, f, indent=2, default=str)

        return full

    def read_frame(self, path: Path) -> pd.DataFrame | None:
        """Read a table written by ``write_frame``, or None if missing."""
        full = self._resolve(path)
        if not full.exists():
            return None
        text = full.read_text(encoding="utf-8")
        return pd.read_json(StringIO(text), orient="records", convert_dates=False)

    def read_meta(self, path: Path) -> dict[str, Any]:
        """Read sidecar metadata for a stored table (empty dict if absent)."""
        sidecar = self._sidecar(self._resolve(path))
        if not sidecar.exists():
            return {}
        with sidecar.open(encoding="utf-8") as f:
            result: dict[str, Any] = json.load(f)
        return result.get("meta", {})

    def _resolve(self, path: Path) -> Path:
        full = self.base / path if not path.is_absolute() else path
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg) from None
        return full

    @staticmethod
    def _sidecar(full: Path) -> Path:
        return full.with_suffix(full.suffix + ".meta.json")
