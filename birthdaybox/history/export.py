from __future__ import annotations

"""Tabular view of draw history and NDJSON export."""

from pathlib import Path
from typing import List, Mapping, Sequence

import pandas as pd

from ..quotes.catalog import Category
from .schema import QuoteRecord


COLUMNS = ["category", "id", "text", "timestamp", "drawn_at"]


def _empty_df() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "category": pd.Series(dtype="string"),
            "id": pd.Series(dtype="string"),
            "text": pd.Series(dtype="string"),
            "timestamp": pd.Series(dtype="int64"),
            "drawn_at": pd.Series(dtype=pd.DatetimeTZDtype(tz="UTC")),
        }
    )


def history_frame(history: Mapping[Category, Sequence[QuoteRecord]]) -> pd.DataFrame:
    """Flatten history into one row per record, sorted by timestamp.

    Adds:
    - drawn_at: tz-aware UTC datetime derived from timestamp (ms)
    """
    rows: List[dict] = []
    for cat in Category:
        for r in history.get(cat, ()):
            rows.append({"category": cat.value, "id": r.id, "text": r.text, "timestamp": r.timestamp})
    if not rows:
        return _empty_df()
    df = pd.DataFrame(rows)
    df = df.astype({"category": "string", "id": "string", "text": "string", "timestamp": "int64"})
    df["drawn_at"] = pd.to_datetime(df["timestamp"], unit="ms", utc=True)
    return df.sort_values("timestamp", kind="stable").reset_index(drop=True)[COLUMNS]


def counts_by_category(df: pd.DataFrame) -> pd.Series:
    """Draw counts for all six categories, zeros included."""
    counts = df.groupby("category").size() if not df.empty else pd.Series(dtype="int64")
    return counts.reindex([c.value for c in Category], fill_value=0).astype("int64")


def export_ndjson(df: pd.DataFrame, out_path: Path) -> None:
    """Export a DataFrame to line-delimited JSON (NDJSON)."""
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_json(out_path, orient="records", lines=True, date_format="iso", force_ascii=False)
