from __future__ import annotations

"""Pydantic models for the persisted draw history."""

import time
from typing import Any, Callable, Dict, List, Mapping, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from ..quotes.catalog import Category


class QuoteRecord(BaseModel):
    """One committed draw. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    text: str
    timestamp: int = Field(ge=0)


History = Dict[Category, List[QuoteRecord]]


def now_ms() -> int:
    return int(time.time() * 1000)


def new_record_id(ts_ms: int) -> str:
    """Creation time prefix plus a short random suffix."""
    return f"{ts_ms}{uuid4().hex[:9]}"


def make_record(text: str, clock: Optional[Callable[[], int]] = None) -> QuoteRecord:
    ts = int((clock or now_ms)())
    return QuoteRecord(id=new_record_id(ts), text=text, timestamp=ts)


def empty_history() -> History:
    return {c: [] for c in Category}


def parse_history(raw: Any) -> History:
    """Validate a decoded JSON document into a History.

    Unknown category keys are ignored and missing ones default to empty.
    Raises ValueError (pydantic's ValidationError included) on a bad shape.
    """
    if not isinstance(raw, dict):
        raise ValueError(f"history root must be an object, got {type(raw).__name__}")
    history = empty_history()
    for cat in Category:
        items = raw.get(cat.value)
        if items is None:
            continue
        if not isinstance(items, list):
            raise ValueError(f"history for {cat.value} must be a list")
        history[cat] = [QuoteRecord.model_validate(item) for item in items]
    return history


def dump_history(history: Mapping[Category, List[QuoteRecord]]) -> Dict[str, List[Dict[str, Any]]]:
    """Serializable document with categories in enum order."""
    return {cat.value: [r.model_dump() for r in history.get(cat, [])] for cat in Category}
