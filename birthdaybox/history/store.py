from __future__ import annotations

"""Durable JSON store for per-category draw history.

One file holds the whole document:

    {"JOY": [{"id": "...", "text": "...", "timestamp": 1700000000000}], "ANGER": [], ...}

Notes:
- Records are append-only; oldest first.
- The whole document is rewritten after every append.
- An absent or unreadable file loads as six empty lists.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Tuple

from pydantic import ValidationError

from ..app.explain import trace as xtrace
from ..quotes.catalog import Category
from .schema import History, QuoteRecord, dump_history, empty_history, parse_history


logger = logging.getLogger(__name__)


class HistoryStore:
    def __init__(self, path: Path | str, *, slot: str = "birthday_app_history") -> None:
        self.path = Path(path)
        self.slot = slot
        self._history: History = empty_history()

    def load(self) -> History:
        """Rehydrate from disk, degrading to the empty default on any problem."""
        self._history = self._read()
        xtrace("history_loaded", {c.value: len(v) for c, v in self._history.items()})
        return self.snapshot_lists()

    def _read(self) -> History:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return empty_history()
        except OSError as exc:
            logger.warning("Could not read history in %s (%s): %s", self.path, self.slot, exc)
            return empty_history()
        try:
            return parse_history(json.loads(raw.decode("utf-8")))
        except (ValidationError, ValueError, RecursionError) as exc:
            # JSONDecodeError and UnicodeDecodeError are ValueErrors
            logger.warning("Discarding unreadable history in %s (%s): %s", self.path, self.slot, exc)
            return empty_history()

    def append(self, category: Category, record: QuoteRecord) -> None:
        self._history[Category(category)].append(record)
        self.save()

    def all(self, category: Category) -> Tuple[QuoteRecord, ...]:
        return tuple(self._history[Category(category)])

    def snapshot(self) -> Dict[Category, Tuple[QuoteRecord, ...]]:
        return {c: tuple(v) for c, v in self._history.items()}

    def snapshot_lists(self) -> History:
        return {c: list(v) for c, v in self._history.items()}

    def counts(self) -> Dict[Category, int]:
        return {c: len(v) for c, v in self._history.items()}

    def save(self, history: Optional[History] = None) -> bool:
        """Persist the full document; returns False if the write failed.

        A failed write leaves the previous file untouched.
        """
        if history is not None:
            self._history = {c: list(history.get(c, [])) for c in Category}
        payload = json.dumps(dump_history(self._history), ensure_ascii=False, separators=(",", ":"))
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=f".{self.slot}.", suffix=".tmp", dir=str(self.path.parent))
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp, self.path)
            except OSError:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except OSError as exc:
            logger.warning("Could not write history to %s: %s", self.path, exc)
            return False
        return True
