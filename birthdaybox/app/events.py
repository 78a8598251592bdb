from __future__ import annotations

"""Tiny pub/sub event bus between the core and the presentation shell."""

import logging
from typing import Any, Callable, Dict, List


logger = logging.getLogger(__name__)


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Callable[[Any], None]]] = {}

    def subscribe(self, event: str, handler: Callable[[Any], None]) -> None:
        self._subs.setdefault(event, []).append(handler)

    def emit(self, event: str, payload: Any) -> None:
        for h in list(self._subs.get(event, [])):
            try:
                h(payload)
            except Exception:
                # One bad subscriber must not starve the others
                logger.exception("Handler for %r failed", event)
