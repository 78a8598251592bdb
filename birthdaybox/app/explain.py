from __future__ import annotations

"""Milestone traces for login, draws and history loads.

Traces go to the ``birthdaybox.app.explain`` logger at INFO as one line of
compact JSON. They stay silent unless --explain turns the logger on, so
--verbose alone does not flood the terminal with them.
"""

import json
import logging
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)
logger.setLevel(logging.WARNING)


def enable(flag: bool = True) -> None:
    logger.setLevel(logging.INFO if flag else logging.WARNING)


def trace(event: str, payload: Optional[Dict[str, Any]] = None) -> None:
    if not logger.isEnabledFor(logging.INFO):
        return
    data = json.dumps(payload or {}, ensure_ascii=False, separators=(",", ":"), default=str)
    logger.info("%s :: %s", event, data)
