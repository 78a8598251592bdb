from __future__ import annotations

"""Configuration loading and validation for birthdaybox.

This module loads YAML configuration, applies defaults, and validates
that numbers and paths are sane for the GUI and CLI.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


logger = logging.getLogger(__name__)

DEFAULT_STEPS = 20
DEFAULT_INTERVAL_MS = 100
DEFAULT_SLOT = "birthday_app_history"
DEFAULT_ERROR_MESSAGE = "密码错误，请重试"


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)


def default_config_path() -> Path:
    return Path(__file__).with_name("defaults.yml")


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        cfg = _load_yaml(Path(path))
    else:
        cfg = _load_yaml(default_config_path())
    if not isinstance(cfg, dict):
        logger.warning("Config root is not a mapping, using defaults")
        cfg = {}
    return cfg


def _coerce_int(section: Dict[str, Any], key: str, default: int, minimum: int) -> None:
    raw = section.get(key, default)
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid %s %r, using %d", key, raw, default)
        section[key] = default
        return
    if value < minimum:
        logger.warning("%s must be >= %d (got %d), using %d", key, minimum, value, default)
        value = default
    section[key] = value


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    # Shallow defaults for missing sections
    for section in ("gate", "draw", "storage", "ui", "quotes"):
        if not isinstance(cfg.get(section), dict):
            cfg[section] = {}

    gate = cfg["gate"]
    draw = cfg["draw"]
    storage = cfg["storage"]
    ui = cfg["ui"]
    quotes = cfg["quotes"]

    gate.setdefault("secret", "2025")
    gate.setdefault("error_message", DEFAULT_ERROR_MESSAGE)
    # The passphrase is compared as a string; YAML may hand us an int
    gate["secret"] = str(gate["secret"])

    draw.setdefault("steps", DEFAULT_STEPS)
    draw.setdefault("interval_ms", DEFAULT_INTERVAL_MS)
    _coerce_int(draw, "steps", DEFAULT_STEPS, 0)
    _coerce_int(draw, "interval_ms", DEFAULT_INTERVAL_MS, 0)

    storage.setdefault("path", "~/.birthdaybox/birthday_app_history.json")
    storage.setdefault("slot", DEFAULT_SLOT)

    ui.setdefault("title", "Happy Birthday")
    ui.setdefault("geometry", "720x640")
    ui.setdefault("date_format", "%m月%d日 %H:%M")

    quotes.setdefault("path", None)

    return cfg


def storage_path(cfg: Dict[str, Any]) -> Path:
    return Path(str(cfg["storage"]["path"])).expanduser()
