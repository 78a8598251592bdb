from __future__ import annotations

"""Quote catalog loader (YAML).

Loads the per-category quote pools and display metadata from a YAML
resource. Both are static and read-only once loaded.
"""

import enum
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml


logger = logging.getLogger(__name__)


class Category(str, enum.Enum):
    JOY = "JOY"
    ANGER = "ANGER"
    SORROW = "SORROW"
    FEAR = "FEAR"
    BIRTHDAY = "BIRTHDAY"
    ANSWERS = "ANSWERS"


# The four corner tiles on the main screen
EMOTIONS: Tuple[Category, ...] = (Category.JOY, Category.ANGER, Category.SORROW, Category.FEAR)


class CatalogError(ValueError):
    """Raised when the quotes resource is missing or malformed."""


@dataclass(frozen=True)
class CategoryMeta:
    label: str
    icon: str
    title: str
    hint: str = ""
    color: str = "#ffffff"
    accent: str = "#78716c"


def parse_category(value: str) -> Category:
    try:
        return Category(str(value).strip().upper())
    except ValueError:
        raise ValueError(f"Unknown category: {value}") from None


def _default_quotes_path() -> str:
    return str(Path(__file__).resolve().parents[1] / "resources" / "quotes.yml")


def _load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise CatalogError(f"Quotes resource {path} must be a mapping")
    return data


class Catalog:
    """Read-only Quote Store plus Category Configuration."""

    def __init__(self, pools: Mapping[Category, List[str]], metas: Mapping[Category, CategoryMeta]) -> None:
        self._pools: Dict[Category, Tuple[str, ...]] = {c: tuple(pools.get(c, ())) for c in Category}
        missing = [c.value for c in Category if c not in metas]
        if missing:
            raise CatalogError(f"Missing metadata for categories: {', '.join(missing)}")
        self._metas: Dict[Category, CategoryMeta] = dict(metas)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Catalog":
        cats = data.get("categories")
        if not isinstance(cats, dict):
            raise CatalogError("Quotes resource has no 'categories' mapping")
        pools: Dict[Category, List[str]] = {}
        metas: Dict[Category, CategoryMeta] = {}
        for cat in Category:
            node = cats.get(cat.value)
            if not isinstance(node, dict):
                raise CatalogError(f"Quotes resource is missing category {cat.value}")
            quotes = node.get("quotes") or []
            if not isinstance(quotes, list):
                raise CatalogError(f"quotes for {cat.value} must be a list")
            pools[cat] = [str(q) for q in quotes]
            metas[cat] = CategoryMeta(
                label=str(node.get("label", cat.value)),
                icon=str(node.get("icon", "")),
                title=str(node.get("title", cat.value)),
                hint=str(node.get("hint", "")),
                color=str(node.get("color", "#ffffff")),
                accent=str(node.get("accent", "#78716c")),
            )
            if not pools[cat]:
                logger.warning("Category %s has an empty quote pool", cat.value)
        return cls(pools, metas)

    def pool(self, category: Category) -> Tuple[str, ...]:
        return self._pools[Category(category)]

    def meta(self, category: Category) -> CategoryMeta:
        return self._metas[Category(category)]


def load_catalog(path: Optional[str] = None) -> Catalog:
    p = path or _default_quotes_path()
    return Catalog.from_mapping(_load_yaml(p))
