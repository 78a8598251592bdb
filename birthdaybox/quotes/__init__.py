from .catalog import EMOTIONS, Catalog, CatalogError, Category, CategoryMeta, load_catalog, parse_category

__all__ = [
    "EMOTIONS",
    "Catalog",
    "CatalogError",
    "Category",
    "CategoryMeta",
    "load_catalog",
    "parse_category",
]
