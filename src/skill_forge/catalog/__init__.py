"""
Document catalog package.

Discovers prompt documents in host directories and indexes them by
invocable name.
"""

from .loader import (
    EXTRA_SCOPE,
    PROJECT_SCOPE,
    USER_SCOPE,
    CatalogLoader,
    SearchRoot,
    get_default_search_roots,
    is_hidden,
)
from .registry import Catalog, levenshtein_distance, normalize_name, similarity


def build_catalog(loader: CatalogLoader) -> Catalog:
    """Create a catalog populated from a loader."""
    catalog = Catalog()
    catalog.load(loader)
    return catalog


__all__ = [
    "EXTRA_SCOPE",
    "PROJECT_SCOPE",
    "USER_SCOPE",
    "Catalog",
    "CatalogLoader",
    "SearchRoot",
    "build_catalog",
    "get_default_search_roots",
    "is_hidden",
    "levenshtein_distance",
    "normalize_name",
    "similarity",
]
