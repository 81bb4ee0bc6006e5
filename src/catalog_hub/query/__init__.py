"""Filtering, searching and sorting over canonical records."""

from catalog_hub.query.debounce import Debouncer
from catalog_hub.query.events import Subscribers
from catalog_hub.query.filters import FilterManager, FilterState, FilterStatistics, apply_filters
from catalog_hub.query.search import (
    SearchIndexEntry,
    SearchManager,
    build_search_index,
    calculate_search_score,
    matches_text,
    scored_search,
)
from catalog_hub.query.sorting import sort_products, sort_records, sort_shops, vietnamese_sort_key
from catalog_hub.query.stats import CatalogStatistics, collection_statistics

__all__ = [
    "CatalogStatistics",
    "Debouncer",
    "FilterManager",
    "FilterState",
    "FilterStatistics",
    "SearchIndexEntry",
    "SearchManager",
    "Subscribers",
    "apply_filters",
    "build_search_index",
    "calculate_search_score",
    "collection_statistics",
    "matches_text",
    "scored_search",
    "sort_products",
    "sort_records",
    "sort_shops",
    "vietnamese_sort_key",
]
