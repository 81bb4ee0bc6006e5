"""Runtime configuration for catalog-hub."""

from __future__ import annotations

import os
from dataclasses import dataclass

ENV_PREFIX = "CATALOG_HUB_"

DEFAULT_PRODUCT_IMAGE = (
    'data:image/svg+xml,%3Csvg xmlns="http://www.w3.org/2000/svg" fill="none" '
    'viewBox="0 0 24 24" stroke="%239ca3af"%3E%3Cpath stroke-linecap="round" '
    'stroke-linejoin="round" stroke-width="2" d="M4 16l4.586-4.586a2 2 0 012.828 '
    "0L16 16m-2-2l1.586-1.586a2 2 0 012.828 0L20 14m-6-6h.01M6 20h12a2 2 0 "
    '002-2V6a2 2 0 00-2-2H6a2 2 0 00-2 2v12a2 2 0 002 2z"%3E%3C/path%3E%3C/svg%3E'
)
DEFAULT_SHOP_LOGO = (
    'data:image/svg+xml,%3Csvg xmlns="http://www.w3.org/2000/svg" fill="none" '
    'viewBox="0 0 24 24" stroke="%239ca3af"%3E%3Cpath stroke-linecap="round" '
    'stroke-linejoin="round" stroke-width="2" d="M19 21V5a2 2 0 00-2-2H7a2 2 0 '
    "00-2 2v16m14 0h2m-2 0h-5m-9 0H3m2 0h5M9 7h1m-1 4h1m4-4h1m-1 4h1m-5 10v-5a1 "
    '1 0 011-1h2a1 1 0 011 1v5m-4 0h4"%3E%3C/path%3E%3C/svg%3E'
)


def _safe_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _safe_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class CatalogConfig:
    products_path: str = "data/products.csv"
    shops_path: str = "data/shops.csv"
    dictionary_version: str = "v1"
    search_min_query_length: int = 2
    search_max_results: int = 50
    search_debounce_sec: float = 0.3
    recent_searches_limit: int = 10
    best_seller_threshold: int = 100
    storage_prefix: str = "shopee_hub_"
    storage_path: str | None = None
    items_per_page: int = 12
    csv_delimiter: str = ","

    @classmethod
    def from_env(cls) -> "CatalogConfig":
        defaults = cls()
        return cls(
            products_path=os.getenv(f"{ENV_PREFIX}PRODUCTS_PATH", defaults.products_path),
            shops_path=os.getenv(f"{ENV_PREFIX}SHOPS_PATH", defaults.shops_path),
            dictionary_version=os.getenv(f"{ENV_PREFIX}DICTIONARY_VERSION", defaults.dictionary_version),
            search_min_query_length=max(
                0,
                _safe_int(os.getenv(f"{ENV_PREFIX}SEARCH_MIN_QUERY_LENGTH"), defaults.search_min_query_length),
            ),
            search_max_results=max(
                1,
                _safe_int(os.getenv(f"{ENV_PREFIX}SEARCH_MAX_RESULTS"), defaults.search_max_results),
            ),
            search_debounce_sec=max(
                0.0,
                _safe_float(os.getenv(f"{ENV_PREFIX}SEARCH_DEBOUNCE_SEC"), defaults.search_debounce_sec),
            ),
            recent_searches_limit=max(
                1,
                _safe_int(os.getenv(f"{ENV_PREFIX}RECENT_SEARCHES_LIMIT"), defaults.recent_searches_limit),
            ),
            best_seller_threshold=_safe_int(
                os.getenv(f"{ENV_PREFIX}BEST_SELLER_THRESHOLD"), defaults.best_seller_threshold
            ),
            storage_prefix=os.getenv(f"{ENV_PREFIX}STORAGE_PREFIX", defaults.storage_prefix),
            storage_path=os.getenv(f"{ENV_PREFIX}STORAGE_PATH") or None,
            items_per_page=max(
                1,
                _safe_int(os.getenv(f"{ENV_PREFIX}ITEMS_PER_PAGE"), defaults.items_per_page),
            ),
            csv_delimiter=os.getenv(f"{ENV_PREFIX}CSV_DELIMITER", defaults.csv_delimiter) or ",",
        )
