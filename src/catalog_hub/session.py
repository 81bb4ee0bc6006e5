"""Per-session context tying loading, filtering, search and sorting together."""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from catalog_hub.config import CatalogConfig
from catalog_hub.core import CatalogLoader
from catalog_hub.normalization import ProcessedCollection, ProcessingConfig, RecordKind
from catalog_hub.query.filters import FilterManager
from catalog_hub.query.search import SearchManager
from catalog_hub.query.sorting import sort_records
from catalog_hub.sources.base import BaseSource, Location
from catalog_hub.storage import JsonFileStore, KeyValueStore, MemoryStore

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    IDLE = "idle"
    FILTERING = "filtering"
    FILTERED = "filtered"
    SEARCHING = "searching"
    SEARCHED = "searched"
    SORTING = "sorting"
    SORTED = "sorted"


_TRANSITIONS: dict[PipelineState, set[PipelineState]] = {
    PipelineState.IDLE: {PipelineState.FILTERING},
    PipelineState.FILTERING: {PipelineState.FILTERED},
    PipelineState.FILTERED: {PipelineState.SEARCHING, PipelineState.SORTING},
    PipelineState.SEARCHING: {PipelineState.SEARCHED},
    PipelineState.SORTING: {PipelineState.SORTED},
    PipelineState.SEARCHED: {PipelineState.IDLE},
    PipelineState.SORTED: {PipelineState.IDLE},
}


@dataclass(frozen=True)
class Page:
    items: tuple[Any, ...]
    page: int
    per_page: int
    total_items: int
    total_pages: int


def paginate(records: Sequence[Any], page: int = 1, per_page: int = 12) -> Page:
    """Slice one 1-based page out of ``records``; out-of-range pages are empty."""
    per_page = max(1, per_page)
    page = max(1, page)
    start = (page - 1) * per_page
    return Page(
        items=tuple(records[start : start + per_page]),
        page=page,
        per_page=per_page,
        total_items=len(records),
        total_pages=math.ceil(len(records) / per_page),
    )


def _build_store(config: CatalogConfig) -> KeyValueStore:
    if config.storage_path:
        return JsonFileStore(config.storage_path, prefix=config.storage_prefix)
    return MemoryStore(prefix=config.storage_prefix)


class CatalogSession:
    """One browsing session over a single loaded source.

    Owns its loader cache, filter manager, search manager and key/value store;
    nothing is shared between sessions.
    """

    def __init__(
        self,
        config: CatalogConfig | None = None,
        *,
        store: KeyValueStore | None = None,
        source: BaseSource | str | None = None,
        rng: random.Random | None = None,
        on_params_change: Callable[[dict[str, str]], None] | None = None,
    ):
        self.config = config or CatalogConfig()
        self.store = store or _build_store(self.config)
        self.loader = CatalogLoader(
            source,
            config=ProcessingConfig(
                dictionary_version=self.config.dictionary_version,
                best_seller_threshold=self.config.best_seller_threshold,
                rng=rng,
            ),
            delimiter=self.config.csv_delimiter,
        )
        self.filters = FilterManager(on_params_change=on_params_change)
        self.search = SearchManager(
            self.store,
            min_query_length=self.config.search_min_query_length,
            max_results=self.config.search_max_results,
            debounce_sec=self.config.search_debounce_sec,
            recent_limit=self.config.recent_searches_limit,
        )
        self.collection: ProcessedCollection | None = None
        self.kind: RecordKind = "product"
        self.state = PipelineState.IDLE
        self.results: list[Any] = []

    def load(self, location: Location | None = None, kind: RecordKind = "product") -> ProcessedCollection:
        """Load a source and make it the session's data set.

        ``location`` defaults to the configured products or shops path.
        """
        if location is None:
            location = self.config.products_path if kind == "product" else self.config.shops_path
        collection = self.loader.load(location, kind)
        self.collection = collection
        self.kind = kind
        self.filters.set_data(collection)
        self.search.init_search(collection.all, kind)
        self.results = list(collection.all)
        return collection

    def set_collection(self, collection: ProcessedCollection) -> None:
        """Use an already-processed collection instead of loading one."""
        self.collection = collection
        self.kind = collection.kind
        self.filters.set_data(collection)
        self.search.init_search(collection.all, collection.kind)
        self.results = list(collection.all)

    def is_search_active(self, search_query: str | None) -> bool:
        query = (search_query or "").strip()
        return bool(query) and len(query) >= self.search.min_query_length

    def apply(self, sort_key: str | None = None, search_query: str | None = None) -> list[Any]:
        """Run filter, then search or sort, over the full collection.

        An active search query replaces the result with the scored search
        results and the filters do not apply to them. Otherwise the filtered
        records are sorted by ``sort_key``.
        """
        try:
            results = self._run(sort_key, search_query)
        except Exception:
            self.state = PipelineState.IDLE
            raise

        self.results = results
        self._transition(PipelineState.IDLE)
        return results

    def _run(self, sort_key: str | None, search_query: str | None) -> list[Any]:
        self._transition(PipelineState.FILTERING)
        filtered = self.filters.apply_filters()
        self._transition(PipelineState.FILTERED)

        if self.is_search_active(search_query):
            self._transition(PipelineState.SEARCHING)
            scored = self.search.perform_search(search_query.strip())
            results = [item.entry.original_data for item in scored]
            self._transition(PipelineState.SEARCHED)
        else:
            self._transition(PipelineState.SORTING)
            results = sort_records(filtered, sort_key)
            self._transition(PipelineState.SORTED)
        return results

    def page(self, page: int = 1, per_page: int | None = None) -> Page:
        return paginate(self.results, page, per_page or self.config.items_per_page)

    def _transition(self, target: PipelineState) -> None:
        if target not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Invalid pipeline transition: {self.state.value} -> {target.value}")
        logger.debug("Pipeline %s -> %s", self.state.value, target.value)
        self.state = target
