"""Accent-insensitive search over canonical records.

Two independent entry points share the same text normalization:

* :func:`matches_text` is the plain substring check used inside the filter
  predicates.
* :func:`scored_search` ranks a prebuilt index across name, category and a
  third kind-specific field; :class:`SearchManager` wraps it with debouncing
  and the recent-search history.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable, Sequence
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from catalog_hub.normalization.fields import normalize_search_text
from catalog_hub.query.debounce import Debouncer
from catalog_hub.query.events import Subscribers, Unsubscribe
from catalog_hub.storage import KeyValueStore, MemoryStore, get_storage, remove_storage, set_storage

logger = logging.getLogger(__name__)

SearchKind = Literal["product", "shop"]

RECENT_SEARCHES_KEY = "recent_searches"

EXACT_NAME_SCORE = 100
NAME_PREFIX_SCORE = 50
NAME_CONTAINS_SCORE = 30
TEXT_CONTAINS_SCORE = 15
WORD_PREFIX_SCORE = 10


class SearchIndexEntry(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str
    kind: SearchKind
    name: str
    category: str = ""
    normalized_name: str
    normalized_category: str = ""
    original_data: Any = None
    search_text: str = ""


class ScoredEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    entry: SearchIndexEntry
    score: int


class RecentSearch(BaseModel):
    query: str
    timestamp: int


class SearchSnapshot(BaseModel):
    """Payload sent to search subscribers."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    results: list[SearchIndexEntry] = Field(default_factory=list)
    count: int = 0
    recent_searches: list[RecentSearch] = Field(default_factory=list)
    is_searching: bool = False


def matches_text(field: object, query: str) -> bool:
    """Whether ``field`` contains ``query``, ignoring case and diacritics."""
    return normalize_search_text(query) in normalize_search_text(field)


def build_search_index(records: Iterable[Any], kind: SearchKind = "product") -> list[SearchIndexEntry]:
    entries: list[SearchIndexEntry] = []
    for record in records:
        name = getattr(record, "name", "") or ""
        category = getattr(record, "category", "") or ""
        third = getattr(record, "shop_name" if kind == "product" else "shop_type", "")
        fields = [name, category, third]
        entries.append(
            SearchIndexEntry(
                id=str(getattr(record, "id", "")),
                kind=kind,
                name=name,
                category=category,
                normalized_name=normalize_search_text(name),
                normalized_category=normalize_search_text(category),
                original_data=record,
                search_text=" ".join(normalize_search_text(value) for value in fields if value),
            )
        )
    return entries


def calculate_search_score(query: str, entry: SearchIndexEntry) -> int:
    """Score an index entry against an already-normalized query."""
    score = 0
    if entry.normalized_name == query:
        score += EXACT_NAME_SCORE
    if entry.normalized_name.startswith(query):
        score += NAME_PREFIX_SCORE
    if query in entry.normalized_name:
        score += NAME_CONTAINS_SCORE
    if query in entry.search_text:
        score += TEXT_CONTAINS_SCORE
    score += WORD_PREFIX_SCORE * sum(1 for word in entry.search_text.split() if word.startswith(query))
    return score


def scored_search(
    index: Sequence[SearchIndexEntry],
    query: str,
    *,
    min_query_length: int = 2,
    max_results: int = 50,
) -> list[ScoredEntry]:
    """Rank ``index`` against ``query``; ties keep index order."""
    if not query or len(query) < min_query_length:
        return []

    normalized_query = normalize_search_text(query)
    if not normalized_query:
        return []
    scored = [ScoredEntry(entry=entry, score=calculate_search_score(normalized_query, entry)) for entry in index]
    ranked = sorted((item for item in scored if item.score > 0), key=lambda item: item.score, reverse=True)
    return ranked[:max_results]


class SearchManager:
    """Scored search with debouncing and a persisted recent-search history."""

    def __init__(
        self,
        store: KeyValueStore | None = None,
        *,
        min_query_length: int = 2,
        max_results: int = 50,
        debounce_sec: float = 0.3,
        recent_limit: int = 10,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store or MemoryStore()
        self.min_query_length = min_query_length
        self.max_results = max_results
        self.recent_limit = recent_limit
        self.clock = clock
        self.is_searching = False
        self._lock = threading.RLock()
        self._index: list[SearchIndexEntry] = []
        self._results: list[ScoredEntry] = []
        self._recent: list[RecentSearch] = []
        self._subscribers = Subscribers("search listener")
        self._debounced = Debouncer(self.perform_search, debounce_sec)
        self._load_recent_searches()

    @property
    def index(self) -> list[SearchIndexEntry]:
        return self._index

    def init_search(self, records: Iterable[Any], kind: SearchKind = "product") -> None:
        index = build_search_index(records, kind)
        with self._lock:
            self._index = index
        logger.info("Search index built with %d items", len(index))

    def search(self, query: str) -> None:
        """Schedule a debounced :meth:`perform_search`."""
        self._debounced(query)

    def flush(self) -> list[ScoredEntry] | None:
        return self._debounced.flush()

    def cancel_pending(self) -> None:
        self._debounced.cancel()

    def perform_search(self, query: str) -> list[ScoredEntry]:
        with self._lock:
            if not query or len(query) < self.min_query_length:
                self._results = []
            else:
                self.is_searching = True
                self._results = scored_search(
                    self._index,
                    query,
                    min_query_length=self.min_query_length,
                    max_results=self.max_results,
                )
                self.is_searching = False
                self._add_recent_search(query)
            results = list(self._results)
        self._notify()
        return results

    def results(self) -> list[SearchIndexEntry]:
        with self._lock:
            return [item.entry for item in self._results]

    def scored_results(self) -> list[ScoredEntry]:
        with self._lock:
            return list(self._results)

    def results_count(self) -> int:
        return len(self._results)

    def clear_results(self) -> None:
        with self._lock:
            self._results = []
        self._notify()

    def recent_searches(self) -> list[RecentSearch]:
        with self._lock:
            return list(self._recent)

    def remove_recent_search(self, query: str) -> None:
        with self._lock:
            self._recent = [item for item in self._recent if item.query != query]
            self._save_recent_searches()
        self._notify()

    def clear_recent_searches(self) -> None:
        with self._lock:
            self._recent = []
            remove_storage(self.store, RECENT_SEARCHES_KEY)
        self._notify()

    def subscribe(self, listener: Callable[[SearchSnapshot], Any]) -> Unsubscribe:
        return self._subscribers.subscribe(listener)

    def snapshot(self) -> SearchSnapshot:
        with self._lock:
            return SearchSnapshot(
                results=[item.entry for item in self._results],
                count=len(self._results),
                recent_searches=list(self._recent),
                is_searching=self.is_searching,
            )

    def _add_recent_search(self, query: str) -> None:
        if not query or len(query) < self.min_query_length:
            return
        entry = RecentSearch(query=query, timestamp=int(self.clock() * 1000))
        remaining = [item for item in self._recent if item.query != query]
        self._recent = [entry, *remaining][: self.recent_limit]
        self._save_recent_searches()

    def _load_recent_searches(self) -> None:
        stored = get_storage(self.store, RECENT_SEARCHES_KEY)
        if not isinstance(stored, list):
            return
        recent: list[RecentSearch] = []
        for item in stored:
            try:
                recent.append(RecentSearch.model_validate(item))
            except ValidationError:
                logger.warning("Dropping malformed recent search entry: %r", item)
        self._recent = recent[: self.recent_limit]

    def _save_recent_searches(self) -> None:
        set_storage(self.store, RECENT_SEARCHES_KEY, [item.model_dump() for item in self._recent])

    def _notify(self) -> None:
        self._subscribers.notify(self.snapshot())
