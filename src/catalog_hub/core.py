"""Core loading functions."""

from __future__ import annotations

import random
import threading

from catalog_hub.normalization import ProcessedCollection, ProcessingConfig, RecordKind, RecordProcessor
from catalog_hub.sources.base import BaseSource, Location


def _build_csv_source(delimiter: str) -> BaseSource:
    from catalog_hub.sources.csv_source import CSVSource

    return CSVSource(delimiter=delimiter)


def _select_source(source: BaseSource | str | None, delimiter: str = ",") -> BaseSource:
    if isinstance(source, BaseSource):
        return source
    source_name = (source or "csv").strip().lower()
    if source_name in {"csv", "delimited"}:
        return _build_csv_source(delimiter)
    raise ValueError(f"Unsupported source: {source_name}")


class CatalogLoader:
    """Loads and processes sources, caching one collection per location."""

    def __init__(
        self,
        source: BaseSource | str | None = None,
        *,
        config: ProcessingConfig | None = None,
        delimiter: str = ",",
    ):
        self.source = _select_source(source, delimiter)
        self.processor = RecordProcessor(config=config)
        self._cache: dict[tuple[str, str], ProcessedCollection] = {}
        self._lock = threading.Lock()

    def load(self, location: Location, kind: RecordKind, *, force: bool = False) -> ProcessedCollection:
        """Load ``location`` and process it as ``kind`` records.

        Args:
            location: Local path or URL of the source.
            kind: ``"product"`` or ``"shop"``.
            force: Ignore the cache and read the source again.

        Returns:
            The processed collection. Repeat calls return the cached one.

        Raises:
            LoadError: The source could not be fetched or parsed.
        """
        cache_key = (str(location), kind)
        if not force:
            cached = self.get_cached(location, kind)
            if cached is not None:
                return cached

        rows = self.source.read_rows(location)
        collection = self.processor.process(rows, kind)
        with self._lock:
            self._cache[cache_key] = collection
        return collection

    def get_cached(self, location: Location, kind: RecordKind) -> ProcessedCollection | None:
        with self._lock:
            return self._cache.get((str(location), kind))

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()


def load_catalog(
    location: Location,
    kind: RecordKind,
    *,
    source: BaseSource | str | None = None,
    dictionary_version: str = "v1",
    best_seller_threshold: int = 100,
    rng: random.Random | None = None,
) -> ProcessedCollection:
    """Read one source and return its processed collection."""

    loader = CatalogLoader(
        source,
        config=ProcessingConfig(
            dictionary_version=dictionary_version,
            best_seller_threshold=best_seller_threshold,
            rng=rng,
        ),
    )
    return loader.load(location, kind)
