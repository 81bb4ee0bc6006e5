"""Normalization of raw catalog rows into canonical records."""

from catalog_hub.normalization.engine import ProcessingConfig, RecordProcessor, process_records
from catalog_hub.normalization.fields import (
    calculate_discount,
    normalize_search_text,
    parse_count,
    parse_price,
    parse_rating,
)
from catalog_hub.normalization.types import ProcessedCollection, RecordKind

__all__ = [
    "ProcessedCollection",
    "ProcessingConfig",
    "RecordKind",
    "RecordProcessor",
    "calculate_discount",
    "normalize_search_text",
    "parse_count",
    "parse_price",
    "parse_rating",
    "process_records",
]
