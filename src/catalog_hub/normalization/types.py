"""Data models for record processing output."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Literal, TypeVar

from catalog_hub.schema import CanonicalProduct, CanonicalShop

RecordKind = Literal["product", "shop"]
RecordT = TypeVar("RecordT", CanonicalProduct, CanonicalShop)


@dataclass(frozen=True)
class ProcessedCollection(Generic[RecordT]):
    """Canonical records of one source, partitioned by tier and category.

    ``high_end``, ``budget`` and ``mixed`` partition ``all``; ``by_tier`` maps
    tier keys onto those same tuples.
    """

    kind: RecordKind
    all: tuple[RecordT, ...] = ()
    high_end: tuple[RecordT, ...] = ()
    budget: tuple[RecordT, ...] = ()
    mixed: tuple[RecordT, ...] = ()
    by_category: dict[str, tuple[RecordT, ...]] = field(default_factory=dict)
    by_tier: dict[str, tuple[RecordT, ...]] = field(default_factory=dict)
    best_sellers: tuple[RecordT, ...] = ()

    def __len__(self) -> int:
        return len(self.all)
