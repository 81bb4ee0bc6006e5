"""Aggregate figures over a list of canonical records."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from catalog_hub.normalization.fields import round_half_up


class CatalogStatistics(BaseModel):
    total: int = 0
    avg_price: int = 0
    min_price: float = 0
    max_price: float = 0
    avg_discount: int = 0
    total_sold: int = 0


def collection_statistics(records: Sequence[Any]) -> CatalogStatistics:
    """Summarize prices, discounts and sales.

    Min and max only consider records with a non-zero sale price; both
    averages divide by the full record count.
    """
    if not records:
        return CatalogStatistics()

    prices = [record.sale_price for record in records if getattr(record, "sale_price", 0)]
    total_discount = sum(getattr(record, "discount", 0) or 0 for record in records)
    total_sold = sum(getattr(record, "sold_count", 0) or 0 for record in records)

    return CatalogStatistics(
        total=len(records),
        avg_price=round_half_up(sum(prices) / len(records)),
        min_price=min(prices) if prices else 0,
        max_price=max(prices) if prices else 0,
        avg_discount=round_half_up(total_discount / len(records)),
        total_sold=total_sold,
    )
