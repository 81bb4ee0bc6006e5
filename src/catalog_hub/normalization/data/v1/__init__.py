"""Catalog tables v1."""

from catalog_hub.normalization.data.v1.categories import CATEGORIES
from catalog_hub.normalization.data.v1.tiers import TIERS

__all__ = ["CATEGORIES", "TIERS"]
