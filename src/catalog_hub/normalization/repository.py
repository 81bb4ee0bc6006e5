"""Category and tier repository for record processing."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module

DEFAULT_TIER = "n3"


@dataclass(frozen=True)
class Category:
    key: str
    name: str
    icon: str = ""


@dataclass(frozen=True)
class Tier:
    key: str
    name: str
    bucket: str
    description: str = ""


class CatalogRepository:
    """Loads the known category and tier keys from packaged table data."""

    def __init__(self, version: str = "v1"):
        self.version = version
        module = self._load_module()
        self.categories: list[Category] = [Category(**item) for item in module.CATEGORIES]
        self.tiers: list[Tier] = [Tier(**item) for item in module.TIERS]
        self._categories_by_key = {category.key: category for category in self.categories}
        self._tiers_by_key = {tier.key: tier for tier in self.tiers}

    def category_keys(self) -> list[str]:
        return [category.key for category in self.categories]

    def tier_keys(self) -> list[str]:
        return [tier.key for tier in self.tiers]

    def is_known_category(self, key: str) -> bool:
        return key in self._categories_by_key

    def is_known_tier(self, key: str) -> bool:
        return key in self._tiers_by_key

    def category(self, key: str) -> Category | None:
        return self._categories_by_key.get(key)

    def tier(self, key: str) -> Tier:
        """Return the tier for ``key``; unknown keys resolve to the default tier."""
        return self._tiers_by_key.get(key) or self._tiers_by_key[DEFAULT_TIER]

    def _load_module(self):
        try:
            return import_module(f"catalog_hub.normalization.data.{self.version}")
        except ModuleNotFoundError as exc:
            raise ValueError(f"Unsupported catalog table version: {self.version}") from exc
