"""Record processor turning raw source rows into canonical collections."""

from __future__ import annotations

import random
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from catalog_hub.config import DEFAULT_PRODUCT_IMAGE, DEFAULT_SHOP_LOGO
from catalog_hub.normalization.fields import (
    calculate_discount,
    generate_id,
    generate_random_rating,
    normalize_key,
    parse_bool,
    parse_count,
    parse_price,
    parse_rating,
)
from catalog_hub.normalization.repository import DEFAULT_TIER, CatalogRepository
from catalog_hub.normalization.types import ProcessedCollection, RecordKind
from catalog_hub.schema import (
    CanonicalProduct,
    CanonicalShop,
    RawProductRecord,
    RawRecord,
    RawShopRecord,
)

RawInput = Mapping[str, Any] | RawRecord

_RAW_MODELS: dict[str, type[RawRecord]] = {
    "product": RawProductRecord,
    "shop": RawShopRecord,
}


@dataclass(frozen=True)
class ProcessingConfig:
    dictionary_version: str = "v1"
    best_seller_threshold: int = 100
    rng: random.Random | None = None


class RecordProcessor:
    """Builds canonical records and partitions them by tier and category."""

    def __init__(self, config: ProcessingConfig | None = None):
        self.config = config or ProcessingConfig()
        self.repo = CatalogRepository(version=self.config.dictionary_version)

    def process(self, raw_records: Iterable[RawInput], kind: RecordKind) -> ProcessedCollection:
        if kind not in _RAW_MODELS:
            raise ValueError(f"Unsupported record kind: {kind}")

        records = [self._coerce(raw, kind) for raw in raw_records]
        reserved_ids = {str(record.id).strip() for record in records if record.present("id")}

        all_records: list = []
        buckets: dict[str, list] = {tier.bucket: [] for tier in self.repo.tiers}
        by_category: dict[str, list] = {key: [] for key in self.repo.category_keys()}
        best_sellers: list = []
        seen_ids: set[str] = set()

        for record in records:
            if kind == "product":
                canonical = self.normalize_product(record, seen_ids=seen_ids, reserved_ids=reserved_ids)
            else:
                canonical = self.normalize_shop(record, seen_ids=seen_ids, reserved_ids=reserved_ids)
            seen_ids.add(canonical.id)
            all_records.append(canonical)

            buckets[self.repo.tier(canonical.tier).bucket].append(canonical)

            if self.repo.is_known_category(canonical.category):
                by_category[canonical.category].append(canonical)

            if kind == "product" and canonical.sold_count > self.config.best_seller_threshold:
                best_sellers.append(canonical)

        best_sellers.sort(key=lambda item: item.sold_count, reverse=True)

        by_bucket = {bucket: tuple(items) for bucket, items in buckets.items()}
        by_tier = {tier.key: by_bucket[tier.bucket] for tier in self.repo.tiers}
        return ProcessedCollection(
            kind=kind,
            all=tuple(all_records),
            high_end=by_bucket.get("high_end", ()),
            budget=by_bucket.get("budget", ()),
            mixed=by_bucket.get("mixed", ()),
            by_category={key: tuple(items) for key, items in by_category.items()},
            by_tier=by_tier,
            best_sellers=tuple(best_sellers),
        )

    def normalize_product(
        self,
        raw: RawInput,
        *,
        seen_ids: set[str] | None = None,
        reserved_ids: set[str] | None = None,
    ) -> CanonicalProduct:
        record = self._coerce(raw, "product")
        warnings: list[str] = []

        original_price = self._price(record, "original_price", warnings)
        sale_price = self._price(record, "sale_price", warnings)
        sold_count = parse_count(record.sold_count)
        if record.present("sold_count") and sold_count == 0 and not _is_zero_text(record.sold_count):
            warnings.append("sold_count_unparsable")

        return CanonicalProduct(
            id=self._record_id(record, warnings, seen_ids, reserved_ids),
            name=self._text(record, "product_name", "Unknown Product", warnings, tag="name"),
            category=self._category(record, warnings),
            tier=self._tier(record, warnings),
            original_price=original_price,
            sale_price=sale_price,
            discount=calculate_discount(original_price, sale_price),
            sold_count=sold_count,
            rating=generate_random_rating(self.config.rng),
            image=self._text(record, "image_url", DEFAULT_PRODUCT_IMAGE, warnings, tag="image"),
            link=self._text(record, "affiliate_link", "#", warnings, tag="link"),
            shop_name=record.text("shop_name", "Shopee"),
            description=record.text("description"),
            warnings=tuple(warnings),
        )

    def normalize_shop(
        self,
        raw: RawInput,
        *,
        seen_ids: set[str] | None = None,
        reserved_ids: set[str] | None = None,
    ) -> CanonicalShop:
        record = self._coerce(raw, "shop")
        warnings: list[str] = []

        rating = parse_rating(record.rating)
        if not record.present("rating"):
            warnings.append("rating_missing")
        elif parse_rating(record.rating, default=-1.0) < 0:
            warnings.append("rating_unparsable")

        return CanonicalShop(
            id=self._record_id(record, warnings, seen_ids, reserved_ids),
            name=self._text(record, "shop_name", "Unknown Shop", warnings, tag="name"),
            category=self._category(record, warnings),
            tier=self._tier(record, warnings),
            shop_type=record.text("shop_type", "Cửa hàng chính thức"),
            rating=rating,
            rating_count=parse_count(record.rating_count),
            followers=parse_count(record.followers),
            logo=self._text(record, "logo_url", DEFAULT_SHOP_LOGO, warnings, tag="logo"),
            link=self._text(record, "affiliate_link", "#", warnings, tag="link"),
            verified=parse_bool(record.verified),
            description=record.text("description"),
            warnings=tuple(warnings),
        )

    def _coerce(self, raw: RawInput, kind: RecordKind) -> RawRecord:
        model = _RAW_MODELS[kind]
        if isinstance(raw, model):
            return raw
        if isinstance(raw, RawRecord):
            return model.model_validate(raw.model_dump())
        return model.model_validate(dict(raw))

    def _record_id(
        self,
        record: RawRecord,
        warnings: list[str],
        seen_ids: set[str] | None,
        reserved_ids: set[str] | None,
    ) -> str:
        """Return the record's id; explicit ids repeated within a batch are kept but flagged."""
        if record.present("id"):
            record_id = str(record.id).strip()
            if seen_ids and record_id in seen_ids:
                warnings.append("id_duplicate")
            return record_id
        warnings.append("id_missing")
        taken = (seen_ids or set()) | (reserved_ids or set())
        while True:
            candidate = generate_id(self.config.rng)
            if candidate not in taken:
                return candidate

    def _category(self, record: RawRecord, warnings: list[str]) -> str:
        category = normalize_key(record.category)
        if not category:
            warnings.append("category_missing")
        elif not self.repo.is_known_category(category):
            warnings.append("category_unknown")
        return category

    def _tier(self, record: RawRecord, warnings: list[str]) -> str:
        tier = normalize_key(record.tier, default=DEFAULT_TIER)
        if not record.present("tier"):
            warnings.append("tier_missing")
        elif not self.repo.is_known_tier(tier):
            warnings.append("tier_unknown")
        return tier

    @staticmethod
    def _price(record: RawRecord, field: str, warnings: list[str]) -> float:
        value = parse_price(getattr(record, field))
        if not record.present(field):
            warnings.append(f"{field}_missing")
        elif value == 0 and not _is_zero_text(getattr(record, field)):
            warnings.append(f"{field}_unparsable")
        return value

    @staticmethod
    def _text(
        record: RawRecord,
        field: str,
        default: str,
        warnings: list[str],
        *,
        tag: str,
    ) -> str:
        if not record.present(field):
            warnings.append(f"{tag}_missing")
        return record.text(field, default)


def process_records(
    raw_records: Iterable[RawInput],
    kind: RecordKind,
    *,
    dictionary_version: str = "v1",
    best_seller_threshold: int = 100,
    rng: random.Random | None = None,
) -> ProcessedCollection:
    """Process raw rows of one source into a canonical collection."""

    processor = RecordProcessor(
        config=ProcessingConfig(
            dictionary_version=dictionary_version,
            best_seller_threshold=best_seller_threshold,
            rng=rng,
        )
    )
    return processor.process(raw_records, kind)


def _is_zero_text(value: object) -> bool:
    text = str(value)
    return any(ch.isdigit() for ch in text) and not any(ch in "123456789" for ch in text)
