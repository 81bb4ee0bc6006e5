"""Validate packaged catalog tables and CSV sources.

Checks:
1. Category and tier keys are unique and the three tier buckets are present.
2. Each CSV source carries the columns its record kind needs.
3. No row has an unknown category or tier, or an unparsable price or count.

Usage:
  python scripts/validate_catalog_data.py --products data/products.csv --shops data/shops.csv
"""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path

from catalog_hub.config import CatalogConfig
from catalog_hub.exceptions import LoadError
from catalog_hub.normalization import ProcessingConfig, RecordProcessor
from catalog_hub.normalization.repository import CatalogRepository
from catalog_hub.sources import CSVSource

REQUIRED_COLUMNS = {
    "product": {"product_name", "sale_price", "category", "tier"},
    "shop": {"shop_name", "category", "tier"},
}
REQUIRED_TIERS = {"n1", "n2", "n3"}
REQUIRED_BUCKETS = ("high_end", "budget", "mixed")
BLOCKING_SUFFIXES = ("_unknown", "_unparsable")


def fail(message: str) -> None:
    print(f"[catalog-check] ERROR: {message}")
    raise SystemExit(1)


def parse_args() -> argparse.Namespace:
    config = CatalogConfig.from_env()
    parser = argparse.ArgumentParser(description="Validate catalog tables and CSV sources")
    parser.add_argument("--products", default=config.products_path, help="Products CSV path")
    parser.add_argument("--shops", default=config.shops_path, help="Shops CSV path")
    parser.add_argument("--version", default=config.dictionary_version, help="Table version (default: v1)")
    parser.add_argument(
        "--skip-missing",
        action="store_true",
        help="Skip CSV sources that do not exist instead of failing",
    )
    return parser.parse_args()


def validate_tables(repo: CatalogRepository) -> None:
    duplicates = [key for key, count in Counter(repo.category_keys()).items() if count > 1]
    if duplicates:
        fail(f"Duplicate category keys: {duplicates}")

    tier_keys = repo.tier_keys()
    if len(set(tier_keys)) != len(tier_keys):
        fail(f"Duplicate tier keys: {tier_keys}")
    missing = REQUIRED_TIERS - set(tier_keys)
    if missing:
        fail(f"Missing tier keys: {sorted(missing)}")

    unnamed = [category.key for category in repo.categories if not category.name.strip()]
    unnamed += [tier.key for tier in repo.tiers if not (tier.name.strip() and tier.description.strip())]
    if unnamed:
        fail(f"Entries without a display name or description: {unnamed}")
    buckets = [tier.bucket for tier in repo.tiers]
    if sorted(buckets) != sorted(REQUIRED_BUCKETS):
        fail(f"Tier buckets must be exactly {sorted(REQUIRED_BUCKETS)}: {buckets}")


def validate_source(path: Path, kind: str, processor: RecordProcessor) -> int:
    try:
        rows = CSVSource().read_rows(path)
    except LoadError as e:
        fail(str(e))

    columns = set().union(*(row.keys() for row in rows)) if rows else set()
    missing = REQUIRED_COLUMNS[kind] - columns
    if rows and missing:
        fail(f"{path} is missing columns: {sorted(missing)}")

    collection = processor.process(rows, kind)
    problems = [
        f"{record.id}: {tag}"
        for record in collection.all
        for tag in record.warnings
        if tag.endswith(BLOCKING_SUFFIXES)
    ]
    if problems:
        fail(f"{path} has invalid rows:\n  " + "\n  ".join(problems))
    return len(collection)


def main() -> int:
    args = parse_args()
    repo = CatalogRepository(version=args.version)
    validate_tables(repo)

    processor = RecordProcessor(ProcessingConfig(dictionary_version=args.version))
    for location, kind in ((args.products, "product"), (args.shops, "shop")):
        path = Path(location)
        if not path.exists() and args.skip_missing:
            print(f"[catalog-check] skip {path} (not found)")
            continue
        count = validate_source(path, kind, processor)
        print(f"[catalog-check] {path}: {count} {kind} rows")

    print("[catalog-check] OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
