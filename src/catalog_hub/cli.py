"""Command-line interface for catalog-hub."""

import argparse
import json
import logging
import sys

from catalog_hub import __version__
from catalog_hub.config import CatalogConfig
from catalog_hub.exceptions import CatalogHubError, LoadError
from catalog_hub.formatting import format_currency, format_number, format_sold_count, truncate_text
from catalog_hub.normalization.repository import CatalogRepository
from catalog_hub.query.filters import FilterState
from catalog_hub.query.sorting import SORTERS
from catalog_hub.query.stats import collection_statistics
from catalog_hub.session import CatalogSession

_KINDS = {"products": "product", "shops": "shop"}
_DEFAULT_SORT = {"product": "sold-desc", "shop": "rating-desc"}


def _non_negative(value: str) -> float:
    try:
        number = float(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from e
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value!r}")
    return number


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from e
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalog-hub",
        description="Browse affiliate product and shop listings from CSV sources",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"catalog-hub {__version__}",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "source",
        nargs="?",
        help="Path or URL of the CSV source (default: configured path)",
    )
    common.add_argument("--category", help="Only records in this category key")
    common.add_argument("--tier", help="Only records in this tier (n1, n2, n3)")
    common.add_argument("--min-price", type=_non_negative, default=0)
    common.add_argument("--max-price", type=_non_negative, default=float("inf"))
    common.add_argument("--min-discount", type=int, default=0)
    common.add_argument("--min-rating", type=_non_negative, default=0)
    common.add_argument(
        "--filter-search",
        default="",
        help="Keep records whose name contains TEXT (accent-insensitive)",
    )
    common.add_argument(
        "--search",
        help="Ranked search; replaces the filtered listing with search results",
    )
    common.add_argument("--sort", choices=sorted(SORTERS), help="Sort key for the filtered listing")
    common.add_argument("--page", type=_positive_int, default=1)
    common.add_argument("--per-page", type=_positive_int, help="Items per page")
    common.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    common.add_argument(
        "--stats",
        action="store_true",
        help="Print price, discount and sales statistics of the result",
    )
    common.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("products", parents=[common], help="List products")
    subparsers.add_parser("shops", parents=[common], help="List shops")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.min_discount < 0:
        parser.error("--min-discount must not be negative")

    kind = _KINDS[args.command]
    session = CatalogSession(CatalogConfig.from_env())
    session.filters.state = FilterState(
        category=args.category or "all",
        tier=args.tier or "all",
        min_price=args.min_price,
        max_price=args.max_price,
        min_discount=args.min_discount,
        min_rating=args.min_rating,
        search_query=args.filter_search,
    )

    try:
        session.load(args.source, kind)
    except LoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except CatalogHubError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    results = session.apply(sort_key=args.sort or _DEFAULT_SORT[kind], search_query=args.search)
    page = session.page(args.page, args.per_page)
    stats = collection_statistics(results) if args.stats else None

    if args.json:
        payload = {
            "kind": kind,
            "page": page.page,
            "per_page": page.per_page,
            "total_items": page.total_items,
            "total_pages": page.total_pages,
            "items": [item.model_dump(mode="json") for item in page.items],
        }
        if stats is not None:
            payload["stats"] = stats.model_dump()
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        _print_formatted(kind, page, CatalogRepository(version=session.config.dictionary_version))
        if stats is not None:
            _print_stats(stats)

    return 0


def _print_formatted(kind: str, page, repo: CatalogRepository) -> None:
    """Print one page in human-readable format."""
    print()
    print(f"  catalog-hub {kind}s  (page {page.page}/{max(page.total_pages, 1)}, {page.total_items} items)")
    print()

    if not page.items:
        print("  No results")
        print()
        return

    for item in page.items:
        if kind == "product":
            fields = [
                ("Name", truncate_text(item.name)),
                ("Category", _category_label(repo, item.category)),
                ("Tier", repo.tier(item.tier).name),
                ("Price", _format_price(item)),
                ("Sold", format_sold_count(item.sold_count)),
                ("Rating", item.rating),
                ("Shop", item.shop_name),
                ("Link", item.link),
            ]
        else:
            fields = [
                ("Name", truncate_text(item.name)),
                ("Type", item.shop_type),
                ("Category", _category_label(repo, item.category)),
                ("Tier", repo.tier(item.tier).name),
                ("Rating", f"{item.rating} ({format_number(item.rating_count)})"),
                ("Followers", format_number(item.followers) if item.followers else None),
                ("Verified", "yes" if item.verified else None),
                ("Link", item.link),
            ]

        for label, value in fields:
            display = value if value else "-"
            print(f"  {label + ':':<11} {display}")
        print()


def _category_label(repo: CatalogRepository, key: str) -> str | None:
    category = repo.category(key)
    if category is None:
        return key or None
    return f"{category.icon} {category.name}".strip()


def _format_price(product) -> str:
    """Format sale price with the original price when discounted."""
    price = format_currency(product.sale_price)
    if product.discount > 0:
        return f"{price} (-{product.discount}%, was {format_currency(product.original_price)})"
    return price


def _print_stats(stats) -> None:
    fields = [
        ("Total", format_number(stats.total)),
        ("Avg price", format_currency(stats.avg_price)),
        ("Min price", format_currency(stats.min_price)),
        ("Max price", format_currency(stats.max_price)),
        ("Avg discount", f"{stats.avg_discount}%"),
        ("Total sold", format_number(stats.total_sold)),
    ]
    for label, value in fields:
        print(f"  {label + ':':<14} {value}")
    print()


if __name__ == "__main__":
    sys.exit(main())
