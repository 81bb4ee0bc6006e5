"""Tests for filter predicates and FilterManager."""

import math
import random

from catalog_hub.normalization import process_records
from catalog_hub.query.filters import (
    FilterManager,
    FilterState,
    apply_filters,
    filter_state_from_params,
    filter_state_to_params,
)
from catalog_hub.schema import CanonicalShop


def _collection():
    return process_records(
        [
            {"id": "a", "product_name": "Áo Thun Nam", "category": "thoi-trang", "tier": "n2",
             "original_price": "200.000đ", "sale_price": "150.000đ"},
            {"id": "b", "product_name": "Giày Nike", "category": "the-thao", "tier": "n1",
             "original_price": "1.500.000đ", "sale_price": "1.200.000đ"},
            {"id": "c", "product_name": "Áo Sơ Mi", "category": "thoi-trang", "tier": "n1",
             "original_price": "500.000đ", "sale_price": "450.000đ"},
        ],
        "product",
        rng=random.Random(0),
    )


def _ids(records):
    return [record.id for record in records]


def test_identity_filter_returns_all_in_order():
    """The default filter state should keep every record in order."""
    collection = _collection()

    assert apply_filters(collection, FilterState()) == list(collection.all)


def test_filter_by_category_and_tier():
    """Category and tier filters should match exact keys."""
    collection = _collection()

    assert _ids(apply_filters(collection, FilterState(category="thoi-trang"))) == ["a", "c"]
    assert _ids(apply_filters(collection, FilterState(category="thoi-trang", tier="n1"))) == ["c"]


def test_filter_by_price_range_is_inclusive():
    """Price bounds should include their endpoints."""
    collection = _collection()

    state = FilterState(min_price=150000, max_price=450000)

    assert _ids(apply_filters(collection, state)) == ["a", "c"]


def test_filter_by_min_discount():
    """min_discount should drop records below the threshold."""
    collection = _collection()

    assert _ids(apply_filters(collection, FilterState(min_discount=20))) == ["a", "b"]


def test_filter_search_ignores_accents():
    """The filter search should ignore tone marks."""
    collection = _collection()

    assert _ids(apply_filters(collection, FilterState(search_query="ao"))) == ["a", "c"]
    assert _ids(apply_filters(collection, FilterState(search_query="GIÀY"))) == ["b"]


def test_filter_applies_min_rating_to_shops():
    """min_rating should filter shops by rating."""
    shops = [
        CanonicalShop(id="s1", name="Shop A", rating=4.9),
        CanonicalShop(id="s2", name="Shop B", rating=3.5),
    ]

    assert _ids(apply_filters(shops, FilterState(min_rating=4))) == ["s1"]


def test_state_to_params_omits_defaults():
    """Query params should leave out default values."""
    assert filter_state_to_params(FilterState()) == {}
    params = filter_state_to_params(FilterState(category="me-be", min_price=1000, max_price=5000, search_query="bỉm"))
    assert params == {"category": "me-be", "minPrice": "1000", "maxPrice": "5000", "search": "bỉm"}


def test_state_from_params_parses_leading_integers():
    """Numeric params should read their leading integer."""
    state = filter_state_from_params({"minPrice": "100abc", "maxPrice": "", "minDiscount": "x", "search": "%C3%A1o"})

    assert state.min_price == 100
    assert state.max_price == math.inf
    assert state.min_discount == 0
    assert state.search_query == "áo"


def test_state_from_params_ignores_negative_values(caplog):
    """Negative numeric params should be ignored with a warning."""
    state = filter_state_from_params({"minDiscount": "-5"})

    assert state.min_discount == 0
    assert "minDiscount" in caplog.text


def test_manager_setters_refilter_and_notify(mocker):
    """Each setter should refilter and notify listeners."""
    on_params_change = mocker.Mock()
    listener = mocker.Mock()
    manager = FilterManager(on_params_change=on_params_change)
    manager.set_data(_collection())
    manager.subscribe(listener)

    manager.set_category("thoi-trang")
    manager.set_tier("n1")

    assert _ids(manager.filtered_data) == ["c"]
    on_params_change.assert_called_with({"category": "thoi-trang", "tier": "n1"})
    filtered, stats = listener.call_args.args
    assert _ids(filtered) == ["c"]
    assert stats.total_items == 3
    assert stats.filtered_items == 1
    assert stats.applied_filters == 2


def test_manager_reset_restores_identity():
    """reset() should restore the default state."""
    manager = FilterManager()
    manager.set_data(_collection())
    manager.set_price_range(1000000)
    assert _ids(manager.filtered_data) == ["b"]

    manager.reset_filters()

    assert _ids(manager.filtered_data) == ["a", "b", "c"]
    assert manager.applied_filters_count() == 0


def test_manager_query_string_round_trip():
    """A query string should restore the state it came from."""
    manager = FilterManager()
    manager.init_from_query_string("?category=thoi-trang&minDiscount=10")

    assert manager.state.category == "thoi-trang"
    assert manager.state.min_discount == 10
    assert manager.to_query_string() == "category=thoi-trang&minDiscount=10"


def test_failing_listener_does_not_stop_others(mocker):
    """One failing listener should not block the others."""
    manager = FilterManager()
    manager.set_data(_collection())
    good = mocker.Mock()
    manager.subscribe(mocker.Mock(side_effect=RuntimeError("boom")))
    manager.subscribe(good)

    manager.set_search_query("giay")

    good.assert_called_once()
