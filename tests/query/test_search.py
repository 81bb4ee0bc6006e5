"""Tests for scored search and SearchManager."""

import json

from catalog_hub.query.search import (
    RECENT_SEARCHES_KEY,
    SearchManager,
    build_search_index,
    calculate_search_score,
    matches_text,
    scored_search,
)
from catalog_hub.schema import CanonicalProduct, CanonicalShop
from catalog_hub.storage import MemoryStore


def _products():
    return [
        CanonicalProduct(id="1", name="Áo Thun Nam", category="thoi-trang", shop_name="Coolmate"),
        CanonicalProduct(id="2", name="Áo Sơ Mi", category="thoi-trang", shop_name="Routine"),
        CanonicalProduct(id="3", name="Giày Nike", category="the-thao", shop_name="Nike Official"),
    ]


def test_matches_text_is_accent_and_case_insensitive():
    """matches_text() should ignore tone marks and case."""
    assert matches_text("Áo Thun Nam", "AO THUN")
    assert matches_text("Giày Nike", "giày")
    assert not matches_text("Giày Nike", "adidas")


def test_index_uses_shop_name_for_products_and_shop_type_for_shops():
    """The search index should pick the third field per record kind."""
    product_entry = build_search_index(_products()[:1], "product")[0]
    shop_entry = build_search_index([CanonicalShop(id="s", name="Coolmate", shop_type="Shopee Mall")], "shop")[0]

    assert product_entry.search_text == "ao thun nam thoi-trang coolmate"
    assert shop_entry.search_text.endswith("shopee mall")
    assert shop_entry.kind == "shop"


def test_scored_search_without_diacritics_returns_both_shirts():
    """An unaccented query should find accented names."""
    index = build_search_index(_products(), "product")

    results = scored_search(index, "ao")

    # "the-thao" also contains "ao", so the shoes trail with a text-only score
    assert [item.entry.id for item in results] == ["1", "2", "3"]
    assert [item.score for item in results] == [105, 105, 15]


def test_exact_name_match_gets_all_bonuses():
    """An exact name match should collect every name bonus."""
    index = build_search_index(_products(), "product")

    results = scored_search(index, "Áo Sơ Mi")

    assert [item.entry.id for item in results] == ["2"]
    assert results[0].score == 100 + 50 + 30 + 15


def test_calculate_search_score_counts_word_prefixes():
    """Each word starting with the query should add to the score."""
    entry = build_search_index(_products()[2:], "product")[0]

    # name contains, text contains, and "nike" twice as a word prefix
    assert calculate_search_score("nike", entry) == 30 + 15 + 20
    assert calculate_search_score("giay", entry) == 50 + 30 + 15 + 10


def test_scored_search_respects_min_length_and_max_results():
    """Short queries should return nothing and results should be capped."""
    index = build_search_index(_products(), "product")

    assert scored_search(index, "a") == []
    assert scored_search(index, "   ", min_query_length=0) == []
    assert len(scored_search(index, "ao", max_results=1)) == 1


def test_manager_perform_search_records_recent_searches():
    """perform_search() should remember the query."""
    store = MemoryStore()
    times = iter([1.0, 2.0, 3.0])
    manager = SearchManager(store, clock=lambda: next(times))
    manager.init_search(_products(), "product")

    manager.perform_search("ao")
    manager.perform_search("nike")
    manager.perform_search("ao")

    assert [item.query for item in manager.recent_searches()] == ["ao", "nike"]
    assert manager.recent_searches()[0].timestamp == 3000
    stored = json.loads(store.read(RECENT_SEARCHES_KEY))
    assert [item["query"] for item in stored] == ["ao", "nike"]
    assert [entry.id for entry in manager.results()] == ["1", "2", "3"]


def test_manager_short_query_clears_results_without_history():
    """A short query should clear results and skip history."""
    manager = SearchManager()
    manager.init_search(_products(), "product")
    manager.perform_search("ao")

    manager.perform_search("a")

    assert manager.results_count() == 0
    assert [item.query for item in manager.recent_searches()] == ["ao"]


def test_recent_searches_are_capped():
    """Recent searches should keep only the newest entries."""
    manager = SearchManager(recent_limit=3)
    manager.init_search(_products(), "product")

    for query in ["q1", "q2", "q3", "q4"]:
        manager.perform_search(query)

    assert [item.query for item in manager.recent_searches()] == ["q4", "q3", "q2"]


def test_recent_searches_survive_a_new_manager():
    """Recent searches should persist through the store."""
    store = MemoryStore()
    first = SearchManager(store)
    first.perform_search("giay")

    second = SearchManager(store)

    assert [item.query for item in second.recent_searches()] == ["giay"]


def test_corrupt_recent_searches_load_as_empty():
    """Unreadable stored history should load as empty."""
    store = MemoryStore()
    store.write(RECENT_SEARCHES_KEY, "{not json")

    manager = SearchManager(store)

    assert manager.recent_searches() == []


def test_malformed_recent_entries_are_dropped():
    """Invalid history entries should be dropped."""
    store = MemoryStore()
    store.write(RECENT_SEARCHES_KEY, json.dumps([{"query": "ok", "timestamp": 1}, {"nope": True}]))

    manager = SearchManager(store)

    assert [item.query for item in manager.recent_searches()] == ["ok"]


def test_remove_and_clear_recent_searches(mocker):
    """Recent searches should support removing one entry or all."""
    store = MemoryStore()
    manager = SearchManager(store)
    listener = mocker.Mock()
    manager.subscribe(listener)
    manager.perform_search("ao")
    manager.perform_search("nike")

    manager.remove_recent_search("ao")
    assert [item.query for item in manager.recent_searches()] == ["nike"]

    manager.clear_recent_searches()
    assert manager.recent_searches() == []
    assert store.read(RECENT_SEARCHES_KEY) is None
    assert listener.call_count == 4


def test_debounced_search_runs_once_with_latest_query():
    """Debounced search should run once with the latest query."""
    manager = SearchManager(debounce_sec=60)
    manager.init_search(_products(), "product")

    manager.search("gi")
    manager.search("giay")
    results = manager.flush()

    assert [item.entry.id for item in results] == ["3"]
    assert [item.query for item in manager.recent_searches()] == ["giay"]
    assert manager.flush() is None


def test_snapshot_reports_results_and_history():
    """snapshot() should report the current results and history."""
    manager = SearchManager()
    manager.init_search(_products(), "product")
    manager.perform_search("giay")

    snapshot = manager.snapshot()

    assert snapshot.count == 1
    assert snapshot.results[0].name == "Giày Nike"
    assert snapshot.is_searching is False
