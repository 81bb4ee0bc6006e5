"""Tests for schema models."""

import pytest
from pydantic import ValidationError

from catalog_hub.schema import CanonicalProduct, CanonicalShop, RawProductRecord, RawShopRecord


def test_raw_record_all_none():
    """RawProductRecord with no data should work."""
    record = RawProductRecord()
    assert record.product_name is None
    assert record.sale_price is None
    assert record.present("product_name") is False


def test_raw_record_presence_ignores_blank_text():
    """Blank strings count as absent, numbers as present."""
    record = RawShopRecord(shop_name="   ", rating=0)
    assert record.present("shop_name") is False
    assert record.present("rating") is True
    assert record.text("shop_name", "Unknown Shop") == "Unknown Shop"


def test_raw_record_keeps_extra_columns():
    """Unknown CSV columns should be preserved."""
    record = RawProductRecord(product_name=" Áo ", brand="Coolmate")
    assert record.text("product_name") == "Áo"
    assert record.model_extra == {"brand": "Coolmate"}


def test_canonical_product_defaults():
    """CanonicalProduct should fill display defaults."""
    product = CanonicalProduct(id="p1")
    assert product.name == "Unknown Product"
    assert product.link == "#"
    assert product.shop_name == "Shopee"
    assert product.tier == "n3"
    assert product.warnings == ()


def test_canonical_records_are_frozen():
    """Canonical records should not be mutated after processing."""
    shop = CanonicalShop(id="s1")
    with pytest.raises(ValidationError):
        shop.name = "Other"


def test_canonical_shop_rating_bounds():
    """Shop rating must stay within 0..5."""
    with pytest.raises(ValidationError):
        CanonicalShop(id="s1", rating=6)
