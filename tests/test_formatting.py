"""Tests for display formatting."""

from catalog_hub.formatting import format_currency, format_number, format_sold_count, truncate_text


def test_format_number_uses_vi_vn_separators():
    """format_number() should group thousands with dots."""
    assert format_number(1500000) == "1.500.000"
    assert format_number(4.5) == "4,5"
    assert format_number(-1234.5) == "-1.234,5"
    assert format_number(None) == "0"
    assert format_number(float("nan")) == "0"


def test_format_currency():
    """format_currency() should append the dong sign."""
    assert format_currency(1500000) == "1.500.000đ"
    assert format_currency(0) == "0đ"
    assert format_currency(None) == "0đ"


def test_format_sold_count():
    """format_sold_count() should abbreviate thousands."""
    assert format_sold_count(0) == "0"
    assert format_sold_count(None) == "0"
    assert format_sold_count(999) == "999"
    assert format_sold_count(1000) == "1k"
    assert format_sold_count(1500) == "1.5k"
    assert format_sold_count(12345) == "12.3k"
    assert format_sold_count(10000) == "10k"


def test_truncate_text():
    """truncate_text() should shorten long text with an ellipsis."""
    assert truncate_text("Áo Thun", 50) == "Áo Thun"
    assert truncate_text("hello world", 6) == "hello..."
    assert truncate_text(None) == ""
