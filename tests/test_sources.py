"""Tests for CSV sources."""

import pytest

from catalog_hub.exceptions import LoadError
from catalog_hub.sources import CSVSource
from catalog_hub.sources.csv_source import normalize_header


def test_normalize_header():
    """normalize_header() should turn header names into snake_case keys."""
    assert normalize_header("  Product Name ") == "product_name"
    assert normalize_header("Sold\tCount") == "sold_count"


def test_read_rows_cleans_headers_values_and_empty_rows(tmp_path):
    """read_rows() should clean headers and values and skip empty rows."""
    path = tmp_path / "products.csv"
    path.write_text(
        "\ufeffProduct Name, Sale Price ,id\n"
        "  Giày Nike , 1.200.000đ ,\n"
        ",,\n"
        "\n"
        "Áo Thun,150.000đ,p-9\n"
        "Bàn Học,90.000đ,\n",
        encoding="utf-8",
    )

    rows = CSVSource().read_rows(path)

    assert rows == [
        {"product_name": "Giày Nike", "sale_price": "1.200.000đ", "id": "item_1"},
        {"product_name": "Áo Thun", "sale_price": "150.000đ", "id": "p-9"},
        {"product_name": "Bàn Học", "sale_price": "90.000đ", "id": "item_3"},
    ]


def test_short_rows_get_none_for_missing_columns():
    """Short rows should get None for the missing columns."""
    rows = CSVSource().parse("shop_name,rating,followers\nCoolmate,4.9\n")

    assert rows == [{"shop_name": "Coolmate", "rating": "4.9", "followers": None, "id": "item_1"}]


def test_quoted_values_and_custom_delimiter():
    """Quoted values and custom delimiters should be honored."""
    rows = CSVSource(delimiter=";").parse('product_name;description\n"Áo; cotton";"dòng 1\ndòng 2"\n')

    assert rows[0]["product_name"] == "Áo; cotton"
    assert rows[0]["description"] == "dòng 1\ndòng 2"


def test_header_only_file_has_no_rows():
    """A file with only a header should have no rows."""
    assert CSVSource().parse("product_name,sale_price\n") == []
    assert CSVSource().parse("") == []


def test_missing_file_raises_load_error(tmp_path):
    """A missing file should raise LoadError."""
    with pytest.raises(LoadError):
        CSVSource().read_rows(tmp_path / "missing.csv")


def test_invalid_utf8_raises_load_error(tmp_path):
    """A file that is not UTF-8 should raise LoadError."""
    path = tmp_path / "latin1.csv"
    path.write_bytes("product_name\nGiày\n".encode("cp1258"))

    with pytest.raises(LoadError):
        CSVSource().read_rows(path)


def test_url_source_is_fetched(mocker):
    """An http URL should be fetched and parsed."""
    response = mocker.MagicMock()
    response.read.return_value = "shop_name\nCoolmate\n".encode("utf-8")
    urlopen = mocker.patch("catalog_hub.sources.csv_source.request.urlopen")
    urlopen.return_value.__enter__.return_value = response

    rows = CSVSource().read_rows("https://example.com/shops.csv")

    assert rows == [{"shop_name": "Coolmate", "id": "item_1"}]
    urlopen.assert_called_once_with("https://example.com/shops.csv", timeout=10.0)


def test_url_failure_raises_load_error(mocker):
    """A failed fetch should raise LoadError."""
    from urllib.error import URLError

    mocker.patch("catalog_hub.sources.csv_source.request.urlopen", side_effect=URLError("offline"))

    with pytest.raises(LoadError, match="offline"):
        CSVSource().read_rows("http://example.com/products.csv")
