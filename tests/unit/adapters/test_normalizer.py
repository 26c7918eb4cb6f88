"""Tests for CSV normalization helpers."""

from biznova.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    normalize_email,
    normalize_phone,
)


def test_normalize_column_name_bom_and_spaces():
    assert normalize_column_name("\ufeffShop Name ") == "shop_name"


def test_normalize_column_name_dashes_and_punctuation():
    assert normalize_column_name("Avatar-URL") == "avatar_url"
    assert normalize_column_name("Latitude (deg)") == "latitude_deg"


def test_clean_string():
    assert clean_string("  Morar ") == "Morar"
    assert clean_string("   ") is None
    assert clean_string(None) is None


def test_normalize_phone():
    assert normalize_phone("+91 98765-43210") == "9876543210"
    assert normalize_phone("09876543210") == "9876543210"
    assert normalize_phone("9876543210") == "9876543210"
    assert normalize_phone("") is None
    assert normalize_phone("n/a") is None


def test_normalize_email():
    assert normalize_email("  Shop@Example.COM ") == "shop@example.com"
    assert normalize_email("") is None
