"""Tests for CSV loader functions."""

import csv
from pathlib import Path

from biznova.adapters.csv_loader.loader import load_entities


def _write_csv(rows: list[dict], path: Path, delimiter: str = ",") -> None:
    """Helper to write a test CSV file."""
    with open(path, "w", encoding="utf-8-sig", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=rows[0].keys(), delimiter=delimiter)
        writer.writeheader()
        writer.writerows(rows)


def test_load_retailers_basic(tmp_path):
    csv_path = tmp_path / "retailers.csv"
    _write_csv([
        {
            "Name": "Ramesh Gupta", "Shop Name": "Gupta Kirana", "Email": "Ramesh@Shop.in",
            "Phone": "+91 98765 43210", "Address": "Sarafa Bazaar", "Locality": "Lashkar",
            "City": "Gwalior", "Latitude": "26.2001", "Longitude": "78.1502", "Category": "grocery",
        },
    ], csv_path)

    rows = load_entities(csv_path)
    assert len(rows) == 1
    row = rows[0]
    assert row["name"] == "Ramesh Gupta"
    assert row["shop_name"] == "Gupta Kirana"
    assert row["email"] == "ramesh@shop.in"
    assert row["phone"] == "9876543210"
    assert row["address"] == "Sarafa Bazaar, Gwalior"
    assert row["locality"] == "Lashkar"
    assert row["latitude"] == 26.2001
    assert row["longitude"] == 78.1502
    assert row["category"] == "grocery"


def test_locality_falls_back_to_city(tmp_path):
    csv_path = tmp_path / "customers.csv"
    _write_csv([{"Name": "Asha", "City": "Morar", "Lat": "", "Lng": ""}], csv_path)

    row = load_entities(csv_path)[0]
    assert row["locality"] == "Morar"
    assert row["address"] == "Morar"
    assert row["latitude"] is None
    assert row["longitude"] is None


def test_semicolon_export_with_decimal_commas(tmp_path):
    csv_path = tmp_path / "shops.csv"
    _write_csv(
        [{"Store Name": "Sharma Medical", "Name": "R. Sharma", "lat": "26,25", "lon": "78,17"}],
        csv_path,
        delimiter=";",
    )

    row = load_entities(csv_path)[0]
    assert row["shop_name"] == "Sharma Medical"
    assert row["latitude"] == 26.25
    assert row["longitude"] == 78.17


def test_unparsable_coordinates_become_none(tmp_path):
    csv_path = tmp_path / "shops.csv"
    _write_csv([{"Name": "X", "Latitude": "unknown", "Longitude": "78.1"}], csv_path)

    row = load_entities(csv_path)[0]
    assert row["latitude"] is None
    assert row["longitude"] == 78.1
