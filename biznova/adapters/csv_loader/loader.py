"""CSV loader — reads and normalizes retailer / customer CSV exports."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from biznova.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    normalize_email,
    normalize_phone,
)

logger = logging.getLogger(__name__)


def _sniff_dialect(sample: str) -> type[csv.Dialect]:
    """Detect the delimiter (comma/semicolon/tab) from the header line."""
    if not sample:
        return csv.excel

    first_line = sample.splitlines()[0]
    delims = [",", ";", "\t"]
    counts = {d: first_line.count(d) for d in delims}
    best_delim = max(counts, key=counts.get)

    if counts[best_delim] > 0:
        class DynamicDialect(csv.excel):
            delimiter = best_delim
        return DynamicDialect

    return csv.excel


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str | None]]:
    """Read a CSV file with BOM handling and column normalization.

    Args:
        file_path: path to the CSV file.
        encoding: file encoding (utf-8-sig strips BOM automatically).

    Returns:
        List of dicts with normalized column names.
    """
    with open(file_path, encoding=encoding, newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        reader = csv.DictReader(f, dialect=_sniff_dialect(sample))
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
        rows = [
            {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
            for raw_row in reader
        ]

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), file_path.name, list(col_map.values()))
    return rows


def _first(row: dict[str, str | None], *keys: str) -> str | None:
    for key in keys:
        value = clean_string(row.get(key))
        if value:
            return value
    return None


def load_entities(file_path: Path) -> list[dict]:
    """Load and normalize a retailers or customers CSV.

    Expected columns (after normalization, any alias works):
        name / owner_name, shop_name / store_name, email, phone / mobile,
        address, locality / area, city, latitude / lat, longitude / lng / lon,
        avatar_url, category
    """
    rows = _read_csv(file_path)
    entities = []
    for row in rows:
        address = _first(row, "address", "full_address", "street_address")
        city = _first(row, "city", "town")
        if city and address and city.lower() not in address.lower():
            address = f"{address}, {city}"

        entities.append({
            "name": _first(row, "name", "owner_name", "full_name", "customer_name") or "",
            "shop_name": _first(row, "shop_name", "store_name", "business_name"),
            "email": normalize_email(row.get("email")),
            "phone": normalize_phone(_first(row, "phone", "mobile", "phone_number")),
            "address": address or city,
            # Entities without an explicit locality are discoverable by city
            "locality": _first(row, "locality", "area", "neighbourhood", "neighborhood") or city,
            "latitude": _parse_float(_first(row, "latitude", "lat")),
            "longitude": _parse_float(_first(row, "longitude", "lng", "lon", "long")),
            "avatar_url": _first(row, "avatar_url", "avatar", "image_url"),
            "category": _first(row, "category", "shop_type", "type"),
        })
    logger.info("Parsed %d entities from %s", len(entities), file_path.name)
    return entities


def _parse_float(value: str | None) -> float | None:
    """Safely parse a float from a string."""
    if not value:
        return None
    try:
        return float(value.replace(",", ".").strip())
    except ValueError:
        return None
