"""Tests for NominatimAdapter — centroid fallback and caching (no network)."""

import pytest

from biznova.adapters.geocoder.nominatim_adapter import NominatimAdapter
from biznova.domain.value_objects.geo_point import GeoPoint


@pytest.fixture
def adapter(monkeypatch):
    adapter = NominatimAdapter(user_agent="test-agent", country_codes="in")
    calls = []

    async def offline_lookup(address):
        calls.append(address)
        return None

    monkeypatch.setattr(adapter, "_nominatim_lookup", offline_lookup)
    adapter.calls = calls
    return adapter


# ─── City centroid fallback ──────────────────────────────────────────


def test_city_centroid_gwalior():
    point = NominatimAdapter._city_centroid_lookup("Shop 4, Sarafa Bazaar, Lashkar, Gwalior")
    assert point is not None
    assert 26.0 < point.latitude < 26.5
    assert 78.0 < point.longitude < 78.4


def test_city_centroid_case_insensitive():
    assert NominatimAdapter._city_centroid_lookup("INDORE") is not None


def test_city_centroid_alias():
    assert NominatimAdapter._city_centroid_lookup("Bangalore") == NominatimAdapter._city_centroid_lookup("Bengaluru")


def test_city_centroid_requires_whole_word():
    """'Agra' must not match inside 'Nagrani Colony'."""
    assert NominatimAdapter._city_centroid_lookup("Nagrani Colony") is None


def test_city_centroid_unknown_city():
    assert NominatimAdapter._city_centroid_lookup("Some Unknown Place") is None


# ─── Query variants ─────────────────────────────────────────────────


def test_build_queries_drops_numbers():
    queries = NominatimAdapter._build_queries("Shop 12, MG Road, Gwalior 474001")
    assert queries == ["Shop 12, MG Road, Gwalior 474001", "shop mg road gwalior"]


def test_build_queries_single_variant_when_nothing_to_strip():
    assert NominatimAdapter._build_queries("morar") == ["morar"]


# ─── Cache behavior ─────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_falls_back_to_centroid(adapter):
    point = await adapter.geocode("Lashkar, Gwalior")
    assert isinstance(point, GeoPoint)
    assert adapter.calls == ["Lashkar, Gwalior"]


@pytest.mark.asyncio
async def test_cache_deduplicates(adapter):
    r1 = await adapter.geocode("Gwalior")
    r2 = await adapter.geocode("  gwalior ")
    assert r1 is r2
    assert len(adapter.calls) == 1


@pytest.mark.asyncio
async def test_unresolvable_address_cached_as_none(adapter):
    assert await adapter.geocode("Nowhere Land") is None
    assert await adapter.geocode("nowhere land") is None
    assert len(adapter.calls) == 1
