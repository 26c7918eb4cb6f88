"""Tests for domain entities."""

from datetime import timezone

from biznova.domain.entities.registered_entity import RegisteredEntity
from biznova.domain.value_objects.enums import EntityRole
from biznova.domain.value_objects.geo_point import GeoPoint


def _shop(**kwargs) -> RegisteredEntity:
    return RegisteredEntity(id=1, role=EntityRole.RETAILER, name="Ramesh Gupta", **kwargs)


def test_display_name_prefers_shop_name():
    assert _shop(shop_name="Gupta Kirana Store").display_name == "Gupta Kirana Store"
    assert _shop().display_name == "Ramesh Gupta"


def test_has_gps():
    assert not _shop().has_gps()
    assert _shop(location=GeoPoint(latitude=26.2, longitude=78.1)).has_gps()


def test_move_to_sets_location_locality_and_timestamp():
    shop = _shop(locality="Old Area")
    point = GeoPoint(latitude=26.249273, longitude=78.169700)
    shop.move_to(point, "Lashkar")
    assert shop.location == point
    assert shop.locality == "Lashkar"
    assert shop.updated_at is not None
    assert shop.updated_at.tzinfo is timezone.utc


def test_move_to_clears_empty_locality():
    shop = _shop(locality="Old Area")
    shop.move_to(GeoPoint(latitude=26.2, longitude=78.1), "")
    assert shop.locality is None


def test_build_geocode_query():
    shop = _shop(address="Shop 12, Sarafa Bazaar", locality="Lashkar")
    assert shop.build_geocode_query() == "Shop 12, Sarafa Bazaar, Lashkar"
    assert _shop(locality="Morar").build_geocode_query() == "Morar"
    assert _shop().build_geocode_query() is None
