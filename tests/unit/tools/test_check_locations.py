"""Tests for the location audit report."""

from biznova.domain.entities.registered_entity import RegisteredEntity
from biznova.domain.value_objects.enums import EntityRole
from biznova.domain.value_objects.geo_point import GeoPoint
from biznova.tools.check_locations import build_report


def _entity(id, location=None, **kwargs):
    return RegisteredEntity(id=id, role=EntityRole.RETAILER, name=f"shop-{id}", location=location, **kwargs)


def test_build_report_classifies_entities():
    # #3 was stored as (0, 0), which loads without a location
    entities = [
        _entity(1, GeoPoint(latitude=26.2, longitude=78.1)),
        _entity(2, None, locality="Morar"),
        _entity(3, None),
        _entity(4, GeoPoint(latitude=26.3, longitude=78.2)),
    ]
    report = build_report(EntityRole.RETAILER, entities, placeholder_ids={3})
    assert report.total == 4
    assert report.with_gps == 2
    assert [e.id for e in report.placeholders] == [3]
    assert [e.id for e in report.missing] == [2]
    assert report.discoverable == 2


def test_without_placeholder_ids_unlocated_entities_are_missing():
    report = build_report(EntityRole.RETAILER, [_entity(1), _entity(2)])
    assert report.placeholders == []
    assert [e.id for e in report.missing] == [1, 2]


def test_build_report_empty():
    report = build_report(EntityRole.CUSTOMER, [])
    assert report.total == 0
    assert report.discoverable == 0
