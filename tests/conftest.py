"""Pytest configuration and shared fixtures."""

import pytest

from biznova.domain.value_objects.geo_point import GeoPoint


@pytest.fixture
def origin() -> GeoPoint:
    """Gwalior, where the platform's first retailers registered."""
    return GeoPoint(latitude=26.249273, longitude=78.169700)
