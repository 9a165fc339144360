"""Tests for GeoPoint value object."""

from shuttle.domain.value_objects.geo_point import GeoPoint

ALMATY = GeoPoint(latitude=43.238949, longitude=76.945465)
ASTANA = GeoPoint(latitude=51.128207, longitude=71.430411)


def test_haversine_same_point():
    """Distance from a point to itself should be 0."""
    assert ALMATY.haversine_km(ALMATY) == 0.0


def test_haversine_almaty_to_astana():
    """Almaty to Astana is approximately 970 km (straight line)."""
    distance = ALMATY.haversine_km(ASTANA)
    assert 900 < distance < 1050


def test_nearest_km_picks_closest():
    karaganda = GeoPoint(latitude=49.806406, longitude=73.085485)
    nearest = ASTANA.nearest_km([ALMATY, karaganda])
    assert nearest == ASTANA.haversine_km(karaganda)


def test_nearest_km_empty():
    assert ALMATY.nearest_km([]) is None


def test_dict_round_trip_shape():
    assert ALMATY.to_dict() == {"lat": 43.238949, "lng": 76.945465}
    assert GeoPoint.from_dict({"lat": 43.238949, "lng": 76.945465}) == ALMATY


def test_from_dict_incomplete():
    assert GeoPoint.from_dict(None) is None
    assert GeoPoint.from_dict({}) is None
    assert GeoPoint.from_dict({"lat": 43.0}) is None


def test_geo_point_is_frozen():
    """GeoPoint should be immutable."""
    p = GeoPoint(latitude=43.0, longitude=76.0)
    try:
        p.latitude = 50.0
        assert False, "Should have raised FrozenInstanceError"
    except AttributeError:
        pass
