import math

import pytest

from domain.models import BoundingBox, Coordinate
from services.geo_math import compute_bounding_box, format_distance, haversine_distance_km


POINTS = [
    Coordinate(0.0, 0.0),
    Coordinate(40.7128, -74.0060),
    Coordinate(-33.8688, 151.2093),
    Coordinate(89.9, 179.9),
    Coordinate(-45.0, -179.5),
]


@pytest.mark.parametrize("point", POINTS)
def test_distance_to_self_is_zero(point):
    assert haversine_distance_km(point, point) == 0.0


def test_distance_is_symmetric():
    for a in POINTS:
        for b in POINTS:
            assert haversine_distance_km(a, b) == pytest.approx(haversine_distance_km(b, a))


def test_one_degree_of_longitude_at_equator():
    d = haversine_distance_km(Coordinate(0.0, 0.0), Coordinate(0.0, 1.0))
    assert d == pytest.approx(111.19, abs=0.5)


def test_antipodal_points_do_not_blow_up():
    d = haversine_distance_km(Coordinate(0.0, 0.0), Coordinate(0.0, 180.0))
    assert d == pytest.approx(math.pi * 6371.0, rel=1e-9)


def test_bounding_box_new_york():
    bbox = compute_bounding_box(Coordinate(lat=40.0, lon=-74.0), 5)
    assert bbox.min_lat == pytest.approx(39.955, abs=1e-3)
    assert bbox.max_lat == pytest.approx(40.045, abs=1e-3)
    assert bbox.min_lon < -74.0 < bbox.max_lon

    equator = compute_bounding_box(Coordinate(lat=0.0, lon=-74.0), 5)
    lon_delta = bbox.max_lon - (-74.0)
    equator_delta = equator.max_lon - (-74.0)
    assert lon_delta > equator_delta
    assert lon_delta == pytest.approx(5 / (111 * math.cos(math.radians(40))))


def test_bounding_box_default_radius_is_five_km():
    center = Coordinate(lat=10.0, lon=20.0)
    assert compute_bounding_box(center) == compute_bounding_box(center, 5)


def test_bounding_box_is_not_clamped_near_antimeridian():
    bbox = compute_bounding_box(Coordinate(lat=0.0, lon=179.99), 5)
    assert bbox.max_lon > 180.0


def test_rect_filter_order():
    bbox = BoundingBox(min_lon=1.5, min_lat=2.5, max_lon=3.5, max_lat=4.5)
    assert bbox.as_rect_filter() == "rect:1.5,2.5,3.5,4.5"


@pytest.mark.parametrize(
    "km,expected",
    [
        (0.45, "450 m"),
        (0.0, "0 m"),
        (0.9994, "999 m"),
        (1.0, "1.0 km"),
        (12.34, "12.3 km"),
        (0.0025, "3 m"),
        (0.0125, "13 m"),
        (1.25, "1.3 km"),
        (2.75, "2.8 km"),
    ],
)
def test_format_distance(km, expected):
    assert format_distance(km) == expected


def test_coordinate_rejects_out_of_range_values():
    with pytest.raises(ValueError):
        Coordinate(lat=91.0, lon=0.0)
    with pytest.raises(ValueError):
        Coordinate(lat=0.0, lon=-180.5)
    with pytest.raises(ValueError):
        Coordinate(lat=float("nan"), lon=0.0)


def test_coordinate_from_lon_lat_pair():
    assert Coordinate.from_lon_lat([-74.0, 40.0]) == Coordinate(lat=40.0, lon=-74.0)
    assert Coordinate.from_lon_lat(None) is None
    assert Coordinate.from_lon_lat([1.0]) is None
    assert Coordinate.from_lon_lat(["x", "y"]) is None
    assert Coordinate.from_lon_lat([0.0, 95.0]) is None
