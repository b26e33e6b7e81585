"""Pure geographic helpers: search bounding boxes, haversine distance, distance labels."""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

from domain.models import BoundingBox, Coordinate

EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE_LAT = 111.0
DEFAULT_RADIUS_KM = 5.0


def compute_bounding_box(center: Coordinate, radius_km: float = DEFAULT_RADIUS_KM) -> BoundingBox:
    """
    Box of roughly `radius_km` around `center`.

    One degree of latitude is taken as 111 km; the longitude delta is widened
    by 1/cos(lat) for meridian convergence. The result is not clamped, so
    boxes near the poles or the antimeridian can leave the valid range.
    """
    lat_delta = radius_km / KM_PER_DEGREE_LAT
    lon_delta = radius_km / (KM_PER_DEGREE_LAT * math.cos(math.radians(center.lat)))
    return BoundingBox(
        min_lon=center.lon - lon_delta,
        min_lat=center.lat - lat_delta,
        max_lon=center.lon + lon_delta,
        max_lat=center.lat + lat_delta,
    )


def haversine_distance_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates in km."""
    dlat = math.radians(b.lat - a.lat)
    dlon = math.radians(b.lon - a.lon)
    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(dlon / 2) ** 2
    )
    h = min(h, 1.0)  # rounding can push antipodal points just past 1
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def _round_half_up(value: float, places: str) -> Decimal:
    # Exact binary value, ties away from zero: same digits as JS toFixed.
    return Decimal(value).quantize(Decimal(places), rounding=ROUND_HALF_UP)


def format_distance(km: float) -> str:
    """'450 m' below one kilometre, '12.3 km' from there on. Halves round up."""
    if km < 1:
        return f"{_round_half_up(km * 1000, '1')} m"
    return f"{_round_half_up(km, '0.1')} km"
