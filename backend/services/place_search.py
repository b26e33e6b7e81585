"""
The search pipeline: origin -> bounding box -> provider search -> ranked places.

These functions hold no state; `services.search_session` layers request
sequencing on top of them.
"""
from __future__ import annotations

import logging
from typing import Optional

from domain.errors import GeocodingError, InvalidPostcodeError
from domain.models import Coordinate, PlaceKind, SearchResult, SearchStatus
from services.geo_math import compute_bounding_box
from services.geocoding import geocode_postcode, reverse_geocode
from services.places_client import PlacesClient, get_default_places_client
from services.result_normalizer import normalize
from settings import settings

logger = logging.getLogger(__name__)


def validate_postcode(postcode: Optional[str]) -> str:
    code = (postcode or "").strip()
    if len(code) < settings.MIN_POSTCODE_LENGTH:
        raise InvalidPostcodeError("Please enter a valid zip code.")
    return code


def describe_origin(origin: Coordinate) -> Optional[str]:
    """Label such as "City, State" for a device position; None when the area cannot be named."""
    try:
        location = reverse_geocode(origin)
    except GeocodingError as exc:
        logger.warning("Could not name the area around (%.5f, %.5f): %s", origin.lat, origin.lon, exc)
        return None
    return location.label if location else None


def search_places(
    origin: Coordinate,
    kind: PlaceKind,
    client: Optional[PlacesClient] = None,
    radius_km: Optional[float] = None,
    limit: Optional[int] = None,
    location_label: Optional[str] = None,
    sequence: int = 0,
) -> SearchResult:
    """
    Search one category around `origin` and rank the results by distance.

    Without a `location_label` the origin is reverse geocoded for one; a
    failed lookup leaves the label empty and does not fail the search.
    """
    kind = PlaceKind(kind)
    client = client or get_default_places_client()
    radius = radius_km if radius_km is not None else settings.SEARCH_RADIUS_KM
    bbox = compute_bounding_box(origin, radius)
    if location_label is None:
        location_label = describe_origin(origin)

    raw_places = client.search(kind, bbox, limit=limit)
    places = normalize(raw_places, origin, kind)
    status = SearchStatus.OK if places else SearchStatus.NO_RESULTS
    logger.debug(
        "search_places: kind=%s origin=(%.5f, %.5f) radius_km=%.1f -> %d places",
        kind.value,
        origin.lat,
        origin.lon,
        radius,
        len(places),
    )
    return SearchResult(
        kind=kind,
        status=status,
        origin=origin,
        places=tuple(places),
        location_label=location_label,
        sequence=sequence,
    )


def search_by_postcode(
    postcode: str,
    kind: PlaceKind,
    client: Optional[PlacesClient] = None,
    radius_km: Optional[float] = None,
    limit: Optional[int] = None,
    sequence: int = 0,
) -> SearchResult:
    """
    Geocode `postcode` and search around it.

    An unknown postcode is a normal outcome (status `location_not_found`),
    not an error.
    """
    kind = PlaceKind(kind)
    code = validate_postcode(postcode)
    location = geocode_postcode(code)
    if location is None:
        return SearchResult(kind=kind, status=SearchStatus.LOCATION_NOT_FOUND, sequence=sequence)
    return search_places(
        location.coordinate,
        kind,
        client=client,
        radius_km=radius_km,
        limit=limit,
        location_label=location.label,
        sequence=sequence,
    )
