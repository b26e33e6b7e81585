"""
Places client for the Geoapify places API.

Issues one rectangle-filtered category search and lifts each GeoJSON
feature into a `RawPlace`. Ranking happens elsewhere.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from domain.errors import PlacesProviderError
from domain.models import BoundingBox, Coordinate, PlaceKind, RawPlace
from services.geocoding import _provider_get
from settings import settings

PLACES_SEARCH_PATH = "/v2/places"


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def raw_place_from_feature(feature: Any) -> RawPlace:
    """Lift one provider feature into a RawPlace; missing pieces stay None."""
    feature = _as_dict(feature)
    props = _as_dict(feature.get("properties"))
    geometry = _as_dict(feature.get("geometry"))
    contact = _as_dict(props.get("contact"))
    source_raw = _as_dict(_as_dict(props.get("datasource")).get("raw"))
    catering = _as_dict(props.get("catering"))

    categories = props.get("categories") or []
    if isinstance(categories, str):
        categories = [categories]

    return RawPlace(
        place_id=props.get("place_id"),
        name=props.get("name"),
        categories=tuple(str(c) for c in categories),
        coordinate=Coordinate.from_lon_lat(geometry.get("coordinates")),
        formatted_address=props.get("formatted"),
        address_line1=props.get("address_line1"),
        phone=contact.get("phone"),
        website=props.get("website"),
        source_phone=source_raw.get("phone"),
        source_website=source_raw.get("website"),
        stars=source_raw.get("stars"),
        cuisine=catering.get("cuisine"),
        opening_hours=props.get("opening_hours"),
        raw=props,
    )


class PlacesClient:
    def __init__(self, default_limit: Optional[int] = None):
        self.default_limit = default_limit or settings.SEARCH_RESULT_LIMIT
        self.logger = logging.getLogger(__name__)

    def search(self, kind: PlaceKind, bbox: BoundingBox, limit: Optional[int] = None) -> List[RawPlace]:
        """
        Search one category inside `bbox`.

        An empty list means the provider found nothing; transport or status
        failures raise `PlacesProviderError`.
        """
        kind = PlaceKind(kind)
        count = limit or self.default_limit
        data = _provider_get(
            PLACES_SEARCH_PATH,
            params={
                "categories": kind.provider_categories,
                "filter": bbox.as_rect_filter(),
                "limit": str(count),
            },
            error_cls=PlacesProviderError,
            what=f"{kind.value}s",
        )
        if not isinstance(data, dict):
            raise PlacesProviderError(f"Failed to fetch {kind.value}s: unexpected response shape")

        features = data.get("features") or []
        results = [raw_place_from_feature(f) for f in features]
        self.logger.debug(
            "PlacesClient.search: kind=%s filter=%s limit=%d got %d results",
            kind.value,
            bbox.as_rect_filter(),
            count,
            len(results),
        )
        return results


_default_places_client: Optional[PlacesClient] = None


def get_default_places_client() -> PlacesClient:
    global _default_places_client
    if _default_places_client is None:
        _default_places_client = PlacesClient()
    return _default_places_client
