"""
Turn raw provider features into ranked, display-ready places.

Restaurants and hotels share one pipeline (distance, name, address and
contact fallbacks, id, stable sort by distance); only the kind-specific
fields differ and those come from a small per-kind strategy.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, List, Optional, Union

from domain.models import Coordinate, PlaceKind, RankedPlace, RawPlace
from services.cuisine import food_emoji_for, parse_food_items
from services.geo_math import format_distance, haversine_distance_km

ADDRESS_NOT_AVAILABLE = "Address not available"
DISTANCE_UNAVAILABLE = "n/a"

logger = logging.getLogger(__name__)


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _first_text(*values: Any) -> Optional[str]:
    for value in values:
        text = _clean_text(value)
        if text:
            return text
    return None


class PlaceFields:
    """Kind-specific presentation fields. Subclasses fill in what their cards show."""

    kind: PlaceKind

    def derive(self, raw: RawPlace) -> Dict[str, Any]:
        return {}


class HotelFields(PlaceFields):
    kind = PlaceKind.HOTEL
    default_category = "Hotel"

    def category_label(self, raw: RawPlace) -> str:
        # "accommodation.guest_house" -> "guest house"
        if raw.categories:
            parts = str(raw.categories[0]).split(".")
            if len(parts) > 1 and parts[1]:
                return parts[1].replace("_", " ")
        return self.default_category

    @staticmethod
    def star_count(raw: RawPlace) -> Optional[int]:
        if raw.stars is None or isinstance(raw.stars, bool):
            return None
        try:
            stars = int(float(raw.stars))
        except (TypeError, ValueError, OverflowError):
            return None
        return stars if stars > 0 else None

    def derive(self, raw: RawPlace) -> Dict[str, Any]:
        return {
            "category": self.category_label(raw),
            "stars": self.star_count(raw),
        }


class RestaurantFields(PlaceFields):
    kind = PlaceKind.RESTAURANT

    def derive(self, raw: RawPlace) -> Dict[str, Any]:
        cuisine = _clean_text(raw.cuisine) or ""
        return {
            "food_items": tuple(parse_food_items(cuisine)),
            "food_emoji": food_emoji_for(cuisine),
            "opening_hours": _clean_text(raw.opening_hours),
        }


PLACE_FIELDS: Dict[PlaceKind, PlaceFields] = {
    PlaceKind.HOTEL: HotelFields(),
    PlaceKind.RESTAURANT: RestaurantFields(),
}


def rank_place(raw: RawPlace, index: int, origin: Coordinate, kind: PlaceKind) -> RankedPlace:
    """Normalize a single raw place. `index` is its position in the provider response."""
    if raw.coordinate is not None:
        distance_km = haversine_distance_km(origin, raw.coordinate)
        distance = format_distance(distance_km)
    else:
        distance_km = math.inf
        distance = DISTANCE_UNAVAILABLE

    return RankedPlace(
        id=_clean_text(raw.place_id) or f"{kind.value}-{index}",
        kind=kind,
        name=_clean_text(raw.name) or kind.fallback_name,
        distance_km=distance_km,
        distance=distance,
        coordinate=raw.coordinate,
        address=_first_text(raw.formatted_address, raw.address_line1) or ADDRESS_NOT_AVAILABLE,
        phone=_first_text(raw.phone, raw.source_phone),
        website=_first_text(raw.website, raw.source_website),
        **PLACE_FIELDS[kind].derive(raw),
    )


def normalize(
    raw_places: Optional[Iterable[RawPlace]],
    origin: Coordinate,
    kind: Union[PlaceKind, str],
) -> List[RankedPlace]:
    """
    Rank raw places by distance from `origin`.

    Every input item is kept; missing fields fall back to defaults instead
    of dropping the item. Places without a usable position sort last. Ties
    keep provider order.
    """
    kind = PlaceKind(kind)
    if not raw_places:
        return []

    ranked = [rank_place(raw, index, origin, kind) for index, raw in enumerate(raw_places)]
    ranked.sort(key=lambda place: place.distance_km)

    unlocated = sum(1 for place in ranked if place.coordinate is None)
    if unlocated:
        logger.debug("normalize: %d of %d %s results have no usable position", unlocated, len(ranked), kind.value)
    return ranked
