"""
Core domain models for the nearby places search.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple
import math


class PlaceKind(str, Enum):
    """Kind of place a search is looking for."""
    RESTAURANT = "restaurant"
    HOTEL = "hotel"

    @property
    def provider_categories(self) -> str:
        """Category filter understood by the places provider."""
        if self is PlaceKind.HOTEL:
            return "accommodation.hotel,accommodation"
        return "catering.restaurant"

    @property
    def fallback_name(self) -> str:
        if self is PlaceKind.HOTEL:
            return "Unnamed Hotel"
        return "Unnamed Restaurant"


class SearchStatus(str, Enum):
    """Outcome of a search that did not fail at the transport level."""
    OK = "ok"
    NO_RESULTS = "no_results"
    LOCATION_NOT_FOUND = "location_not_found"


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 position in decimal degrees."""
    lat: float
    lon: float

    def __post_init__(self) -> None:
        for name, value, limit in (("lat", self.lat, 90.0), ("lon", self.lon, 180.0)):
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if math.isnan(value) or not -limit <= value <= limit:
                raise ValueError(f"{name} must be within [-{limit:g}, {limit:g}], got {value!r}")

    @classmethod
    def from_lon_lat(cls, pair: Any) -> Optional["Coordinate"]:
        """Build from a provider [lon, lat] pair; None when the pair is unusable."""
        try:
            lon, lat = float(pair[0]), float(pair[1])
            return cls(lat=lat, lon=lon)
        except (TypeError, ValueError, IndexError, KeyError):
            return None

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lon": self.lon}


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned lon/lat rectangle used as a coarse geographic filter."""
    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    def as_rect_filter(self) -> str:
        """Render as the provider's `rect:` filter (minLon,minLat,maxLon,maxLat)."""
        return f"rect:{self.min_lon},{self.min_lat},{self.max_lon},{self.max_lat}"


@dataclass(frozen=True)
class RawPlace:
    """
    One feature from the places provider, read-only.

    Only the fields the normalizer consumes are lifted out of the payload;
    the untouched properties stay available on `raw`.
    """
    place_id: Optional[str] = None
    name: Optional[str] = None
    categories: Tuple[str, ...] = ()
    coordinate: Optional[Coordinate] = None
    formatted_address: Optional[str] = None
    address_line1: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    source_phone: Optional[str] = None
    source_website: Optional[str] = None
    stars: Optional[Any] = None  # hotels
    cuisine: Optional[str] = None  # restaurants, e.g. "pizza;italian"
    opening_hours: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RankedPlace:
    """A normalized, display-ready place. Only meaningful inside its result set."""
    id: str
    kind: PlaceKind
    name: str
    distance_km: float
    distance: str
    coordinate: Optional[Coordinate]
    address: str
    phone: Optional[str] = None
    website: Optional[str] = None
    # hotels
    category: Optional[str] = None
    stars: Optional[int] = None
    # restaurants
    food_items: Tuple[str, ...] = ()
    food_emoji: Optional[str] = None
    opening_hours: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "kind": self.kind.value,
            "name": self.name,
            "distance": self.distance,
            "distance_km": self.distance_km if math.isfinite(self.distance_km) else None,
            "coordinate": self.coordinate.to_dict() if self.coordinate else None,
            "address": self.address,
            "phone": self.phone,
            "website": self.website,
        }
        if self.kind is PlaceKind.HOTEL:
            data["category"] = self.category
            data["stars"] = self.stars
        else:
            data["food_items"] = list(self.food_items)
            data["food_emoji"] = self.food_emoji
            data["opening_hours"] = self.opening_hours
        return data


@dataclass(frozen=True)
class GeocodedLocation:
    """Result of a postcode lookup."""
    coordinate: Coordinate
    city: str = "Unknown"
    state: str = "Unknown"

    @property
    def label(self) -> str:
        return f"{self.city}, {self.state}"


@dataclass(frozen=True)
class SearchResult:
    """
    Immutable outcome of one search.

    `sequence` is the request number the result was produced for; a session
    only adopts a result whose sequence is still the latest one it issued.
    """
    kind: PlaceKind
    status: SearchStatus
    origin: Optional[Coordinate] = None
    places: Tuple[RankedPlace, ...] = ()
    location_label: Optional[str] = None
    sequence: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.places

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "status": self.status.value,
            "origin": self.origin.to_dict() if self.origin else None,
            "location_label": self.location_label,
            "places": [p.to_dict() for p in self.places],
        }
