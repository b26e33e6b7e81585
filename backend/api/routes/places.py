"""
Places API routes.

Nearby restaurant/hotel search around a device position or a postcode,
plus a bare postcode lookup.
"""
import logging
from enum import Enum
from typing import List, Optional
from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from domain.errors import InvalidPostcodeError, ProviderError, ProviderNotConfiguredError
from domain.models import Coordinate, PlaceKind, SearchResult
from services.geocoding import geocode_postcode
from services.place_search import search_by_postcode, search_places, validate_postcode

router = APIRouter()
logger = logging.getLogger(__name__)


class PlaceCollection(str, Enum):
    RESTAURANTS = "restaurants"
    HOTELS = "hotels"

    @property
    def kind(self) -> PlaceKind:
        if self is PlaceCollection.HOTELS:
            return PlaceKind.HOTEL
        return PlaceKind.RESTAURANT


class CoordinateResponse(BaseModel):
    lat: float
    lon: float


class PlaceResponse(BaseModel):
    id: str
    kind: str
    name: str
    distance: str
    distance_km: Optional[float] = None
    coordinate: Optional[CoordinateResponse] = None
    address: str
    phone: Optional[str] = None
    website: Optional[str] = None
    category: Optional[str] = None
    stars: Optional[int] = None
    food_items: Optional[List[str]] = None
    food_emoji: Optional[str] = None
    opening_hours: Optional[str] = None


class SearchResponse(BaseModel):
    kind: str
    status: str
    origin: Optional[CoordinateResponse] = None
    location_label: Optional[str] = None
    places: List[PlaceResponse]


class GeocodeResponse(BaseModel):
    postcode: str
    lat: float
    lon: float
    city: str
    state: str
    label: str


def result_to_response(result: SearchResult) -> SearchResponse:
    """Convert a domain SearchResult to the API response."""
    return SearchResponse(**result.to_dict())


def _provider_failure(exc: ProviderError) -> HTTPException:
    if isinstance(exc, ProviderNotConfiguredError):
        return HTTPException(status_code=503, detail=str(exc))
    return HTTPException(status_code=502, detail=str(exc))


@router.get("/places/{collection}", response_model=SearchResponse)
def search_nearby(
    collection: PlaceCollection,
    lat: Optional[float] = Query(None),
    lon: Optional[float] = Query(None),
    postcode: Optional[str] = Query(None),
    radius_km: Optional[float] = Query(None, gt=0),
    limit: Optional[int] = Query(None, ge=1, le=500),
):
    """
    Search nearby places, sorted by distance.

    Pass either `lat`+`lon` (device position) or `postcode`, not both. An
    empty `places` list with status `no_results` is not an error.
    """
    kind = collection.kind
    if postcode is not None and (lat is not None or lon is not None):
        raise HTTPException(status_code=422, detail="Provide lat and lon, or a postcode, not both.")
    try:
        if lat is not None and lon is not None:
            try:
                origin = Coordinate(lat=lat, lon=lon)
            except ValueError as exc:
                raise HTTPException(status_code=422, detail=str(exc))
            result = search_places(origin, kind, radius_km=radius_km, limit=limit)
        elif postcode is not None:
            result = search_by_postcode(postcode, kind, radius_km=radius_km, limit=limit)
        else:
            raise HTTPException(status_code=422, detail="Provide lat and lon, or a postcode.")
    except InvalidPostcodeError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except ProviderError as exc:
        logger.warning("Search for %s failed: %s", collection.value, exc)
        raise _provider_failure(exc)

    return result_to_response(result)


@router.get("/geocode/{postcode}", response_model=GeocodeResponse)
def geocode(postcode: str):
    """Resolve a postcode to coordinates and a city/state label."""
    try:
        code = validate_postcode(postcode)
        location = geocode_postcode(code)
    except InvalidPostcodeError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except ProviderError as exc:
        logger.warning("Geocoding %r failed: %s", postcode, exc)
        raise _provider_failure(exc)

    if location is None:
        raise HTTPException(status_code=404, detail="Could not find the location for this zip code.")
    return GeocodeResponse(
        postcode=code,
        lat=location.coordinate.lat,
        lon=location.coordinate.lon,
        city=location.city,
        state=location.state,
        label=location.label,
    )
