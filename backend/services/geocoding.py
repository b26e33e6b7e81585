"""Postcode geocoding and the shared HTTP plumbing for the Geoapify APIs.

Both the geocoder and the places client go through `_provider_get`, which
owns the session, the API key and the mapping of transport problems onto
`ProviderError` subclasses.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional, Type
from urllib.parse import urlencode

import requests

from domain.errors import GeocodingError, ProviderError, ProviderNotConfiguredError
from domain.models import Coordinate, GeocodedLocation
from settings import settings

logger = logging.getLogger(__name__)
_session = requests.Session()

GEOCODE_SEARCH_PATH = "/v1/geocode/search"
GEOCODE_REVERSE_PATH = "/v1/geocode/reverse"
UNKNOWN_LABEL = "Unknown"
UNKNOWN_CITY = "Unknown City"


def _redact_key(text: str) -> str:
    return re.sub(r"apiKey=[^&\s]+", "apiKey=<redacted>", text)


def _require_api_key() -> str:
    if not settings.GEOAPIFY_API_KEY:
        raise ProviderNotConfiguredError("GEOAPIFY_API_KEY is not set; provider calls are unavailable.")
    return settings.GEOAPIFY_API_KEY


def _provider_get(
    path: str,
    *,
    params: dict[str, Any],
    error_cls: Type[ProviderError],
    what: str,
) -> Any:
    """GET a provider endpoint and return its decoded JSON body.

    Network errors, non-2xx statuses and undecodable bodies all raise
    `error_cls` with the original exception chained.
    """
    query = dict(params)
    query["apiKey"] = _require_api_key()
    url = f"{settings.GEOAPIFY_BASE_URL}{path}"
    if settings.LOG_PROVIDER_URLS:
        logger.debug("GET %s", _redact_key(f"{url}?{urlencode(query)}"))

    try:
        resp = _session.get(url, params=query, timeout=settings.PROVIDER_TIMEOUT_SECONDS)
    except requests.RequestException as exc:
        logger.warning("%s request failed: %s", what, _redact_key(str(exc)))
        raise error_cls(f"Failed to fetch {what}: {_redact_key(str(exc))}") from exc

    if not 200 <= resp.status_code < 300:
        logger.warning("%s request returned status %s", what, resp.status_code)
        raise error_cls(f"Failed to fetch {what}: API returned status {resp.status_code}", status_code=resp.status_code)

    try:
        return resp.json()
    except ValueError as exc:
        logger.warning("%s response was not valid JSON: %s", what, exc)
        raise error_cls(f"Failed to fetch {what}: invalid JSON in response") from exc


def _location_from_result(item: dict) -> Optional[GeocodedLocation]:
    try:
        coordinate = Coordinate(lat=float(item["lat"]), lon=float(item["lon"]))
    except (KeyError, TypeError, ValueError):
        return None
    city = item.get("city") or item.get("county") or UNKNOWN_LABEL
    state = item.get("state") or item.get("country") or UNKNOWN_LABEL
    return GeocodedLocation(coordinate=coordinate, city=str(city), state=str(state))


def geocode_postcode(postcode: str) -> Optional[GeocodedLocation]:
    """Resolve a postal code to a location.

    Returns None when the provider knows no such postcode; raises
    `GeocodingError` when the lookup itself fails.
    """
    code = postcode.strip()
    data = _provider_get(
        GEOCODE_SEARCH_PATH,
        params={"postcode": code, "format": "json"},
        error_cls=GeocodingError,
        what="postcode location",
    )
    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list) or not results:
        logger.warning("No geocoding results for postcode %r", code)
        return None

    location = _location_from_result(results[0]) if isinstance(results[0], dict) else None
    if location is None:
        logger.warning("Geocoding result for postcode %r has no usable coordinates", code)
        return None
    logger.debug("Geocoded postcode %r to %s (%s)", code, location.label, location.coordinate)
    return location


def reverse_geocode(coordinate: Coordinate) -> Optional[GeocodedLocation]:
    """Name the area around a device position ("city, state").

    Returns None when the provider has nothing for the position; raises
    `GeocodingError` when the lookup itself fails.
    """
    data = _provider_get(
        GEOCODE_REVERSE_PATH,
        params={"lat": str(coordinate.lat), "lon": str(coordinate.lon), "format": "json"},
        error_cls=GeocodingError,
        what="location name",
    )
    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        logger.warning("No reverse geocoding results for %.5f,%.5f", coordinate.lat, coordinate.lon)
        return None

    item = results[0]
    city = item.get("city") or item.get("county") or UNKNOWN_CITY
    country_code = item.get("country_code")
    state = item.get("state") or (country_code.upper() if isinstance(country_code, str) else None) or UNKNOWN_LABEL
    location = GeocodedLocation(coordinate=coordinate, city=str(city), state=str(state))
    logger.debug("Reverse geocoded %.5f,%.5f to %s", coordinate.lat, coordinate.lon, location.label)
    return location
