"""Exceptions raised by the search pipeline and its provider clients."""
from typing import Optional


class NearbyPlacesError(Exception):
    """Base class for every error raised by this package."""


class ProviderError(NearbyPlacesError):
    """An external provider call failed (network error, bad status, bad payload)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class PlacesProviderError(ProviderError):
    pass


class GeocodingError(ProviderError):
    pass


class ProviderNotConfiguredError(ProviderError):
    """No API key is configured, so no provider call can be made."""


class InvalidPostcodeError(NearbyPlacesError, ValueError):
    pass


class LocationUnavailableError(NearbyPlacesError):
    """The device could not produce a position."""

    PERMISSION_DENIED = "permission_denied"
    SERVICES_DISABLED = "services_disabled"
    UNAVAILABLE = "unavailable"

    def __init__(self, reason: str = UNAVAILABLE, message: Optional[str] = None):
        super().__init__(message or _LOCATION_MESSAGES.get(reason, "Unable to get location"))
        self.reason = reason


_LOCATION_MESSAGES = {
    LocationUnavailableError.PERMISSION_DENIED: "Permission denied",
    LocationUnavailableError.SERVICES_DISABLED: "Location services are disabled",
    LocationUnavailableError.UNAVAILABLE: "Unable to get location",
}
