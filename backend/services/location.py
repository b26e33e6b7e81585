"""Device location as seen by the search pipeline: something that yields a Coordinate."""
from __future__ import annotations

from typing import Optional, Protocol

from domain.errors import LocationUnavailableError
from domain.models import Coordinate


class LocationProvider(Protocol):
    def current_position(self) -> Coordinate:
        """Return the device position or raise LocationUnavailableError."""
        ...


class FixedLocationProvider:
    """
    A position reported by the client (e.g. a phone sending its GPS fix).

    `None` means the client had no fix; `reason` says why, using the
    LocationUnavailableError reason constants.
    """

    def __init__(
        self,
        coordinate: Optional[Coordinate],
        reason: str = LocationUnavailableError.UNAVAILABLE,
    ):
        self.coordinate = coordinate
        self.reason = reason

    @classmethod
    def from_lat_lon(cls, lat: Optional[float], lon: Optional[float]) -> "FixedLocationProvider":
        if lat is None or lon is None:
            return cls(None)
        return cls(Coordinate(lat=lat, lon=lon))

    def current_position(self) -> Coordinate:
        if self.coordinate is None:
            raise LocationUnavailableError(self.reason)
        return self.coordinate
