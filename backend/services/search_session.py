"""
Session-scoped search context.

A session stands in for the screen state of one user: which kind of place
they browse and the last result they were shown. Every search takes the
next sequence number; when it finishes, its result is only adopted if no
newer search (or a clear) was started in the meantime. Searches still
return their own result either way, so callers can tell a stale response
by `session.is_current(result)`.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from domain.errors import LocationUnavailableError, ProviderError
from domain.models import Coordinate, PlaceKind, SearchResult
from services.location import LocationProvider
from services.place_search import search_by_postcode, search_places, validate_postcode
from services.places_client import PlacesClient

logger = logging.getLogger(__name__)


class SearchSession:
    def __init__(
        self,
        kind: PlaceKind = PlaceKind.RESTAURANT,
        client: Optional[PlacesClient] = None,
        radius_km: Optional[float] = None,
        limit: Optional[int] = None,
    ):
        self.kind = PlaceKind(kind)
        self.client = client
        self.radius_km = radius_km
        self.limit = limit
        self._lock = threading.Lock()
        self._sequence = 0
        self._current: Optional[SearchResult] = None

    @property
    def current(self) -> Optional[SearchResult]:
        """The most recent result that was not superseded, or None."""
        with self._lock:
            return self._current

    @property
    def latest_sequence(self) -> int:
        with self._lock:
            return self._sequence

    def is_current(self, result: SearchResult) -> bool:
        with self._lock:
            return result.sequence == self._sequence

    def _begin(self) -> int:
        with self._lock:
            self._sequence += 1
            return self._sequence

    def _commit(self, result: SearchResult) -> SearchResult:
        with self._lock:
            if result.sequence == self._sequence:
                self._current = result
            else:
                logger.debug(
                    "Dropping stale %s result #%d (latest is #%d)",
                    result.kind.value,
                    result.sequence,
                    self._sequence,
                )
        return result

    def _discard(self, sequence: int) -> None:
        with self._lock:
            if sequence == self._sequence:
                self._current = None

    def _run(self, sequence: int, search: Callable[[], SearchResult]) -> SearchResult:
        try:
            result = search()
        except (ProviderError, LocationUnavailableError):
            # A failed search still replaces what was shown, unless it was superseded.
            self._discard(sequence)
            raise
        return self._commit(result)

    def search_at(self, origin: Coordinate, kind: Optional[PlaceKind] = None) -> SearchResult:
        kind = PlaceKind(kind or self.kind)
        sequence = self._begin()
        return self._run(
            sequence,
            lambda: search_places(
                origin,
                kind,
                client=self.client,
                radius_km=self.radius_km,
                limit=self.limit,
                sequence=sequence,
            ),
        )

    def search_postcode(self, postcode: str, kind: Optional[PlaceKind] = None) -> SearchResult:
        kind = PlaceKind(kind or self.kind)
        # Rejected input leaves the session untouched.
        code = validate_postcode(postcode)
        sequence = self._begin()
        return self._run(
            sequence,
            lambda: search_by_postcode(
                code,
                kind,
                client=self.client,
                radius_km=self.radius_km,
                limit=self.limit,
                sequence=sequence,
            ),
        )

    def search_device(self, provider: LocationProvider, kind: Optional[PlaceKind] = None) -> SearchResult:
        kind = PlaceKind(kind or self.kind)
        sequence = self._begin()

        def _search() -> SearchResult:
            origin = provider.current_position()
            return search_places(
                origin,
                kind,
                client=self.client,
                radius_km=self.radius_km,
                limit=self.limit,
                sequence=sequence,
            )

        return self._run(sequence, _search)

    def clear(self) -> None:
        """Drop the shown results and orphan any search still in flight."""
        with self._lock:
            self._sequence += 1
            self._current = None
