import sys
from pathlib import Path

import pytest

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from settings import settings  # noqa: E402


@pytest.fixture(autouse=True)
def provider_settings(monkeypatch):
    monkeypatch.setattr(settings, "GEOAPIFY_API_KEY", "test-key")
    monkeypatch.setattr(settings, "GEOAPIFY_BASE_URL", "https://api.example.test")
    monkeypatch.setattr(settings, "SEARCH_RADIUS_KM", 5.0)
    monkeypatch.setattr(settings, "SEARCH_RESULT_LIMIT", 20)
    monkeypatch.setattr(settings, "MIN_POSTCODE_LENGTH", 3)
    return settings


class DummyResponse:
    def __init__(self, json_data=None, status_code=200, json_error=None):
        self._json = json_data
        self.status_code = status_code
        self._json_error = json_error

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._json


def feature(lat, lon, **props):
    """A minimal places-API GeoJSON feature."""
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
        "properties": props,
    }
