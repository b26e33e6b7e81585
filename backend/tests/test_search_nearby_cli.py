import json
from unittest.mock import patch

import pytest

from domain.errors import PlacesProviderError
from domain.models import Coordinate, PlaceKind, RankedPlace, SearchResult, SearchStatus
from scripts import search_nearby

ORIGIN = Coordinate(lat=40.0, lon=-74.0)


def _result(places=()) -> SearchResult:
    status = SearchStatus.OK if places else SearchStatus.NO_RESULTS
    return SearchResult(kind=PlaceKind.RESTAURANT, status=status, origin=ORIGIN, places=tuple(places), sequence=1)


def _place() -> RankedPlace:
    return RankedPlace(
        id="r1",
        kind=PlaceKind.RESTAURANT,
        name="Joe's Pizza",
        distance_km=1.24,
        distance="1.2 km",
        coordinate=ORIGIN,
        address="7 Carmine St",
        food_items=("Pizza",),
        food_emoji="\U0001F355",
    )


@patch.object(search_nearby.SearchSession, "search_device")
def test_cli_prints_one_line_per_place(mock_search, capsys):
    mock_search.return_value = _result([_place()])
    code = search_nearby.main(["--lat", "40.0", "--lon", "-74.0"])
    out = capsys.readouterr().out
    assert code == 0
    assert "1.2 km  Joe's Pizza  7 Carmine St" in out


@patch.object(search_nearby.SearchSession, "search_postcode")
def test_cli_json_output(mock_search, capsys):
    mock_search.return_value = _result([_place()])
    code = search_nearby.main(["--postcode", "10014", "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert payload["places"][0]["food_items"] == ["Pizza"]
    mock_search.assert_called_once_with("10014")


@patch.object(search_nearby.SearchSession, "search_device")
def test_cli_no_results(mock_search, capsys):
    mock_search.return_value = _result()
    code = search_nearby.main(["--lat", "40.0", "--lon", "-74.0"])
    assert code == 3
    assert "No restaurants found in this area." in capsys.readouterr().out


@patch.object(search_nearby.SearchSession, "search_device")
def test_cli_provider_error(mock_search, capsys):
    mock_search.side_effect = PlacesProviderError("Failed to fetch restaurants: API returned status 401")
    code = search_nearby.main(["--lat", "40.0", "--lon", "-74.0"])
    assert code == 1
    assert "status 401" in capsys.readouterr().err


def test_cli_rejects_invalid_latitude(capsys):
    code = search_nearby.main(["--lat", "123", "--lon", "0"])
    assert code == 2
    assert "Invalid input" in capsys.readouterr().err


@patch.object(search_nearby.SearchSession, "search_postcode")
def test_cli_rejects_lon_with_postcode(mock_search, capsys):
    with pytest.raises(SystemExit) as excinfo:
        search_nearby.main(["--postcode", "10014", "--lon", "-74.0"])
    assert excinfo.value.code == 2
    assert "--lon cannot be combined with --postcode" in capsys.readouterr().err
    mock_search.assert_not_called()
