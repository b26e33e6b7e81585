"""Search nearby restaurants or hotels from the command line.

Usage:
    python -m scripts.search_nearby --lat 40.7128 --lon -74.0060 [--kind hotel] [--radius-km 5] [--limit 20]
    python -m scripts.search_nearby --postcode 10001 [--json]

Needs GEOAPIFY_API_KEY in the environment (or backend/.env).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parents[1] / ".env")

from domain.errors import InvalidPostcodeError, LocationUnavailableError, ProviderError
from domain.models import PlaceKind, SearchResult, SearchStatus
from services.location import FixedLocationProvider
from services.search_session import SearchSession

logger = logging.getLogger(__name__)


def format_result_lines(result: SearchResult) -> List[str]:
    if result.status is SearchStatus.LOCATION_NOT_FOUND:
        return ["Could not find the location for this zip code."]
    lines = []
    if result.location_label:
        lines.append(result.location_label)
    if result.status is SearchStatus.NO_RESULTS:
        lines.append(f"No {result.kind.value}s found in this area.")
        return lines
    for place in result.places:
        lines.append(f"{place.distance:>9}  {place.name}  {place.address}")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Find restaurants or hotels near a position or postcode.")
    where = parser.add_mutually_exclusive_group(required=True)
    where.add_argument("--postcode", help="Postal code to search around.")
    where.add_argument("--lat", type=float, help="Latitude of the search origin (requires --lon).")
    parser.add_argument("--lon", type=float, help="Longitude of the search origin.")
    parser.add_argument("--kind", choices=[k.value for k in PlaceKind], default=PlaceKind.RESTAURANT.value)
    parser.add_argument("--radius-km", type=float, default=None)
    parser.add_argument("--limit", type=int, default=None)
    parser.add_argument("--json", action="store_true", help="Print the result as JSON.")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.lat is not None and args.lon is None:
        parser.error("--lat requires --lon")
    if args.postcode is not None and args.lon is not None:
        parser.error("--lon cannot be combined with --postcode")

    session = SearchSession(kind=PlaceKind(args.kind), radius_km=args.radius_km, limit=args.limit)
    try:
        if args.postcode is not None:
            result = session.search_postcode(args.postcode)
        else:
            result = session.search_device(FixedLocationProvider.from_lat_lon(args.lat, args.lon))
    except (InvalidPostcodeError, ValueError) as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        return 2
    except LocationUnavailableError as exc:
        print(f"Location unavailable: {exc}", file=sys.stderr)
        return 1
    except ProviderError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print("\n".join(format_result_lines(result)))
    return 0 if result.status is SearchStatus.OK else 3


if __name__ == "__main__":
    raise SystemExit(main())
