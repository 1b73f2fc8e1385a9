import asyncio
from typing import Dict, List, Optional, Set

import pytest

from wayside.models.location import GeoPoint
from wayside.models.place import PlaceRecord
from wayside.models.route import TravelMode
from wayside.repositories.base import (
    BaseMapsRepository,
    DirectionsError,
    GeocodingError,
    PlacesSearchError,
)

# Canonical example from the polyline algorithm documentation
CANONICAL_POLYLINE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"
CANONICAL_POINTS = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]


class StubMapsRepository(BaseMapsRepository):
    """In-memory map provider with scriptable failures."""

    def __init__(
        self,
        addresses: Optional[Dict[str, GeoPoint]] = None,
        encoded_route: Optional[str] = CANONICAL_POLYLINE,
        failing_searches: Optional[Set[int]] = None,
        search_delays: Optional[Dict[int, float]] = None,
    ):
        self.addresses = addresses if addresses is not None else {
            "Sacramento": GeoPoint(latitude=38.5, longitude=-120.2),
            "Coos Bay": GeoPoint(latitude=43.252, longitude=-126.453),
        }
        self.encoded_route = encoded_route
        self.failing_searches = failing_searches or set()
        self.search_delays = search_delays or {}
        self.search_calls: List[GeoPoint] = []
        self.route_calls = []

    async def resolve_address(self, address: str) -> GeoPoint:
        if address not in self.addresses:
            raise GeocodingError(f"No results found for address: {address}")
        return self.addresses[address]

    async def compute_route(self, origin, destination, mode=TravelMode.DRIVE) -> str:
        self.route_calls.append((origin, destination, mode))
        if self.encoded_route is None:
            raise DirectionsError("No route found")
        return self.encoded_route

    async def search_near(self, query, center, radius_meters, limit, language=None, region=None):
        call_number = len(self.search_calls)
        self.search_calls.append(center)
        await asyncio.sleep(self.search_delays.get(call_number, 0))
        if call_number in self.failing_searches:
            raise PlacesSearchError("API error (HTTP 503): backend unavailable")
        return [
            PlaceRecord(
                id=f"place-{call_number}-{i}",
                name=f"{query} #{i}",
                location=center,
            )
            for i in range(limit)
        ]


@pytest.fixture
def stub_repository():
    return StubMapsRepository()


@pytest.fixture
def canonical_path():
    return [GeoPoint(latitude=lat, longitude=lng) for lat, lng in CANONICAL_POINTS]
