from typing import List, Optional
import asyncio
import logging

from wayside.core.errors import EmptyRoute, EndpointResolutionFailed, RouteNotFound
from wayside.geo import polyline
from wayside.geo.sampling import sample, to_waypoints
from wayside.models.location import GeoPoint
from wayside.models.route import (
    RouteSearchRequest,
    RouteSearchResult,
    SearchOutcome,
    TravelMode,
    Waypoint,
    WaypointResult,
)
from wayside.repositories.base import BaseMapsRepository, MapsServiceError

logger = logging.getLogger(__name__)


class RouteSearchService:
    """Finds places along the route between two addresses.

    One call to ``run_route`` resolves both endpoints, fetches the route
    polyline, samples evenly spaced waypoints along it and searches near each
    waypoint. The first four stages raise a ``PipelineError`` on failure. A
    failed waypoint search is recorded in its own outcome and never affects
    the other waypoints.
    """

    def __init__(
        self,
        maps_repository: BaseMapsRepository,
        search_timeout: Optional[float] = None,
        max_concurrent_searches: int = 8,
    ):
        self.maps_repository = maps_repository
        self.search_timeout = search_timeout
        self.max_concurrent_searches = max(1, max_concurrent_searches)

    async def run_route(
        self,
        query: str,
        origin_text: str,
        destination_text: str,
        mode: TravelMode | str = TravelMode.DRIVE,
        radius: float = 1000.0,
        waypoint_count: int = 5,
        per_waypoint_limit: int = 5,
        language: Optional[str] = None,
        region: Optional[str] = None,
    ) -> RouteSearchResult:
        request = RouteSearchRequest(
            query=query,
            origin=origin_text,
            destination=destination_text,
            mode=mode,
            radius=radius,
            waypoint_count=waypoint_count,
            per_waypoint_limit=per_waypoint_limit,
            language=language,
            region=region,
        )
        return await self.search(request)

    async def search(self, request: RouteSearchRequest) -> RouteSearchResult:
        logger.info(
            f"Route search for '{request.query}' from '{request.origin}' to "
            f"'{request.destination}' via {request.mode.value}"
        )

        origin = await self._resolve_endpoint("origin", request.origin)
        destination = await self._resolve_endpoint("destination", request.destination)

        try:
            encoded = await self.maps_repository.compute_route(origin, destination, request.mode)
        except MapsServiceError as e:
            logger.error(f"Route lookup failed: {e}")
            raise RouteNotFound(
                f"No route found between '{request.origin}' and '{request.destination}' "
                f"using mode {request.mode.value}: {e}"
            ) from e

        path = polyline.decode(encoded)
        if not path:
            raise EmptyRoute("Route returned no path points")
        logger.info(f"Decoded route with {len(path)} points")

        waypoints = to_waypoints(sample(path, request.waypoint_count))
        logger.info(f"Searching near {len(waypoints)} waypoints")

        outcomes = await self._fan_out(request, waypoints)

        result = RouteSearchResult(
            query=request.query,
            origin=request.origin,
            destination=request.destination,
            travel_mode=request.mode,
            origin_point=origin,
            destination_point=destination,
            waypoints=[
                WaypointResult(waypoint=wp, outcome=outcome)
                for wp, outcome in zip(waypoints, outcomes)
            ],
        )
        logger.info(
            f"Route search finished: {result.succeeded_count} waypoints succeeded, "
            f"{result.failed_count} failed, {len(result.all_places())} places"
        )
        return result

    async def _resolve_endpoint(self, which: str, address: str) -> GeoPoint:
        try:
            return await self.maps_repository.resolve_address(address)
        except MapsServiceError as e:
            logger.error(f"Failed to resolve {which} '{address}': {e}")
            raise EndpointResolutionFailed(which, address, str(e)) from e

    async def _fan_out(
        self, request: RouteSearchRequest, waypoints: List[Waypoint]
    ) -> List[SearchOutcome]:
        # One slot per waypoint; completion order never decides placement
        slots: List[Optional[SearchOutcome]] = [None] * len(waypoints)
        semaphore = asyncio.Semaphore(self.max_concurrent_searches)

        async def search_one(waypoint: Waypoint):
            async with semaphore:
                slots[waypoint.sequence_index] = await self._search_waypoint(request, waypoint)

        await asyncio.gather(*(search_one(wp) for wp in waypoints))
        return slots

    async def _search_waypoint(
        self, request: RouteSearchRequest, waypoint: Waypoint
    ) -> SearchOutcome:
        index = waypoint.sequence_index
        call = self.maps_repository.search_near(
            request.query,
            waypoint.point,
            request.radius,
            request.per_waypoint_limit,
            language=request.language,
            region=request.region,
        )
        try:
            if self.search_timeout is not None:
                places = await asyncio.wait_for(call, timeout=self.search_timeout)
            else:
                places = await call
        except asyncio.TimeoutError:
            logger.warning(f"Search near waypoint {index} {waypoint.point} timed out after {self.search_timeout}s")
            return SearchOutcome.failure(index, f"search timed out after {self.search_timeout}s")
        except Exception as e:
            logger.warning(f"Search near waypoint {index} {waypoint.point} failed: {e}")
            return SearchOutcome.failure(index, str(e) or type(e).__name__)

        logger.debug(f"Waypoint {index}: {len(places)} places")
        return SearchOutcome.succeeded(index, places)
