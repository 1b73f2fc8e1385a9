from typing import Optional
import logging
from fastapi import APIRouter, Depends, Query, HTTPException

from wayside.api.dependencies import get_route_search_service
from wayside.core.errors import (
    EmptyRoute,
    EndpointResolutionFailed,
    MalformedPolyline,
    RouteNotFound,
)
from wayside.models.route import RouteSearchResult
from wayside.services.route_search import RouteSearchService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/search", response_model=RouteSearchResult)
async def search_along_route_api(
    query: str = Query(..., description="What to search for along the route"),
    origin: str = Query(..., alias="from", description="Origin address or place name"),
    destination: str = Query(..., alias="to", description="Destination address or place name"),
    mode: str = Query("DRIVE", description="DRIVE, WALK, BICYCLE, TWO_WHEELER or TRANSIT"),
    radius: float = Query(1000.0, description="Search radius around each waypoint in meters"),
    waypoints: int = Query(5, description="Number of waypoints to sample along the route"),
    limit: int = Query(5, description="Maximum results per waypoint"),
    lang: Optional[str] = Query(None, description="BCP-47 language code"),
    region: Optional[str] = Query(None, description="CLDR region code"),
    route_service: RouteSearchService = Depends(get_route_search_service),
):
    """Search for places near evenly spaced points along a route."""
    try:
        result = await route_service.run_route(
            query=query,
            origin_text=origin,
            destination_text=destination,
            mode=mode,
            radius=radius,
            waypoint_count=waypoints,
            per_waypoint_limit=limit,
            language=lang,
            region=region,
        )
        if result.failed_count:
            logger.warning(
                f"Route search for '{query}' completed with {result.failed_count} failed waypoint searches"
            )
        return result
    except EndpointResolutionFailed as e:
        raise HTTPException(status_code=404, detail=e.message)
    except (RouteNotFound, EmptyRoute) as e:
        raise HTTPException(status_code=404, detail=e.message)
    except MalformedPolyline as e:
        logger.error(f"Routing service returned an unreadable path: {e}")
        raise HTTPException(status_code=502, detail=f"Routing service returned an invalid path: {e.message}")
    except ValueError as e:
        logger.warning(f"Validation error in route search request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
