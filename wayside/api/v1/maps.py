from typing import List, Optional
import logging
from fastapi import APIRouter, Depends, Query, HTTPException

from wayside.api.dependencies import get_maps_repository
from wayside.models.location import GeoPoint
from wayside.models.place import PlaceRecord
from wayside.repositories.base import BaseMapsRepository, GeocodingError, PlacesSearchError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/resolve", response_model=GeoPoint)
async def resolve_address_api(
    address: str = Query(..., min_length=1, description="Address or place name to resolve"),
    maps_repository: BaseMapsRepository = Depends(get_maps_repository),
):
    """Resolve an address to coordinates."""
    try:
        return await maps_repository.resolve_address(address)
    except GeocodingError as e:
        logger.warning(f"Could not resolve address '{address}': {e}")
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/search", response_model=List[PlaceRecord])
async def search_near_api(
    query: str = Query(..., min_length=1, description="Search query for places"),
    latitude: float = Query(..., ge=-90, le=90, description="Location latitude (WGS84)"),
    longitude: float = Query(..., ge=-180, le=180, description="Location longitude (WGS84)"),
    radius: float = Query(1000.0, gt=0, le=50000, description="Search radius in meters"),
    limit: int = Query(5, ge=1, le=20, description="Maximum number of results"),
    lang: Optional[str] = Query(None, description="BCP-47 language code"),
    region: Optional[str] = Query(None, description="CLDR region code"),
    maps_repository: BaseMapsRepository = Depends(get_maps_repository),
):
    """Search for places around a single point."""
    center = GeoPoint(latitude=latitude, longitude=longitude)
    try:
        places = await maps_repository.search_near(
            query, center, radius, limit, language=lang, region=region
        )
        logger.info(f"Found {len(places)} places for '{query}' near {center}")
        return places
    except PlacesSearchError as e:
        logger.error(f"Places search error for query '{query}': {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=f"Map service search error: {e}")
