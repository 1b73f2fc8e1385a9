from functools import lru_cache
from fastapi import Depends

from wayside.core.settings import get_settings
from wayside.repositories.base import BaseMapsRepository
from wayside.repositories.maps.google_maps import GoogleMapsRepository
from wayside.services.route_search import RouteSearchService


@lru_cache()
def get_maps_repository() -> BaseMapsRepository:
    """Get GoogleMapsRepository instance."""
    settings = get_settings()
    return GoogleMapsRepository(
        api_key=settings.GOOGLE_MAPS_API_KEY,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
        places_base_url=settings.PLACES_BASE_URL,
        routes_base_url=settings.ROUTES_BASE_URL,
        max_response_bytes=settings.MAX_RESPONSE_BYTES,
    )


def get_route_search_service(
    maps_repository: BaseMapsRepository = Depends(get_maps_repository),
) -> RouteSearchService:
    """Get RouteSearchService instance."""
    settings = get_settings()
    return RouteSearchService(
        maps_repository=maps_repository,
        search_timeout=settings.SEARCH_TIMEOUT_SECONDS,
        max_concurrent_searches=settings.MAX_CONCURRENT_SEARCHES,
    )
