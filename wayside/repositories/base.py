from abc import ABC, abstractmethod
from typing import List, Optional

from wayside.models.location import GeoPoint
from wayside.models.place import PlaceRecord
from wayside.models.route import TravelMode


# Custom Exception Hierarchy
class MapsServiceError(Exception):
    """Base class for map service errors."""
    pass

class MissingApiKeyError(MapsServiceError):
    """No API key was configured for the map service."""
    pass

class InvalidApiKeyError(MapsServiceError):
    """The configured API key was rejected by the client library."""
    pass

class GeocodingError(MapsServiceError):
    """Error during geocoding."""
    pass

class DirectionsError(MapsServiceError):
    """Error retrieving directions."""
    pass

class PlacesSearchError(MapsServiceError):
    """Error searching for places."""
    pass


class BaseMapsRepository(ABC):
    """Capabilities the route search pipeline needs from a map provider."""

    @abstractmethod
    async def resolve_address(self, address: str) -> GeoPoint:
        """Convert free text to coordinates. Raises GeocodingError if nothing matches."""
        pass

    @abstractmethod
    async def compute_route(
        self,
        origin: GeoPoint,
        destination: GeoPoint,
        mode: TravelMode = TravelMode.DRIVE,
    ) -> str:
        """Encoded polyline of the route. Raises DirectionsError if there is none."""
        pass

    @abstractmethod
    async def search_near(
        self,
        query: str,
        center: GeoPoint,
        radius_meters: float,
        limit: int,
        language: Optional[str] = None,
        region: Optional[str] = None,
    ) -> List[PlaceRecord]:
        """Places matching ``query`` biased toward a circle. Raises PlacesSearchError."""
        pass
