from typing import Optional, List, Dict, Any
import asyncio
import json
import logging

import aiohttp
import googlemaps
import googlemaps.exceptions

from wayside.models.location import GeoPoint
from wayside.models.place import PlaceRecord
from wayside.models.route import TravelMode
from wayside.repositories.base import (
    BaseMapsRepository,
    MapsServiceError,
    MissingApiKeyError,
    InvalidApiKeyError,
    GeocodingError,
    DirectionsError,
    PlacesSearchError,
)

logger = logging.getLogger(__name__)

PLACES_BASE_URL = "https://places.googleapis.com/v1"
ROUTES_BASE_URL = "https://routes.googleapis.com"
MAX_RESPONSE_BYTES = 1_048_576

ROUTE_FIELD_MASK = "routes.polyline.encodedPolyline"
SEARCH_FIELD_MASK = (
    "places.id,places.displayName,places.formattedAddress,"
    "places.shortFormattedAddress,places.types,places.primaryType,"
    "places.location,places.rating,places.userRatingCount,places.priceLevel,"
    "places.websiteUri,places.googleMapsUri,places.businessStatus,places.editorialSummary"
)
# Places API caps text search pages at 20 results
MAX_SEARCH_RESULTS = 20


def parse_place(data: Dict[str, Any]) -> PlaceRecord:
    """Build a PlaceRecord from a Places API (v1) place object."""
    location = None
    loc_data = data.get("location")
    if loc_data and "latitude" in loc_data and "longitude" in loc_data:
        location = GeoPoint(latitude=loc_data["latitude"], longitude=loc_data["longitude"])

    return PlaceRecord(
        id=data.get("id", ""),
        name=(data.get("displayName") or {}).get("text", ""),
        address=data.get("formattedAddress") or data.get("shortFormattedAddress"),
        location=location,
        types=data.get("types", []),
        primary_type=data.get("primaryType"),
        rating=data.get("rating"),
        user_rating_count=data.get("userRatingCount"),
        price_level=data.get("priceLevel"),
        business_status=data.get("businessStatus"),
        website_uri=data.get("websiteUri"),
        google_maps_uri=data.get("googleMapsUri"),
        summary=(data.get("editorialSummary") or {}).get("text"),
    )


def extract_encoded_polyline(payload: Dict[str, Any]) -> Optional[str]:
    """Encoded polyline of the first route in a computeRoutes response, if any."""
    if not isinstance(payload, dict):
        return None
    routes = payload.get("routes") or []
    if not isinstance(routes, list) or not routes or not isinstance(routes[0], dict):
        return None
    polyline = routes[0].get("polyline")
    if not isinstance(polyline, dict):
        return None
    encoded = polyline.get("encodedPolyline")
    return encoded if isinstance(encoded, str) and encoded else None


def _lat_lng(point: GeoPoint) -> Dict[str, Any]:
    return {"location": {"latLng": {"latitude": point.latitude, "longitude": point.longitude}}}


class GoogleMapsRepository(BaseMapsRepository):
    def __init__(
        self,
        api_key: Optional[str],
        timeout: float = 10.0,
        places_base_url: str = PLACES_BASE_URL,
        routes_base_url: str = ROUTES_BASE_URL,
        max_response_bytes: int = MAX_RESPONSE_BYTES,
    ):
        """Initialize Google Maps clients."""
        if not api_key:
            raise MissingApiKeyError("missing API key: set GOOGLE_MAPS_API_KEY")
        logger.info("Initializing Google Maps client")
        self.api_key = api_key
        self.timeout = timeout
        self.places_base_url = places_base_url.rstrip("/")
        self.routes_base_url = routes_base_url.rstrip("/")
        self.max_response_bytes = max_response_bytes
        try:
            self.client = googlemaps.Client(key=api_key, timeout=timeout)
        except ValueError as e:
            raise InvalidApiKeyError(f"invalid API key: {e}") from e

    async def resolve_address(self, address: str) -> GeoPoint:
        """Convert address to coordinates using the Geocoding API."""
        logger.info(f"Attempting to geocode address: '{address}'")
        try:
            result = await asyncio.to_thread(self.client.geocode, address)
        except (
            googlemaps.exceptions.ApiError,
            googlemaps.exceptions.TransportError,
            googlemaps.exceptions.Timeout,
        ) as e:
            logger.error(f"Google Maps API error while geocoding '{address}': {e}", exc_info=True)
            raise GeocodingError(f"API error during geocoding for '{address}': {e}") from e

        if not result:
            logger.warning(f"No geocoding results found for address: '{address}'")
            raise GeocodingError(f"No results found for address: {address}")

        try:
            location_data = result[0]["geometry"]["location"]
            point = GeoPoint(latitude=location_data["lat"], longitude=location_data["lng"])
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Unexpected geocoding result for '{address}': {e}")
            raise GeocodingError(f"Malformed geocoding result for address: {address}") from e
        logger.info(
            f"Successfully geocoded '{address}' to {point}, address='{result[0].get('formatted_address', '')}'"
        )
        return point

    async def compute_route(
        self,
        origin: GeoPoint,
        destination: GeoPoint,
        mode: TravelMode = TravelMode.DRIVE,
    ) -> str:
        """Get the encoded polyline of a route using the Routes API."""
        logger.info(f"Attempting to compute route from {origin} to {destination} via mode='{mode.value}'")
        body = {
            "origin": _lat_lng(origin),
            "destination": _lat_lng(destination),
            "travelMode": mode.value,
            "polylineEncoding": "ENCODED_POLYLINE",
        }
        payload = await self._post(
            f"{self.routes_base_url}/directions/v2:computeRoutes",
            ROUTE_FIELD_MASK,
            body,
            DirectionsError,
        )

        encoded = extract_encoded_polyline(payload)
        if not encoded:
            logger.warning(f"No route found from {origin} to {destination}, mode='{mode.value}'")
            raise DirectionsError(
                f"No route found between {origin} and {destination} using mode {mode.value}"
            )
        logger.info(f"Successfully computed route: {len(encoded)} polyline characters")
        return encoded

    async def search_near(
        self,
        query: str,
        center: GeoPoint,
        radius_meters: float,
        limit: int,
        language: Optional[str] = None,
        region: Optional[str] = None,
    ) -> List[PlaceRecord]:
        """Text search biased toward a circle using the Places API."""
        log_query = f"query='{query}', center={center}, radius={radius_meters}m"
        logger.debug(f"Attempting to search places with {log_query}")

        body: Dict[str, Any] = {
            "textQuery": query,
            "locationBias": {
                "circle": {
                    "center": {"latitude": center.latitude, "longitude": center.longitude},
                    "radius": radius_meters,
                }
            },
            "maxResultCount": min(limit, MAX_SEARCH_RESULTS),
        }
        if language:
            body["languageCode"] = language
        if region:
            body["regionCode"] = region

        payload = await self._post(
            f"{self.places_base_url}/places:searchText",
            SEARCH_FIELD_MASK,
            body,
            PlacesSearchError,
        )
        try:
            places = [parse_place(p) for p in payload.get("places", [])]
        except (ValueError, AttributeError, TypeError) as e:
            raise PlacesSearchError(f"failed to parse search response: {e}") from e

        logger.debug(f"Found {len(places)} places for {log_query}")
        return places

    async def _post(
        self,
        url: str,
        field_mask: str,
        body: Dict[str, Any],
        error_cls: type = MapsServiceError,
    ) -> Dict[str, Any]:
        """POST a JSON body with auth and field mask headers, return the decoded JSON."""
        headers = {
            "X-Goog-Api-Key": self.api_key,
            "X-Goog-FieldMask": field_mask,
        }
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, json=body, headers=headers) as response:
                    status = response.status
                    raw = await response.read()
        except asyncio.TimeoutError as e:
            logger.error(f"Request to {url} timed out after {self.timeout}s")
            raise error_cls(f"request timed out after {self.timeout}s") from e
        except aiohttp.ClientError as e:
            logger.error(f"HTTP error calling {url}: {e}", exc_info=True)
            raise error_cls(f"HTTP error: {e}") from e

        if len(raw) > self.max_response_bytes:
            raise error_cls(f"API error (HTTP {status}): response too large: {len(raw)} bytes")
        if status < 200 or status >= 300:
            message = raw.decode("utf-8", errors="replace")
            logger.error(f"API error (HTTP {status}) from {url}: {message}")
            raise error_cls(f"API error (HTTP {status}): {message}")
        if not raw:
            return {}
        try:
            payload = json.loads(raw)
        except ValueError as e:
            raise error_cls(f"API error (HTTP {status}): failed to parse JSON response: {e}") from e
        if not isinstance(payload, dict):
            raise error_cls(f"API error (HTTP {status}): expected a JSON object, got {type(payload).__name__}")
        return payload
