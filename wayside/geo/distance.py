from math import asin, cos, radians, sin, sqrt
from typing import List, Sequence

from wayside.models.location import GeoPoint

# Mean Earth radius (IUGG)
EARTH_RADIUS_METERS = 6_371_008.8


def distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points in meters (haversine)."""
    lat1 = radians(a.latitude)
    lat2 = radians(b.latitude)
    d_lat = lat2 - lat1
    d_lng = radians(b.longitude - a.longitude)

    h = sin(d_lat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(d_lng / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * asin(min(1.0, sqrt(h)))


def interpolate(a: GeoPoint, b: GeoPoint, fraction: float) -> GeoPoint:
    """Point at ``fraction`` of the way from a to b, linear in lat/lng space.

    Route vertices are close together, so the error against a true geodesic
    is negligible at search-radius scale.
    """
    if fraction <= 0:
        return a
    if fraction >= 1:
        return b
    return GeoPoint(
        latitude=a.latitude + fraction * (b.latitude - a.latitude),
        longitude=a.longitude + fraction * (b.longitude - a.longitude),
    )


def cumulative_distances(path: Sequence[GeoPoint]) -> List[float]:
    """Distance traveled from the first vertex to each vertex of ``path``."""
    if not path:
        return []
    cumulative = [0.0]
    for prev, curr in zip(path, path[1:]):
        cumulative.append(cumulative[-1] + distance(prev, curr))
    return cumulative
