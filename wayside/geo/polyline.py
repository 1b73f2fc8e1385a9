"""Encoded polyline codec.

Routes come back from the routing service as an encoded polyline: each
coordinate is stored as a delta from the previous one at 1e-5 degree
precision, zig-zag encoded and split into 5-bit groups, least significant
first. A group with bit 0x20 set is followed by another group of the same
value. Each group is offset by 63 to land in printable ASCII.

See https://developers.google.com/maps/documentation/utilities/polylinealgorithm
"""

from typing import Iterable, List, Tuple
import polyline

from wayside.core.errors import MalformedPolyline
from wayside.models.location import GeoPoint

PRECISION = 5
_FACTOR = 10 ** PRECISION

_MIN_CHAR = 63
_MAX_CHAR = 126
_CONTINUATION = 0x20
_CHUNK_MASK = 0x1F
# A 32-bit signed delta fits in 7 groups of 5 bits
_MAX_GROUPS = 7

_MAX_LAT = 90 * _FACTOR
_MAX_LNG = 180 * _FACTOR


def _read_delta(encoded: str, index: int) -> Tuple[int, int]:
    """Decode one signed delta starting at ``index``; return it and the next index."""
    result = 0
    shift = 0
    start = index
    while True:
        if index >= len(encoded):
            raise MalformedPolyline("input ends in the middle of a codeword", start)
        code = ord(encoded[index])
        if code < _MIN_CHAR or code > _MAX_CHAR:
            raise MalformedPolyline(f"invalid character {encoded[index]!r}", index)
        b = code - _MIN_CHAR
        index += 1
        result |= (b & _CHUNK_MASK) << shift
        shift += 5
        if b < _CONTINUATION:
            break
        if shift >= _MAX_GROUPS * 5:
            raise MalformedPolyline("coordinate delta overflows the fixed-point range", start)
    delta = ~(result >> 1) if result & 1 else result >> 1
    return delta, index


def decode(encoded: str) -> List[GeoPoint]:
    """Decode an encoded polyline into points in traversal order.

    An empty string is an empty path, not an error.
    """
    points: List[GeoPoint] = []
    index = 0
    lat = 0
    lng = 0

    while index < len(encoded):
        point_start = index
        dlat, index = _read_delta(encoded, index)
        if index >= len(encoded):
            raise MalformedPolyline("latitude is not followed by a longitude", point_start)
        dlng, index = _read_delta(encoded, index)

        lat += dlat
        lng += dlng
        if abs(lat) > _MAX_LAT or abs(lng) > _MAX_LNG:
            raise MalformedPolyline("decoded coordinate is out of range", point_start)

        points.append(GeoPoint(latitude=lat / _FACTOR, longitude=lng / _FACTOR))

    return points


def encode(points: Iterable[GeoPoint]) -> str:
    """Encode points with the same algorithm ``decode`` reads."""
    return polyline.encode([p.as_tuple() for p in points], PRECISION)
