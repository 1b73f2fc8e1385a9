from bisect import bisect_left
from typing import List, Sequence
import logging

from wayside.geo.distance import cumulative_distances, interpolate
from wayside.models.location import GeoPoint
from wayside.models.route import Waypoint

logger = logging.getLogger(__name__)


def sample(path: Sequence[GeoPoint], count: int) -> List[GeoPoint]:
    """Resample ``path`` into ``count`` points spaced evenly by distance traveled.

    The i-th sample (0-based) sits at ``total * (i + 1) / count`` meters along
    the path, so the last one is always the final vertex. Fewer points come
    back when the path cannot support them: an empty path gives nothing, and
    a single-point or zero-length path gives one point.
    """
    if count < 1:
        raise ValueError(f"count must be at least 1, got {count}")
    if not path:
        return []
    if len(path) == 1:
        return [path[0]]
    if count == 1:
        return [path[-1]]

    cumulative = cumulative_distances(path)
    total = cumulative[-1]
    if total == 0:
        return [path[0]]

    last_segment = len(path) - 2
    samples: List[GeoPoint] = []
    for i in range(count):
        target = total * (i + 1) / count
        # First vertex at or past the target closes the bracketing segment
        seg = min(max(bisect_left(cumulative, target) - 1, 0), last_segment)
        seg_start = cumulative[seg]
        seg_len = cumulative[seg + 1] - seg_start
        fraction = 0.0 if seg_len == 0 else (target - seg_start) / seg_len
        samples.append(interpolate(path[seg], path[seg + 1], fraction))

    samples[-1] = path[-1]
    logger.debug(f"Sampled {len(samples)} points over {total:.0f}m from {len(path)} vertices")
    return samples


def to_waypoints(points: Sequence[GeoPoint]) -> List[Waypoint]:
    return [Waypoint(point=p, sequence_index=i) for i, p in enumerate(points)]
