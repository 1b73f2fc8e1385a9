import math

import pytest

from wayside.geo.distance import EARTH_RADIUS_METERS, cumulative_distances, distance
from wayside.geo.sampling import sample, to_waypoints
from wayside.models.location import GeoPoint

START = GeoPoint(latitude=0.0, longitude=0.0)


def _north_of_start(meters: float) -> GeoPoint:
    return GeoPoint(latitude=math.degrees(meters / EARTH_RADIUS_METERS), longitude=0.0)


def test_straight_path_is_split_evenly():
    path = [START, _north_of_start(1000)]

    samples = sample(path, 5)

    distances = [distance(START, p) for p in samples]
    assert distances == pytest.approx([200, 400, 600, 800, 1000], abs=1e-6)


def test_count_one_returns_destination(canonical_path):
    assert sample(canonical_path, 1) == [canonical_path[-1]]


@pytest.mark.parametrize("count", [1, 2, 3, 7, 25, 100])
def test_last_sample_is_destination(canonical_path, count):
    samples = sample(canonical_path, count)

    assert len(samples) == count
    assert samples[-1] == canonical_path[-1]


def test_canonical_route_two_samples(canonical_path):
    first, last = sample(canonical_path, 2)

    assert last == canonical_path[-1]
    # halfway by distance traveled falls on the second segment
    assert 40.7 < first.latitude < 43.252
    assert -126.453 < first.longitude < -120.95
    total = cumulative_distances(canonical_path)[-1]
    traveled = distance(canonical_path[0], canonical_path[1]) + distance(canonical_path[1], first)
    assert traveled == pytest.approx(total / 2, rel=1e-2)


def test_samples_progress_along_path(canonical_path):
    samples = sample(canonical_path, 10)

    # the route heads north the whole way
    latitudes = [p.latitude for p in samples]
    assert latitudes == sorted(latitudes)


def test_empty_path():
    assert sample([], 5) == []


def test_single_point_path_yields_one_point():
    assert sample([START], 5) == [START]


def test_zero_length_path_yields_one_point():
    assert sample([START, START, START], 4) == [START]


def test_duplicate_vertices_do_not_break_interpolation():
    end = _north_of_start(1000)
    path = [START, START, _north_of_start(500), _north_of_start(500), end, end]

    samples = sample(path, 4)

    distances = [distance(START, p) for p in samples]
    assert distances == pytest.approx([250, 500, 750, 1000], abs=1e-6)
    assert samples[-1] == end


def test_count_must_be_positive(canonical_path):
    with pytest.raises(ValueError):
        sample(canonical_path, 0)


def test_to_waypoints_numbers_from_zero(canonical_path):
    waypoints = to_waypoints(canonical_path)

    assert [wp.sequence_index for wp in waypoints] == [0, 1, 2]
    assert [wp.point for wp in waypoints] == canonical_path
