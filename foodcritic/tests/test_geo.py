import math

import numpy as np
import pytest

from foodcritic.geo.distance import distance_km, distance_km_array
from foodcritic.geo.fence import SAN_DIEGO, BoundingBox

DOWNTOWN = (32.7157, -117.1611)
LA_JOLLA = (32.8473, -117.2742)


# ── GeoFence ─────────────────────────────────────────────────────────────


def test_fence_contains_downtown():
    assert SAN_DIEGO.contains(*DOWNTOWN)


def test_fence_bounds_are_inclusive():
    assert SAN_DIEGO.contains(32.534156, -117.608643)
    assert SAN_DIEGO.contains(33.114249, -116.908707)


def test_fence_rejects_outside_points():
    assert not SAN_DIEGO.contains(34.0522, -118.2437)  # Los Angeles
    assert not SAN_DIEGO.contains(32.7, -116.5)
    assert not SAN_DIEGO.contains(1000.0, -117.1)


def test_fence_rejects_missing_or_nan():
    assert not SAN_DIEGO.contains(None, -117.1)
    assert not SAN_DIEGO.contains(32.7, None)
    assert not SAN_DIEGO.contains(float("nan"), -117.1)


def test_bounding_box_around_encloses_radius():
    box = BoundingBox.around(32.7, -117.1, 11.1)
    assert box.min_lat == pytest.approx(32.6)
    assert box.max_lat == pytest.approx(32.8)
    assert box.min_lng < -117.2 and box.max_lng > -117.0


def test_bounding_box_intersect():
    box = SAN_DIEGO.bounds.intersect(BoundingBox(32.0, 32.6, -118.0, -117.0))
    assert box.min_lat == 32.534156
    assert box.max_lat == 32.6
    assert box.min_lng == -117.608643
    assert box.max_lng == -117.0


# ── Distance ─────────────────────────────────────────────────────────────


def test_distance_to_self_is_zero():
    assert distance_km(*DOWNTOWN, *DOWNTOWN) == 0.0


def test_distance_is_symmetric():
    assert distance_km(*DOWNTOWN, *LA_JOLLA) == pytest.approx(distance_km(*LA_JOLLA, *DOWNTOWN))


def test_distance_downtown_to_la_jolla():
    assert 17.0 < distance_km(*DOWNTOWN, *LA_JOLLA) < 20.0


def test_one_degree_of_latitude():
    assert distance_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(111.19, abs=0.01)


def test_distance_propagates_nan():
    assert math.isnan(distance_km(float("nan"), 0.0, 1.0, 1.0))


def test_array_matches_scalar():
    lats = np.array([DOWNTOWN[0], LA_JOLLA[0]])
    lngs = np.array([DOWNTOWN[1], LA_JOLLA[1]])
    distances = distance_km_array(*DOWNTOWN, lats, lngs)
    assert distances[0] == 0.0
    assert distances[1] == pytest.approx(distance_km(*DOWNTOWN, *LA_JOLLA))
