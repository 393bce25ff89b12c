"""Unit tests for spherical-earth helpers."""
import math

import pytest

import geodesy


def test_haversine_zero_for_same_point() -> None:
    assert geodesy.haversine_distance(40.0, -3.0, 40.0, -3.0) == 0.0


def test_haversine_one_millidegree_at_equator() -> None:
    expected = 6371000.0 * math.radians(0.001)
    assert geodesy.haversine_distance(0, 0, 0, 0.001) == pytest.approx(expected, rel=1e-9)
    assert geodesy.haversine_distance(0, 0, 0.001, 0) == pytest.approx(expected, rel=1e-9)


def test_distance_3d_combines_axes() -> None:
    horizontal = geodesy.haversine_distance(0, 0, 0, 0.001)
    assert geodesy.distance_3d(0, 0, 30, 0, 0.001, 100) == pytest.approx(math.hypot(horizontal, 70))
    assert geodesy.distance_3d(0, 0, 100, 0, 0, 30) == pytest.approx(70)


def test_longitude_degrees_shrink_toward_poles() -> None:
    assert geodesy.meters_per_degree_lng(0) == pytest.approx(111320.0)
    assert geodesy.meters_per_degree_lng(60) == pytest.approx(55660.0)
    assert geodesy.meters_per_degree_lat() == 110540.0


def test_heading_cardinal_directions() -> None:
    assert geodesy.calculate_heading(0, 0, 1, 0) == pytest.approx(0)
    assert geodesy.calculate_heading(0, 0, 0, 1) == pytest.approx(90)
    assert geodesy.calculate_heading(0, 0, -1, 0) == pytest.approx(180)
    assert geodesy.calculate_heading(0, 0, 0, -1) == pytest.approx(270)


def test_polyline_length_sums_legs() -> None:
    leg = geodesy.haversine_distance(0, 0, 0, 0.001)
    assert geodesy.polyline_length([(0, 0), (0, 0.001), (0, 0.002)]) == pytest.approx(2 * leg)
    assert geodesy.polyline_length([(0, 0)]) == 0.0
    assert geodesy.polyline_length([]) == 0.0


def test_local_xyz_origin_and_offsets() -> None:
    assert geodesy.to_local_xyz(10, 20, 50, 10, 20) == (0.0, 50, 0.0)
    east, up, north = geodesy.to_local_xyz(0.001, 0.001, 0, 0, 0)
    assert east == pytest.approx(111.32)
    assert north == pytest.approx(110.54)
    assert up == 0


def test_center_of_bounding_box() -> None:
    assert geodesy.center_of([]) == (0.0, 0.0)
    assert geodesy.center_of([(1, 1), (3, 5), (2, 2)]) == (2.0, 3.0)
