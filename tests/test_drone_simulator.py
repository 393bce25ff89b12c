"""Tests for route playback with a virtual drone."""
import asyncio

import pytest

from drone_simulator import VirtualDrone, RoutePlayback
from main import build_route_plan
from models import BatteryProfile, Waypoint

WAYPOINTS = [
    Waypoint(id="a", lat=0.0, lng=0.0, altitude=30),
    Waypoint(id="b", lat=0.0, lng=0.001, altitude=30),
    Waypoint(id="c", lat=0.0, lng=0.002, altitude=100),
]


def _battery(capacity: float) -> BatteryProfile:
    return BatteryProfile(id="test", name="Test pack", chemistry="LiPo", capacity_mah=capacity,
                          nominal_voltage=14.8, cell_count=4, max_discharge_a=50)


@pytest.fixture
def drone() -> VirtualDrone:
    return VirtualDrone("drone_001", build_route_plan(WAYPOINTS, _battery(850)))


def test_idle_drone_does_not_move(drone: VirtualDrone) -> None:
    drone.update(5.0)
    assert drone.progress == 0
    assert drone.status == "idle"


def test_progress_rate_and_multiplier(drone: VirtualDrone) -> None:
    drone.start()
    drone.update(4.0)
    assert drone.progress == pytest.approx(0.2)
    drone.update(1.0, speed_multiplier=2.0)
    assert drone.progress == pytest.approx(0.3)
    assert drone.status == "flying"


def test_start_and_end_positions(drone: VirtualDrone) -> None:
    drone.start()
    frame = drone.get_frame()
    assert (frame.lat, frame.lng, frame.altitude) == pytest.approx((0.0, 0.0, 30))
    assert frame.segment_index == 0
    assert frame.heading == pytest.approx(90)

    drone.update(100.0)
    frame = drone.get_frame()
    assert drone.status == "finished"
    assert frame.progress == 1.0
    assert (frame.lat, frame.lng, frame.altitude) == pytest.approx((0.0, 0.002, 100))
    assert frame.segment_index == 1


def test_heading_holds_east_across_waypoints(drone: VirtualDrone) -> None:
    drone.start()
    points = len(drone.plan.curve.points)
    assert points == 42

    for k in range(points):
        drone.progress = (k + 0.5) / (points - 1) if k < points - 1 else 1.0
        assert drone.get_frame().heading == pytest.approx(90), k

    # exactly on the repeated boundary sample between the two segments
    drone.progress = 20 / 41
    assert drone.get_frame().heading == pytest.approx(90)
    drone.progress = 21 / 41
    assert drone.get_frame().heading == pytest.approx(90)


def test_battery_drains_to_route_total(drone: VirtualDrone) -> None:
    drone.start()
    drone.update(10.0)
    halfway = drone.battery_remaining_percent
    assert 0 < drone.consumed_capacity < drone.plan.analysis.total_consumption
    assert halfway < 100

    drone.update(10.0)
    assert drone.consumed_capacity == pytest.approx(drone.plan.analysis.total_consumption)
    assert drone.battery_remaining_percent < halfway


def test_finished_drone_stays_put(drone: VirtualDrone) -> None:
    drone.start()
    drone.update(50.0)
    consumed = drone.consumed_capacity
    drone.update(50.0)
    assert drone.consumed_capacity == consumed
    assert drone.status == "finished"


def test_small_battery_triggers_emergency() -> None:
    drone = VirtualDrone("drone_002", build_route_plan(WAYPOINTS, _battery(20)))
    drone.start()
    drone.update(12.0)

    assert drone.battery_remaining_percent < 10
    assert drone.status == "emergency"
    assert drone.low_battery_reported

    drone.update(12.0)
    assert drone.status == "finished"
    assert drone.battery_remaining_percent == 0


def test_single_point_route_finishes_immediately() -> None:
    drone = VirtualDrone("drone_003", build_route_plan(WAYPOINTS[:1], _battery(850)))
    drone.start()
    assert drone.status == "finished"
    frame = drone.get_frame()
    assert (frame.lat, frame.lng, frame.altitude) == (0.0, 0.0, 30)


def test_playback_without_service_returns_none() -> None:
    playback = RoutePlayback("http://127.0.0.1:9")
    assert asyncio.run(playback.play(WAYPOINTS, "lihv-850")) is None
