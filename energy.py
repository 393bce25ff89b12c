"""
Energy Model
Converts waypoint-to-waypoint displacement and speed assumptions into
current draw and battery capacity consumed, per segment and per route
"""

import logging
from typing import Sequence

from models import (
    Waypoint, SegmentAnalysis, RouteAnalysis, RouteSummary,
    BatteryProfile, BatteryStatus, CurveData
)
import config
import geodesy

logger = logging.getLogger(__name__)


def base_current(vertical_rate: float, climb_speed: float) -> float:
    """
    Select the current draw for a vertical rate before the altitude penalty

    Climbing interpolates between cruise and climb current by effort
    (rate / climb_speed, capped at 1) and adds CLIMB_PENALTY_FACTOR once
    effort exceeds CLIMB_PENALTY_EFFORT. Descending runs near idle.

    Args:
        vertical_rate: Signed vertical speed in m/s
        climb_speed: Reference climb speed in m/s

    Returns:
        Current in Amps
    """
    deadband = config.VERTICAL_RATE_DEADBAND

    if vertical_rate > deadband:
        effort = min(vertical_rate / climb_speed, 1)
        current = config.CRUISE_CURRENT + (config.CLIMB_CURRENT - config.CRUISE_CURRENT) * effort
        if effort > config.CLIMB_PENALTY_EFFORT:
            current *= (1 + config.CLIMB_PENALTY_FACTOR)
        return current

    if vertical_rate < -deadband:
        return config.IDLE_DESCENT_CURRENT

    return config.CRUISE_CURRENT


def altitude_factor(avg_altitude: float) -> float:
    """Air-density multiplier: every 100m of mean altitude adds 1%"""
    return 1 + (avg_altitude / 100) * config.ALTITUDE_PENALTY_PER_100M


def calculate_segment(p1: Waypoint, p2: Waypoint,
                      cruise_speed: float = config.DEFAULT_CRUISE_SPEED,
                      climb_speed: float = config.DEFAULT_CLIMB_SPEED) -> SegmentAnalysis:
    """
    Analyze energy use between two consecutive waypoints

    The segment lasts as long as its slower axis: horizontal distance at
    cruise speed or vertical distance at climb speed, never under
    MIN_SEGMENT_TIME.

    Args:
        p1, p2: Segment endpoints
        cruise_speed: Horizontal speed in m/s
        climb_speed: Vertical reference speed in m/s

    Returns:
        SegmentAnalysis for the segment
    """
    horizontal = geodesy.haversine_distance(p1.lat, p1.lng, p2.lat, p2.lng)
    vertical = p2.altitude - p1.altitude
    distance = geodesy.distance_3d(p1.lat, p1.lng, p1.altitude, p2.lat, p2.lng, p2.altitude)

    time_horizontal = horizontal / cruise_speed
    time_vertical = abs(vertical) / climb_speed
    time = max(time_horizontal, time_vertical, config.MIN_SEGMENT_TIME)

    vertical_rate = vertical / time
    current = base_current(vertical_rate, climb_speed)
    current *= altitude_factor((p1.altitude + p2.altitude) / 2)

    # mAh = A * h * 1000
    consumed = current * (time / 3600) * 1000

    return SegmentAnalysis(
        distance_3d=distance,
        vertical_distance=vertical,
        time=time,
        consumed_capacity=consumed,
        average_current=current
    )


def classify_battery_status(total_consumption: float, capacity: float) -> BatteryStatus:
    """
    Classify consumption against capacity

    Thresholds are exclusive: exactly 50% is still ok.
    """
    usage_percent = total_consumption / capacity * 100

    if usage_percent > config.BATTERY_CRASH_PERCENT:
        return BatteryStatus.CRASH
    if usage_percent > config.BATTERY_CRITICAL_PERCENT:
        return BatteryStatus.CRITICAL
    if usage_percent > config.BATTERY_WARNING_PERCENT:
        return BatteryStatus.WARNING
    return BatteryStatus.OK


def analyze_route(waypoints: Sequence[Waypoint],
                  battery: BatteryProfile,
                  cruise_speed: float = config.DEFAULT_CRUISE_SPEED,
                  climb_speed: float = config.DEFAULT_CLIMB_SPEED) -> RouteAnalysis:
    """
    Analyze a whole route, one SegmentAnalysis per consecutive waypoint pair

    Args:
        waypoints: Ordered route waypoints
        battery: Battery the route is flown on
        cruise_speed: Horizontal speed in m/s
        climb_speed: Vertical reference speed in m/s

    Returns:
        RouteAnalysis (all zero with status ok for fewer than 2 waypoints)
    """
    if len(waypoints) < 2:
        return RouteAnalysis()

    segments = [
        calculate_segment(waypoints[i], waypoints[i + 1], cruise_speed, climb_speed)
        for i in range(len(waypoints) - 1)
    ]

    total_distance = sum(s.distance_3d for s in segments)
    total_time = sum(s.time for s in segments)
    total_consumption = sum(s.consumed_capacity for s in segments)
    status = classify_battery_status(total_consumption, battery.capacity_mah)

    logger.debug("Analyzed %d segments: %.1f mAh of %.0f mAh (%s)",
                 len(segments), total_consumption, battery.capacity_mah, status.value)

    return RouteAnalysis(
        total_distance=total_distance,
        total_time=total_time,
        total_consumption=total_consumption,
        usage_percent=total_consumption / battery.capacity_mah * 100,
        segments=segments,
        battery_status=status
    )


def summarize_route(waypoints: Sequence[Waypoint]) -> RouteSummary:
    """Horizontal length, altitude range and bounding center of a route"""
    points = [(wp.lat, wp.lng) for wp in waypoints]
    altitudes = [wp.altitude for wp in waypoints]
    center_lat, center_lng = geodesy.center_of(points)

    return RouteSummary(
        waypoint_count=len(waypoints),
        total_distance=geodesy.polyline_length(points),
        min_altitude=min(altitudes) if altitudes else 0.0,
        max_altitude=max(altitudes) if altitudes else 0.0,
        center_lat=center_lat,
        center_lng=center_lng
    )


def consumed_at_progress(analysis: RouteAnalysis, curve: CurveData, progress: float) -> float:
    """
    Capacity consumed once a fraction of the dense curve has been flown

    Completed segments count in full; the current segment counts by the
    share of its dense points already passed.

    Args:
        analysis: Route analysis for the same waypoints as the curve
        curve: Dense curve with segment ranges
        progress: Fraction of the dense curve flown, in [0, 1]

    Returns:
        Consumed capacity in mAh
    """
    if not analysis.segments or len(curve.points) < 2:
        return 0.0

    progress = min(max(progress, 0.0), 1.0)
    raw_index = progress * (len(curve.points) - 1)

    consumed = 0.0
    for segment, r in zip(analysis.segments, curve.segment_ranges):
        if raw_index >= r.end:
            consumed += segment.consumed_capacity
            continue
        if raw_index > r.start and r.end > r.start:
            consumed += segment.consumed_capacity * (raw_index - r.start) / (r.end - r.start)
        break

    return consumed
