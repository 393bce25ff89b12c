"""
Curve Generator
Smooths sparse waypoints into a dense Catmull-Rom curve with clamped endpoints
"""

import math
from typing import List, Sequence, Tuple

from models import Waypoint, CurveData, SegmentRange
import config
import geodesy


def catmull_rom(p0: float, p1: float, p2: float, p3: float, t: float) -> float:
    """
    Evaluate the uniform Catmull-Rom basis on one axis

    Args:
        p0, p1, p2, p3: Control values (curve runs from p1 at t=0 to p2 at t=1)
        t: Curve parameter in [0, 1]

    Returns:
        Interpolated value
    """
    t2 = t * t
    t3 = t2 * t
    return 0.5 * (
        (2 * p1) +
        (-p0 + p2) * t +
        (2 * p0 - 5 * p1 + 4 * p2 - p3) * t2 +
        (-p0 + 3 * p1 - 3 * p2 + p3) * t3
    )


def generate_curve(waypoints: Sequence[Waypoint]) -> CurveData:
    """
    Generate a dense smooth curve through the waypoints

    Each waypoint pair contributes CURVE_STEPS_PER_SEGMENT + 1 samples. The
    sample at t=1 of one segment and t=0 of the next are both kept.

    Args:
        waypoints: Ordered waypoints (altitude is ignored)

    Returns:
        CurveData with (lat, lng) points and one SegmentRange per waypoint pair
    """
    if len(waypoints) < 2:
        return CurveData(points=[(wp.lat, wp.lng) for wp in waypoints], segment_ranges=[])

    n = len(waypoints)
    steps = config.CURVE_STEPS_PER_SEGMENT
    points: List[Tuple[float, float]] = []
    segment_ranges: List[SegmentRange] = []

    for i in range(n - 1):
        start_index = len(points)
        p0 = waypoints[max(0, i - 1)]
        p1 = waypoints[i]
        p2 = waypoints[i + 1]
        p3 = waypoints[min(n - 1, i + 2)]

        for k in range(steps + 1):
            t = k / steps
            lat = catmull_rom(p0.lat, p1.lat, p2.lat, p3.lat, t)
            lng = catmull_rom(p0.lng, p1.lng, p2.lng, p3.lng, t)
            points.append((lat, lng))

        segment_ranges.append(SegmentRange(start=start_index, end=len(points) - 1))

    return CurveData(points=points, segment_ranges=segment_ranges)


def interpolate_altitude(waypoints: Sequence[Waypoint], fraction: float) -> float:
    """
    Linearly interpolate altitude over a path fraction

    The fraction is spread evenly across waypoint indices, not distance.

    Args:
        waypoints: Ordered waypoints
        fraction: Position along the route in [0, 1]

    Returns:
        Altitude in meters (0 for an empty route)
    """
    if not waypoints:
        return 0.0
    if len(waypoints) == 1:
        return waypoints[0].altitude

    last = len(waypoints) - 1
    raw_index = fraction * last
    idx = min(int(math.floor(raw_index)), last)
    next_idx = min(idx + 1, last)
    local_t = raw_index - idx

    a1 = waypoints[idx].altitude
    a2 = waypoints[next_idx].altitude
    return a1 + (a2 - a1) * local_t


def curve_points_3d(waypoints: Sequence[Waypoint]) -> List[Tuple[float, float, float]]:
    """Dense curve points with altitude attached by path fraction"""
    curve = generate_curve(waypoints)
    total = len(curve.points)

    points = []
    for i, (lat, lng) in enumerate(curve.points):
        fraction = i / (total - 1) if total > 1 else 0.0
        points.append((lat, lng, interpolate_altitude(waypoints, fraction)))
    return points


def segment_lengths(curve: CurveData) -> List[float]:
    """Physical length of every segment range, in meters"""
    return [
        geodesy.polyline_length(curve.points[r.start:r.end + 1])
        for r in curve.segment_ranges
    ]
