"""
Pattern Synthesizer
Bulk-generates waypoints for circles, spirals, figure-eights and ovals
around a center coordinate, and regenerates placed patterns in place
"""

import math
from typing import Dict, List, Sequence

from models import Waypoint, PatternType, PatternInfo
import config
import geodesy


PATTERN_CATALOG: Dict[PatternType, PatternInfo] = {
    PatternType.CIRCLE: PatternInfo(
        type=PatternType.CIRCLE, label="Circle",
        description="Circular orbit at a fixed altitude"),
    PatternType.SPIRAL_UP: PatternInfo(
        type=PatternType.SPIRAL_UP, label="Spiral Up",
        description="Widening spiral climbing from start to end altitude"),
    PatternType.SPIRAL_DOWN: PatternInfo(
        type=PatternType.SPIRAL_DOWN, label="Spiral Down",
        description="Tightening spiral descending from end to start altitude"),
    PatternType.FIGURE8: PatternInfo(
        type=PatternType.FIGURE8, label="Figure 8",
        description="Double loop crossing over the center"),
    PatternType.OVAL: PatternInfo(
        type=PatternType.OVAL, label="Oval",
        description="Orbit foreshortened along the north-south axis"),
}


def _round_half_up(value: float) -> float:
    # half-up, so 30.5 -> 31 and -0.5 -> 0
    return float(math.floor(value + 0.5))


def _offset(center_lat: float, center_lng: float,
            north_m: float, east_m: float, dlng_per_m: float) -> tuple:
    dlat_per_m = 1.0 / geodesy.meters_per_degree_lat()
    return (center_lat + north_m * dlat_per_m, center_lng + east_m * dlng_per_m)


def generate_pattern(pattern_type: PatternType,
                     center_lat: float,
                     center_lng: float,
                     radius: float = config.DEFAULT_PATTERN_RADIUS,
                     point_count: int = config.DEFAULT_PATTERN_POINTS,
                     start_altitude: float = config.DEFAULT_PATTERN_START_ALTITUDE,
                     end_altitude: float = config.DEFAULT_PATTERN_END_ALTITUDE) -> List[Waypoint]:
    """
    Generate the waypoints of a geometric pattern

    Angles sweep counter-clockwise from east: latitude offset follows
    sin(angle), longitude offset follows cos(angle).

    Args:
        pattern_type: Shape to generate
        center_lat, center_lng: Pattern center in degrees
        radius: Pattern radius in meters
        point_count: Shape points per loop (before loop multipliers)
        start_altitude: Altitude for fixed patterns, low end for spirals
        end_altitude: High end for spirals

    Returns:
        New waypoints with fresh ids, empty for radius <= 0 or point_count < 1
    """
    if radius <= 0 or point_count < 1:
        return []

    dlng_per_m = 1.0 / geodesy.meters_per_degree_lng(center_lat)
    waypoints: List[Waypoint] = []

    if pattern_type == PatternType.CIRCLE or pattern_type == PatternType.OVAL:
        lat_radius = radius if pattern_type == PatternType.CIRCLE else radius * config.OVAL_LAT_RATIO
        for i in range(point_count + 1):
            angle = (i / point_count) * math.pi * 2
            lat, lng = _offset(center_lat, center_lng,
                               math.sin(angle) * lat_radius,
                               math.cos(angle) * radius,
                               dlng_per_m)
            waypoints.append(Waypoint(lat=lat, lng=lng, altitude=start_altitude))

    elif pattern_type == PatternType.SPIRAL_UP or pattern_type == PatternType.SPIRAL_DOWN:
        loops = config.SPIRAL_LOOPS
        total_points = point_count * loops
        min_ratio = config.SPIRAL_MIN_RADIUS_RATIO
        ascending = pattern_type == PatternType.SPIRAL_UP

        for i in range(total_points + 1):
            t = i / total_points
            angle = t * math.pi * 2 * loops
            if ascending:
                r = radius * (min_ratio + t * (1 - min_ratio))
                altitude = start_altitude + t * (end_altitude - start_altitude)
            else:
                r = radius * (1 - t * (1 - min_ratio))
                altitude = end_altitude - t * (end_altitude - start_altitude)

            lat, lng = _offset(center_lat, center_lng,
                               math.sin(angle) * r,
                               math.cos(angle) * r,
                               dlng_per_m)
            waypoints.append(Waypoint(lat=lat, lng=lng, altitude=_round_half_up(altitude)))

    elif pattern_type == PatternType.FIGURE8:
        total_points = point_count * config.FIGURE8_LOOP_MULTIPLIER
        for i in range(total_points + 1):
            angle = (i / total_points) * math.pi * 2
            lat, lng = _offset(center_lat, center_lng,
                               math.sin(angle * 2) * radius * config.FIGURE8_LATERAL_RATIO,
                               math.cos(angle) * radius,
                               dlng_per_m)
            waypoints.append(Waypoint(lat=lat, lng=lng, altitude=start_altitude))

    else:
        raise AssertionError(f"Unhandled pattern type: {pattern_type!r}")

    return waypoints


def infer_point_count(pattern_type: PatternType, length: int) -> int:
    """
    Recover the point_count that produced a pattern of the given length

    Args:
        pattern_type: Shape of the placed pattern
        length: Number of waypoints it produced

    Returns:
        Shape points per loop, at least 1
    """
    if length <= 1:
        return 1

    if pattern_type == PatternType.CIRCLE or pattern_type == PatternType.OVAL:
        return max(1, length - 1)
    if pattern_type == PatternType.SPIRAL_UP or pattern_type == PatternType.SPIRAL_DOWN:
        return max(1, int(_round_half_up((length - 1) / config.SPIRAL_LOOPS)))
    if pattern_type == PatternType.FIGURE8:
        return max(1, int(_round_half_up((length - 1) / config.FIGURE8_LOOP_MULTIPLIER)))

    raise AssertionError(f"Unhandled pattern type: {pattern_type!r}")


def regenerate_pattern(pattern_type: PatternType,
                       center_lat: float,
                       center_lng: float,
                       waypoint_ids: Sequence[str],
                       radius: float = config.DEFAULT_PATTERN_RADIUS,
                       start_altitude: float = config.DEFAULT_PATTERN_START_ALTITUDE,
                       end_altitude: float = config.DEFAULT_PATTERN_END_ALTITUDE) -> List[Waypoint]:
    """
    Regenerate a placed pattern after its radius or altitude changed

    The point count is inferred from the original id list, and the original
    ids are reassigned in order so references held by id stay valid.

    Returns:
        Regenerated waypoints carrying the original ids
    """
    point_count = infer_point_count(pattern_type, len(waypoint_ids))
    regenerated = generate_pattern(pattern_type, center_lat, center_lng,
                                   radius, point_count, start_altitude, end_altitude)

    return [
        wp.model_copy(update={'id': wp_id})
        for wp_id, wp in zip(waypoint_ids, regenerated)
    ]


def apply_regeneration(route: Sequence[Waypoint], regenerated: Sequence[Waypoint]) -> List[Waypoint]:
    """
    Replace route waypoints by id with their regenerated versions

    Waypoints not belonging to the pattern, and the route order, are untouched.
    """
    by_id = {wp.id: wp for wp in regenerated}
    return [by_id.get(wp.id, wp) for wp in route]
