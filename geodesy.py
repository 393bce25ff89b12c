"""
Geodesy Utilities
Spherical-earth distances and local metric conversions
"""

import math
from typing import List, Sequence, Tuple

import config


def haversine_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Calculate great circle distance between two points on Earth

    Args:
        lat1, lng1: First point coordinates
        lat2, lng2: Second point coordinates

    Returns:
        Distance in meters
    """
    R = config.EARTH_RADIUS

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lng2 - lng1)

    a = (math.sin(delta_phi / 2) ** 2 +
         math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return R * c


def distance_3d(lat1: float, lng1: float, alt1: float,
                lat2: float, lng2: float, alt2: float) -> float:
    """
    Calculate 3D distance between two points (haversine horizontal + vertical)

    Returns:
        Distance in meters
    """
    horizontal = haversine_distance(lat1, lng1, lat2, lng2)
    vertical = alt2 - alt1
    return math.sqrt(horizontal ** 2 + vertical ** 2)


def calculate_heading(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Calculate heading (bearing) from point 1 to point 2

    Returns:
        Heading in degrees (0 = North, 90 = East)
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lng = math.radians(lng2 - lng1)

    x = math.sin(delta_lng) * math.cos(lat2_rad)
    y = (math.cos(lat1_rad) * math.sin(lat2_rad) -
         math.sin(lat1_rad) * math.cos(lat2_rad) * math.cos(delta_lng))

    heading = math.degrees(math.atan2(x, y))
    return (heading + 360) % 360


def meters_per_degree_lat() -> float:
    """Meters spanned by one degree of latitude (constant on a sphere)"""
    return config.METERS_PER_DEGREE_LAT


def meters_per_degree_lng(lat: float) -> float:
    """Meters spanned by one degree of longitude at the given latitude"""
    return config.METERS_PER_DEGREE_LNG_EQUATOR * math.cos(math.radians(lat))


def polyline_length(points: Sequence[Tuple[float, float]]) -> float:
    """Sum of haversine distances between consecutive (lat, lng) points"""
    total = 0.0
    for i in range(1, len(points)):
        a_lat, a_lng = points[i - 1]
        b_lat, b_lng = points[i]
        total += haversine_distance(a_lat, a_lng, b_lat, b_lng)
    return total


def to_local_xyz(lat: float, lng: float, altitude: float,
                 origin_lat: float, origin_lng: float) -> Tuple[float, float, float]:
    """
    Convert a geographic point to a local metric frame centered on an origin

    Returns:
        (east, up, north) in meters
    """
    east = (lng - origin_lng) * meters_per_degree_lng(origin_lat)
    north = (lat - origin_lat) * meters_per_degree_lat()
    return (east, altitude, north)


def center_of(points: List[Tuple[float, float]]) -> Tuple[float, float]:
    """Bounding-box center of (lat, lng) points, (0, 0) when empty"""
    if not points:
        return (0.0, 0.0)

    lats = [p[0] for p in points]
    lngs = [p[1] for p in points]
    return ((min(lats) + max(lats)) / 2, (min(lngs) + max(lngs)) / 2)
