"""
Geodesy

Great-circle distance helpers shared by the synthesizer and the stats
calculator.
"""

from math import radians, cos, sin, atan2, sqrt
from typing import Any, Sequence

EARTH_RADIUS_KM = 6371.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great-circle distance between two points.

    Args:
        lat1, lon1: First point coordinates (degrees)
        lat2, lon2: Second point coordinates (degrees)

    Returns:
        Distance in kilometers
    """
    lat1_rad = radians(lat1)
    lat2_rad = radians(lat2)
    delta_lat = radians(lat2 - lat1)
    delta_lon = radians(lon2 - lon1)

    a = sin(delta_lat / 2) ** 2 + cos(lat1_rad) * cos(lat2_rad) * sin(delta_lon / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance(point_a: Any, point_b: Any) -> float:
    """Distance in km between two objects with latitude/longitude attributes"""
    return haversine_distance(
        point_a.latitude, point_a.longitude,
        point_b.latitude, point_b.longitude
    )


def route_distance_km(points: Sequence[Any]) -> float:
    """
    Sum the distance over consecutive pairs of a point sequence.

    Works for waypoints and track points alike.
    """
    total = 0.0
    for i in range(1, len(points)):
        total += distance(points[i - 1], points[i])
    return total
