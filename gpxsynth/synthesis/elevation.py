"""
Elevation Model

Synthetic elevation profile: a gentle sinusoid around a flat base with a
small random jitter.
"""

from math import pi, sin
from typing import Optional

from .noise import NoiseSource

BASE_ELEVATION_M = 25
MAX_VARIATION_M = 10
NOISE_AMPLITUDE_M = 1.0


def route_progress(distance_covered: float, total_distance: float) -> float:
    """Fraction of the route covered, 0 for a zero-length route"""
    if total_distance <= 0:
        return 0.0
    return distance_covered / total_distance


def generate_elevation(
    distance_covered: float,
    total_distance: float,
    noise: Optional[NoiseSource] = None
) -> int:
    """
    Elevation in meters at a point along the route.

    Two full undulations over the route, plus uniform noise in [-1, 1].

    Args:
        distance_covered: Distance from start (meters)
        total_distance: Route length (meters)
        noise: Random source, a fresh unseeded one if omitted

    Returns:
        Elevation rounded to whole meters
    """
    noise = noise or NoiseSource()
    progress = route_progress(distance_covered, total_distance)

    variation = sin(progress * pi * 4) * MAX_VARIATION_M
    jitter = noise.uniform(-NOISE_AMPLITUDE_M, NOISE_AMPLITUDE_M)

    return int(round(BASE_ELEVATION_M + variation + jitter))
