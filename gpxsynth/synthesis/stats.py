"""
Route and Track Statistics

Summary numbers for a route, in two modes:
- Live preview from the raw waypoint list, before any track exists
- Post-generation summary of a synthesized track

Effort figures (calories, steps) always come from the planned route
distance and duration, never from the generated samples.
"""

import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Sequence

import numpy as np

from .geodesy import route_distance_km
from .profiles import ActivityProfile
from .track_synthesizer import TrackPoint, Waypoint, planned_duration_seconds

DEFAULT_BODY_WEIGHT_KG = float(os.getenv('GPXSYNTH_DEFAULT_WEIGHT_KG', '70'))

# Rough estimate for the preview only: ~5m of climbing per km
ELEVATION_GAIN_PER_KM_M = 5


@dataclass
class RouteStats:
    """Live preview statistics for a waypoint list"""
    waypoint_count: int
    distance_km: float
    duration_hours: float
    pace_min_per_km: Optional[float]
    speed_kmh: float
    calories_kcal: int
    steps: Optional[int]
    heart_rate_avg: int
    elevation_gain_m: int
    estimated_gps_points: int

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result['display'] = {
            'distance': f"{self.distance_km:.2f}",
            'duration': format_duration(self.duration_hours * 60),
            'pace': format_pace(self.pace_min_per_km),
            'speed': f"{self.speed_kmh:.1f}",
            'steps': f"{self.steps:,}" if self.steps is not None else "N/A",
            'gps_points': f"{self.estimated_gps_points:,}",
        }
        return result


@dataclass
class TrackSummary:
    """Statistics for a generated track"""
    points_count: int
    planned_distance_km: float
    actual_distance_m: float
    duration_seconds: float
    calories_kcal: int
    steps: int
    average_heart_rate: int
    max_heart_rate: int
    elevation_gain_m: int
    elevation_loss_m: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def resolve_body_weight(value: Any) -> float:
    """
    Parse a body weight input.

    Falls back to the default weight when the value is missing,
    unparsable or not positive.
    """
    try:
        weight = float(value)
    except (TypeError, ValueError):
        return DEFAULT_BODY_WEIGHT_KG

    if not weight > 0 or weight == float('inf'):
        return DEFAULT_BODY_WEIGHT_KG

    return weight


def calculate_calories(profile: ActivityProfile, body_weight_kg: float, duration_hours: float) -> int:
    """kcal = MET x weight (kg) x duration (hours)"""
    return int(round(profile.metabolic_factor * body_weight_kg * duration_hours))


def calculate_steps(profile: ActivityProfile, distance_km: float) -> Optional[int]:
    """Step count from stride length, None for activities without steps"""
    if not profile.counts_steps:
        return None
    return int(round(distance_km * 1000 / profile.stride_length_m))


def calculate_route_stats(
    waypoints: Sequence[Waypoint],
    profile: ActivityProfile,
    body_weight_kg: Any = None
) -> RouteStats:
    """
    Live preview statistics for a route that has not been generated yet.

    Args:
        waypoints: Ordered route waypoints (any count, including 0)
        profile: Activity profile
        body_weight_kg: Body weight, defaults when missing or invalid

    Returns:
        RouteStats
    """
    weight = resolve_body_weight(body_weight_kg)

    distance_km = route_distance_km(waypoints)
    duration_hours = distance_km / profile.average_speed_kmh

    if distance_km > 0:
        pace = (duration_hours * 60) / distance_km
    else:
        pace = None

    return RouteStats(
        waypoint_count=len(waypoints),
        distance_km=distance_km,
        duration_hours=duration_hours,
        pace_min_per_km=pace,
        speed_kmh=float(profile.average_speed_kmh),
        calories_kcal=calculate_calories(profile, weight, duration_hours),
        steps=calculate_steps(profile, distance_km),
        heart_rate_avg=profile.heart_rate_avg,
        elevation_gain_m=int(round(distance_km * ELEVATION_GAIN_PER_KM_M)),
        estimated_gps_points=int(round(duration_hours * 3600 / profile.gps_interval_seconds)),
    )


def summarize_track(
    track_points: Sequence[TrackPoint],
    waypoints: Sequence[Waypoint],
    profile: ActivityProfile,
    body_weight_kg: Any = None
) -> TrackSummary:
    """
    Summarize a generated track.

    Distance is measured over the generated samples; duration, calories
    and steps come from the planned waypoint route.

    Args:
        track_points: Output of the synthesizer
        waypoints: Waypoints the track was generated from
        profile: Activity profile used for generation
        body_weight_kg: Body weight, defaults when missing or invalid

    Returns:
        TrackSummary
    """
    weight = resolve_body_weight(body_weight_kg)

    planned_km = route_distance_km(waypoints)
    duration_seconds = planned_duration_seconds(planned_km, profile)
    duration_hours = duration_seconds / 3600

    if track_points:
        heart_rates = np.array([p.heart_rate_bpm for p in track_points])
        elevation_diffs = np.diff(np.array([p.elevation_m for p in track_points]))
        average_hr = int(round(float(heart_rates.mean())))
        max_hr = int(heart_rates.max())
        gain = int(elevation_diffs[elevation_diffs > 0].sum())
        loss = int(-elevation_diffs[elevation_diffs < 0].sum())
    else:
        average_hr = max_hr = gain = loss = 0

    return TrackSummary(
        points_count=len(track_points),
        planned_distance_km=planned_km,
        actual_distance_m=route_distance_km(track_points) * 1000,
        duration_seconds=duration_seconds,
        calories_kcal=calculate_calories(profile, weight, duration_hours),
        steps=calculate_steps(profile, planned_km) or 0,
        average_heart_rate=average_hr,
        max_heart_rate=max_hr,
        elevation_gain_m=gain,
        elevation_loss_m=loss,
    )


def format_duration(minutes: float) -> str:
    """Format minutes as HH:MM"""
    hours = int(minutes // 60)
    mins = int(minutes % 60)
    return f"{hours:02d}:{mins:02d}"


def format_pace(pace_min_km: Optional[float]) -> str:
    """Format pace as M:SS, placeholder when there is no distance"""
    if pace_min_km is None:
        return "--:--"
    mins = int(pace_min_km)
    secs = int((pace_min_km - mins) * 60)
    return f"{mins}:{secs:02d}"
