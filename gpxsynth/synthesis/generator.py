"""
Activity Generator

End-to-end generation: waypoints and form inputs in, GPX document and
summary out.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Any, Dict, List, Optional, Sequence, Union

from .errors import InsufficientInputError
from .gpx_writer import GpxMetadata, build_gpx, gpx_filename
from .noise import NoiseSource
from .profiles import ActivityKind, ActivityProfile, get_activity_profile
from .route_state import MIN_WAYPOINTS
from .stats import TrackSummary, resolve_body_weight, summarize_track
from .track_synthesizer import TrackPoint, TrackSynthesizer, WaypointLike, to_waypoints

logger = logging.getLogger(__name__)

START_TIME_ROUNDING_MINUTES = 5


@dataclass
class GeneratedActivity:
    """A generated track with its GPX rendering"""
    profile: ActivityProfile
    start_time: datetime
    track_points: List[TrackPoint]
    summary: TrackSummary
    gpx_content: str

    @property
    def filename(self) -> str:
        return gpx_filename(self.profile.kind.value, self.start_time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'activity': self.profile.kind.value,
            'start_time': self.start_time.isoformat(),
            'filename': self.filename,
            'summary': self.summary.to_dict(),
            'gpx': self.gpx_content,
        }


def parse_start_time(date_str: str, time_str: Optional[str] = None) -> datetime:
    """
    Combine a date (YYYY-MM-DD) and time of day (HH:MM) into one datetime.

    A full ISO timestamp in date_str is accepted when time_str is omitted.

    Raises:
        ValueError: If either part is malformed
    """
    if not time_str:
        return datetime.fromisoformat(date_str.replace('Z', '+00:00'))

    day = datetime.strptime(date_str.strip(), '%Y-%m-%d').date()
    time_of_day = time.fromisoformat(time_str.strip())
    return datetime.combine(day, time_of_day)


def default_start_time(now: datetime) -> datetime:
    """Current time rounded down to the previous 5 minutes"""
    minute = now.minute - now.minute % START_TIME_ROUNDING_MINUTES
    return now.replace(minute=minute, second=0, microsecond=0)


def generate_activity(
    waypoints: Sequence[WaypointLike],
    activity: Union[str, ActivityKind],
    start_time: datetime,
    body_weight_kg: Any = None,
    noise: Optional[NoiseSource] = None
) -> GeneratedActivity:
    """
    Generate a synthetic activity for a route.

    Args:
        waypoints: Ordered waypoints (at least 2)
        activity: Activity kind or its name
        start_time: Start instant of the activity
        body_weight_kg: Body weight for calories, defaults when invalid
        noise: Optional seeded random source

    Returns:
        GeneratedActivity with track points, summary and GPX content

    Raises:
        InsufficientInputError: If fewer than 2 waypoints are given
        UnknownActivityError: If the activity kind has no profile
    """
    route = to_waypoints(waypoints)
    if len(route) < MIN_WAYPOINTS:
        raise InsufficientInputError(len(route))

    profile = get_activity_profile(activity)
    weight = resolve_body_weight(body_weight_kg)

    track_points = TrackSynthesizer(profile, noise).synthesize(route, start_time)
    summary = summarize_track(track_points, route, profile, weight)

    gpx_content = build_gpx(track_points, GpxMetadata(
        profile=profile,
        start_time=start_time,
        total_distance_m=summary.actual_distance_m,
        total_duration_s=summary.duration_seconds,
        calories_kcal=summary.calories_kcal,
        step_count=summary.steps,
    ))

    logger.info(
        f"Generated {profile.kind.value} track: "
        f"{summary.actual_distance_m / 1000:.2f}km, "
        f"{timedelta(seconds=round(summary.duration_seconds))}, "
        f"{summary.points_count} GPS points, "
        f"{summary.calories_kcal} kcal"
    )

    return GeneratedActivity(
        profile=profile,
        start_time=start_time,
        track_points=track_points,
        summary=summary,
        gpx_content=gpx_content,
    )
