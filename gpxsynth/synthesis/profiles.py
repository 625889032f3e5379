"""
Activity Profiles

Static per-activity parameters: speed, stride, MET value, GPS sampling
interval and heart-rate range.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

from .errors import UnknownActivityError


class ActivityKind(Enum):
    """Supported activity types"""

    WALKING = "walking"
    RUNNING = "running"
    CYCLING = "cycling"


@dataclass(frozen=True)
class ActivityProfile:
    """Simulation parameters for one activity kind"""

    kind: ActivityKind
    display_name: str
    average_speed_kmh: float
    min_speed_kmh: float
    max_speed_kmh: float
    stride_length_m: float  # 0 when steps do not apply
    metabolic_factor: float  # MET
    gps_interval_seconds: float
    heart_rate_min: int
    heart_rate_max: int
    heart_rate_avg: int

    @property
    def counts_steps(self) -> bool:
        return self.stride_length_m > 0


ACTIVITY_PROFILES: Dict[ActivityKind, ActivityProfile] = {
    ActivityKind.WALKING: ActivityProfile(
        kind=ActivityKind.WALKING,
        display_name="Walking",
        average_speed_kmh=5,
        min_speed_kmh=4,
        max_speed_kmh=6,
        stride_length_m=0.7,
        metabolic_factor=4.3,
        gps_interval_seconds=2,
        heart_rate_min=85,
        heart_rate_max=110,
        heart_rate_avg=95,
    ),
    ActivityKind.RUNNING: ActivityProfile(
        kind=ActivityKind.RUNNING,
        display_name="Running",
        average_speed_kmh=10,
        min_speed_kmh=7,
        max_speed_kmh=13,
        stride_length_m=1.2,
        metabolic_factor=8.5,
        gps_interval_seconds=1.5,
        heart_rate_min=140,
        heart_rate_max=175,
        heart_rate_avg=155,
    ),
    ActivityKind.CYCLING: ActivityProfile(
        kind=ActivityKind.CYCLING,
        display_name="Cycling",
        average_speed_kmh=22,
        min_speed_kmh=15,
        max_speed_kmh=30,
        stride_length_m=0,
        metabolic_factor=7.0,
        gps_interval_seconds=2,
        heart_rate_min=110,
        heart_rate_max=150,
        heart_rate_avg=130,
    ),
}


def get_activity_profile(activity: Union[str, ActivityKind]) -> ActivityProfile:
    """
    Look up the profile for an activity kind.

    Args:
        activity: ActivityKind or its string value ("walking", "running", "cycling")

    Returns:
        The matching ActivityProfile

    Raises:
        UnknownActivityError: If no profile exists for the activity
    """
    if isinstance(activity, ActivityKind):
        return ACTIVITY_PROFILES[activity]

    try:
        kind = ActivityKind(str(activity).strip().lower())
    except ValueError:
        raise UnknownActivityError(str(activity))

    return ACTIVITY_PROFILES[kind]
