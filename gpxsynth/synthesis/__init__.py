"""
Synthesis Module

Synthetic GPS activity generation from hand-placed waypoints.
"""

from .errors import (
    GpxSynthError,
    InsufficientInputError,
    MissingGeneratedArtifactError,
    UnknownActivityError,
)
from .generator import (
    default_start_time,
    generate_activity,
    GeneratedActivity,
    parse_start_time,
)
from .geodesy import distance, haversine_distance, route_distance_km
from .gpx_writer import build_gpx, GpxMetadata, parse_gpx_track
from .noise import NoiseSource
from .profiles import (
    ACTIVITY_PROFILES,
    ActivityKind,
    ActivityProfile,
    get_activity_profile,
)
from .route_state import RouteState
from .stats import (
    calculate_route_stats,
    resolve_body_weight,
    RouteStats,
    summarize_track,
    TrackSummary,
)
from .track_synthesizer import (
    Segment,
    synthesize,
    TrackPoint,
    TrackSynthesizer,
    Waypoint,
)

__all__ = [
    "GpxSynthError",
    "InsufficientInputError",
    "MissingGeneratedArtifactError",
    "UnknownActivityError",
    "generate_activity",
    "GeneratedActivity",
    "default_start_time",
    "parse_start_time",
    "distance",
    "haversine_distance",
    "route_distance_km",
    "build_gpx",
    "GpxMetadata",
    "parse_gpx_track",
    "NoiseSource",
    "ACTIVITY_PROFILES",
    "ActivityKind",
    "ActivityProfile",
    "get_activity_profile",
    "RouteState",
    "calculate_route_stats",
    "resolve_body_weight",
    "RouteStats",
    "summarize_track",
    "TrackSummary",
    "Segment",
    "synthesize",
    "TrackPoint",
    "TrackSynthesizer",
    "Waypoint",
]
