"""
Track Synthesizer

Turns a sparse list of user-placed waypoints into a dense, time-stamped
GPS track:
- Constant average speed from the activity profile
- One sample per GPS interval, interpolated exactly along each segment
- Synthetic elevation and heart rate per sample
- Start and end pinned to the first and last waypoint
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .elevation import generate_elevation
from .geodesy import haversine_distance
from .heart_rate import generate_heart_rate
from .noise import NoiseSource
from .profiles import ActivityProfile

# Stop sampling this close to the end so the pinned final point is not
# preceded by a near-duplicate
END_TOLERANCE_M = 1.0

START_HR_OFFSET_BPM = 5


@dataclass(frozen=True)
class Waypoint:
    """A user-placed route anchor"""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Segment:
    """Straight line between two consecutive waypoints"""
    start: Waypoint
    end: Waypoint
    length_m: float


@dataclass(frozen=True)
class TrackPoint:
    """A single synthesized GPS sample"""
    latitude: float
    longitude: float
    elevation_m: int
    heart_rate_bpm: int
    time: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            'lat': self.latitude,
            'lon': self.longitude,
            'elevation': self.elevation_m,
            'hr': self.heart_rate_bpm,
            'time': self.time.isoformat(),
        }


WaypointLike = Union[Waypoint, Dict[str, float], Tuple[float, float], Sequence[float]]


def to_waypoint(value: WaypointLike) -> Waypoint:
    """
    Coerce boundary input into a Waypoint.

    Accepts a Waypoint, a dict with lat/lon (or latitude/longitude) keys,
    or a (lat, lon) pair.
    """
    if isinstance(value, Waypoint):
        return value
    if isinstance(value, dict):
        lat = value.get('lat', value.get('latitude'))
        lon = value.get('lon', value.get('lng', value.get('longitude')))
        if lat is None or lon is None:
            raise ValueError(f"Waypoint is missing coordinates: {value!r}")
        return Waypoint(float(lat), float(lon))
    lat, lon = value
    return Waypoint(float(lat), float(lon))


def to_waypoints(values: Iterable[WaypointLike]) -> List[Waypoint]:
    """Coerce a sequence of boundary inputs into Waypoints"""
    return [to_waypoint(v) for v in values]


def build_segments(waypoints: Sequence[Waypoint]) -> List[Segment]:
    """
    Build segments for each consecutive waypoint pair.

    Returns:
        List of Segment with great-circle length in meters
    """
    segments = []
    for i in range(len(waypoints) - 1):
        start = waypoints[i]
        end = waypoints[i + 1]
        length_m = haversine_distance(
            start.latitude, start.longitude,
            end.latitude, end.longitude
        ) * 1000
        segments.append(Segment(start=start, end=end, length_m=length_m))
    return segments


def planned_duration_seconds(distance_km: float, profile: ActivityProfile) -> float:
    """Time to cover the distance at the profile's average speed"""
    return distance_km / profile.average_speed_kmh * 3600


class TrackSynthesizer:
    """Generates synthetic track points for one activity profile"""

    def __init__(self, profile: ActivityProfile, noise: Optional[NoiseSource] = None):
        """
        Initialize synthesizer.

        Args:
            profile: Activity profile driving speed, sampling and heart rate
            noise: Random source for elevation/heart-rate jitter
        """
        self.profile = profile
        self.noise = noise or NoiseSource()

    def synthesize(
        self,
        waypoints: Sequence[Waypoint],
        start_time: datetime
    ) -> List[TrackPoint]:
        """
        Generate the track for a route.

        Args:
            waypoints: Ordered route waypoints
            start_time: Time of the first sample

        Returns:
            Time-ordered TrackPoint list, empty if fewer than 2 waypoints
        """
        if len(waypoints) < 2:
            return []

        profile = self.profile
        segments = build_segments(waypoints)
        total_distance_m = sum(s.length_m for s in segments)

        first = waypoints[0]
        last = waypoints[-1]

        points = [TrackPoint(
            latitude=first.latitude,
            longitude=first.longitude,
            elevation_m=generate_elevation(0, total_distance_m, self.noise),
            heart_rate_bpm=profile.heart_rate_min - START_HR_OFFSET_BPM,
            time=start_time,
        )]

        if total_distance_m > 0:
            speed_mps = profile.average_speed_kmh * 1000 / 3600
            distance_per_interval = speed_mps * profile.gps_interval_seconds

            distance_covered = 0.0
            step = 0

            while distance_covered < total_distance_m - END_TOLERANCE_M:
                distance_covered += distance_per_interval
                step += 1

                lat, lon = self._interpolate(segments, total_distance_m, distance_covered)

                points.append(TrackPoint(
                    latitude=lat,
                    longitude=lon,
                    elevation_m=generate_elevation(
                        distance_covered, total_distance_m, self.noise
                    ),
                    heart_rate_bpm=generate_heart_rate(
                        distance_covered, total_distance_m, profile,
                        len(points), self.noise
                    ),
                    time=start_time + timedelta(
                        seconds=step * profile.gps_interval_seconds
                    ),
                ))

        end_time = start_time + timedelta(
            seconds=planned_duration_seconds(total_distance_m / 1000, profile)
        )
        # The last interval may overshoot the planned finish
        end_time = max(end_time, points[-1].time)

        points.append(TrackPoint(
            latitude=last.latitude,
            longitude=last.longitude,
            elevation_m=generate_elevation(total_distance_m, total_distance_m, self.noise),
            heart_rate_bpm=profile.heart_rate_min,
            time=end_time,
        ))

        return points

    @staticmethod
    def _locate_segment(
        segments: Sequence[Segment],
        total_distance_m: float,
        distance_covered: float
    ) -> Tuple[Segment, float]:
        """
        Find the segment containing a distance along the route.

        A distance exactly on a segment boundary belongs to the earlier
        segment. Overruns past the route end clamp to the last segment.

        Returns:
            Tuple of (segment, cumulative distance at segment start in meters)
        """
        segment_start = 0.0
        for segment in segments:
            if distance_covered <= segment_start + segment.length_m:
                return segment, segment_start
            segment_start += segment.length_m

        last = segments[-1]
        return last, total_distance_m - last.length_m

    @classmethod
    def _interpolate(
        cls,
        segments: Sequence[Segment],
        total_distance_m: float,
        distance_covered: float
    ) -> Tuple[float, float]:
        """Exact linear position at a distance along the route"""
        segment, segment_start = cls._locate_segment(
            segments, total_distance_m, distance_covered
        )

        if segment.length_m > 0:
            ratio = min(1.0, (distance_covered - segment_start) / segment.length_m)
        else:
            ratio = 1.0

        lat = segment.start.latitude + (segment.end.latitude - segment.start.latitude) * ratio
        lon = segment.start.longitude + (segment.end.longitude - segment.start.longitude) * ratio

        return lat, lon


def synthesize(
    waypoints: Sequence[WaypointLike],
    profile: ActivityProfile,
    start_time: datetime,
    noise: Optional[NoiseSource] = None
) -> List[TrackPoint]:
    """
    Generate a synthetic track for a route.

    Convenience wrapper around TrackSynthesizer.

    Args:
        waypoints: Ordered waypoints (Waypoint, lat/lon dicts or pairs)
        profile: Activity profile
        start_time: Time of the first sample
        noise: Optional seeded random source

    Returns:
        List of TrackPoint, empty if fewer than 2 waypoints
    """
    return TrackSynthesizer(profile, noise).synthesize(to_waypoints(waypoints), start_time)
