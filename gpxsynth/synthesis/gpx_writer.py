"""
GPX Writer

Renders synthesized tracks as GPX 1.1 with the Garmin TrackPointExtension
heart-rate field, and reads such documents back with gpxpy.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Sequence
from xml.sax.saxutils import escape

import gpxpy
import gpxpy.gpx

from .profiles import ActivityProfile
from .track_synthesizer import TrackPoint

GPX_NAMESPACE = "http://www.topografix.com/GPX/1/1"
TRACKPOINT_EXTENSION_NAMESPACE = "http://www.garmin.com/xmlschemas/TrackPointExtension/v1"
GPX_CREATOR = "Garmin"
GPX_MEDIA_TYPE = "application/gpx+xml"


@dataclass
class GpxMetadata:
    """Document-level data for a generated activity"""
    profile: ActivityProfile
    start_time: datetime
    total_distance_m: float
    total_duration_s: float
    calories_kcal: int
    step_count: int


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_gpx_time(value: datetime) -> str:
    """ISO-8601 UTC timestamp with milliseconds, e.g. 2026-01-15T08:00:00.000Z"""
    return ensure_utc(value).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def format_display_date(value: datetime) -> str:
    """Short month/day/year date used in the document name"""
    return f"{value.month}/{value.day}/{value.year}"


def gpx_filename(activity: str, start_time: datetime) -> str:
    """Download filename, e.g. running_2026-01-15.gpx"""
    return f"{activity}_{start_time.strftime('%Y-%m-%d')}.gpx"


def build_gpx(track_points: Sequence[TrackPoint], metadata: GpxMetadata) -> str:
    """
    Render a track as a GPX document.

    Args:
        track_points: Synthesized track points in time order
        metadata: Activity metadata for the document header

    Returns:
        GPX file content as string
    """
    profile = metadata.profile
    activity_name = escape(profile.display_name)

    gpx_header = f'''<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="{GPX_CREATOR}"
  xmlns="{GPX_NAMESPACE}"
  xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
  xmlns:gpxtpx="{TRACKPOINT_EXTENSION_NAMESPACE}"
  xsi:schemaLocation="{GPX_NAMESPACE} {GPX_NAMESPACE}/gpx.xsd">
  <metadata>
    <name>{activity_name} - {format_display_date(metadata.start_time)}</name>
    <time>{format_gpx_time(metadata.start_time)}</time>
  </metadata>
  <trk>
    <name>{activity_name}</name>
    <type>{profile.kind.value}</type>
    <trkseg>
'''

    gpx_points = []
    for point in track_points:
        gpx_points.append(f'''      <trkpt lat="{point.latitude:.7f}" lon="{point.longitude:.7f}">
        <ele>{point.elevation_m}</ele>
        <time>{format_gpx_time(point.time)}</time>
        <extensions>
          <gpxtpx:TrackPointExtension>
            <gpxtpx:hr>{point.heart_rate_bpm}</gpxtpx:hr>
          </gpxtpx:TrackPointExtension>
        </extensions>
      </trkpt>
''')

    gpx_footer = '''    </trkseg>
  </trk>
</gpx>'''

    return gpx_header + ''.join(gpx_points) + gpx_footer


def _extension_heart_rate(point: gpxpy.gpx.GPXTrackPoint) -> Optional[int]:
    """Pull gpxtpx:hr out of a parsed point's extension elements"""
    for extension in point.extensions:
        for element in extension.iter():
            tag = element.tag.rsplit('}', 1)[-1]
            if tag == 'hr' and element.text:
                return int(float(element.text))
    return None


def parse_gpx_track(gpx_content: str) -> List[TrackPoint]:
    """
    Read the track points of a GPX document.

    Points without elevation, heart rate or time get 0 / 0 / epoch, so any
    GPX can be loaded; documents from build_gpx round-trip exactly apart
    from coordinate precision.

    Args:
        gpx_content: Raw GPX file content as string

    Returns:
        List of TrackPoint in document order
    """
    gpx = gpxpy.parse(gpx_content)
    epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)

    points = []
    for track in gpx.tracks:
        for segment in track.segments:
            for point in segment.points:
                heart_rate = _extension_heart_rate(point)
                points.append(TrackPoint(
                    latitude=point.latitude,
                    longitude=point.longitude,
                    elevation_m=int(round(point.elevation or 0)),
                    heart_rate_bpm=heart_rate if heart_rate is not None else 0,
                    time=ensure_utc(point.time) if point.time else epoch,
                ))

    return points
