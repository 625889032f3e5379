"""
GPX Writer Tests

Tests for GPX rendering and read-back.
"""

from datetime import datetime, timedelta, timezone

import gpxpy
import pytest
from gpxsynth.synthesis.gpx_writer import (
    build_gpx,
    format_display_date,
    format_gpx_time,
    gpx_filename,
    GpxMetadata,
    parse_gpx_track,
    TRACKPOINT_EXTENSION_NAMESPACE,
)
from gpxsynth.synthesis.noise import NoiseSource
from gpxsynth.synthesis.profiles import ActivityKind, get_activity_profile
from gpxsynth.synthesis.track_synthesizer import synthesize, TrackPoint


START = datetime(2026, 1, 15, 8, 0)

THREE_WAYPOINTS = [
    (-6.3894443, 107.4196013),
    (-6.3874443, 107.4216013),
    (-6.3854443, 107.4196013),
]

CYCLING = get_activity_profile(ActivityKind.CYCLING)
WALKING = get_activity_profile(ActivityKind.WALKING)


def _metadata(profile, start=START):
    return GpxMetadata(
        profile=profile,
        start_time=start,
        total_distance_m=1000.0,
        total_duration_s=720.0,
        calories_kcal=60,
        step_count=1430,
    )


class TestTimeFormatting:
    """Tests for timestamp and date formatting"""

    def test_naive_time_treated_as_utc(self):
        """Naive datetimes are written as UTC with milliseconds"""
        assert format_gpx_time(datetime(2026, 1, 15, 8, 0)) == "2026-01-15T08:00:00.000Z"

    def test_aware_time_converted_to_utc(self):
        """Aware datetimes are converted to UTC"""
        wib = timezone(timedelta(hours=7))
        assert format_gpx_time(datetime(2026, 1, 15, 15, 30, tzinfo=wib)) == "2026-01-15T08:30:00.000Z"

    def test_milliseconds_kept(self):
        """Sub-second timestamps keep millisecond precision"""
        value = datetime(2026, 1, 15, 8, 0, 1, 500000, tzinfo=timezone.utc)
        assert format_gpx_time(value) == "2026-01-15T08:00:01.500Z"

    def test_display_date(self):
        assert format_display_date(START) == "1/15/2026"

    def test_filename(self):
        assert gpx_filename("running", START) == "running_2026-01-15.gpx"


class TestBuildGpx:
    """Tests for GPX rendering"""

    def test_cycling_document(self):
        """Three-waypoint cycling track has the right type and an hr on every point"""
        points = synthesize(THREE_WAYPOINTS, CYCLING, START, NoiseSource(1))
        content = build_gpx(points, _metadata(CYCLING))

        assert "<type>cycling</type>" in content
        assert content.count("<trkpt ") == len(points)
        assert content.count("<gpxtpx:hr>") == len(points)
        assert content.count("<trkseg>") == 1

    def test_header_and_namespaces(self):
        """Root element declares GPX 1.1 and the extension namespace"""
        content = build_gpx([], _metadata(WALKING))

        assert content.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert '<gpx version="1.1" creator="Garmin"' in content
        assert 'xmlns="http://www.topografix.com/GPX/1/1"' in content
        assert f'xmlns:gpxtpx="{TRACKPOINT_EXTENSION_NAMESPACE}"' in content
        assert "<name>Walking - 1/15/2026</name>" in content
        assert "<time>2026-01-15T08:00:00.000Z</time>" in content

    def test_point_formatting(self):
        """Coordinates use 7 decimals, elevation and hr are integers"""
        point = TrackPoint(
            latitude=-6.38944438,
            longitude=107.4,
            elevation_m=27,
            heart_rate_bpm=131,
            time=datetime(2026, 1, 15, 8, 0, 2, tzinfo=timezone.utc),
        )
        content = build_gpx([point], _metadata(CYCLING))

        assert '<trkpt lat="-6.3894444" lon="107.4000000">' in content
        assert "<ele>27</ele>" in content
        assert "<time>2026-01-15T08:00:02.000Z</time>" in content
        assert "<gpxtpx:hr>131</gpxtpx:hr>" in content

    def test_document_parses_with_gpxpy(self):
        """gpxpy reads the generated document as a single-track GPX"""
        points = synthesize(THREE_WAYPOINTS, CYCLING, START, NoiseSource(2))
        gpx = gpxpy.parse(build_gpx(points, _metadata(CYCLING)))

        assert len(gpx.tracks) == 1
        assert gpx.tracks[0].type == "cycling"
        assert len(gpx.tracks[0].segments) == 1
        assert len(gpx.tracks[0].segments[0].points) == len(points)


class TestParseGpxTrack:
    """Tests for GPX read-back"""

    def test_round_trip(self):
        """Re-parsing reproduces count, endpoints, elevation and heart rate"""
        points = synthesize(THREE_WAYPOINTS, WALKING, START, NoiseSource(3))
        parsed = parse_gpx_track(build_gpx(points, _metadata(WALKING)))

        assert len(parsed) == len(points)
        assert parsed[0].latitude == pytest.approx(points[0].latitude, abs=1e-7)
        assert parsed[0].longitude == pytest.approx(points[0].longitude, abs=1e-7)
        assert parsed[-1].latitude == pytest.approx(points[-1].latitude, abs=1e-7)
        assert parsed[-1].longitude == pytest.approx(points[-1].longitude, abs=1e-7)
        assert [p.elevation_m for p in parsed] == [p.elevation_m for p in points]
        assert [p.heart_rate_bpm for p in parsed] == [p.heart_rate_bpm for p in points]

    def test_round_trip_times(self):
        """Times survive to the millisecond"""
        points = synthesize(THREE_WAYPOINTS, WALKING, START, NoiseSource(4))
        parsed = parse_gpx_track(build_gpx(points, _metadata(WALKING)))

        for original, read in zip(points, parsed):
            expected = original.time.replace(tzinfo=timezone.utc)
            assert abs((read.time - expected).total_seconds()) < 0.001

    def test_plain_gpx_without_extensions(self):
        """Points without hr, elevation or time still load"""
        content = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test">
  <trk>
    <trkseg>
      <trkpt lat="38.8977" lon="-77.0365"></trkpt>
      <trkpt lat="38.8987" lon="-77.0365"><ele>20.6</ele></trkpt>
    </trkseg>
  </trk>
</gpx>
"""
        parsed = parse_gpx_track(content)

        assert len(parsed) == 2
        assert parsed[0].heart_rate_bpm == 0
        assert parsed[0].elevation_m == 0
        assert parsed[1].elevation_m == 21
