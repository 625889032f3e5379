"""
Tests for route preview statistics and generated track summaries.
"""

from datetime import datetime, timezone

import pytest
from gpxsynth.synthesis.noise import NoiseSource
from gpxsynth.synthesis.profiles import ActivityKind, get_activity_profile
from gpxsynth.synthesis.stats import (
    calculate_route_stats,
    format_duration,
    format_pace,
    resolve_body_weight,
    summarize_track,
)
from gpxsynth.synthesis.track_synthesizer import synthesize, Waypoint


EQUATOR_KM = [Waypoint(0, 0), Waypoint(0, 0.009)]
START = datetime(2026, 1, 15, 8, 0, tzinfo=timezone.utc)

WALKING = get_activity_profile(ActivityKind.WALKING)
CYCLING = get_activity_profile(ActivityKind.CYCLING)


class TestBodyWeight:
    """Tests for body weight parsing"""

    def test_valid_values(self):
        """Numbers and numeric strings are used as given"""
        assert resolve_body_weight(82.5) == 82.5
        assert resolve_body_weight("64") == 64.0

    @pytest.mark.parametrize("value", [None, "", "abc", 0, -5, float('nan'), float('inf')])
    def test_invalid_values_default(self, value):
        """Missing or invalid weights fall back to 70kg"""
        assert resolve_body_weight(value) == 70.0


class TestRouteStats:
    """Tests for live preview statistics"""

    def test_empty_route(self):
        """No waypoints means zero distance and placeholder pace"""
        stats = calculate_route_stats([], WALKING)

        assert stats.waypoint_count == 0
        assert stats.distance_km == 0
        assert stats.pace_min_per_km is None
        assert stats.calories_kcal == 0
        assert stats.estimated_gps_points == 0
        assert stats.to_dict()['display']['pace'] == "--:--"

    def test_one_kilometer_walk(self):
        """1km walk at 5km/h, 70kg"""
        stats = calculate_route_stats(EQUATOR_KM, WALKING, 70)

        assert stats.waypoint_count == 2
        assert stats.distance_km == pytest.approx(1.0, abs=0.001)
        assert stats.duration_hours * 60 == pytest.approx(12, abs=0.05)
        assert stats.pace_min_per_km == pytest.approx(12.0)
        assert stats.speed_kmh == 5.0
        assert stats.calories_kcal == 60  # 4.3 * 70 * 0.2h
        assert stats.steps == 1430  # 1000.75m / 0.7m
        assert stats.elevation_gain_m == 5
        assert stats.estimated_gps_points == 360
        assert stats.heart_rate_avg == 95

    def test_display_strings(self):
        """Display values are formatted for the stats panel"""
        display = calculate_route_stats(EQUATOR_KM, WALKING).to_dict()['display']

        assert display['distance'] == "1.00"
        assert display['duration'] == "00:12"
        assert display['speed'] == "5.0"
        assert display['steps'] == "1,430"
        assert display['gps_points'] == "360"

    def test_cycling_has_no_steps(self):
        """Steps do not apply to cycling"""
        stats = calculate_route_stats(EQUATOR_KM, CYCLING)
        assert stats.steps is None
        assert stats.to_dict()['display']['steps'] == "N/A"

    def test_invalid_weight_uses_default(self):
        """Invalid weight gives the same calories as 70kg"""
        assert (
            calculate_route_stats(EQUATOR_KM, WALKING, "heavy").calories_kcal
            == calculate_route_stats(EQUATOR_KM, WALKING, 70).calories_kcal
        )

    def test_idempotent(self):
        """Repeated calls on the same route give identical results"""
        route = list(EQUATOR_KM)
        first = calculate_route_stats(route, WALKING, 75)
        second = calculate_route_stats(route, WALKING, 75)
        assert first == second
        assert route == EQUATOR_KM


class TestTrackSummary:
    """Tests for post-generation summaries"""

    def test_summary_uses_planned_route(self):
        """Calories, steps and duration come from the drawn route"""
        points = synthesize(EQUATOR_KM, WALKING, START, NoiseSource(1))
        summary = summarize_track(points, EQUATOR_KM, WALKING, 70)
        preview = calculate_route_stats(EQUATOR_KM, WALKING, 70)

        assert summary.points_count == len(points)
        assert summary.calories_kcal == preview.calories_kcal
        assert summary.steps == preview.steps
        assert summary.duration_seconds == pytest.approx(preview.duration_hours * 3600)
        assert summary.planned_distance_km == pytest.approx(preview.distance_km)

    def test_actual_distance_from_samples(self):
        """Actual distance is measured over the generated points"""
        points = synthesize(EQUATOR_KM, WALKING, START, NoiseSource(2))
        summary = summarize_track(points, EQUATOR_KM, WALKING)
        assert summary.actual_distance_m == pytest.approx(1000.75, abs=0.5)

    def test_heart_rate_and_elevation_aggregates(self):
        """Heart rate and elevation aggregates are within the synthetic ranges"""
        points = synthesize(EQUATOR_KM, WALKING, START, NoiseSource(3))
        summary = summarize_track(points, EQUATOR_KM, WALKING)

        assert WALKING.heart_rate_min - 10 <= summary.average_heart_rate <= WALKING.heart_rate_max
        assert summary.max_heart_rate <= WALKING.heart_rate_max
        assert summary.elevation_gain_m > 0
        assert summary.elevation_loss_m > 0

    def test_cycling_summary_zero_steps(self):
        """Cycling summaries report 0 steps"""
        points = synthesize(EQUATOR_KM, CYCLING, START, NoiseSource(4))
        assert summarize_track(points, EQUATOR_KM, CYCLING).steps == 0

    def test_empty_track(self):
        """An empty track summarizes to zeros"""
        summary = summarize_track([], [], WALKING)
        assert summary.points_count == 0
        assert summary.actual_distance_m == 0
        assert summary.average_heart_rate == 0


class TestFormatting:
    """Tests for display formatting"""

    def test_format_duration(self):
        assert format_duration(90) == "01:30"
        assert format_duration(12.01) == "00:12"

    def test_format_pace(self):
        assert format_pace(5.5) == "5:30"
        assert format_pace(None) == "--:--"
