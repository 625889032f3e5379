"""
GPX Generation Tasks

Celery tasks behind the generate, download and preview actions.
"""

import logging
from typing import Any, Dict, List, Optional

import gpxpy

from ..synthesis import (
    calculate_route_stats,
    generate_activity,
    get_activity_profile,
    GpxSynthError,
    MissingGeneratedArtifactError,
    NoiseSource,
    parse_gpx_track,
    parse_start_time,
)
from ..synthesis.gpx_writer import GPX_MEDIA_TYPE, gpx_filename
from ..synthesis.track_synthesizer import to_waypoints
from . import app

logger = logging.getLogger(__name__)


def error_result(error: Exception) -> Dict[str, Any]:
    """Failure payload for a task, keyed by a stable error code"""
    code = error.code if isinstance(error, GpxSynthError) else "invalid_request"
    return {"success": False, "error": str(error), "error_code": code}


@app.task(name="preview_route_stats")
def preview_route_stats(
    waypoints: List[Dict[str, float]],
    activity: str = "walking",
    body_weight_kg: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Live statistics for the waypoints placed so far.

    Args:
        waypoints: List of {lat, lon} dicts in route order (may be empty)
        activity: Activity kind ("walking", "running", "cycling")
        body_weight_kg: Body weight, defaults to 70 when missing or invalid

    Returns:
        Dict with stats and display strings
    """
    try:
        profile = get_activity_profile(activity)
        stats = calculate_route_stats(to_waypoints(waypoints), profile, body_weight_kg)

        return {"success": True, "stats": stats.to_dict()}

    except (GpxSynthError, ValueError, TypeError) as e:
        return error_result(e)


@app.task(name="generate_activity_gpx", bind=True)
def generate_activity_gpx(
    self,
    waypoints: List[Dict[str, float]],
    activity: str,
    start_date: str,
    start_time: Optional[str] = None,
    body_weight_kg: Optional[float] = None,
    seed: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Generate a synthetic activity GPX for a route.

    Args:
        waypoints: List of {lat, lon} dicts in route order
        activity: Activity kind ("walking", "running", "cycling")
        start_date: Activity date (YYYY-MM-DD) or a full ISO timestamp
        start_time: Time of day (HH:MM), combined with start_date
        body_weight_kg: Body weight for calories, defaults to 70
        seed: Optional seed for repeatable elevation/heart-rate noise

    Returns:
        Dict containing:
            - gpx: Generated GPX document
            - filename: Suggested download filename
            - summary: Distance, duration, calories, steps, point count
    """
    logger.info(
        f"[Task {self.request.id}] Generating {activity} GPX from {len(waypoints)} waypoints"
    )

    try:
        started_at = parse_start_time(start_date, start_time)
        generated = generate_activity(
            waypoints,
            activity,
            started_at,
            body_weight_kg=body_weight_kg,
            noise=NoiseSource(seed),
        )

        logger.info(
            f"[Task {self.request.id}] Generation complete. "
            f"Distance: {generated.summary.actual_distance_m / 1000:.2f}km, "
            f"Duration: {generated.summary.duration_seconds / 60:.0f}min, "
            f"GPS points: {generated.summary.points_count}"
        )

        return {"success": True, **generated.to_dict()}

    except (GpxSynthError, ValueError, TypeError) as e:
        logger.warning(f"[Task {self.request.id}] Generation rejected: {e}")
        return error_result(e)

    except Exception as e:
        logger.error(
            f"[Task {self.request.id}] Error generating {activity} GPX: {e}",
            exc_info=True,
        )
        return {"success": False, "error": str(e), "error_code": "internal_error"}


@app.task(name="download_gpx")
def download_gpx(
    gpx_content: Optional[str], activity: str, start_date: str
) -> Dict[str, Any]:
    """
    Package a generated GPX for download.

    Args:
        gpx_content: GPX from generate_activity_gpx, None if not generated yet
        activity: Activity kind used for the filename
        start_date: Activity date (YYYY-MM-DD) used for the filename

    Returns:
        Dict with filename, media type and content
    """
    try:
        if not gpx_content:
            raise MissingGeneratedArtifactError()

        filename = gpx_filename(activity, parse_start_time(start_date, "00:00"))
        logger.info(f"Prepared {filename} for download ({len(gpx_content)} chars)")

        return {
            "success": True,
            "filename": filename,
            "media_type": GPX_MEDIA_TYPE,
            "content": gpx_content,
        }

    except (GpxSynthError, ValueError) as e:
        return error_result(e)


@app.task(name="inspect_gpx")
def inspect_gpx(gpx_content: str) -> Dict[str, Any]:
    """
    Parse a GPX file and report what a consumer would read from it.

    Useful for checking a generated document: point count, endpoints,
    distance, timing and heart rate.

    Args:
        gpx_content: Raw GPX file content as string

    Returns:
        Dict containing parsed track metrics
    """
    try:
        gpx = gpxpy.parse(gpx_content)
        points = parse_gpx_track(gpx_content)

        if not points:
            return {"success": False, "error": "No track points found", "error_code": "invalid_request"}

        heart_rates = [p.heart_rate_bpm for p in points if p.heart_rate_bpm > 0]
        uphill, downhill = gpx.get_uphill_downhill()
        duration = gpx.get_duration()

        return {
            "success": True,
            "activity": gpx.tracks[0].type if gpx.tracks else None,
            "name": gpx.name,
            "points_count": len(points),
            "first_point": {"lat": points[0].latitude, "lon": points[0].longitude},
            "last_point": {"lat": points[-1].latitude, "lon": points[-1].longitude},
            "total_distance_m": gpx.length_2d(),
            "elevation_gain_m": uphill,
            "elevation_loss_m": downhill,
            "duration_s": duration,
            "average_heart_rate": round(sum(heart_rates) / len(heart_rates)) if heart_rates else None,
            "max_heart_rate": max(heart_rates) if heart_rates else None,
        }

    except Exception as e:
        return {"success": False, "error": str(e), "error_code": "invalid_request"}
