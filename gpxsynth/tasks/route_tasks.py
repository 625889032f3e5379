"""
Route Persistence Tasks

Celery tasks behind the save and load actions.
"""

import logging
from typing import Any, Dict, List, Optional

from ..route_store import RouteStore
from ..synthesis import RouteState
from . import app

logger = logging.getLogger(__name__)


@app.task(name="save_route")
def save_route(
    waypoints: List[Dict[str, float]], store_path: Optional[str] = None
) -> Dict[str, Any]:
    """
    Save the current waypoints, replacing any saved route.

    Args:
        waypoints: List of {lat, lon} dicts in route order
        store_path: Override for the store file (defaults to GPXSYNTH_ROUTE_STORE)

    Returns:
        Dict with the number of waypoints saved
    """
    if not waypoints:
        return {"success": False, "error": "No waypoints to save", "error_code": "insufficient_input"}

    try:
        route = RouteState.from_points(waypoints)
        count = RouteStore(store_path).save(route)
        return {"success": True, "waypoint_count": count}

    except (OSError, ValueError, TypeError) as e:
        logger.error(f"Failed to save route: {e}", exc_info=True)
        return {"success": False, "error": str(e), "error_code": "storage_error"}


@app.task(name="load_route")
def load_route(store_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the saved route.

    A missing or unreadable saved route is not an error: the result is
    successful with no waypoints and ``found`` set to False.

    Args:
        store_path: Override for the store file (defaults to GPXSYNTH_ROUTE_STORE)

    Returns:
        Dict with waypoints and waypoint_count
    """
    route = RouteStore(store_path).load()

    if route is None:
        return {"success": True, "found": False, "waypoints": [], "waypoint_count": 0}

    return {
        "success": True,
        "found": True,
        "waypoints": route.to_list(),
        "waypoint_count": len(route.waypoints),
    }
