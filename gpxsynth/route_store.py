"""
Saved Route Store

Keeps a single saved route as JSON on disk. Saving overwrites the slot;
loading returns the whole route or nothing.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .synthesis.route_state import RouteState

logger = logging.getLogger(__name__)

SAVED_ROUTE_KEY = "savedRoute"
DEFAULT_STORE_PATH = "~/.gpxsynth/saved_route.json"


def get_store_path() -> Path:
    return Path(os.getenv('GPXSYNTH_ROUTE_STORE', DEFAULT_STORE_PATH)).expanduser()


class RouteStore:
    """Single-slot JSON store for a waypoint list"""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else get_store_path()

    def save(self, route: RouteState) -> int:
        """
        Overwrite the saved route.

        Returns:
            Number of waypoints saved
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {SAVED_ROUTE_KEY: route.to_list()}
        self.path.write_text(json.dumps(payload), encoding='utf-8')

        logger.info(f"Saved route with {len(route.waypoints)} waypoints to {self.path}")
        return len(route.waypoints)

    def load(self) -> Optional[RouteState]:
        """
        Load the saved route.

        Returns:
            RouteState, or None if nothing is saved or the file is unreadable
        """
        if not self.path.exists():
            logger.info(f"No saved route at {self.path}")
            return None

        try:
            payload = json.loads(self.path.read_text(encoding='utf-8'))
            points = self._extract_points(payload)
            route = RouteState.from_points(points)
        except (OSError, ValueError, TypeError, KeyError) as e:
            logger.warning(f"Failed to load saved route from {self.path}: {e}")
            return None

        logger.info(f"Loaded route with {len(route.waypoints)} waypoints")
        return route

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()

    @staticmethod
    def _extract_points(payload: Any) -> List[Dict[str, Any]]:
        # Accept a bare list as well as the keyed slot
        if isinstance(payload, dict):
            payload = payload[SAVED_ROUTE_KEY]
        if not isinstance(payload, list):
            raise ValueError("Saved route is not a list of waypoints")
        return payload
