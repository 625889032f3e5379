"""
Route State

Immutable snapshot of the waypoints a user has placed. Editing operations
return a new RouteState so callers can hand a snapshot to the synthesizer
while the route keeps changing.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Tuple

from .errors import InsufficientInputError
from .track_synthesizer import Waypoint, WaypointLike, to_waypoints

MIN_WAYPOINTS = 2


@dataclass(frozen=True)
class RouteState:
    """Ordered waypoints of a route under construction"""
    waypoints: Tuple[Waypoint, ...] = ()

    @classmethod
    def from_points(cls, points: Iterable[WaypointLike]) -> "RouteState":
        return cls(tuple(to_waypoints(points)))

    @property
    def can_generate(self) -> bool:
        return len(self.waypoints) >= MIN_WAYPOINTS

    def add_waypoint(self, latitude: float, longitude: float) -> "RouteState":
        return replace(self, waypoints=self.waypoints + (Waypoint(latitude, longitude),))

    def move_waypoint(self, index: int, latitude: float, longitude: float) -> "RouteState":
        """Replace the waypoint at index (drag-to-edit)"""
        if not 0 <= index < len(self.waypoints):
            raise IndexError(f"No waypoint at index {index}")
        waypoints = list(self.waypoints)
        waypoints[index] = Waypoint(latitude, longitude)
        return replace(self, waypoints=tuple(waypoints))

    def undo(self) -> "RouteState":
        """Drop the last waypoint; no-op on an empty route"""
        return replace(self, waypoints=self.waypoints[:-1])

    def clear(self) -> "RouteState":
        return replace(self, waypoints=())

    def close_loop(self) -> "RouteState":
        """
        Append the first waypoint to the end of the route.

        Raises:
            InsufficientInputError: If the route has fewer than 2 waypoints
        """
        if not self.can_generate:
            raise InsufficientInputError(len(self.waypoints))
        return self.add_waypoint(self.waypoints[0].latitude, self.waypoints[0].longitude)

    def to_list(self) -> List[Dict[str, Any]]:
        """Plain lat/lon dicts for storage and transport"""
        return [{'lat': wp.latitude, 'lon': wp.longitude} for wp in self.waypoints]
