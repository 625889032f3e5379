"""
Synthesis Errors

Error taxonomy for track generation. Every error carries a stable ``code``
so the task layer can report it without inspecting message text.
"""


class GpxSynthError(Exception):
    """Base class for recoverable generation errors"""

    code = "gpxsynth_error"


class InsufficientInputError(GpxSynthError):
    """Raised when fewer than 2 waypoints are supplied for generation"""

    code = "insufficient_input"

    def __init__(self, waypoint_count: int):
        self.waypoint_count = waypoint_count
        super().__init__(
            f"At least 2 waypoints are required, got {waypoint_count}"
        )


class MissingGeneratedArtifactError(GpxSynthError):
    """Raised when a download is requested before a GPX was generated"""

    code = "missing_generated_artifact"

    def __init__(self):
        super().__init__("Generate a GPX before downloading it")


class UnknownActivityError(GpxSynthError):
    """Raised for an activity kind with no profile"""

    code = "unknown_activity"

    def __init__(self, activity: str):
        self.activity = activity
        super().__init__(f"Unknown activity type: {activity!r}")
