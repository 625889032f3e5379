"""
GPX Synth Worker Tasks Package
"""

from ..celery_app import app

# Import all tasks to ensure they're registered with Celery
from .gpx_tasks import (
    download_gpx,
    generate_activity_gpx,
    inspect_gpx,
    preview_route_stats,
)
from .route_tasks import load_route, save_route

__all__ = [
    "app",
    "download_gpx",
    "generate_activity_gpx",
    "inspect_gpx",
    "preview_route_stats",
    "load_route",
    "save_route",
]
