"""
GPX Synth Worker

This module provides Celery tasks for:
- Live route statistics while waypoints are placed
- Synthetic GPS track generation (elevation, heart rate, timing)
- GPX export and read-back
- Saving and loading a route
"""

# Delay Celery import to allow using the synthesis package without a broker
def get_celery_app():
    from .celery_app import app
    return app

# Only export get_celery_app function, not the app directly
__all__ = ['get_celery_app']
