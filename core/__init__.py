"""
Core business logic - framework-agnostic.
Used by the web API, the refresh scheduler and scripts/update_courses.py.
"""

from .errors import (
    CourseViewerError,
    ConfigError,
    UpstreamError,
    StorageError,
    NotFoundError,
)
from .users import ProgressStore, User, WatchedLesson

__all__ = [
    # Errors
    "CourseViewerError",
    "ConfigError",
    "UpstreamError",
    "StorageError",
    "NotFoundError",
    # Users / progress
    "ProgressStore",
    "User",
    "WatchedLesson",
]
