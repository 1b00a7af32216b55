"""
Process-wide service instances, exposed as FastAPI dependencies.

Each service is created on first use and then shared by every request.
Tests replace them through app.dependency_overrides.
"""

from core.config import get_file_view_ttl_seconds
from core.courses.builder import CourseTreeBuilder
from core.courses.store import CourseStore
from core.drive.cache import TTLCache
from core.drive.client import get_drive_client
from core.drive.file_view import FileViewResolver
from core.users import ProgressStore

_course_store: CourseStore | None = None
_progress_store: ProgressStore | None = None
_file_view_resolver: FileViewResolver | None = None


class _LazyDriveClient:
    """Defers Drive credential loading until the first remote call.

    Lets the app start (and serve an existing snapshot) without credentials.
    """

    def __getattr__(self, name):
        return getattr(get_drive_client(), name)


def get_course_store() -> CourseStore:
    global _course_store
    if _course_store is None:
        _course_store = CourseStore(CourseTreeBuilder(_LazyDriveClient()))
    return _course_store


def get_progress_store() -> ProgressStore:
    global _progress_store
    if _progress_store is None:
        _progress_store = ProgressStore()
    return _progress_store


def get_file_view_resolver() -> FileViewResolver:
    global _file_view_resolver
    if _file_view_resolver is None:
        cache = TTLCache(ttl_seconds=get_file_view_ttl_seconds())
        _file_view_resolver = FileViewResolver(_LazyDriveClient(), cache)
    return _file_view_resolver


def reset_services() -> None:
    """Drop all instances (used by tests)."""
    global _course_store, _progress_store, _file_view_resolver
    _course_store = None
    _progress_store = None
    _file_view_resolver = None
