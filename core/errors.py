"""
Error taxonomy shared by the course pipeline.

Core modules raise these and let them propagate; the web layer maps them
to HTTP responses (see main.py exception handlers).
"""


class CourseViewerError(Exception):
    """Base class for all course viewer errors."""

    pass


class ConfigError(CourseViewerError):
    """Raised when required configuration (root folder, credentials, secrets) is missing."""

    pass


class UpstreamError(CourseViewerError):
    """Raised when Google Drive is unreachable or returns an error."""

    pass


class StorageError(CourseViewerError):
    """Raised when reading or writing a local JSON document fails."""

    pass


class NotFoundError(CourseViewerError):
    """Raised when a user, course, level, module or lesson id is unknown."""

    pass
