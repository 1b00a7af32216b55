"""Google Drive access: client, view URL resolution and its cache."""

from .cache import TTLCache
from .client import (
    DriveClient,
    DriveFileNotFoundError,
    DriveItem,
    FOLDER_MIME_TYPE,
    get_drive_client,
    set_drive_client,
)
from .file_view import FileView, FileViewResolver

__all__ = [
    "TTLCache",
    "DriveClient",
    "DriveFileNotFoundError",
    "DriveItem",
    "FOLDER_MIME_TYPE",
    "get_drive_client",
    "set_drive_client",
    "FileView",
    "FileViewResolver",
]
