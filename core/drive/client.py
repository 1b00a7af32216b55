"""Google Drive API client."""

import asyncio
import logging
from dataclasses import dataclass

import httplib2
import sentry_sdk
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2 import service_account
from googleapiclient.discovery import build, Resource
from googleapiclient.errors import HttpError

from core.config import get_drive_credentials_info
from core.errors import ConfigError, UpstreamError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/drive.readonly"]
FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
LIST_PAGE_SIZE = 1000

# Errors the googleapiclient/httplib2 stack raises for a failed call
_UPSTREAM_ERRORS = (HttpError, GoogleAuthError, httplib2.HttpLib2Error, OSError)


class DriveFileNotFoundError(UpstreamError):
    """Raised when Drive answers 404 for a file or folder id."""

    pass


@dataclass(frozen=True)
class DriveItem:
    """A file or folder as returned by the Drive files API."""

    id: str
    name: str
    mime_type: str

    @property
    def is_folder(self) -> bool:
        return self.mime_type == FOLDER_MIME_TYPE

    @classmethod
    def from_api(cls, data: dict) -> "DriveItem":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            mime_type=data.get("mimeType", ""),
        )


def _is_rate_limit_error(exception: Exception) -> bool:
    """Check if exception is a Google API rate limit error."""
    if isinstance(exception, HttpError):
        return exception.resp.status == 429
    return False


def _log_drive_error(
    exception: Exception,
    operation: str,
    context: dict | None = None,
) -> None:
    """
    Log Drive API errors with appropriate severity.

    Rate limits get warning level + specific Sentry event.
    Other errors get error level.
    """
    context = context or {}

    if _is_rate_limit_error(exception):
        logger.warning(
            f"Google Drive rate limit hit during {operation}",
            extra={"operation": operation, **context},
        )
        sentry_sdk.capture_message(
            f"Google Drive rate limit: {operation}",
            level="warning",
            extras={"operation": operation, **context},
        )
    else:
        logger.error(
            f"Google Drive API error during {operation}: {exception}",
            extra={"operation": operation, **context},
        )
        sentry_sdk.capture_exception(exception)


class DriveClient:
    """
    Thin async wrapper over the Drive v3 files API.

    googleapiclient is synchronous, so every call runs in a worker thread
    via asyncio.to_thread and is awaited before the caller continues.
    """

    def __init__(self, credentials, service: Resource | None = None):
        self._credentials = credentials
        self._service = service

    @classmethod
    def from_env(cls) -> "DriveClient":
        """
        Build a client from the configured service account.

        Raises:
            ConfigError: If no Drive credentials are configured.
        """
        info = get_drive_credentials_info()
        if info is None:
            raise ConfigError(
                "Google Drive credentials not configured. Set "
                "GOOGLE_DRIVE_CREDENTIALS_JSON, GOOGLE_DRIVE_CREDENTIALS_FILE or "
                "GOOGLE_CLIENT_EMAIL + GOOGLE_PRIVATE_KEY."
            )
        creds = service_account.Credentials.from_service_account_info(
            info,
            scopes=SCOPES,
        )
        return cls(creds)

    @property
    def service(self) -> Resource:
        if self._service is None:
            self._service = build(
                "drive", "v3", credentials=self._credentials, cache_discovery=False
            )
        return self._service

    async def _run(self, operation: str, func, **context):
        try:
            return await asyncio.to_thread(func)
        except HttpError as e:
            if e.resp.status == 404:
                logger.warning(f"Drive {operation}: not found ({context})")
                raise DriveFileNotFoundError(f"Drive {operation}: not found ({context})") from e
            _log_drive_error(e, operation, context)
            raise UpstreamError(f"Drive {operation} failed ({context}): {e}") from e
        except _UPSTREAM_ERRORS as e:
            _log_drive_error(e, operation, context)
            raise UpstreamError(f"Drive {operation} failed ({context}): {e}") from e

    async def list_children(self, folder_id: str) -> list[DriveItem]:
        """
        List the non-trashed children of a folder, ordered by name.

        Follows nextPageToken until the listing is exhausted.

        Raises:
            UpstreamError: If any page request fails
        """

        def _sync_list() -> list[DriveItem]:
            items: list[DriveItem] = []
            page_token = None
            while True:
                response = (
                    self.service.files()
                    .list(
                        q=f"'{folder_id}' in parents and trashed = false",
                        fields="nextPageToken, files(id, name, mimeType)",
                        orderBy="name",
                        pageSize=LIST_PAGE_SIZE,
                        pageToken=page_token,
                        supportsAllDrives=True,
                        includeItemsFromAllDrives=True,
                    )
                    .execute()
                )
                items.extend(DriveItem.from_api(f) for f in response.get("files", []))
                page_token = response.get("nextPageToken")
                if not page_token:
                    return items

        return await self._run("list_children", _sync_list, folder_id=folder_id)

    async def get_metadata(self, file_id: str) -> DriveItem:
        """Fetch id, name and mimeType of a single file."""

        def _sync_get() -> DriveItem:
            data = (
                self.service.files()
                .get(fileId=file_id, fields="id, name, mimeType", supportsAllDrives=True)
                .execute()
            )
            return DriveItem.from_api(data)

        return await self._run("get_metadata", _sync_get, file_id=file_id)

    async def read_text(self, file_id: str) -> str:
        """Download a small text file and decode it as UTF-8."""

        def _sync_download() -> str:
            content = (
                self.service.files()
                .get_media(fileId=file_id, supportsAllDrives=True)
                .execute()
            )
            if isinstance(content, bytes):
                return content.decode("utf-8", errors="replace")
            return content

        return await self._run("read_text", _sync_download, file_id=file_id)

    async def get_access_token(self) -> str:
        """Return a valid OAuth2 access token, refreshing it when expired."""

        def _sync_token() -> str:
            if not self._credentials.valid:
                self._credentials.refresh(Request())
            return self._credentials.token

        return await self._run("get_access_token", _sync_token)


_client: DriveClient | None = None


def get_drive_client() -> DriveClient:
    """
    Get or create the process-wide Drive client.

    Raises:
        ConfigError: If no Drive credentials are configured.
    """
    global _client

    if _client is None:
        _client = DriveClient.from_env()
    return _client


def set_drive_client(client: DriveClient | None) -> None:
    """Replace the process-wide client (used by tests)."""
    global _client
    _client = client
