"""Resolve a Drive file id to an embeddable viewing URL."""

import logging
from dataclasses import dataclass
from typing import Literal

from core.courses.classify import (
    GOOGLE_DOCUMENT,
    GOOGLE_PRESENTATION,
    GOOGLE_SPREADSHEET,
    PDF,
    is_image_type,
    is_video_type,
    normalize_content_type,
)

from .cache import TTLCache
from .client import DriveClient

logger = logging.getLogger(__name__)

ViewKind = Literal["video", "iframe", "image", "other"]

# Google-native editors, keyed by content type -> URL path segment
EDITOR_PATHS = {
    GOOGLE_DOCUMENT: "document",
    GOOGLE_SPREADSHEET: "spreadsheets",
    GOOGLE_PRESENTATION: "presentation",
}


def editor_url(path: str, file_id: str) -> str:
    return f"https://docs.google.com/{path}/d/{file_id}/edit?usp=sharing&embedded=true"


def preview_url(file_id: str) -> str:
    return f"https://drive.google.com/file/d/{file_id}/preview"


def media_url(file_id: str, access_token: str) -> str:
    return (
        f"https://www.googleapis.com/drive/v3/files/{file_id}"
        f"?alt=media&access_token={access_token}"
    )


@dataclass(frozen=True)
class FileView:
    """How the frontend should render a lesson file."""

    url: str
    kind: ViewKind
    content_type: str

    def to_dict(self) -> dict:
        return {"url": self.url, "type": self.kind, "mimeType": self.content_type}


class FileViewResolver:
    """
    Resolves file ids to FileViews, caching each result for the cache's TTL.

    The cache is consulted before every Drive lookup; an absent or expired
    entry triggers a fresh metadata request and a cache write.
    """

    def __init__(self, client: DriveClient, cache: TTLCache):
        self._client = client
        self._cache = cache

    async def resolve(self, file_id: str) -> FileView:
        """
        Resolve a file id.

        Raises:
            UpstreamError: If the Drive metadata (or token) lookup fails
        """
        cached = self._cache.get(file_id)
        if cached is not None:
            logger.debug(f"File view cache hit: {file_id}")
            return cached

        item = await self._client.get_metadata(file_id)
        view = await self._build_view(file_id, item.mime_type)
        self._cache.set(file_id, view)
        logger.debug(f"Resolved {file_id} as {view.kind} ({view.content_type})")
        return view

    async def _build_view(self, file_id: str, mime_type: str) -> FileView:
        # First match wins; the reported content type stays as Drive sent it
        mime = normalize_content_type(mime_type)

        if mime in EDITOR_PATHS:
            return FileView(editor_url(EDITOR_PATHS[mime], file_id), "iframe", mime_type)

        if mime == PDF:
            return FileView(preview_url(file_id), "iframe", mime_type)

        if is_image_type(mime):
            token = await self._client.get_access_token()
            return FileView(media_url(file_id, token), "image", mime_type)

        if is_video_type(mime):
            return FileView(preview_url(file_id), "video", mime_type)

        return FileView(preview_url(file_id), "other", mime_type)
