"""Map Drive content types to lesson kinds."""

from typing import Literal

LessonKind = Literal["video", "docs", "image", "other"]

GOOGLE_DOCUMENT = "application/vnd.google-apps.document"
GOOGLE_SPREADSHEET = "application/vnd.google-apps.spreadsheet"
GOOGLE_PRESENTATION = "application/vnd.google-apps.presentation"
GOOGLE_VIDEO = "application/vnd.google-apps.video"
PDF = "application/pdf"

DOCUMENT_TYPES = frozenset(
    {
        PDF,
        GOOGLE_DOCUMENT,
        GOOGLE_SPREADSHEET,
        GOOGLE_PRESENTATION,
        "text/plain",
        "text/markdown",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/vnd.ms-powerpoint",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    }
)


def normalize_content_type(mime_type: str | None) -> str:
    """Lower-case a content type and drop parameters such as "; charset=utf-8"."""
    return (mime_type or "").split(";", 1)[0].strip().lower()


def is_video_type(mime_type: str | None) -> bool:
    mime = normalize_content_type(mime_type)
    return mime.startswith("video/") or mime == GOOGLE_VIDEO


def is_document_type(mime_type: str | None) -> bool:
    return normalize_content_type(mime_type) in DOCUMENT_TYPES


def is_image_type(mime_type: str | None) -> bool:
    return normalize_content_type(mime_type).startswith("image/")


def classify_content_type(mime_type: str | None) -> LessonKind:
    """Classify a content type into exactly one lesson kind.

    Total and deterministic: unknown or missing types are "other".
    """
    if is_video_type(mime_type):
        return "video"
    if is_document_type(mime_type):
        return "docs"
    if is_image_type(mime_type):
        return "image"
    return "other"
