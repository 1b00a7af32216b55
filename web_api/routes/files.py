"""
Lesson file viewing routes.

Endpoints:
- GET /api/file/{file_id} - {url, type, mimeType} for rendering a lesson file
- GET /api/video/{file_id} - Same payload wrapped as {url: {...}} (legacy)
"""

from fastapi import APIRouter, Depends

from core.drive.file_view import FileViewResolver
from web_api.dependencies import get_file_view_resolver

router = APIRouter(prefix="/api", tags=["files"])


@router.get("/file/{file_id}")
async def get_file_view(
    file_id: str,
    resolver: FileViewResolver = Depends(get_file_view_resolver),
):
    view = await resolver.resolve(file_id)
    return view.to_dict()


@router.get("/video/{file_id}")
async def get_video_view(
    file_id: str,
    resolver: FileViewResolver = Depends(get_file_view_resolver),
):
    view = await resolver.resolve(file_id)
    return {"url": view.to_dict()}
