"""Progress tracking API routes.

Endpoints:
- GET /api/progress - Watched lessons of a user (defaults to the session user)
- POST /api/progress - Mark a lesson watched/unwatched for the session user
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from core.users import ProgressStore
from web_api.auth import SessionToken, get_current_session, get_optional_session
from web_api.dependencies import get_progress_store

router = APIRouter(prefix="/api/progress", tags=["progress"])


class SetWatchedRequest(BaseModel):
    course_id: str = Field(alias="courseId", min_length=1)
    lesson_id: str = Field(alias="lessonId", min_length=1)
    watched: bool

    model_config = {"populate_by_name": True}


@router.get("")
async def get_watched_lessons(
    user_id: str | None = Query(None, alias="userId"),
    session: SessionToken | None = Depends(get_optional_session),
    users: ProgressStore = Depends(get_progress_store),
):
    """List watched (courseId, lessonId) pairs.

    Uses ?userId= when given, otherwise the session user.
    """
    if user_id is None:
        if session is None:
            raise HTTPException(401, "Authentication required")
        user_id = session.user_id

    watched = users.list_watched(user_id)
    return {"watchedLessons": [w.to_dict() for w in sorted(watched)]}


@router.post("")
async def set_watched(
    body: SetWatchedRequest,
    session: SessionToken = Depends(get_current_session),
    users: ProgressStore = Depends(get_progress_store),
):
    """Mark or unmark a lesson. Both directions are idempotent."""
    user = users.set_watched(session.user_id, body.course_id, body.lesson_id, body.watched)
    return {
        "success": True,
        "watchedLessons": [w.to_dict() for w in sorted(user.watched_lessons)],
    }
