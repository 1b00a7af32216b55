"""
Course tree refresh routes.

Endpoints:
- POST /api/update-courses - Rebuild the tree from Drive (current snapshot kept until replaced)
- POST /api/force-update - Delete the snapshot, then rebuild

Both require a session. Concurrent calls share a single rebuild.
"""

import logging

from fastapi import APIRouter, Depends

from core.courses.store import CourseStore
from web_api.auth import SessionToken, get_current_session
from web_api.dependencies import get_course_store

router = APIRouter(prefix="/api", tags=["content"])

logger = logging.getLogger(__name__)


@router.post("/update-courses")
async def update_courses(
    session: SessionToken = Depends(get_current_session),
    store: CourseStore = Depends(get_course_store),
):
    logger.info(f"Course rebuild requested by user {session.user_id}")
    courses = await store.rebuild()
    return {"success": True, "courses": [course.to_dict() for course in courses]}


@router.post("/force-update")
async def force_update(
    session: SessionToken = Depends(get_current_session),
    store: CourseStore = Depends(get_course_store),
):
    """Discard the current snapshot and rebuild it from Drive."""
    logger.info(f"Forced course rebuild requested by user {session.user_id}")
    courses = await store.rebuild(force=True)
    return {
        "success": True,
        "message": "Course structure rebuilt",
        "courses": [course.to_dict() for course in courses],
    }
