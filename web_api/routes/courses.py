# web_api/routes/courses.py
"""Course catalog API routes.

All endpoints are reads of the course snapshot (built on first access).

Endpoints:
- GET /api/courses - All courses
- GET /api/courses/{course_id} - One course
- GET /api/courses/{course_id}/levels - Levels of a course
- GET /api/courses/{course_id}/levels/{level_id} - Modules of a level
- GET /api/courses/{course_id}/levels/{level_id}/{module_id} - One module
- GET /api/courses/{course_id}/lessons/{lesson_id} - Lesson with location and neighbours
- GET /api/courses/{course_id}/progress - Watched/total counts for the session user
"""

from fastapi import APIRouter, Depends

from core.courses.catalog import (
    course_progress,
    find_course,
    find_level,
    find_module,
    locate_lesson,
)
from core.courses.store import CourseStore
from core.users import ProgressStore
from web_api.auth import SessionToken, get_current_session
from web_api.dependencies import get_course_store, get_progress_store

router = APIRouter(prefix="/api/courses", tags=["courses"])


@router.get("")
async def list_courses(store: CourseStore = Depends(get_course_store)):
    courses = await store.load()
    return [course.to_dict() for course in courses]


@router.get("/{course_id}")
async def get_course(course_id: str, store: CourseStore = Depends(get_course_store)):
    course = find_course(await store.load(), course_id)
    return course.to_dict()


@router.get("/{course_id}/levels")
async def get_levels(course_id: str, store: CourseStore = Depends(get_course_store)):
    course = find_course(await store.load(), course_id)
    return [level.to_dict() for level in course.levels]


@router.get("/{course_id}/levels/{level_id}")
async def get_level_modules(
    course_id: str,
    level_id: str,
    store: CourseStore = Depends(get_course_store),
):
    """Modules of one level."""
    level = find_level(find_course(await store.load(), course_id), level_id)
    return [module.to_dict() for module in level.modules]


@router.get("/{course_id}/levels/{level_id}/{module_id}")
async def get_module(
    course_id: str,
    level_id: str,
    module_id: str,
    store: CourseStore = Depends(get_course_store),
):
    level = find_level(find_course(await store.load(), course_id), level_id)
    return find_module(level, module_id).to_dict()


@router.get("/{course_id}/lessons/{lesson_id}")
async def get_lesson(
    course_id: str,
    lesson_id: str,
    store: CourseStore = Depends(get_course_store),
):
    """Lesson with its level/module/submodule ids and previous/next lesson ids."""
    course = find_course(await store.load(), course_id)
    return locate_lesson(course, lesson_id).to_dict()


@router.get("/{course_id}/progress")
async def get_course_progress(
    course_id: str,
    session: SessionToken = Depends(get_current_session),
    store: CourseStore = Depends(get_course_store),
    users: ProgressStore = Depends(get_progress_store),
):
    """Course progress for the logged-in user.

    Only watched lessons that still exist in the current tree are counted.
    """
    course = find_course(await store.load(), course_id)
    watched = users.watched_lesson_ids(session.user_id, course_id)
    return course_progress(course, watched)
