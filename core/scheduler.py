"""
APScheduler-based periodic course tree refresh.

A single interval job rebuilds the course snapshot from Drive. Jobs are
in-memory only: a restart simply schedules the next run from scratch.
"""

import logging

import sentry_sdk
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from core.config import get_refresh_interval_minutes
from core.courses.store import CourseStore

logger = logging.getLogger(__name__)

REFRESH_JOB_ID = "course_refresh"

_scheduler: AsyncIOScheduler | None = None


async def refresh_courses(store: CourseStore) -> None:
    """Rebuild the course snapshot. Failures keep the previous snapshot."""
    try:
        courses = await store.rebuild()
        logger.info(f"Scheduled course refresh done: {len(courses)} courses")
    except Exception as e:
        logger.error(f"Scheduled course refresh failed: {e}")
        sentry_sdk.capture_exception(e)


def init_scheduler(store: CourseStore, interval_minutes: int | None = None) -> AsyncIOScheduler | None:
    """
    Initialize and start the scheduler.

    Call this during app startup (in FastAPI lifespan). Returns None when
    the refresh interval is 0 (disabled).
    """
    global _scheduler

    if _scheduler is not None:
        return _scheduler

    if interval_minutes is None:
        interval_minutes = get_refresh_interval_minutes()
    if interval_minutes <= 0:
        logger.info("Course refresh scheduler disabled")
        return None

    _scheduler = AsyncIOScheduler(
        job_defaults={
            "coalesce": True,  # Combine missed runs into one
            "max_instances": 1,
            "misfire_grace_time": 600,
        },
    )
    _scheduler.add_job(
        refresh_courses,
        trigger="interval",
        minutes=interval_minutes,
        id=REFRESH_JOB_ID,
        args=[store],
        replace_existing=True,
    )
    _scheduler.start()
    # First run is one interval after startup; load() covers the empty case
    logger.info(f"Course refresh scheduled every {interval_minutes} minutes")
    return _scheduler


def shutdown_scheduler() -> None:
    """Stop the scheduler if running."""
    global _scheduler

    if _scheduler is not None:
        _scheduler.shutdown(wait=False)
        _scheduler = None
        logger.info("Course refresh scheduler stopped")
