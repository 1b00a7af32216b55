#!/usr/bin/env python3
"""
Rebuild the course snapshot from Google Drive.

Usage:
    python scripts/update_courses.py               # build once
    python scripts/update_courses.py --force       # delete snapshot, then build
    python scripts/update_courses.py --interval 60 # build now and every 60 minutes
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
load_dotenv(project_root / ".env.local")
load_dotenv(project_root / ".env")

from core.courses.builder import CourseTreeBuilder
from core.courses.store import CourseStore
from core.drive.client import get_drive_client
from core.errors import ConfigError, CourseViewerError

logger = logging.getLogger("update_courses")


async def update_once(store: CourseStore, force: bool) -> bool:
    try:
        courses = await store.rebuild(force=force)
    except CourseViewerError as e:
        logger.error(f"Course update failed: {e}")
        return False
    except Exception as e:
        logger.exception(f"Unexpected error during course update: {e}")
        return False
    lessons = sum(len(course.lesson_ids) for course in courses)
    logger.info(f"Course structure updated: {len(courses)} courses, {lessons} lessons")
    return True


async def main(force: bool, interval_minutes: int | None) -> int:
    try:
        client = get_drive_client()
    except ConfigError as e:
        logger.error(str(e))
        return 1
    store = CourseStore(CourseTreeBuilder(client))

    ok = await update_once(store, force)
    if not interval_minutes:
        return 0 if ok else 1

    while True:
        await asyncio.sleep(interval_minutes * 60)
        await update_once(store, force)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Rebuild the course snapshot from Drive")
    parser.add_argument("--force", action="store_true", help="Delete the snapshot before building")
    parser.add_argument(
        "--interval",
        type=int,
        default=None,
        metavar="MINUTES",
        help="Keep running and rebuild every MINUTES",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    sys.exit(asyncio.run(main(args.force, args.interval)))
