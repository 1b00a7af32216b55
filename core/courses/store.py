"""
Persistent course snapshot.

The full course tree lives in one JSON document. load() is the read path
for every catalog query; a missing snapshot triggers a build on first
access. rebuild() is single-flight: concurrent triggers share one traversal.
"""

import asyncio
import logging
from pathlib import Path
from typing import Callable

from core.config import get_root_folder_id
from core.data import courses_file, delete_file, read_json, write_json_atomic
from core.errors import StorageError

from .builder import CourseTreeBuilder
from .types import Course

logger = logging.getLogger(__name__)


class CourseStore:
    """
    Args:
        builder: Tree builder used when the snapshot is missing or on rebuild.
        path: Snapshot file (defaults to DATA_DIR/courses.json).
        root_folder_id: Callable returning the root folder id, read at build
            time so configuration changes are picked up.
    """

    def __init__(
        self,
        builder: CourseTreeBuilder,
        path: Path | None = None,
        root_folder_id: Callable[[], str | None] = get_root_folder_id,
    ):
        self.builder = builder
        self.path = path or courses_file()
        self._root_folder_id = root_folder_id
        self._build_lock = asyncio.Lock()
        self._inflight: asyncio.Future | None = None

    def save(self, courses: list[Course]) -> None:
        """Replace the snapshot with the given course list."""
        write_json_atomic(self.path, [course.to_dict() for course in courses])
        logger.info(f"Saved {len(courses)} courses to {self.path}")

    def read(self) -> list[Course] | None:
        """Read the snapshot without building. None if it does not exist."""
        data = read_json(self.path)
        if data is None:
            return None
        if not isinstance(data, list):
            raise StorageError(f"{self.path} does not hold a course list")
        try:
            return [Course.from_dict(item) for item in data]
        except (KeyError, TypeError) as e:
            raise StorageError(f"Malformed course snapshot {self.path}: {e}") from e

    async def load(self) -> list[Course]:
        """
        Load the snapshot, building and saving it first if it is missing.

        Raises:
            StorageError: On read failures other than "not found"
            ConfigError / UpstreamError: From the first-run build
        """
        courses = self.read()
        if courses is not None:
            return courses
        logger.info("No course snapshot found, building it now")
        return await self.rebuild()

    async def rebuild(self, force: bool = False) -> list[Course]:
        """
        Build the tree from Drive and replace the snapshot.

        With force=True the current snapshot is deleted before building,
        so readers fall back to a fresh build if this one fails.

        A call made while another rebuild is running waits for that rebuild
        and returns its result.
        """
        if self._inflight is not None:
            logger.info("Course rebuild already in progress, waiting for it")
            return await asyncio.shield(self._inflight)

        async with self._build_lock:
            loop = asyncio.get_running_loop()
            self._inflight = loop.create_future()
            try:
                if force and delete_file(self.path):
                    logger.info(f"Deleted course snapshot {self.path}")
                courses = await self.builder.build(self._root_folder_id())
                self.save(courses)
            except asyncio.CancelledError:
                self._inflight.cancel()
                raise
            except Exception as e:
                self._inflight.set_exception(e)
                # Mark retrieved so a failure nobody waited on is not logged by asyncio
                self._inflight.exception()
                raise
            else:
                self._inflight.set_result(courses)
                return courses
            finally:
                self._inflight = None

    def delete(self) -> bool:
        return delete_file(self.path)
