"""Lookups and progress summaries over a loaded course tree."""

from dataclasses import dataclass
from typing import Iterable, Literal

from core.errors import NotFoundError

from .types import Course, Lesson, Level, Module, SubModule

ProgressStatus = Literal["not_started", "in_progress", "completed"]


def find_course(courses: list[Course], course_id: str) -> Course:
    for course in courses:
        if course.id == course_id:
            return course
    raise NotFoundError(f"Course not found: {course_id}")


def find_level(course: Course, level_id: str) -> Level:
    for level in course.levels:
        if level.id == level_id:
            return level
    raise NotFoundError(f"Level not found: {level_id}")


def find_module(level: Level, module_id: str) -> Module:
    for module in level.modules:
        if module.id == module_id:
            return module
    raise NotFoundError(f"Module not found: {module_id}")


@dataclass(frozen=True)
class LessonLocation:
    """A lesson with its ancestors and its neighbours in course order."""

    course: Course
    level: Level
    module: Module
    submodule: SubModule
    lesson: Lesson
    previous: Lesson | None = None
    next: Lesson | None = None

    def to_dict(self) -> dict:
        return {
            "courseId": self.course.id,
            "levelId": self.level.id,
            "moduleId": self.module.id,
            "submoduleId": self.submodule.id,
            "lesson": self.lesson.to_dict(),
            "previousLessonId": self.previous.id if self.previous else None,
            "nextLessonId": self.next.id if self.next else None,
        }


def locate_lesson(course: Course, lesson_id: str) -> LessonLocation:
    """Find a lesson in a course, with the lessons before and after it.

    Raises:
        NotFoundError: If no lesson with that id exists in the course
    """
    entries = list(course.iter_lessons())
    for i, (level, module, submodule, lesson) in enumerate(entries):
        if lesson.id != lesson_id:
            continue
        previous = entries[i - 1][3] if i > 0 else None
        following = entries[i + 1][3] if i + 1 < len(entries) else None
        return LessonLocation(
            course=course,
            level=level,
            module=module,
            submodule=submodule,
            lesson=lesson,
            previous=previous,
            next=following,
        )
    raise NotFoundError(f"Lesson not found: {lesson_id}")


def _status(completed: int, total: int) -> ProgressStatus:
    if completed == 0:
        return "not_started"
    if completed >= total:
        return "completed"
    return "in_progress"


def summarize_progress(lessons: Iterable[Lesson], watched_ids: set[str]) -> dict:
    """Count watched lessons among the given ones.

    Watched ids that no longer exist in the tree (after a rebuild) simply
    do not match and are ignored.
    """
    lesson_ids = [lesson.id for lesson in lessons]
    completed = sum(1 for lid in lesson_ids if lid in watched_ids)
    total = len(lesson_ids)
    return {"status": _status(completed, total), "completed": completed, "total": total}


def course_progress(course: Course, watched_ids: set[str]) -> dict:
    """Progress for a whole course plus a per-module breakdown."""
    modules = []
    for level in course.levels:
        for module in level.modules:
            modules.append(
                {
                    "levelId": level.id,
                    "moduleId": module.id,
                    **summarize_progress(module.lessons, watched_ids),
                }
            )
    all_lessons = [lesson for _, _, _, lesson in course.iter_lessons()]
    return {
        "courseId": course.id,
        **summarize_progress(all_lessons, watched_ids),
        "modules": modules,
    }
