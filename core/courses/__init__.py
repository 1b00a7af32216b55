"""Course tree: types, extraction from Drive, persistence and lookups."""

from .types import (
    Course,
    Level,
    Module,
    ModuleMetadata,
    SubModule,
    Lesson,
    DEFAULT_SUBMODULE_TITLE,
    DEFAULT_LEVEL_TITLE,
)
from .classify import LessonKind, classify_content_type
from .metadata import parse_module_metadata
from .builder import CourseTreeBuilder, extract_tags, classify_course_type
from .store import CourseStore
from .catalog import (
    LessonLocation,
    find_course,
    find_level,
    find_module,
    locate_lesson,
    course_progress,
)

__all__ = [
    # Types
    "Course",
    "Level",
    "Module",
    "ModuleMetadata",
    "SubModule",
    "Lesson",
    "DEFAULT_SUBMODULE_TITLE",
    "DEFAULT_LEVEL_TITLE",
    # Classification and parsing
    "LessonKind",
    "classify_content_type",
    "parse_module_metadata",
    # Extraction and persistence
    "CourseTreeBuilder",
    "extract_tags",
    "classify_course_type",
    "CourseStore",
    # Lookups
    "LessonLocation",
    "find_course",
    "find_level",
    "find_module",
    "locate_lesson",
    "course_progress",
]
