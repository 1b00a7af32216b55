"""
Build the course tree from a Google Drive folder hierarchy.

Layout expected under the root folder:

    <root>/
      [tag] Formação Backend/          training: children are levels
        Nível 1/
          Módulo 1/
            metadata.md                optional, parsed into Module.metadata
            Submódulo A/ aula1.mp4     folders become submodules
            aula0.pdf                  loose files go to the "Aulas" submodule
      Curso de Git/                    course: children are modules directly
        Módulo 1/ ...

Traversal is sequential: each folder is listed once and its children are
processed in listing order (Drive orders by name), so sort and level_index
values are deterministic for a fixed Drive state.
"""

import logging
import re

from core.drive.client import DriveClient, DriveFileNotFoundError, DriveItem
from core.errors import ConfigError, UpstreamError

from .classify import classify_content_type
from .metadata import is_metadata_file, parse_module_metadata
from .types import (
    DEFAULT_LEVEL_TITLE,
    DEFAULT_SUBMODULE_TITLE,
    Course,
    CourseType,
    Lesson,
    Level,
    Module,
    ModuleMetadata,
    SubModule,
)

logger = logging.getLogger(__name__)

TRAINING_MARKERS = ("formação", "formacao")
_TAG_RE = re.compile(r"\[([^\[\]]+)\]")


def extract_tags(name: str) -> tuple[str, ...]:
    """Extract bracketed tags from a folder name.

    "[Backend] [node] Formação X" -> ("backend", "node")
    """
    tags: list[str] = []
    for raw in _TAG_RE.findall(name):
        tag = raw.strip().lower()
        if tag and tag not in tags:
            tags.append(tag)
    return tuple(tags)


def classify_course_type(name: str) -> CourseType:
    lowered = name.lower()
    if any(marker in lowered for marker in TRAINING_MARKERS):
        return "training"
    return "course"


def _folders(items: list[DriveItem]) -> list[DriveItem]:
    return [item for item in items if item.is_folder]


def _to_lesson(item: DriveItem) -> Lesson:
    return Lesson(
        id=item.id,
        title=item.name,
        kind=classify_content_type(item.mime_type),
        source_file_id=item.id,
    )


class CourseTreeBuilder:
    """Walks the Drive hierarchy and assembles Course records."""

    def __init__(self, client: DriveClient):
        self._client = client

    async def build(self, root_folder_id: str | None) -> list[Course]:
        """
        Build every course under the root folder.

        Raises:
            ConfigError: If root_folder_id is missing
            UpstreamError: If any Drive call fails (the whole build aborts)
        """
        if not root_folder_id:
            raise ConfigError("Root folder id not provided (set GOOGLE_FOLDER_ID)")

        logger.info(f"Building course tree from folder {root_folder_id}")
        children = await self._list_children(root_folder_id)

        courses = []
        for item in _folders(children):
            courses.append(await self._build_course(item))

        logger.info(f"Course tree built: {len(courses)} courses")
        return courses

    async def _build_course(self, folder: DriveItem) -> Course:
        course_type = classify_course_type(folder.name)
        logger.info(f"Discovered {course_type}: {folder.name}")

        if course_type == "training":
            children = await self._list_children(folder.id)
            levels = []
            for index, level_folder in enumerate(_folders(children), start=1):
                levels.append(await self._build_level(level_folder, index))
        else:
            # Simple course: one synthetic level wrapping the course's modules
            modules = await self._build_modules(folder.id)
            levels = [
                Level(
                    id=folder.id,
                    title=DEFAULT_LEVEL_TITLE,
                    level_index=1,
                    modules=tuple(modules),
                )
            ]

        return Course(
            id=folder.id,
            title=folder.name,
            type=course_type,
            description=f"Descrição para {folder.name}",
            tags=extract_tags(folder.name),
            levels=tuple(levels),
        )

    async def _build_level(self, folder: DriveItem, level_index: int) -> Level:
        modules = await self._build_modules(folder.id)
        return Level(
            id=folder.id,
            title=folder.name,
            level_index=level_index,
            modules=tuple(modules),
        )

    async def _build_modules(self, parent_id: str) -> list[Module]:
        children = await self._list_children(parent_id)
        modules = []
        for sort, module_folder in enumerate(_folders(children), start=1):
            modules.append(await self._build_module(module_folder, sort))
        return modules

    async def _build_module(self, folder: DriveItem, sort: int) -> Module:
        children = await self._list_children(folder.id)

        metadata: ModuleMetadata | None = None
        loose_files: list[DriveItem] = []
        subfolders: list[DriveItem] = []
        for item in children:
            if item.is_folder:
                subfolders.append(item)
            elif is_metadata_file(item.name):
                metadata = await self._read_metadata(item)
            else:
                loose_files.append(item)

        submodules: list[SubModule] = []
        if loose_files or not subfolders:
            submodules.append(
                SubModule(
                    id=folder.id,
                    sort=1,
                    title=DEFAULT_SUBMODULE_TITLE,
                    lessons=tuple(_to_lesson(item) for item in loose_files),
                )
            )

        for sub_folder in subfolders:
            lessons = await self._build_lessons(sub_folder.id)
            submodules.append(
                SubModule(
                    id=sub_folder.id,
                    sort=len(submodules) + 1,
                    title=sub_folder.name,
                    lessons=tuple(lessons),
                )
            )

        return Module(
            id=folder.id,
            title=folder.name,
            sort=sort,
            submodules=tuple(submodules),
            metadata=metadata,
        )

    async def _list_children(self, folder_id: str) -> list[DriveItem]:
        # A folder removed mid-build is an upstream failure, not a missing file
        try:
            return await self._client.list_children(folder_id)
        except DriveFileNotFoundError as e:
            raise UpstreamError(f"Folder {folder_id} vanished during the course build") from e

    async def _read_metadata(self, item: DriveItem) -> ModuleMetadata | None:
        # A metadata file that vanished after listing counts as absent
        try:
            text = await self._client.read_text(item.id)
        except DriveFileNotFoundError:
            logger.warning(f"metadata file {item.id} disappeared, ignoring")
            return None
        return parse_module_metadata(text)

    async def _build_lessons(self, folder_id: str) -> list[Lesson]:
        children = await self._list_children(folder_id)
        return [_to_lesson(item) for item in children if not item.is_folder]
