"""
Course tree types.

Course -> Level -> Module -> SubModule -> Lesson. All records are frozen
and built bottom-up by the tree builder. to_dict()/from_dict() define the
JSON snapshot format (camelCase keys).
"""

from dataclasses import dataclass, field
from typing import Literal

from .classify import LessonKind

CourseType = Literal["course", "training"]

DEFAULT_SUBMODULE_TITLE = "Aulas"
DEFAULT_LEVEL_TITLE = "Conteúdo do Curso"


@dataclass(frozen=True)
class Lesson:
    """A single viewable file. id is the Drive file id."""

    id: str
    title: str
    kind: LessonKind
    source_file_id: str
    description: str | None = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "type": self.kind,
            "sourceFileId": self.source_file_id,
        }
        if self.description is not None:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Lesson":
        return cls(
            id=data["id"],
            title=data["title"],
            kind=data.get("type", "other"),
            # Legacy snapshots stored the file id under "videoUrl"
            source_file_id=data.get("sourceFileId") or data.get("videoUrl") or data["id"],
            description=data.get("description"),
        )


@dataclass(frozen=True)
class SubModule:
    id: str
    sort: int
    title: str
    lessons: tuple[Lesson, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "sort": self.sort,
            "title": self.title,
            "lessons": [lesson.to_dict() for lesson in self.lessons],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SubModule":
        return cls(
            id=data["id"],
            sort=data["sort"],
            title=data["title"],
            lessons=tuple(Lesson.from_dict(item) for item in data.get("lessons", [])),
        )


@dataclass(frozen=True)
class ModuleMetadata:
    """Free-text fields parsed from a module's metadata.md."""

    description: str | None = None
    challenge_url: str | None = None

    def to_dict(self) -> dict:
        data = {}
        if self.description is not None:
            data["description"] = self.description
        if self.challenge_url is not None:
            data["challengeUrl"] = self.challenge_url
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ModuleMetadata":
        return cls(
            description=data.get("description"),
            challenge_url=data.get("challengeUrl"),
        )


@dataclass(frozen=True)
class Module:
    id: str
    title: str
    sort: int
    submodules: tuple[SubModule, ...] = ()
    metadata: ModuleMetadata | None = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "sort": self.sort,
            "submodules": [sub.to_dict() for sub in self.submodules],
        }
        if self.metadata is not None:
            data["metadata"] = self.metadata.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Module":
        submodules = data.get("submodules")
        if submodules is None:
            submodules = data.get("lessons-submodules", [])
        metadata = data.get("metadata")
        return cls(
            id=data["id"],
            title=data["title"],
            sort=data["sort"],
            submodules=tuple(SubModule.from_dict(item) for item in submodules),
            metadata=ModuleMetadata.from_dict(metadata) if metadata is not None else None,
        )

    @property
    def lessons(self) -> list[Lesson]:
        """All lessons of the module, in submodule order."""
        return [lesson for sub in self.submodules for lesson in sub.lessons]


@dataclass(frozen=True)
class Level:
    id: str
    title: str
    level_index: int
    modules: tuple[Module, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "levelIndex": self.level_index,
            "modules": [module.to_dict() for module in self.modules],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Level":
        level_index = data.get("levelIndex", data.get("level"))
        return cls(
            id=data["id"],
            title=data["title"],
            level_index=level_index,
            modules=tuple(Module.from_dict(item) for item in data.get("modules", [])),
        )


@dataclass(frozen=True)
class Course:
    id: str
    title: str
    type: CourseType
    description: str = ""
    tags: tuple[str, ...] = ()
    levels: tuple[Level, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "tags": list(self.tags),
            "description": self.description,
            "type": self.type,
            "levels": [level.to_dict() for level in self.levels],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Course":
        return cls(
            id=data["id"],
            title=data["title"],
            type=data.get("type", "course"),
            description=data.get("description", ""),
            tags=tuple(data.get("tags", [])),
            levels=tuple(Level.from_dict(item) for item in data.get("levels", [])),
        )

    def iter_lessons(self):
        """Yield (level, module, submodule, lesson) in course order."""
        for level in self.levels:
            for module in level.modules:
                for sub in module.submodules:
                    for lesson in sub.lessons:
                        yield level, module, sub, lesson

    @property
    def lesson_ids(self) -> set[str]:
        return {lesson.id for _, _, _, lesson in self.iter_lessons()}
