"""Tests for course tree JSON serialization."""

from core.courses.types import (
    Course,
    Lesson,
    Level,
    Module,
    ModuleMetadata,
    SubModule,
)


def _sample_course() -> Course:
    return Course(
        id="c1",
        title="[api] Formação Backend",
        type="training",
        description="Descrição para Formação Backend",
        tags=("api",),
        levels=(
            Level(
                id="l1",
                title="Nível 1",
                level_index=1,
                modules=(
                    Module(
                        id="m1",
                        title="Módulo 1",
                        sort=1,
                        metadata=ModuleMetadata(description="Intro"),
                        submodules=(
                            SubModule(
                                id="m1",
                                sort=1,
                                title="Aulas",
                                lessons=(
                                    Lesson(
                                        id="f1",
                                        title="aula1.mp4",
                                        kind="video",
                                        source_file_id="f1",
                                    ),
                                ),
                            ),
                        ),
                    ),
                ),
            ),
        ),
    )


def test_to_dict_uses_camel_case_keys():
    data = _sample_course().to_dict()

    level = data["levels"][0]
    module = level["modules"][0]
    lesson = module["submodules"][0]["lessons"][0]
    assert data["tags"] == ["api"]
    assert level["levelIndex"] == 1
    assert module["metadata"] == {"description": "Intro"}
    assert lesson == {
        "id": "f1",
        "title": "aula1.mp4",
        "type": "video",
        "sourceFileId": "f1",
    }


def test_from_dict_restores_equal_tree():
    course = _sample_course()

    assert Course.from_dict(course.to_dict()) == course


def test_from_dict_accepts_legacy_keys():
    legacy = {
        "id": "c1",
        "title": "Curso",
        "tags": [],
        "description": "",
        "type": "course",
        "levels": [
            {
                "id": "c1",
                "title": "Conteúdo do Curso",
                "level": 1,
                "modules": [
                    {
                        "id": "m1",
                        "title": "Módulo",
                        "sort": 1,
                        "lessons-submodules": [
                            {
                                "id": "m1",
                                "sort": 1,
                                "title": "Aulas",
                                "lessons": [
                                    {
                                        "id": "f1",
                                        "title": "a.pdf",
                                        "type": "docs",
                                        "videoUrl": "f1",
                                    }
                                ],
                            }
                        ],
                    }
                ],
            }
        ],
    }

    course = Course.from_dict(legacy)

    assert course.levels[0].level_index == 1
    lesson = course.levels[0].modules[0].submodules[0].lessons[0]
    assert lesson.source_file_id == "f1"
    assert lesson.kind == "docs"


def test_iter_lessons_in_course_order():
    course = _sample_course()

    assert [lesson.id for *_, lesson in course.iter_lessons()] == ["f1"]
    assert course.lesson_ids == {"f1"}
