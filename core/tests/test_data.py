"""Tests for JSON document persistence."""

import pytest

from core.data import delete_file, read_json, write_json_atomic
from core.errors import StorageError


def test_write_then_read(tmp_path):
    path = tmp_path / "nested" / "doc.json"

    write_json_atomic(path, [{"title": "Formação"}])

    assert read_json(path) == [{"title": "Formação"}]


def test_overwrite_leaves_no_temp_files(tmp_path):
    path = tmp_path / "doc.json"

    write_json_atomic(path, [1])
    write_json_atomic(path, [2])

    assert read_json(path) == [2]
    assert [p.name for p in tmp_path.iterdir()] == ["doc.json"]


def test_read_missing_file(tmp_path):
    assert read_json(tmp_path / "missing.json") is None


def test_read_invalid_json(tmp_path):
    path = tmp_path / "doc.json"
    path.write_text("not json")

    with pytest.raises(StorageError):
        read_json(path)


def test_write_into_unwritable_location(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")

    # Parent "directory" is a regular file
    with pytest.raises(StorageError):
        write_json_atomic(blocker / "doc.json", [])


def test_delete_file(tmp_path):
    path = tmp_path / "doc.json"
    write_json_atomic(path, [])

    assert delete_file(path) is True
    assert delete_file(path) is False
