# web_api/tests/conftest.py
"""Pytest fixtures for web API tests.

Wires the app to an in-memory Drive (the "Formação Backend" training from
the root conftest) and to snapshot/user files under tmp_path, so API tests
run without Google credentials or a data directory.
"""

import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from core.courses.builder import CourseTreeBuilder
from core.courses.store import CourseStore
from core.drive.cache import TTLCache
from core.drive.file_view import FileViewResolver
from core.users import ProgressStore
from web_api.dependencies import (
    get_course_store,
    get_file_view_resolver,
    get_progress_store,
)


@pytest.fixture(autouse=True)
def _session_secret():
    """Sign session cookies with a fixed test secret."""
    with patch.dict(os.environ, {"SESSION_SECRET": "test-secret"}):
        yield


@pytest.fixture
def drive(backend_training_drive):
    return backend_training_drive


@pytest.fixture
def course_store(drive, tmp_path):
    return CourseStore(
        CourseTreeBuilder(drive),
        path=tmp_path / "courses.json",
        root_folder_id=lambda: "root",
    )


@pytest.fixture
def progress_store(tmp_path):
    return ProgressStore(path=tmp_path / "users.json")


@pytest.fixture
def file_view_resolver(drive):
    return FileViewResolver(drive, TTLCache(ttl_seconds=1800))


@pytest.fixture
def client(course_store, progress_store, file_view_resolver):
    """Create a test client for the FastAPI app with test services."""
    from main import app

    app.dependency_overrides[get_course_store] = lambda: course_store
    app.dependency_overrides[get_progress_store] = lambda: progress_store
    app.dependency_overrides[get_file_view_resolver] = lambda: file_view_resolver

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def logged_in_client(client):
    """Client holding a session cookie for seed user 1."""
    response = client.post("/api/auth/login", json={"email": "alef@example.com"})
    assert response.status_code == 200
    return client
