"""Root pytest configuration."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from core.drive.client import DriveFileNotFoundError, DriveItem, FOLDER_MIME_TYPE
from core.errors import UpstreamError

# Load environment variables before tests run
_root = Path(__file__).parent
load_dotenv(_root / ".env")
load_dotenv(_root / ".env.local", override=True)


class FakeDriveClient:
    """In-memory stand-in for DriveClient.

    Children are returned in the order they were added, which plays the
    role of Drive's name ordering.
    """

    def __init__(self):
        self.items: dict[str, DriveItem] = {}
        self.children: dict[str, list[DriveItem]] = {}
        self.contents: dict[str, str] = {}
        self.failing: set[str] = set()
        self.missing: set[str] = set()
        self.calls: list[tuple[str, str]] = []
        self.token_count = 0

    def add_folder(self, parent_id: str, folder_id: str, name: str) -> str:
        item = DriveItem(id=folder_id, name=name, mime_type=FOLDER_MIME_TYPE)
        self.items[folder_id] = item
        self.children.setdefault(parent_id, []).append(item)
        self.children.setdefault(folder_id, [])
        return folder_id

    def add_file(
        self,
        parent_id: str,
        file_id: str,
        name: str,
        mime_type: str,
        content: str | None = None,
    ) -> str:
        item = DriveItem(id=file_id, name=name, mime_type=mime_type)
        self.items[file_id] = item
        self.children.setdefault(parent_id, []).append(item)
        if content is not None:
            self.contents[file_id] = content
        return file_id

    def _check(self, operation: str, item_id: str) -> None:
        self.calls.append((operation, item_id))
        if item_id in self.failing:
            raise UpstreamError(f"Drive {operation} failed for {item_id}")

    async def list_children(self, folder_id: str) -> list[DriveItem]:
        self._check("list_children", folder_id)
        if folder_id in self.missing:
            raise DriveFileNotFoundError(f"not found: {folder_id}")
        return list(self.children.get(folder_id, []))

    async def get_metadata(self, file_id: str) -> DriveItem:
        self._check("get_metadata", file_id)
        if file_id not in self.items:
            raise DriveFileNotFoundError(f"not found: {file_id}")
        return self.items[file_id]

    async def read_text(self, file_id: str) -> str:
        self._check("read_text", file_id)
        if file_id not in self.contents:
            raise DriveFileNotFoundError(f"not found: {file_id}")
        return self.contents[file_id]

    async def get_access_token(self) -> str:
        self.token_count += 1
        return f"token-{self.token_count}"

    def count(self, operation: str) -> int:
        return sum(1 for op, _ in self.calls if op == operation)


@pytest.fixture
def fake_drive():
    """Empty in-memory Drive."""
    return FakeDriveClient()


@pytest.fixture
def backend_training_drive(fake_drive):
    """Drive with one training: Formação Backend / Nível 1 / Módulo 1 / two lessons."""
    fake_drive.add_folder("root", "course-1", "Formação Backend")
    fake_drive.add_folder("course-1", "level-1", "Nível 1")
    fake_drive.add_folder("level-1", "module-1", "Módulo 1")
    fake_drive.add_file("module-1", "file-video", "aula1.mp4", "video/mp4")
    fake_drive.add_file("module-1", "file-pdf", "aula1.pdf", "application/pdf")
    return fake_drive


@pytest.fixture(scope="session")
def event_loop_policy():
    """Use default event loop policy for all async tests."""
    import asyncio

    return asyncio.DefaultEventLoopPolicy()
