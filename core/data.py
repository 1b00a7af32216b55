"""
JSON document persistence for the course snapshot and the user list.

Each document is replaced wholesale on every write: the new content goes to
a temp file in the same directory, which is then os.replace()d over the old
one so readers never observe a partially written file.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from core.config import get_data_dir
from core.errors import StorageError

logger = logging.getLogger(__name__)

COURSES_FILENAME = "courses.json"
USERS_FILENAME = "users.json"


def courses_file() -> Path:
    return get_data_dir() / COURSES_FILENAME


def users_file() -> Path:
    return get_data_dir() / USERS_FILENAME


def read_json(path: Path):
    """
    Load a JSON document.

    Returns:
        The decoded document, or None if the file does not exist.

    Raises:
        StorageError: On any other read or decode failure
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return None
    except (json.JSONDecodeError, OSError) as e:
        logger.error(f"Failed to load {path}: {e}")
        raise StorageError(f"Failed to load {path}: {e}") from e


def write_json_atomic(path: Path, data) -> None:
    """
    Write a JSON document, atomically replacing any previous version.

    Raises:
        StorageError: If the directory or file cannot be written
    """
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        logger.error(f"Failed to save {path}: {e}")
        raise StorageError(f"Failed to save {path}: {e}") from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)


def delete_file(path: Path) -> bool:
    """Remove a document. Returns False if it did not exist."""
    try:
        path.unlink()
        return True
    except FileNotFoundError:
        return False
    except OSError as e:
        raise StorageError(f"Failed to delete {path}: {e}") from e
