"""
User list and per-user lesson progress.

Users live in a single JSON document (DATA_DIR/users.json) that is seeded
with SEED_USERS on first load. Every mutation reads the full list, modifies
one user and writes the full list back (last writer wins; two concurrent
writers can lose one update, acceptable at human click rates).

Watched records are (course_id, lesson_id) pairs. They are not pruned when
the course tree is rebuilt; readers match them against the current tree
(see core.courses.catalog.summarize_progress).
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path

from core.data import read_json, users_file, write_json_atomic
from core.errors import NotFoundError, StorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class WatchedLesson:
    course_id: str
    lesson_id: str

    def to_dict(self) -> dict:
        return {"courseId": self.course_id, "lessonId": self.lesson_id}

    @classmethod
    def from_dict(cls, data: dict) -> "WatchedLesson":
        return cls(course_id=data["courseId"], lesson_id=data["lessonId"])


@dataclass(frozen=True)
class User:
    id: str
    email: str
    name: str
    watched_lessons: frozenset[WatchedLesson] = field(default_factory=frozenset)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "watchedLessons": [w.to_dict() for w in sorted(self.watched_lessons)],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            id=str(data["id"]),
            email=data["email"],
            name=data.get("name", ""),
            watched_lessons=frozenset(
                WatchedLesson.from_dict(item) for item in data.get("watchedLessons", [])
            ),
        )


SEED_USERS = [
    User(id="1", email="alef@example.com", name="Alef Oliveira"),
    User(id="2", email="rebecca@example.com", name="Rebecca"),
]


class ProgressStore:
    """Persistent user list with watched-lesson toggles."""

    def __init__(self, path: Path | None = None, seed: list[User] | None = None):
        self.path = path or users_file()
        self.seed = list(SEED_USERS if seed is None else seed)

    def load_users(self) -> list[User]:
        """Load all users, writing the seed list first if the file is missing."""
        data = read_json(self.path)
        if data is None:
            logger.info(f"No user file at {self.path}, seeding {len(self.seed)} users")
            self.save_users(self.seed)
            return list(self.seed)
        if not isinstance(data, list):
            raise StorageError(f"{self.path} does not hold a user list")
        try:
            return [User.from_dict(item) for item in data]
        except (KeyError, TypeError) as e:
            raise StorageError(f"Malformed user file {self.path}: {e}") from e

    def save_users(self, users: list[User]) -> None:
        write_json_atomic(self.path, [user.to_dict() for user in users])

    def get_user(self, user_id: str) -> User:
        """
        Raises:
            NotFoundError: If no user has that id
        """
        for user in self.load_users():
            if user.id == user_id:
                return user
        raise NotFoundError(f"User not found: {user_id}")

    def find_user_by_email(self, email: str) -> User | None:
        """Case-insensitive email lookup (used by login)."""
        wanted = email.strip().lower()
        for user in self.load_users():
            if user.email.lower() == wanted:
                return user
        return None

    def _update_watched(self, user_id: str, pair: WatchedLesson, watched: bool) -> User:
        users = self.load_users()
        for i, user in enumerate(users):
            if user.id != user_id:
                continue
            if watched:
                updated = user.watched_lessons | {pair}
            else:
                updated = user.watched_lessons - {pair}
            if updated == user.watched_lessons:
                return user
            users[i] = replace(user, watched_lessons=frozenset(updated))
            self.save_users(users)
            logger.info(
                f"User {user_id} {'watched' if watched else 'unwatched'} "
                f"{pair.course_id}/{pair.lesson_id}"
            )
            return users[i]
        raise NotFoundError(f"User not found: {user_id}")

    def mark_watched(self, user_id: str, course_id: str, lesson_id: str) -> User:
        """Mark a lesson watched. Re-marking is a no-op."""
        return self._update_watched(user_id, WatchedLesson(course_id, lesson_id), True)

    def mark_unwatched(self, user_id: str, course_id: str, lesson_id: str) -> User:
        """Unmark a lesson. Unmarking a never-watched lesson is a no-op."""
        return self._update_watched(user_id, WatchedLesson(course_id, lesson_id), False)

    def set_watched(self, user_id: str, course_id: str, lesson_id: str, watched: bool) -> User:
        if watched:
            return self.mark_watched(user_id, course_id, lesson_id)
        return self.mark_unwatched(user_id, course_id, lesson_id)

    def is_watched(self, user_id: str, course_id: str, lesson_id: str) -> bool:
        return WatchedLesson(course_id, lesson_id) in self.get_user(user_id).watched_lessons

    def list_watched(self, user_id: str) -> frozenset[WatchedLesson]:
        return self.get_user(user_id).watched_lessons

    def watched_lesson_ids(self, user_id: str, course_id: str) -> set[str]:
        """Lesson ids the user watched within one course."""
        return {
            w.lesson_id for w in self.list_watched(user_id) if w.course_id == course_id
        }
