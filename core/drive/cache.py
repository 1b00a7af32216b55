"""In-memory TTL cache for resolved file view URLs."""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    value: Any
    expires_at: float


class TTLCache:
    """
    Key/value cache whose entries expire a fixed time after they are written.

    Expired entries are evicted lazily, on the next lookup of that key; there
    is no background sweep. With max_entries set, inserting past capacity
    drops the oldest-written entry first.

    Args:
        ttl_seconds: Lifetime of an entry.
        clock: Monotonic time source (injectable for tests).
        max_entries: Capacity bound, or None for unbounded.
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int | None = None,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, _Entry] = {}

    def get(self, key: str) -> Any | None:
        """Return the live value for key, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            del self._entries[key]
            logger.debug(f"Cache entry expired: {key}")
            return None
        return entry.value

    def set(self, key: str, value: Any) -> None:
        # Re-inserting moves the key to the end of the eviction order
        self._entries.pop(key, None)
        self._entries[key] = _Entry(value=value, expires_at=self._clock() + self.ttl_seconds)

        if self.max_entries is not None:
            while len(self._entries) > self.max_entries:
                oldest = next(iter(self._entries))
                del self._entries[oldest]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
