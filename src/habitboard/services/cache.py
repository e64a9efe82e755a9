"""Client-side query cache keyed by resource tuples.

Keys look like ``("habits", user_id)`` or ``("completions", habit_id)``. The
first element is the key's kind, so a whole kind can be dropped at once.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Hashable, TypeVar

from ..logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
CacheKey = tuple[Hashable, ...]

HABITS = "habits"
COMPLETIONS = "completions"


def habits_key(user_id: str) -> CacheKey:
    return (HABITS, user_id)


def completions_key(habit_id: int) -> CacheKey:
    return (COMPLETIONS, habit_id)


@dataclass
class _Entry:
    value: Any
    stored_at: float


class QueryCache:
    """Best-effort cache of store reads with an explicit staleness window.

    ``ttl`` of 0 means every read refetches. Writes never go through the cache;
    callers push server responses in with :meth:`set` or :meth:`update`.
    """

    def __init__(self, ttl: float = 60.0, *, clock: Callable[[], float] = time.monotonic):
        if ttl < 0:
            raise ValueError("ttl must not be negative")
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[CacheKey, _Entry] = {}

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def is_stale(self, key: CacheKey) -> bool:
        entry = self._entries.get(key)
        if entry is None:
            return True
        return self._clock() - entry.stored_at >= self.ttl

    def peek(self, key: CacheKey, default: Any = None) -> Any:
        """Return the cached value regardless of staleness."""
        entry = self._entries.get(key)
        return default if entry is None else entry.value

    def get_or_fetch(self, key: CacheKey, fetcher: Callable[[], T]) -> T:
        """Return a fresh cached value, calling ``fetcher`` when missing or stale.

        Fetch errors propagate and leave any previous entry untouched.
        """
        if not self.is_stale(key):
            logger.debug("Cache hit", extra={"key": key})
            return self._entries[key].value
        logger.debug("Cache miss", extra={"key": key})
        value = fetcher()
        self.set(key, value)
        return value

    def set(self, key: CacheKey, value: T) -> T:
        self._entries[key] = _Entry(value=value, stored_at=self._clock())
        return value

    def update(self, key: CacheKey, fn: Callable[[Any], Any]) -> bool:
        """Apply ``fn`` to a cached value in place; no-op when the key is absent."""
        entry = self._entries.get(key)
        if entry is None:
            return False
        entry.value = fn(entry.value)
        return True

    def invalidate(self, key: CacheKey) -> None:
        if self._entries.pop(key, None) is not None:
            logger.debug("Cache invalidated", extra={"key": key})

    def invalidate_kind(self, kind: Hashable) -> int:
        """Drop every key whose first element is ``kind``; returns the count."""
        doomed = [key for key in self._entries if key and key[0] == kind]
        for key in doomed:
            del self._entries[key]
        return len(doomed)

    def clear(self) -> None:
        self._entries.clear()


__all__ = [
    "COMPLETIONS",
    "CacheKey",
    "HABITS",
    "QueryCache",
    "completions_key",
    "habits_key",
]
