"""Small bounded memo table for idempotent script queries.

Each :class:`~game_integrations.game.Game` owns one cache.  Populations are
tiny (editions times query kinds), so entries live in a list and lookups scan
it linearly.  Entries never expire; once ``capacity`` is reached the oldest
entry is evicted to make room for a new key.
"""

from __future__ import annotations

from threading import RLock
from typing import Any, Generic, Hashable, Iterator, List, Optional, Tuple, TypeVar

DEFAULT_CAPACITY = 64

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_MISSING = object()


class Cache(Generic[K, V]):
    """Fixed-capacity associative store addressed by key equality."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("Cache capacity must be at least 1.")
        self._capacity = capacity
        self._entries: List[Tuple[K, V]] = []
        self._lock = RLock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Return the cached value for ``key`` or ``default``."""

        value = self.lookup(key)
        return default if value is _MISSING else value

    def lookup(self, key: K) -> Any:
        """Return the cached value or the module-private missing marker.

        Callers that cache ``None`` results use this together with
        :func:`is_missing` to tell a stored ``None`` from an absent entry.
        """

        with self._lock:
            for stored_key, value in self._entries:
                if stored_key == key:
                    return value
        return _MISSING

    def set(self, key: K, value: V) -> None:
        """Overwrite the entry for ``key`` or append a new one."""

        with self._lock:
            for index, (stored_key, _) in enumerate(self._entries):
                if stored_key == key:
                    self._entries[index] = (stored_key, value)
                    return
            if len(self._entries) >= self._capacity:
                del self._entries[0]
            self._entries.append((key, value))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def keys(self) -> Tuple[K, ...]:
        with self._lock:
            return tuple(key for key, _ in self._entries)

    def __contains__(self, key: object) -> bool:
        return self.lookup(key) is not _MISSING  # type: ignore[arg-type]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[K]:
        return iter(self.keys())


def is_missing(value: Any) -> bool:
    return value is _MISSING


__all__ = ["Cache", "DEFAULT_CAPACITY", "is_missing"]
