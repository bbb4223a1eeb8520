"""Bounded store backed by cachetools.LRUCache."""

import threading
from typing import Any, Hashable, Tuple

from cachetools import LRUCache

from .keys import store_key

_MISSING = object()


class LRUStore:
    """Least-recently-used store holding at most ``max_size`` entries.

    Lookups reorder entries, so reads take the lock too. Evicted keys simply
    miss on the next ``get``.
    """

    def __init__(self, max_size: int):
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")
        self.max_size = max_size
        self._lock = threading.Lock()
        self._lru: LRUCache = LRUCache(maxsize=max_size)

    def add(self, key: Hashable, value: Any) -> None:
        k = store_key(key)
        with self._lock:
            self._lru[k] = value

    def get(self, key: Hashable) -> Tuple[Any, bool]:
        k = store_key(key)
        with self._lock:
            value = self._lru.get(k, _MISSING)
        if value is _MISSING:
            return None, False
        return value, True

    def __len__(self) -> int:
        with self._lock:
            return len(self._lru)
