"""In-memory map stores, safe for concurrent access.

Two variants:
- SyncMap: one lock around a dict. Simple, fine for mixed workloads.
- CopyOnWriteMap: lock-free reads from a published snapshot; writes copy the
  whole dict. Suited to memoization, where hits vastly outnumber misses.
"""

import threading
from typing import Any, Dict, Hashable, Tuple

from .keys import store_key

_MISSING = object()


class SyncMap:
    """Dict guarded by a single lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._m: Dict[Hashable, Any] = {}

    def add(self, key: Hashable, value: Any) -> None:
        k = store_key(key)
        with self._lock:
            self._m[k] = value

    def get(self, key: Hashable) -> Tuple[Any, bool]:
        k = store_key(key)
        with self._lock:
            value = self._m.get(k, _MISSING)
        if value is _MISSING:
            return None, False
        return value, True

    def __len__(self) -> int:
        with self._lock:
            return len(self._m)


class CopyOnWriteMap:
    """Map whose readers never take a lock.

    Readers see whichever snapshot was published last. A snapshot is never
    mutated after it has been published; writers build a new one and swap the
    reference.
    """

    def __init__(self) -> None:
        self._write_lock = threading.Lock()
        self._snapshot: Dict[Hashable, Any] = {}

    def add(self, key: Hashable, value: Any) -> None:
        k = store_key(key)
        with self._write_lock:
            updated = dict(self._snapshot)
            updated[k] = value
            self._snapshot = updated

    def get(self, key: Hashable) -> Tuple[Any, bool]:
        value = self._snapshot.get(store_key(key), _MISSING)
        if value is _MISSING:
            return None, False
        return value, True

    def __len__(self) -> int:
        return len(self._snapshot)
