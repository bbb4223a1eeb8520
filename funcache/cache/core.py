"""Cache orchestrator.

Usage:
    from funcache import new_in_mem_cache

    cache = new_in_mem_cache()

    def get_report():
        return cache.wrap(lambda: build_report())

    get_report()                # computed
    get_report()                # served from the store
    cache.bust(get_report)      # recomputed, store refreshed
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, Optional

from funcache.logging_config import get_logger
from funcache.settings import FuncacheSettings, get_settings

from .decorator import memoize
from .invalidation import ActiveBustCounter, calibrate, is_busting
from .keys import function_identity
from .lru import LRUStore
from .maps import CopyOnWriteMap, SyncMap
from .store import NullStore, Store

logger = get_logger(name=__name__)


class Cache:
    """Memoizes computations in a store and recomputes them inside ``bust``.

    The store is shared, not copied. A Cache is safe to use from any number of
    threads and needs no teardown.
    """

    # Shared by every instance: the bust frame is recognised regardless of
    # which cache entered it.
    _active_busts = ActiveBustCounter()

    def __init__(self, store: Store):
        self.store = store

    def cache(self, key: Hashable, fn: Callable[[], Any]) -> Any:
        """Return the value stored under ``key``, computing it with ``fn`` if needed.

        Inside a bust scope the store is not consulted: ``fn`` always runs and
        its result overwrites the stored value. If ``fn`` raises, nothing is
        stored.
        """
        if not is_busting(self._active_busts):
            data, ok = self.store.get(key)
            if ok:
                logger.debug("Cache HIT: {}", key)
                return data
            logger.debug("Cache MISS: {}", key)
        else:
            logger.debug("Cache BUST: {}", key)

        data = fn()
        self.store.add(key, data)
        return data

    def wrap(self, fn: Callable[[], Any]) -> Any:
        """Same as ``cache``, keyed by where ``fn`` was defined."""
        return self.cache(function_identity(fn), fn)

    def bust(self, fn: Callable[[], None]) -> None:
        """Call ``fn``, recomputing every cached value requested while it runs."""
        self._active_busts.increment()
        try:
            fn()
        finally:
            self._active_busts.decrement()

    def memoize(self, key_builder: Optional[Callable[..., Hashable]] = None) -> Callable:
        """Decorator form of ``cache`` for functions that take arguments."""
        return memoize(self, key_builder=key_builder)


def new(store: Store) -> Cache:
    """Return a Cache backed by the store you provide."""
    return Cache(store)


def new_in_mem_cache() -> Cache:
    """Return a Cache backed by an in-memory map, safe for concurrent access."""
    return Cache(SyncMap())


def build_store(settings: FuncacheSettings) -> Store:
    """Create the store named by ``settings.default_store``."""
    kind = settings.default_store
    if kind == "mutex":
        return SyncMap()
    elif kind == "copy_on_write":
        return CopyOnWriteMap()
    elif kind == "lru":
        return LRUStore(settings.lru_max_size)
    elif kind == "null":
        return NullStore()
    raise ValueError(f"Unknown store kind: {kind!r}")


def new_default_cache(settings: Optional[FuncacheSettings] = None) -> Cache:
    """Return a Cache over the store configured in settings."""
    settings = settings or get_settings()
    store = build_store(settings)
    logger.debug("Created cache with {} store", settings.default_store)
    return Cache(store)


def nil_cache() -> Cache:
    """Return a Cache that never remembers anything."""
    return Cache(NullStore())


calibrate(nil_cache().bust)
