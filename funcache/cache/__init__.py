"""Caching core: orchestrator, stores, bust detection and key helpers."""

from .core import Cache, build_store, new, new_default_cache, new_in_mem_cache, nil_cache
from .decorator import memoize
from .invalidation import CalibrationError, FuncacheError
from .keys import build_cache_key, function_identity
from .lru import LRUStore
from .maps import CopyOnWriteMap, SyncMap
from .store import NullStore, Store

__all__ = [
    "Cache",
    "new",
    "new_in_mem_cache",
    "new_default_cache",
    "nil_cache",
    "build_store",
    "memoize",
    "Store",
    "NullStore",
    "SyncMap",
    "CopyOnWriteMap",
    "LRUStore",
    "function_identity",
    "build_cache_key",
    "FuncacheError",
    "CalibrationError",
]
