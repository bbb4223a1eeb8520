"""Function-result memoization with dynamic-scope invalidation."""

from loguru import logger

# Silent until the embedding application calls configure_logging().
logger.disable("funcache")

from .cache import (
    Cache,
    CalibrationError,
    CopyOnWriteMap,
    FuncacheError,
    LRUStore,
    NullStore,
    Store,
    SyncMap,
    build_store,
    memoize,
    new,
    new_default_cache,
    new_in_mem_cache,
    nil_cache,
)
from .logging_config import configure_logging, get_logger
from .settings import FuncacheSettings, get_settings

__all__ = [
    # Cache
    "Cache",
    "new",
    "new_in_mem_cache",
    "new_default_cache",
    "nil_cache",
    "build_store",
    "memoize",
    # Stores
    "Store",
    "NullStore",
    "SyncMap",
    "CopyOnWriteMap",
    "LRUStore",
    # Errors
    "FuncacheError",
    "CalibrationError",
    # Ambient
    "FuncacheSettings",
    "get_settings",
    "configure_logging",
    "get_logger",
]
