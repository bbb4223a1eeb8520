"""Memoizing decorator built on Cache.cache.

Usage:
    from funcache import memoize, new_in_mem_cache

    cache = new_in_mem_cache()

    @memoize(cache)
    def load_report(report_id: str, as_of: date):
        ...
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Callable, Hashable, Optional

from .keys import build_cache_key, function_identity

if TYPE_CHECKING:
    from .core import Cache


def memoize(
    cache: "Cache",
    key_builder: Optional[Callable[..., Hashable]] = None,
) -> Callable:
    """Decorator that caches a function's results per argument set.

    Args:
        cache: Cache the results are stored through
        key_builder: Optional custom key builder function(func, args, kwargs) -> key.

    Notes:
        - Default keys hash the arguments with orjson after normalizing dates,
          pydantic models and containers; other objects are hashed by ``str()``.
        - Calls made inside ``cache.bust`` recompute and refresh the entry.
    """
    def decorator(func: Callable) -> Callable:
        identity = function_identity(func)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if key_builder:
                cache_key = key_builder(func, args, kwargs)
            else:
                cache_key = build_cache_key(identity, args, kwargs)
            return cache.cache(cache_key, lambda: func(*args, **kwargs))

        wrapper._funcache = cache
        wrapper._is_cached = True

        return wrapper
    return decorator
