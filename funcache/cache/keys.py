"""Cache key construction.

Three kinds of keys:
- function identity, used by Cache.wrap:
    tests.test_core.test_basics.<locals>.<lambda>:42#a1b2c3d4e5f6a7b8
- decorator keys, built from a function identity and its call arguments:
    funcache:app.reports.load_report:17#0f1e2d3c4b5a6978:d41d8cd98f00b204
- store keys, which are the caller's key unchanged unless it is unhashable.
"""

import functools
import hashlib
import weakref
from datetime import date, datetime
from types import CodeType
from typing import Any, Callable, Hashable

import orjson
from pydantic import BaseModel


def function_identity(fn: Callable) -> str:
    """Return a stable identifier for the place a callable was defined.

    Every closure created by the same ``def`` or ``lambda`` gets the same
    identity. Distinct definitions never share one, even when they sit on the
    same line.

    Raises:
        TypeError: If ``fn`` has no Python code object to identify it by
            (builtins, C extension callables).
    """
    if isinstance(fn, functools.partial):
        bound = _hash_json({"a": _normalize(fn.args), "k": _normalize(fn.keywords)})
        return f"{function_identity(fn.func)}|partial:{bound}"

    func = getattr(fn, "__func__", fn)
    code = getattr(func, "__code__", None)
    if code is None:
        func = getattr(type(fn), "__call__", None)
        code = getattr(func, "__code__", None)
    if code is None:
        raise TypeError(f"Cannot derive a cache key from {fn!r}")

    module = getattr(func, "__module__", None) or "<unknown>"
    qualname = getattr(func, "__qualname__", code.co_name)
    return f"{module}.{qualname}:{code.co_firstlineno}#{_code_digest(code)}"


def build_cache_key(identity: str, args: tuple, kwargs: dict) -> str:
    """Build a deterministic key from a function identity and its arguments.

    Args:
        identity: Function identity (see ``function_identity``)
        args: Positional arguments
        kwargs: Keyword arguments

    Returns:
        Key string like "funcache:<identity>:a1b2c3d4e5f6a7b8"
    """
    arg_hash = _hash_json({"a": _normalize(args), "k": _normalize(kwargs)})
    return f"funcache:{identity}:{arg_hash}"


def store_key(key: Any) -> Hashable:
    """Return ``key`` if it can index a dict, else a stable string standing in for it."""
    try:
        hash(key)
    except TypeError:
        data = orjson.dumps(_normalize(key), option=orjson.OPT_SORT_KEYS)
        return f"unhashable:{data.decode('utf-8')}"
    return key


_DIGESTS: "weakref.WeakKeyDictionary[CodeType, str]" = weakref.WeakKeyDictionary()


def _code_digest(code: CodeType) -> str:
    digest = _DIGESTS.get(code)
    if digest is not None:
        return digest

    # Captured variable names and source columns tell apart lambdas that
    # share a line and compile to the same bytecode.
    positions = tuple(code.co_positions())
    h = hashlib.sha256()
    h.update(code.co_code)
    for part in (
        code.co_consts,
        code.co_names,
        code.co_varnames,
        code.co_freevars,
        code.co_cellvars,
        positions,
    ):
        h.update(repr(part).encode("utf-8"))
    digest = h.hexdigest()[:16]
    _DIGESTS[code] = digest
    return digest


def _hash_json(data: Any) -> str:
    raw = orjson.dumps(data, option=orjson.OPT_SORT_KEYS)
    return hashlib.sha256(raw).hexdigest()[:16]


def _normalize(obj):
    """Normalize arguments for deterministic hashing."""
    if isinstance(obj, (str, int, float, bool, type(None))):
        return obj
    elif isinstance(obj, (date, datetime)):
        return obj.isoformat()
    elif isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    elif isinstance(obj, dict):
        return {str(k): _normalize(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [_normalize(item) for item in obj]
    elif isinstance(obj, (set, frozenset)):
        return sorted(
            (_normalize(item) for item in obj),
            key=lambda item: orjson.dumps(item, option=orjson.OPT_SORT_KEYS),
        )
    else:
        return str(obj)
