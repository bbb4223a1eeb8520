"""Bust-scope detection by call stack inspection.

A memoized call is "busting" when any frame on the current thread's stack is
running ``Cache.bust``. That frame is recognised by its code object, which is
captured once at import time by running ``Cache.bust`` against a NullStore
cache and looking one frame above the body it was given.

Threads have their own stacks. Work started on another thread inside a bust
scope does not see the ``Cache.bust`` frame and reads from cache as usual.
"""

from __future__ import annotations

import sys
import threading
from types import CodeType, FrameType
from typing import Callable, Iterator, List, Optional

from funcache.logging_config import get_logger

logger = get_logger(name=__name__)

BUST_FN_IDENTITY = "funcache.cache.core.Cache.bust"

_sentinel_code: Optional[CodeType] = None


class FuncacheError(Exception):
    """Base class for funcache errors."""


class CalibrationError(FuncacheError):
    """The Cache.bust frame could not be identified at import time."""


class ActiveBustCounter:
    """Number of bust scopes currently entered, across all threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    @property
    def value(self) -> int:
        return self._value

    def increment(self) -> None:
        with self._lock:
            self._value += 1

    def decrement(self) -> None:
        with self._lock:
            self._value -= 1


def frame_identity(frame: FrameType) -> str:
    """Return "<module>.<qualname>" for the function a frame is running."""
    code = frame.f_code
    module = frame.f_globals.get("__name__", "<unknown>")
    return f"{module}.{code.co_qualname}"


def _walk_frames(frame: Optional[FrameType], skip: int) -> Iterator[FrameType]:
    """Yield ``frame`` and every frame above it, after dropping ``skip`` of them."""
    for _ in range(skip):
        if frame is None:
            return
        frame = frame.f_back
    while frame is not None:
        yield frame
        frame = frame.f_back


def get_all_callers(skip: int = 0) -> List[CodeType]:
    """Return the code objects of every frame above the caller, innermost first.

    Args:
        skip: Extra frames to drop after the caller's own frame.
    """
    return [frame.f_code for frame in _walk_frames(sys._getframe(1), skip)]


def caller_names(skip: int = 0) -> List[str]:
    """Like ``get_all_callers`` but resolved to symbolic identities."""
    return [frame_identity(frame) for frame in _walk_frames(sys._getframe(1), skip)]


def was_called_by_cache_busting_fn() -> bool:
    """Check whether any frame on the current stack is running ``Cache.bust``."""
    sentinel = _sentinel_code
    if sentinel is None:
        raise CalibrationError("funcache: bust detection used before calibration")

    return any(frame.f_code is sentinel for frame in _walk_frames(sys._getframe(1), 0))


def is_busting(active_busts: ActiveBustCounter) -> bool:
    """Cheap check first: with no bust scope entered anywhere, skip the walk."""
    if active_busts.value == 0:
        return False
    return was_called_by_cache_busting_fn()


def calibrate(bust_entry: Callable[[Callable[[], None]], None]) -> CodeType:
    """Record the code object of the bust entry point.

    Args:
        bust_entry: ``Cache.bust`` bound to a cache over a NullStore. It is called
            once with a body that captures the frame directly above it.

    Returns:
        The calibrated sentinel code object.

    Raises:
        CalibrationError: If the captured frame is not ``Cache.bust``.
    """
    global _sentinel_code

    captured: List[FrameType] = []

    def capture() -> None:
        captured.append(sys._getframe(1))

    bust_entry(capture)

    identity = frame_identity(captured[0]) if captured else None
    if identity != BUST_FN_IDENTITY:
        logger.error(
            "Calibration captured {} instead of {}", identity, BUST_FN_IDENTITY
        )
        raise CalibrationError("funcache: init: unable to identify cache busting func")

    _sentinel_code = captured[0].f_code
    logger.debug("Calibrated bust sentinel: {}", identity)
    return _sentinel_code
