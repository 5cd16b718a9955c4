"""Thread-safe cache of parsed tracebacks keyed by exception identity."""

from __future__ import annotations

import weakref
from collections import OrderedDict
from collections.abc import Callable
from threading import Lock

from error_enhanced.core.config import get_config
from error_enhanced.core.models.stack import StackFrame

Frames = list[StackFrame]


class StackTraceCache:
    """LRU cache mapping an exception object to its parsed frames.

    Exceptions that accept weak references are stored in a
    ``WeakKeyDictionary`` and disappear together with the exception. Built-in
    exception types do not support weak references, so those are kept in a
    bounded LRU keyed by ``id()``; the entry holds the exception itself so the
    id cannot be recycled while the entry is alive.
    """

    def __init__(self, max_size: int = 1024):
        self.max_size = max_size
        self._weak: weakref.WeakKeyDictionary[BaseException, Frames] = weakref.WeakKeyDictionary()
        self._strong: OrderedDict[int, tuple[BaseException, Frames]] = OrderedDict()
        self._lock = Lock()

    def get(self, error: BaseException) -> Frames | None:
        """Return the cached frames for ``error``, or ``None``."""
        with self._lock:
            return self._lookup(error)

    def set(self, error: BaseException, frames: Frames) -> None:
        """Store ``frames`` for ``error``."""
        with self._lock:
            self._store(error, frames)

    def get_or_parse(self, error: BaseException, parse: Callable[[BaseException], Frames]) -> Frames:
        """Return cached frames, running ``parse`` only on a miss.

        The lock is released while ``parse`` runs, so a parser may call back
        into this cache, e.g. for a chained ``__cause__``. When a nested call
        stored frames for the same error first, those frames are kept.
        """
        with self._lock:
            frames = self._lookup(error)
        if frames is not None:
            return list(frames)

        parsed = parse(error)
        with self._lock:
            frames = self._lookup(error)
            if frames is None:
                frames = parsed
                self._store(error, frames)
            return list(frames)

    def clear(self) -> None:
        with self._lock:
            self._weak.clear()
            self._strong.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._weak) + len(self._strong)

    def _lookup(self, error: BaseException) -> Frames | None:
        try:
            return self._weak.get(error)
        except TypeError:
            pass

        entry = self._strong.get(id(error))
        if entry is None or entry[0] is not error:
            return None
        self._strong.move_to_end(id(error))
        return entry[1]

    def _store(self, error: BaseException, frames: Frames) -> None:
        try:
            self._weak[error] = frames
            return
        except TypeError:
            pass

        key = id(error)
        if key in self._strong:
            del self._strong[key]
        while len(self._strong) >= self.max_size and self._strong:
            self._strong.popitem(last=False)
        self._strong[key] = (error, frames)


_default_cache: StackTraceCache | None = None


def get_stack_cache() -> StackTraceCache:
    """Return the process-wide cache, sized from configuration."""
    global _default_cache
    if _default_cache is None:
        _default_cache = StackTraceCache(max_size=get_config().stack_cache.max_size)
    return _default_cache


def reset_stack_cache() -> None:
    """Drop the process-wide cache."""
    global _default_cache
    _default_cache = None
