"""Memo caches for parsed colors, parsed styles, downgrades and string widths."""

from __future__ import annotations

import threading
from collections import OrderedDict
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Callable, Generic, Hashable, Iterator, Optional, TypeVar

from ansi_cells.config import CacheSettings

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUCache(Generic[K, V]):
    """
    A thread-safe least-recently-used cache.

    Every cached function here is pure, so two threads racing on the same
    key compute the same value; the first one stored wins.
    """

    def __init__(self, maxsize: Optional[int] = 4096):
        if maxsize is not None and maxsize < 1:
            raise ValueError(f"maxsize must be >= 1 or None, got {maxsize}")
        self.maxsize = maxsize
        self._data: OrderedDict[K, V] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Get a cached value, marking it as recently used."""
        with self._lock:
            try:
                value = self._data[key]
            except KeyError:
                return default
            self._data.move_to_end(key)
            return value

    def put(self, key: K, value: V) -> V:
        """Store a value unless another thread got there first; return the stored value."""
        with self._lock:
            if key in self._data:
                self._data.move_to_end(key)
                return self._data[key]
            self._data[key] = value
            if self.maxsize is not None and len(self._data) > self.maxsize:
                self._data.popitem(last=False)
            return value

    def get_or_compute(self, key: K, compute: Callable[[], V]) -> V:
        """Return the cached value for key, computing it outside the lock on a miss."""
        with self._lock:
            if key in self._data:
                self._data.move_to_end(key)
                return self._data[key]
        return self.put(key, compute())

    def clear(self) -> None:
        with self._lock:
            self._data.clear()


@dataclass
class RenderCaches:
    """The full set of caches consulted while parsing and rendering."""
    colors: LRUCache = field(default_factory=LRUCache)
    styles: LRUCache = field(default_factory=LRUCache)
    downgrades: LRUCache = field(default_factory=LRUCache)
    widths: LRUCache = field(default_factory=LRUCache)

    @classmethod
    def from_settings(cls, settings: CacheSettings) -> RenderCaches:
        return cls(
            colors=LRUCache(settings.color_cache_size),
            styles=LRUCache(settings.style_cache_size),
            downgrades=LRUCache(settings.downgrade_cache_size),
            widths=LRUCache(settings.width_cache_size),
        )

    def clear(self) -> None:
        for cache in (self.colors, self.styles, self.downgrades, self.widths):
            cache.clear()


_default_caches: Optional[RenderCaches] = None
_default_lock = threading.Lock()
_active_caches: ContextVar[Optional[RenderCaches]] = ContextVar("ansi_cells_caches", default=None)


def default_caches() -> RenderCaches:
    """The process-wide caches, built from the environment on first use."""
    global _default_caches
    with _default_lock:
        if _default_caches is None:
            _default_caches = RenderCaches.from_settings(CacheSettings.from_env())
        return _default_caches


def get_caches() -> RenderCaches:
    """The caches active in the current context."""
    caches = _active_caches.get()
    return caches if caches is not None else default_caches()


@contextmanager
def use_caches(caches: Optional[RenderCaches] = None) -> Iterator[RenderCaches]:
    """
    Install an isolated set of caches for the duration of a block.

    Example:
        >>> with use_caches() as caches:
        ...     Color.parse("red")
        ...     assert "red" in caches.colors
    """
    if caches is None:
        caches = RenderCaches()
    token = _active_caches.set(caches)
    try:
        yield caches
    finally:
        _active_caches.reset(token)
