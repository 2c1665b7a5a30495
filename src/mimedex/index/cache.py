# topmark:header:start
#
#   project      : Mimedex
#   file         : cache.py
#   file_relpath : src/mimedex/index/cache.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bounded least-recently-used cache with hit/miss statistics."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from mimedex.errors import InvalidArgument

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable

K = TypeVar("K", bound="Hashable")
V = TypeVar("V")


@dataclass(frozen=True)
class CacheInfo:
    """Snapshot of cache statistics.

    Attributes:
        hits (int): Lookups answered from the cache.
        misses (int): Lookups that had to call the loader.
        size (int): Current number of entries.
        capacity (int): Maximum number of entries.
    """

    hits: int
    misses: int
    size: int
    capacity: int


class LRUCache(Generic[K, V]):
    """Mapping of at most ``capacity`` entries, evicting the least recently used.

    Both reads and writes refresh an entry's recency. The cache is not
    thread-safe; it is owned by a single index instance.

    Args:
        capacity (int): Maximum number of entries; must be positive.

    Raises:
        InvalidArgument: If ``capacity`` is not positive.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise InvalidArgument(f"Cache capacity must be positive (got {capacity!r}).")
        self.capacity: int = capacity
        self._data: OrderedDict[K, V] = OrderedDict()
        self.hits: int = 0
        self.misses: int = 0

    def get(self, key: K, default: V | None = None) -> V | None:
        """Return the cached value for ``key`` (refreshing it), else ``default``."""
        if key in self._data:
            self._data.move_to_end(key)
            self.hits += 1
            return self._data[key]
        self.misses += 1
        return default

    def put(self, key: K, value: V) -> None:
        """Insert or replace ``key``, evicting the oldest entry when full."""
        if key in self._data:
            self._data.move_to_end(key)
        self._data[key] = value
        while len(self._data) > self.capacity:
            self._data.popitem(last=False)

    def get_or_set(self, key: K, loader: Callable[[K], V]) -> V:
        """Return the cached value for ``key``, loading and caching it on a miss.

        Args:
            key (K): The cache key.
            loader (Callable[[K], V]): Called with ``key`` on a miss; its result is
                cached. Exceptions propagate and nothing is cached.

        Returns:
            V: The cached or freshly loaded value.
        """
        if key in self._data:
            self._data.move_to_end(key)
            self.hits += 1
            return self._data[key]
        self.misses += 1
        value = loader(key)
        self.put(key, value)
        return value

    def clear(self) -> None:
        """Drop every entry and reset the statistics."""
        self._data.clear()
        self.hits = 0
        self.misses = 0

    def info(self) -> CacheInfo:
        """Return the current statistics."""
        return CacheInfo(
            hits=self.hits,
            misses=self.misses,
            size=len(self._data),
            capacity=self.capacity,
        )

    def keys(self) -> list[K]:
        """Return the cached keys, least recently used first."""
        return list(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"<LRUCache size={len(self._data)} capacity={self.capacity}>"
