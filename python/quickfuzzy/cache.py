"""Bounded least-recently-used cache for query fingerprints.

Warning:
    This class is NOT thread-safe. ``get`` reorders entries, so even
    read-only use from several threads needs external locking.
"""

import logging
from collections import OrderedDict
from typing import Dict, Generic, Hashable, Optional, TypeVar

from quickfuzzy._utils import check_non_negative

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUCache(Generic[K, V]):
    """
    Mapping with a fixed capacity that evicts the least recently used key.

    A capacity of 0 turns the cache into a no-op: nothing is stored and
    every ``get`` is a miss.

    Example:
        >>> cache = LRUCache(maxsize=2)
        >>> cache.set("a", 1)
        >>> cache.set("b", 2)
        >>> cache.get("a")
        1
        >>> cache.set("c", 3)  # evicts "b", the least recently used
        >>> cache.has("b")
        False
    """

    def __init__(self, maxsize: int):
        check_non_negative("maxsize", maxsize)
        self._maxsize = int(maxsize)
        self._data: "OrderedDict[K, V]" = OrderedDict()
        self._hits = 0
        self._misses = 0

    @property
    def maxsize(self) -> int:
        return self._maxsize

    def get(self, key: K) -> Optional[V]:
        """Return the cached value and mark it as most recently used."""
        try:
            value = self._data[key]
        except KeyError:
            self._misses += 1
            return None
        self._data.move_to_end(key)
        self._hits += 1
        return value

    def set(self, key: K, value: V) -> None:
        """Insert or update ``key``, evicting the oldest entry when full."""
        if self._maxsize == 0:
            return
        if key in self._data:
            self._data.move_to_end(key)
        elif len(self._data) >= self._maxsize:
            evicted, _ = self._data.popitem(last=False)
            logger.debug("Evicted %r from query cache (maxsize=%d)", evicted, self._maxsize)
        self._data[key] = value

    def has(self, key: K) -> bool:
        """Membership test that does not touch recency."""
        return key in self._data

    def clear(self) -> None:
        self._data.clear()
        self._hits = 0
        self._misses = 0

    def info(self) -> Dict[str, int]:
        """Return hit/miss counters and occupancy."""
        return {
            "hits": self._hits,
            "misses": self._misses,
            "size": len(self._data),
            "maxsize": self._maxsize,
        }

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"LRUCache(maxsize={self._maxsize}, size={len(self._data)})"


__all__ = ["LRUCache"]
