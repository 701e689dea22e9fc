# SPDX-License-Identifier: MIT
# Copyright (c) 2026 LlamaIndex Inc.
"""Bounded LRU cache backed by OrderedDict.

OrderedDict keeps its keys on a doubly-linked list, so ``move_to_end`` and
``popitem(last=False)`` splice in O(1). Together with the dict lookup this
keeps ``get``, ``put``, ``has`` and ``delete`` constant time.

Not thread-safe: callers sharing an instance across threads must hold their
own lock around each call.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Callable, Hashable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Literal, TypeVar, overload

from .config import CacheConfig, validate_capacity

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
D = TypeVar("D")


class _NotFound(Enum):
    NOT_FOUND = "NOT_FOUND"

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> Literal[False]:
        return False


NOT_FOUND = _NotFound.NOT_FOUND
"""Returned by ``get``/``peek`` on a miss. Never equal to a stored value."""

NotFound = Literal[_NotFound.NOT_FOUND]

EvictCallback = Callable[[K, V], None]


@dataclass(frozen=True)
class CacheStats:
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def lookups(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        return self.hits / self.lookups if self.lookups else 0.0


class LRUCache(Generic[K, V]):
    """Bounded LRU cache.

    On ``get`` (hit) or ``put`` the key moves to the most-recently-used end.
    Inserting a new key into a full cache first evicts the least-recently-used
    entry. ``has``, ``peek``, ``in`` and the snapshot accessors never touch the
    recency order.

    Args:
        capacity: Maximum number of entries. Must be an ``int`` >= 1.
        on_evict: Called as ``on_evict(key, value)`` for every entry dropped to
            make room, after the new entry is in place. Explicit ``delete``
            and ``clear`` do not call it.
    """

    def __init__(
        self, capacity: int, *, on_evict: EvictCallback[K, V] | None = None
    ) -> None:
        self._capacity = validate_capacity(capacity)
        self._on_evict = on_evict
        self._data: OrderedDict[K, V] = OrderedDict()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @classmethod
    def from_config(
        cls, config: CacheConfig, *, on_evict: EvictCallback[K, V] | None = None
    ) -> LRUCache[K, V]:
        return cls(config.capacity, on_evict=on_evict)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def size(self) -> int:
        return len(self._data)

    @property
    def stats(self) -> CacheStats:
        return CacheStats(
            hits=self._hits, misses=self._misses, evictions=self._evictions
        )

    @overload
    def get(self, key: K) -> V | NotFound: ...

    @overload
    def get(self, key: K, default: D) -> V | D: ...

    def get(self, key: K, default: object = NOT_FOUND) -> object:
        if key in self._data:
            self._data.move_to_end(key)
            self._hits += 1
            return self._data[key]
        self._misses += 1
        return default

    @overload
    def peek(self, key: K) -> V | NotFound: ...

    @overload
    def peek(self, key: K, default: D) -> V | D: ...

    def peek(self, key: K, default: object = NOT_FOUND) -> object:
        """Return the value for ``key`` without promoting it."""
        return self._data.get(key, default)

    def put(self, key: K, value: V) -> None:
        if key in self._data:
            self._data.move_to_end(key)
            self._data[key] = value
            return
        victim = self._evict() if len(self._data) >= self._capacity else None
        self._data[key] = value
        # put has fully applied by the time on_evict runs
        if victim is not None and self._on_evict is not None:
            self._on_evict(*victim)

    def has(self, key: K) -> bool:
        return key in self._data

    def delete(self, key: K) -> bool:
        if key in self._data:
            del self._data[key]
            return True
        return False

    def clear(self) -> None:
        self._data.clear()

    def keys(self) -> list[K]:
        """Snapshot of the keys, least recently used first."""
        return list(self._data.keys())

    def values(self) -> list[V]:
        """Snapshot of the values, in the same order as ``keys()``."""
        return list(self._data.values())

    def items(self) -> list[tuple[K, V]]:
        return list(self._data.items())

    def _evict(self) -> tuple[K, V]:
        key, value = self._data.popitem(last=False)
        self._evictions += 1
        logger.debug("Evicted %r from LRU cache (capacity=%d)", key, self._capacity)
        return key, value

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[K]:
        # iterate over a snapshot so callers may mutate the cache while looping
        return iter(self.keys())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(capacity={self._capacity}, size={len(self._data)})"
