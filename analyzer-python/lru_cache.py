#!/usr/bin/env python3
"""
Bounded least-recently-used cache.

An OrderedDict keeps entries oldest-first: reads and writes move the entry
to the end, inserts past capacity pop from the front.
"""

from collections import OrderedDict
from typing import Any, Hashable, Optional


class LRUCache:
    """
    Fixed-capacity cache with LRU eviction.

    A stored value of None is indistinguishable from a miss in get();
    use has() when that matters.
    """

    def __init__(self, capacity: int):
        self._capacity = max(0, int(capacity))
        self._entries: "OrderedDict[Hashable, Any]" = OrderedDict()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def get(self, key: Hashable, default: Optional[Any] = None) -> Any:
        """Return the cached value and mark it most recently used."""
        if key not in self._entries:
            return default
        self._entries.move_to_end(key)
        return self._entries[key]

    def set(self, key: Hashable, value: Any) -> None:
        """Insert or overwrite, evicting the least recently used entry past capacity."""
        if self._capacity == 0:
            return
        self._entries[key] = value
        self._entries.move_to_end(key)
        while len(self._entries) > self._capacity:
            self._entries.popitem(last=False)

    def has(self, key: Hashable) -> bool:
        """Membership test. Does not affect recency."""
        return key in self._entries

    def clear(self) -> None:
        self._entries.clear()
