"""
priority_queue.py — Min-Priority Queue with decrease-key
=========================================================
Binary heap (heapq) with lazy deletion.  An index from item to its live
heap entries makes decrease_key O(log n): the old entries are flagged dead
and a fresh one is pushed; dead entries are discarded when they surface.

Ties pop in insertion order, but callers must only rely on
"minimum priority wins".
"""

import heapq
import itertools
from typing import Dict, Hashable, List, Tuple

_REMOVED = object()


class PriorityQueue:

    def __init__(self):
        self._heap: List[list] = []                    # [priority, seq, item]
        self._index: Dict[Hashable, List[list]] = {}   # item → live entries
        self._seq = itertools.count()
        self._size = 0

    def push(self, item: Hashable, priority: float) -> None:
        """Insert.  Pushing an item that is already queued keeps both entries."""
        entry = [priority, next(self._seq), item]
        heapq.heappush(self._heap, entry)
        self._index.setdefault(item, []).append(entry)
        self._size += 1

    def pop(self) -> Tuple[Hashable, float]:
        """Remove and return (item, priority) with the lowest priority."""
        while self._heap:
            entry = heapq.heappop(self._heap)
            priority, _, item = entry
            if item is _REMOVED:
                continue
            live = self._index[item]
            live.remove(entry)
            if not live:
                del self._index[item]
            self._size -= 1
            return item, priority
        raise KeyError("pop from an empty priority queue")

    def decrease_key(self, item: Hashable, priority: float) -> None:
        """Re-prioritise a queued item.  No-op if the item isn't queued."""
        live = self._index.pop(item, None)
        if not live:
            return
        for entry in live:
            entry[2] = _REMOVED
        self._size -= len(live)
        self.push(item, priority)

    def is_empty(self) -> bool:
        return self._size == 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, item: Hashable) -> bool:
        return item in self._index

    def __repr__(self) -> str:
        return f"PriorityQueue(size={self._size})"
