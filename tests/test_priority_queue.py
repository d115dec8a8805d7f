"""
Unit tests for the decrease-key priority queue.
"""

import math

import pytest

from algorithms.priority_queue import PriorityQueue


class TestPushPop:
    """Basic ordering."""

    def test_pops_in_priority_order(self):
        pq = PriorityQueue()
        for item, prio in [("c", 3), ("a", 1), ("d", 4), ("b", 2)]:
            pq.push(item, prio)
        assert [pq.pop() for _ in range(4)] == [("a", 1), ("b", 2), ("c", 3), ("d", 4)]

    def test_infinite_priorities_last(self):
        pq = PriorityQueue()
        pq.push("far", math.inf)
        pq.push("near", 0)
        assert pq.pop() == ("near", 0)
        assert pq.pop() == ("far", math.inf)

    def test_pop_empty_raises(self):
        """Popping an empty queue should raise KeyError."""
        with pytest.raises(KeyError):
            PriorityQueue().pop()

    def test_len_and_contains(self):
        pq = PriorityQueue()
        pq.push("x", 5)
        assert len(pq) == 1 and "x" in pq and not pq.is_empty()
        pq.pop()
        assert len(pq) == 0 and "x" not in pq and pq.is_empty()


class TestDecreaseKey:
    """Re-prioritisation."""

    def test_reflected_in_next_pop(self):
        """A lowered key should surface on the very next pop."""
        pq = PriorityQueue()
        pq.push("a", 1)
        pq.push("b", 10)
        pq.decrease_key("b", 0)
        assert pq.pop() == ("b", 0)
        assert pq.pop() == ("a", 1)
        assert pq.is_empty()

    def test_size_unchanged(self):
        pq = PriorityQueue()
        pq.push("a", 5)
        pq.decrease_key("a", 2)
        assert len(pq) == 1

    def test_absent_item_is_noop(self):
        """Decreasing an item that isn't queued should do nothing."""
        pq = PriorityQueue()
        pq.push("a", 1)
        pq.decrease_key("ghost", 0)
        assert len(pq) == 1
        assert pq.pop() == ("a", 1)
        assert pq.is_empty()

    def test_after_pop_is_noop(self):
        pq = PriorityQueue()
        pq.push("a", 1)
        pq.pop()
        pq.decrease_key("a", 0)
        assert pq.is_empty()

    def test_repeated_decreases(self):
        pq = PriorityQueue()
        for nid in "abcde":
            pq.push(nid, math.inf)
        for prio, nid in enumerate("edcba"):
            pq.decrease_key(nid, prio)
        assert [pq.pop()[0] for _ in range(5)] == list("edcba")
        with pytest.raises(KeyError):
            pq.pop()
