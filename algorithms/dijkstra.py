"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Every known node is seeded at ∞ (source at 0) and pushed into the
priority queue up front; relaxations lower keys in place.

Emits:
  1. Visit     – each node popped with a finite distance
  2. Traverse  – each relaxation that improves a distance
  3. Path      – after the loop, if the predecessor chain reaches back
                 to the source

The loop stops when the end node is popped (no relaxations from it) or
when the cheapest remaining node is at ∞ (the rest is unreachable).

Correctness note: Dijkstra requires non-negative weights.  With a negative
edge the trace is still produced, the distance just isn't guaranteed.
"""

from typing import Dict, List, Optional, Sequence

from graph import Adjacency, Node
from algorithms.common import INF, endpoints_known, known_ids, reconstruct
from algorithms.priority_queue import PriorityQueue
from algorithms.step import EMPTY_RESULT, Path, Result, Step, Traverse, Visit


def dijkstra(
    adjacency: Adjacency,
    start: Optional[str],
    end: Optional[str],
    nodes: Optional[Sequence[Node]] = None,
    links=None,
) -> Result:
    ids = known_ids(adjacency, nodes)
    if not endpoints_known(ids, start, end):
        return EMPTY_RESULT

    steps: List[Step] = []
    dist: Dict[str, float] = {nid: INF for nid in ids}
    previous: Dict[str, str] = {}
    dist[start] = 0

    pq = PriorityQueue()
    for nid in ids:
        pq.push(nid, dist[nid])

    while not pq.is_empty():
        u, _ = pq.pop()
        if dist[u] == INF:
            break

        steps.append(Visit(u))
        if u == end:
            break

        for v, weight in adjacency.get(u, ()):
            new_dist = dist[u] + weight
            if new_dist < dist.get(v, INF):
                dist[v] = new_dist
                previous[v] = u
                steps.append(Traverse(u, v))
                pq.decrease_key(v, new_dist)

    path = reconstruct(previous, end)
    if path and path[0] == start:
        steps.append(Path(tuple(path)))

    return Result(tuple(steps), dist[end])
