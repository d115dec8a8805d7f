"""
bellman_ford.py — Bellman–Ford Algorithm
=========================================
The single-source algorithm that tolerates NEGATIVE edge weights.

Structure:
  • Visit(source) up front.
  • |V|-1 rounds; each round walks the whole adjacency view in node order,
    so every undirected edge is examined from both ends.

Emits:
  1. Traverse – for EVERY edge examined in EVERY round, improved or not.
                This is intentionally noisier than Dijkstra: it is what
                shows "relax everything, repeatedly".
  2. Visit    – for the target of each relaxation that improves a distance
  3. Path     – at the end, if the end node is reachable and its
                predecessor chain leads back to the source

There is no negative-cycle detector round.  On an undirected graph any
negative edge is itself a negative cycle, so the distances after |V|-1
rounds are simply the best found so far.
"""

from typing import Dict, List, Optional, Sequence

from graph import Adjacency, Node
from algorithms.common import INF, endpoints_known, known_ids, reconstruct
from algorithms.step import EMPTY_RESULT, Path, Result, Step, Traverse, Visit


def bellman_ford(
    adjacency: Adjacency,
    start: Optional[str],
    end: Optional[str],
    nodes: Optional[Sequence[Node]] = None,
    links=None,
) -> Result:
    ids = known_ids(adjacency, nodes)
    if not endpoints_known(ids, start, end):
        return EMPTY_RESULT

    steps: List[Step] = [Visit(start)]
    dist: Dict[str, float] = {nid: INF for nid in ids}
    previous: Dict[str, str] = {}
    dist[start] = 0

    for _ in range(len(ids) - 1):
        for u, neighbours in adjacency.items():
            for v, weight in neighbours:
                steps.append(Traverse(u, v))
                du = dist.get(u, INF)
                if du != INF and du + weight < dist.get(v, INF):
                    dist[v] = du + weight
                    previous[v] = u
                    steps.append(Visit(v))

    if dist[end] != INF:
        path = reconstruct(previous, end)
        if path and path[0] == start:
            steps.append(Path(tuple(path)))

    return Result(tuple(steps), dist[end])
