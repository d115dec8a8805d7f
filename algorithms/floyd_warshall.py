"""
floyd_warshall.py — Floyd–Warshall (All-Pairs Shortest Paths)
===============================================================
Structure:
  for k in nodes:          ← "intermediate" node (pivot)
      for i in nodes:
          for j in nodes:
              if dist[i][k] + dist[k][j] < dist[i][j]:
                  dist[i][j] = dist[i][k] + dist[k][j]
                  next[i][j] = next[i][k]

Emits:
  1. Intermediate(k) – once per pivot
  2. Traverse(i, j, through=k) – for EVERY ordered pair, whether or not
                                 it improves (the trace walks the cube)
  3. Path – for the chosen start → end pair, if one exists

start / end are only used at the END to pick the path the user asked
about.  Without them the all-pairs trace is still produced.

The dense matrices are rebuilt from the raw edge list (`links`); without
one, the adjacency view is used instead.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from graph import Adjacency, Edge, Node
from algorithms.common import INF, known_ids
from algorithms.step import EMPTY_RESULT, Intermediate, Path, Result, Step, Traverse

logger = logging.getLogger(__name__)

Matrix = Dict[str, Dict[str, float]]
NextHop = Dict[str, Dict[str, Optional[str]]]


def floyd_warshall(
    adjacency: Adjacency,
    start: Optional[str],
    end: Optional[str],
    nodes: Optional[Sequence[Node]] = None,
    links: Optional[Iterable[Edge]] = None,
) -> Result:
    ids = known_ids(adjacency, nodes)
    if (start is not None and start not in ids) or (end is not None and end not in ids):
        return EMPTY_RESULT

    dist, nxt = _initial_matrices(ids, _weighted_pairs(adjacency, links))
    steps: List[Step] = []

    for k in ids:
        steps.append(Intermediate(k))
        dist_k = dist[k]
        for i in ids:
            dist_i = dist[i]
            for j in ids:
                steps.append(Traverse(i, j, through=k))
                via = dist_i[k] + dist_k[j]
                if via < dist_i[j]:
                    dist_i[j] = via
                    nxt[i][j] = nxt[i][k]

    if start is None or end is None:
        return Result(tuple(steps), INF)

    path = _reconstruct_path(nxt, start, end)
    if path is not None and len(path) > 1:
        steps.append(Path(tuple(path)))

    return Result(tuple(steps), dist[start][end])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _weighted_pairs(
    adjacency: Adjacency,
    links: Optional[Iterable[Edge]],
) -> List[Tuple[str, str, int]]:
    """Directed (u, v, w) triples; undirected links contribute both ways."""
    if links is None:
        return [(u, v, w) for u, nbrs in adjacency.items() for v, w in nbrs]

    pairs = []
    for link in links:
        pairs.append((link.source, link.target, link.weight))
        if not link.directed:
            pairs.append((link.target, link.source, link.weight))
    return pairs


def _initial_matrices(
    ids: Sequence[str],
    pairs: Iterable[Tuple[str, str, int]],
) -> Tuple[Matrix, NextHop]:
    dist: Matrix = {i: {j: (0 if i == j else INF) for j in ids} for i in ids}
    nxt: NextHop = {i: {j: None for j in ids} for i in ids}

    for u, v, w in pairs:
        if u not in dist or v not in dist:
            continue
        # parallel edges: keep the cheapest
        if w < dist[u][v]:
            dist[u][v] = w
            nxt[u][v] = v
    return dist, nxt


def _reconstruct_path(nxt: NextHop, start: str, end: str) -> Optional[List[str]]:
    """
    Follow next-hops from start to end.  Returns None when there is no
    next-hop or when a hop revisits a node (an inconsistent table).
    """
    path = [start]
    cur = start
    while cur != end:
        cur = nxt[cur][end]
        if cur is None:
            return None
        if cur in path:
            logger.warning("Next-hop cycle at '%s' while reconstructing %s → %s", cur, start, end)
            return None
        path.append(cur)
    return path
