"""
astar.py — A* Search
=====================
Dijkstra ordered by f = g + h, where h is the straight-line (Euclidean)
distance from a node's position to the end node's position.  A node with
no position gets h = ∞: it is never preferred, but is still explored if
nothing better is left.

Open-set policy (deliberately different from Dijkstra's trace):
  • Traverse is emitted only when an improvement *first* opens a node.
  • Improving a node that is already open re-prioritises it silently.

On popping the end node: Visit, then Path, then stop.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence

from graph import Adjacency, Node
from algorithms.common import INF, endpoints_known, known_ids, positions, reconstruct
from algorithms.priority_queue import PriorityQueue
from algorithms.step import EMPTY_RESULT, Path, Result, Step, Traverse, Visit

logger = logging.getLogger(__name__)


def euclidean(a: Optional[Node], b: Optional[Node]) -> float:
    if a is None or b is None:
        return INF
    return a.distance_to(b)


def astar(
    adjacency: Adjacency,
    start: Optional[str],
    end: Optional[str],
    nodes: Optional[Sequence[Node]] = None,
    links=None,
) -> Result:
    """
    Args:
        nodes : Node list carrying the x/y positions the heuristic reads.
    """
    ids = known_ids(adjacency, nodes)
    if not endpoints_known(ids, start, end):
        return EMPTY_RESULT

    by_id = positions(nodes)
    goal = by_id.get(end)
    h: Callable[[str], float] = lambda nid: euclidean(by_id.get(nid), goal)

    steps: List[Step] = []
    g_score: Dict[str, float] = {nid: INF for nid in ids}
    f_score: Dict[str, float] = {nid: INF for nid in ids}
    previous: Dict[str, str] = {}

    g_score[start] = 0
    f_score[start] = h(start)

    open_pq = PriorityQueue()
    open_pq.push(start, f_score[start])
    open_set = {start}

    # closed nodes may be re-opened; a negative cycle would re-open forever
    budget = len(ids) * (sum(len(nbrs) for nbrs in adjacency.values()) + 1)

    while not open_pq.is_empty():
        if budget == 0:
            logger.warning("A* expansion budget exhausted (negative cycle?); giving up on '%s'", end)
            return Result(tuple(steps), INF)
        budget -= 1

        u, _ = open_pq.pop()
        open_set.discard(u)
        steps.append(Visit(u))

        if u == end:
            path = reconstruct(previous, end)
            if path:
                steps.append(Path(tuple(path)))
            return Result(tuple(steps), g_score[end])

        for v, weight in adjacency.get(u, ()):
            tentative_g = g_score[u] + weight
            if tentative_g < g_score.get(v, INF):
                previous[v] = u
                g_score[v] = tentative_g
                f_score[v] = tentative_g + h(v)
                if v not in open_set:
                    steps.append(Traverse(u, v))
                    open_pq.push(v, f_score[v])
                    open_set.add(v)
                else:
                    open_pq.decrease_key(v, f_score[v])

    return Result(tuple(steps), INF)
