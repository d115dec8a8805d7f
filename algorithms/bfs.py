"""
bfs.py — Breadth-First Search
==============================
Emits:
  1. Visit     – on every dequeue
  2. Traverse  – when an undiscovered neighbour is found (it's marked
                 visited and enqueued at the same moment)
  3. Path      – once, when the end node is dequeued

Distance is the hop count of the path; weights are ignored.
"""

from collections import deque
from typing import List, Optional, Sequence

from graph import Adjacency, Node
from algorithms.common import INF, endpoints_known, known_ids
from algorithms.step import EMPTY_RESULT, Path, Result, Step, Traverse, Visit


def bfs(
    adjacency: Adjacency,
    start: Optional[str],
    end: Optional[str],
    nodes: Optional[Sequence[Node]] = None,
    links=None,
) -> Result:
    """
    Args:
        adjacency : {node_id: [(neighbour, weight)]}.
        start     : Starting node id.
        end       : Goal node id.
        nodes     : Known nodes; ids outside it give an empty result.
    """
    if not endpoints_known(known_ids(adjacency, nodes), start, end):
        return EMPTY_RESULT

    steps: List[Step] = []
    queue = deque([(start, (start,))])
    visited = {start}

    while queue:
        node, path = queue.popleft()
        steps.append(Visit(node))

        if node == end:
            steps.append(Path(path))
            return Result(tuple(steps), len(path) - 1)

        for nbr, _ in adjacency.get(node, ()):
            if nbr not in visited:
                visited.add(nbr)
                steps.append(Traverse(node, nbr))
                queue.append((nbr, path + (nbr,)))

    return Result(tuple(steps), INF)
