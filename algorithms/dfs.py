"""
dfs.py — Depth-First Search
=============================
Iterative DFS with an explicit stack (no Python recursion limit issues).

Neighbours are pushed in *reverse* adjacency order so they come off the
stack in adjacency order.  A node can sit on the stack more than once;
stale copies are skipped on pop ("mark on pop").

Emits:
  • Traverse – when pushing an unvisited neighbour (before we know where it leads)
  • Visit    – when a node is popped for the first time
  • Path     – the DFS-discovered path once the end node is popped

The distance is the hop count of that path, not necessarily the shortest.
"""

from typing import List, Optional, Sequence

from graph import Adjacency, Node
from algorithms.common import INF, endpoints_known, known_ids
from algorithms.step import EMPTY_RESULT, Path, Result, Step, Traverse, Visit


def dfs(
    adjacency: Adjacency,
    start: Optional[str],
    end: Optional[str],
    nodes: Optional[Sequence[Node]] = None,
    links=None,
) -> Result:
    if not endpoints_known(known_ids(adjacency, nodes), start, end):
        return EMPTY_RESULT

    steps: List[Step] = []
    stack = [(start, (start,))]
    visited: set = set()

    while stack:
        node, path = stack.pop()
        if node in visited:
            continue

        visited.add(node)
        steps.append(Visit(node))

        if node == end:
            steps.append(Path(path))
            return Result(tuple(steps), len(path) - 1)

        for nbr, _ in reversed(adjacency.get(node, ())):
            if nbr not in visited:
                steps.append(Traverse(node, nbr))
                stack.append((nbr, path + (nbr,)))

    return Result(tuple(steps), INF)
