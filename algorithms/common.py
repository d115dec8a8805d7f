"""
Helpers shared by the engines.
"""

import math
from typing import Dict, List, Mapping, Optional, Sequence

from graph import Adjacency, Node

INF = math.inf


def known_ids(adjacency: Adjacency, nodes: Optional[Sequence[Node]]) -> List[str]:
    """Node ids in node order; the adjacency keys stand in when no node list is given."""
    if nodes is None:
        return list(adjacency.keys())
    return [n.id for n in nodes]


def endpoints_known(ids: Sequence[str], start: Optional[str], end: Optional[str]) -> bool:
    return start is not None and end is not None and start in ids and end in ids


def reconstruct(previous: Mapping[str, str], end: str) -> List[str]:
    """
    Walk the predecessor chain back from `end`.

    Returns [] if the chain loops (negative 2-cycles can leave `previous`
    cyclic); callers treat that as "no path".
    """
    path: List[str] = []
    seen = set()
    cur: Optional[str] = end
    while cur is not None:
        if cur in seen:
            return []
        seen.add(cur)
        path.append(cur)
        cur = previous.get(cur)
    path.reverse()
    return path


def positions(nodes: Optional[Sequence[Node]]) -> Dict[str, Node]:
    return {n.id: n for n in nodes or ()}
