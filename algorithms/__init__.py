"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm, run_algorithm

REGISTRY is a dict:
    {
        "bfs": AlgoInfo(key, label, fn, tags, supports_negative, …),
        …
    }

Every engine shares one signature:

    fn(adjacency, start, end, nodes=None, links=None) -> Result

so adding an algorithm is: write the function, add one entry here.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from graph import Graph
from algorithms.step import (
    Step, StepType, Visit, Traverse, Intermediate, Path, Result, step_from_dict,
)
from algorithms.priority_queue import PriorityQueue
from algorithms.bfs            import bfs            as _bfs
from algorithms.dfs            import dfs            as _dfs
from algorithms.dijkstra       import dijkstra       as _dijkstra
from algorithms.astar          import astar          as _astar
from algorithms.bellman_ford   import bellman_ford   as _bf
from algorithms.floyd_warshall import floyd_warshall as _fw

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "bfs"
    label:             str                    # human label, e.g. "Breadth-First Search"
    fn:                Callable[..., Result]  # the engine
    tags:              List[str] = field(default_factory=list)   # e.g. ["unweighted", "shortest-path"]
    supports_negative: bool     = False       # can handle negative edges?
    is_all_pairs:      bool     = False       # runs without start / end?
    has_heuristic:     bool     = False       # reads node positions?
    complexity_time:   str      = ""          # e.g. "O(V + E)"
    complexity_space:  str      = ""          # e.g. "O(V)"
    description:       str      = ""          # one-liner for the UI card

    def to_dict(self) -> dict:
        return {
            "key":               self.key,
            "label":             self.label,
            "tags":              list(self.tags),
            "supports_negative": self.supports_negative,
            "is_all_pairs":      self.is_all_pairs,
            "has_heuristic":     self.has_heuristic,
            "complexity_time":   self.complexity_time,
            "complexity_space":  self.complexity_space,
            "description":       self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=_bfs,
        tags=["unweighted", "shortest-path", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer-by-layer. Finds shortest path by hop count.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", fn=_dfs,
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep before backtracking. Does NOT guarantee shortest path.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra,
        tags=["weighted", "shortest-path"],
        complexity_time="O(E log V)", complexity_space="O(V)",
        description="Greedily expands the closest node. Optimal for non-negative weights.",
    ),

    "astar": AlgoInfo(
        key="astar", label="A* Search", fn=_astar,
        tags=["weighted", "shortest-path", "heuristic"],
        has_heuristic=True,
        complexity_time="O(E log V)", complexity_space="O(V)",
        description="Dijkstra + straight-line distance guidance. Optimal when h is admissible.",
    ),

    "bellman_ford": AlgoInfo(
        key="bellman_ford", label="Bellman–Ford", fn=_bf,
        tags=["weighted", "shortest-path", "negative-edges"],
        supports_negative=True,
        complexity_time="O(V · E)", complexity_space="O(V)",
        description="Relaxes every edge |V|-1 times. Handles negative edges.",
    ),

    "floyd_warshall": AlgoInfo(
        key="floyd_warshall", label="Floyd–Warshall", fn=_fw,
        tags=["weighted", "all-pairs", "negative-edges"],
        supports_negative=True, is_all_pairs=True,
        complexity_time="O(V³)", complexity_space="O(V²)",
        description="All-pairs shortest paths via dynamic programming over every pivot.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


def run_algorithm(
    key: str,
    graph: Graph,
    start: Optional[str],
    end: Optional[str],
) -> Result:
    """Build the adjacency view from `graph` and run one engine to completion."""
    info = get_algorithm(key)
    if info is None:
        raise ValueError(f"Unknown algorithm: {key}")

    if graph.has_negative_edges() and not info.supports_negative:
        logger.warning("%s does not support negative weights; result may be wrong", info.label)

    started = time.monotonic()
    result = info.fn(
        graph.adjacency(), start, end,
        nodes=graph.node_list(), links=list(graph.edges),
    )
    logger.info(
        "%s %s → %s: %d steps, distance=%s (%.1f ms)",
        info.label, start, end, len(result.steps), result.distance,
        (time.monotonic() - started) * 1000,
    )
    return result


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
    "run_algorithm",
    "PriorityQueue",
    "Step", "StepType", "Visit", "Traverse", "Intermediate", "Path", "Result",
    "step_from_dict",
]
