"""
layout.py — Node Placement
===========================
Assigns canvas coordinates to nodes.  The engines only ever *read* these
(A* heuristic), so layout runs before an algorithm, never during one.

  • circle_layout  – nodes on a ring, in node order (deterministic, no deps)
  • spring_layout  – force-directed placement via networkx
"""

import math
from typing import Optional

import networkx as nx

from graph.graph import Graph

DEFAULT_WIDTH  = 800
DEFAULT_HEIGHT = 500


def circle_layout(
    graph: Graph,
    canvas_w: float = DEFAULT_WIDTH,
    canvas_h: float = DEFAULT_HEIGHT,
) -> Graph:
    n = graph.node_count()
    if n == 0:
        return graph

    cx, cy = canvas_w / 2, canvas_h / 2
    radius = min(canvas_w, canvas_h) * 0.35
    for i, node in enumerate(graph.nodes.values()):
        angle = 2 * math.pi * i / n
        node.x = cx + radius * math.cos(angle)
        node.y = cy + radius * math.sin(angle)
    return graph


def spring_layout(
    graph: Graph,
    seed: Optional[int] = 42,
    iterations: int = 300,
    canvas_w: float = DEFAULT_WIDTH,
    canvas_h: float = DEFAULT_HEIGHT,
) -> Graph:
    """
    Force-directed placement (Fruchterman-Reingold).  A fixed seed gives the
    same picture for the same edge list, which keeps A* traces reproducible.
    """
    if graph.node_count() == 0:
        return graph

    g = nx.Graph()
    g.add_nodes_from(graph.node_ids())
    for edge in graph.edges:
        if edge.source in graph.nodes and edge.target in graph.nodes:
            g.add_edge(edge.source, edge.target)

    # edge weights may be negative, so they don't drive attraction
    pos = nx.spring_layout(
        g,
        weight=None,
        seed=seed,
        iterations=iterations,
        center=(canvas_w / 2, canvas_h / 2),
        scale=min(canvas_w, canvas_h) * 0.4,
    )
    for nid, (x, y) in pos.items():
        node = graph.nodes[nid]
        node.x = float(x)
        node.y = float(y)
    return graph


LAYOUTS = {
    "circle": circle_layout,
    "spring": spring_layout,
}
