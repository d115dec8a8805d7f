"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge, build_adjacency
    from graph import edge_key, NodeState, EdgeState
"""

from graph.node   import Node,  NodeState
from graph.edge   import Edge,  EdgeState, EdgeKey, edge_key, format_edge_key
from graph.graph  import Graph, Adjacency, build_adjacency
from graph.parser import parse_edge_list
from graph.layout import circle_layout, spring_layout, LAYOUTS

__all__ = [
    "Node",      "NodeState",
    "Edge",      "EdgeState",
    "EdgeKey",   "edge_key",  "format_edge_key",
    "Graph",     "Adjacency", "build_adjacency",
    "parse_edge_list",
    "circle_layout", "spring_layout", "LAYOUTS",
]
