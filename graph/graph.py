"""
graph.py — Graph Container
===========================
Single source of truth for the graph.  The web layer edits it, the layout
positions it, and every algorithm run starts from `adjacency()`.

Responsibilities:
  1. CRUD on nodes & edges                  (add / get / move)
  2. Adjacency view for the engines         (build_adjacency)
  3. Import from edge-list text             (text → graph)
  4. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Nodes live in an insertion-ordered dict keyed by id; that order is the
    "node order" Bellman-Ford and Floyd-Warshall iterate in.
  - Edges are a plain list.  Parallel edges and self-loops are kept as given;
    the ingestion step is responsible for what reaches us.
  - The adjacency view is rebuilt per run instead of maintained
    incrementally, so no run can observe another run's mutations.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from graph.node import Node
from graph.edge import Edge
from graph.parser import parse_edge_list

logger = logging.getLogger(__name__)

Adjacency = Dict[str, List[Tuple[str, int]]]


def build_adjacency(nodes: Iterable[Node], edges: Iterable[Edge]) -> Adjacency:
    """
    Map every node id to its [(neighbour, weight)] list.

    Isolated nodes map to [].  An edge naming an unknown node is still
    recorded under whichever endpoint does exist.
    """
    adj: Adjacency = {node.id: [] for node in nodes}
    for edge in edges:
        if edge.source in adj:
            adj[edge.source].append((edge.target, edge.weight))
        if not edge.directed and edge.target in adj:
            adj[edge.target].append((edge.source, edge.weight))
    return adj


class Graph:
    """
    Attributes:
        nodes : {node_id: Node}, insertion ordered
        edges : [Edge]
    """

    def __init__(self):
        self.nodes: Dict[str, Node] = {}
        self.edges: List[Edge]      = []

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        self.nodes[node.id] = node
        return node

    def create_node(self, node_id: str, x: Optional[float] = None, y: Optional[float] = None) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(node_id, x=x, y=y))

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def move_node(self, node_id: str, x: float, y: float) -> bool:
        """Reposition a node (drag).  Returns False for an unknown id."""
        node = self.nodes.get(node_id)
        if node is None:
            return False
        node.x, node.y = x, y
        return True

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        self.edges.append(edge)
        return edge

    def create_edge(self, source: str, target: str, weight: int = 1, directed: bool = False) -> Edge:
        return self.add_edge(Edge(source=source, target=target, weight=weight, directed=directed))

    # ==================================================================
    # ADJACENCY
    # ==================================================================
    def adjacency(self) -> Adjacency:
        return build_adjacency(self.nodes.values(), self.edges)

    def node_list(self) -> List[Node]:
        return list(self.nodes.values())

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    # ==================================================================
    # IMPORT
    # ==================================================================
    @classmethod
    def from_edge_list(cls, text: str, directed: bool = False) -> "Graph":
        """Parse `node1 node2 weight` lines.  Positions are left unset."""
        node_ids, edges = parse_edge_list(text, directed=directed)
        g = cls()
        for nid in node_ids:
            g.create_node(nid)
        for edge in edges:
            g.add_edge(edge)
        logger.info("Built graph with %d nodes and %d edges", g.node_count(), g.edge_count())
        return g

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes.values()],
            "edges": [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls()
        for nd in data.get("nodes", []):
            g.add_node(Node.from_dict(nd))
        for ed in data.get("edges", []):
            g.add_edge(Edge.from_dict(ed))
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def has_negative_edges(self) -> bool:
        return any(e.weight < 0 for e in self.edges)

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"
