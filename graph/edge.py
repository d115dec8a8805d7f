"""
edge.py — Graph Edge
====================
Connects two nodes with an integer weight.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Edges are undirected unless `directed` is set; the adjacency view then
    carries them in both directions.
  - Weights may be negative (Bellman-Ford demos).  Nothing here validates
    that; the engines decide what they tolerate.
  - The renderer and the playback driver identify an edge by its canonical
    key (sorted endpoint pair), never by object identity, so the same key
    can be recomputed for any drawn edge.
"""

from enum import Enum
from typing import Tuple


EdgeKey = Tuple[str, str]

KEY_SEPARATOR = "--"


def edge_key(a: str, b: str) -> EdgeKey:
    """Direction-independent key: ("A", "B") for both A→B and B→A."""
    return (a, b) if a <= b else (b, a)


def format_edge_key(key: EdgeKey) -> str:
    return KEY_SEPARATOR.join(key)


# ---------------------------------------------------------------------------
# Edge State Enum — visual encoding for the renderer
# ---------------------------------------------------------------------------
class EdgeState(Enum):
    DEFAULT   = "default"    # thin, neutral grey
    ANIMATING = "animating"  # traversed within the last delay interval
    PATH      = "path"       # on the final reconstructed path


# ---------------------------------------------------------------------------
# Edge
# ---------------------------------------------------------------------------
class Edge:
    """
    Attributes:
        source   : ID of one endpoint (the tail when directed).
        target   : ID of the other endpoint.
        weight   : Integer cost.
        directed : If False, traversal works in both directions.
    """

    __slots__ = ("source", "target", "weight", "directed")

    def __init__(
        self,
        source: str,
        target: str,
        weight: int = 1,
        directed: bool = False,
    ):
        self.source:   str  = source
        self.target:   str  = target
        self.weight:   int  = weight
        self.directed: bool = directed

    @property
    def key(self) -> EdgeKey:
        return edge_key(self.source, self.target)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "source":   self.source,
            "target":   self.target,
            "weight":   self.weight,
            "directed": self.directed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=data["source"],
            target=data["target"],
            weight=int(data.get("weight", 1)),
            directed=data.get("directed", False),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        arrow = " → " if self.directed else " ↔ "
        return f"Edge({self.source}{arrow}{self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Edge)
            and self.source == other.source
            and self.target == other.target
            and self.weight == other.weight
            and self.directed == other.directed
        )

    def __hash__(self) -> int:
        return hash((self.source, self.target, self.weight, self.directed))
