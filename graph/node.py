from enum import Enum
from typing import Optional
import math


# ---------------------------------------------------------------------------
# Node State Enum — maps 1-to-1 with the visual encoding palette
# ---------------------------------------------------------------------------
class NodeState(Enum):
    DEFAULT      = "default"        # neutral grey
    VISITED      = "visited"        # finalised / dequeued by the algorithm
    CURRENT      = "current"        # the node visited on the latest step
    INTERMEDIATE = "intermediate"   # Floyd-Warshall pivot, single-step highlight
    SOURCE       = "source"         # start node
    TARGET       = "target"         # end node


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    Identity plus an optional position.

    Attributes:
        id     : Unique identifier (the token used in the edge list).
        label  : Human-readable name shown on the canvas.
        x, y   : Canvas coordinates assigned by a layout, or None until then.
                 Engines only read them (A* heuristic); they never write.
    """

    __slots__ = ("id", "label", "x", "y")

    def __init__(
        self,
        node_id: str,
        x: Optional[float] = None,
        y: Optional[float] = None,
        label: Optional[str] = None,
    ):
        self.id: str               = node_id
        self.label: str            = label or node_id
        self.x: Optional[float]    = x
        self.y: Optional[float]    = y

    @property
    def has_position(self) -> bool:
        return self.x is not None and self.y is not None

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def distance_to(self, other: "Node") -> float:
        """Euclidean distance; infinite when either node has no position."""
        if not (self.has_position and other.has_position):
            return math.inf
        return math.hypot(self.x - other.x, self.y - other.y)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":    self.id,
            "label": self.label,
            "x":     self.x,
            "y":     self.y,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(
            node_id=data["id"],
            x=data.get("x"),
            y=data.get("y"),
            label=data.get("label"),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        if self.has_position:
            return f"Node(id={self.id}, pos=({self.x:.2f},{self.y:.2f}))"
        return f"Node(id={self.id})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
