"""
step.py — Trace Events
=======================
Every engine returns a Result: the ordered list of Steps it emitted plus
the final distance.  A Step is one discrete event the animation replays:

    Visit(node)                       – node dequeued / finalised
    Traverse(source, target, through) – edge explored or relaxed;
                                        `through` is the Floyd-Warshall pivot
    Intermediate(node)                – Floyd-Warshall pivot announcement
    Path(path)                        – the reconstructed path, at most once

Design decisions:
  - Steps are frozen dataclasses.  The engine is the only writer; the
    playback driver and the renderer are pure readers.
  - Order matters.  The sequence is exactly the algorithm's decision order,
    and reordering it changes what the viewer sees.
  - `to_dict()` uses the wire names the browser expects ("from"/"to"),
    which are keywords in Python and so can't be field names.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


class StepType(Enum):
    VISIT        = "visit"
    TRAVERSE     = "traverse"
    INTERMEDIATE = "intermediate"
    PATH         = "path"


@dataclass(frozen=True)
class Visit:
    node: str

    @property
    def type(self) -> StepType:
        return StepType.VISIT

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "node": self.node}


@dataclass(frozen=True)
class Traverse:
    source:  str
    target:  str
    through: Optional[str] = None

    @property
    def type(self) -> StepType:
        return StepType.TRAVERSE

    def to_dict(self) -> Dict[str, Any]:
        d = {"type": self.type.value, "from": self.source, "to": self.target}
        if self.through is not None:
            d["through"] = self.through
        return d


@dataclass(frozen=True)
class Intermediate:
    node: str

    @property
    def type(self) -> StepType:
        return StepType.INTERMEDIATE

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "node": self.node}


@dataclass(frozen=True)
class Path:
    path: Tuple[str, ...]

    @property
    def type(self) -> StepType:
        return StepType.PATH

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "path": list(self.path)}


Step = Union[Visit, Traverse, Intermediate, Path]


def step_from_dict(data: Dict[str, Any]) -> Step:
    kind = StepType(data["type"])
    if kind is StepType.VISIT:
        return Visit(data["node"])
    if kind is StepType.TRAVERSE:
        return Traverse(data["from"], data["to"], data.get("through"))
    if kind is StepType.INTERMEDIATE:
        return Intermediate(data["node"])
    return Path(tuple(data["path"]))


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Result:
    """
    Attributes:
        steps    : Every Step, in emission order.
        distance : Best known distance to the end node; math.inf if none.
    """

    steps:    Tuple[Step, ...] = field(default_factory=tuple)
    distance: float            = math.inf

    @property
    def found(self) -> bool:
        return bool(self.path)

    @property
    def path(self) -> Tuple[str, ...]:
        for step in self.steps:
            if isinstance(step, Path):
                return step.path
        return ()

    def visited(self) -> List[str]:
        """Visit targets in emission order (duplicates kept)."""
        return [s.node for s in self.steps if isinstance(s, Visit)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "steps":    [s.to_dict() for s in self.steps],
            # JSON has no infinity literal
            "distance": "Infinity" if math.isinf(self.distance) else self.distance,
        }


EMPTY_RESULT = Result()
