"""
state.py — Observable Visualization State
==========================================
What the renderer draws while a trace plays:

    current_node       – node of the latest Visit
    intermediate_node  – Floyd-Warshall pivot, for exactly one step
    visited            – every Visit target so far (only grows during a run)
    final_path         – canonical edge keys of the Path step
    animating          – edge keys traversed within the last delay interval
    distance           – set once, when the trace is exhausted

The Player owns one mutable VisualState and hands out copies, so a reader
never sees a half-applied step.
"""

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Set

from graph import EdgeKey, format_edge_key


class PlaybackStatus(Enum):
    IDLE      = "idle"
    PLAYING   = "playing"
    PAUSED    = "paused"
    FINISHED  = "finished"
    CANCELLED = "cancelled"


@dataclass
class VisualState:
    current_node:      Optional[str]   = None
    intermediate_node: Optional[str]   = None
    visited:           Set[str]        = field(default_factory=set)
    final_path:        Set[EdgeKey]    = field(default_factory=set)
    animating:         Set[EdgeKey]    = field(default_factory=set)
    distance:          Optional[float] = None
    steps_applied:     int             = 0
    total_steps:       int             = 0
    status:            PlaybackStatus  = PlaybackStatus.IDLE

    def copy(self) -> "VisualState":
        return replace(
            self,
            visited=set(self.visited),
            final_path=set(self.final_path),
            animating=set(self.animating),
        )

    @property
    def is_active(self) -> bool:
        return self.status in (PlaybackStatus.PLAYING, PlaybackStatus.PAUSED)

    def to_dict(self) -> Dict[str, Any]:
        distance: Any = self.distance
        if distance is not None and math.isinf(distance):
            distance = "Infinity"
        return {
            "current_node":      self.current_node,
            "intermediate_node": self.intermediate_node,
            "visited":           sorted(self.visited),
            "final_path":        sorted(format_edge_key(k) for k in self.final_path),
            "animating":         sorted(format_edge_key(k) for k in self.animating),
            "distance":          distance,
            "steps_applied":     self.steps_applied,
            "total_steps":       self.total_steps,
            "status":            self.status.value,
        }
