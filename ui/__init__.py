"""
ui/
---
Presentation layer.

    from ui import render_canvas
    from ui import graph_definition, algorithm_selector, results_panel, …
"""

from ui.canvas import render_canvas, CanvasConfig, node_state, edge_state

from ui.controls import (
    format_distance,
    graph_definition,
    algorithm_selector,
    source_target_picker,
    playback_controls,
    results_panel,
)

__all__ = [
    "render_canvas",
    "CanvasConfig",
    "node_state",
    "edge_state",
    "format_distance",
    "graph_definition",
    "algorithm_selector",
    "source_target_picker",
    "playback_controls",
    "results_panel",
]
