"""
canvas.py — SVG Graph Renderer
================================
Pure rendering function: Graph + VisualState → SVG string.

The renderer consumes:
  • graph      – the Graph object (node positions, edges)
  • state      – a VisualState snapshot from the Player (or None)
  • start, end – the configured endpoints
  • config     – visual config (canvas size, colors, fonts, …)

And produces an SVG string ready to inject into the DOM.

Design decisions:
  - NO mutation.  The caller passes in everything it needs and gets back
    a string.
  - Edge status is found by recomputing the canonical key of each drawn
    edge and looking it up in the state's key sets.  Traverse(A, B) and
    Traverse(B, A) therefore light the same line.
  - Current and intermediate nodes get a pulse ring drawn behind the
    node; the fill itself encodes source / target / visited.
"""

from typing import Dict, Optional
import math

from markupsafe import escape

from graph import Graph, Node, Edge, NodeState, EdgeState
from playback.state import VisualState


# ---------------------------------------------------------------------------
# Visual Config — color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 900
    height: int = 600
    bg:     str = "#0a0a0a"

    # node colors (state → fill)
    node_colors: Dict[str, str] = {
        "default":      "#18181b",   # near-black
        "visited":      "#52525b",   # dimmed white
        "current":      "#ffffff",   # pulse ring
        "intermediate": "#a78bfa",   # violet pulse ring (Floyd-Warshall pivot)
        "source":       "#ffffff",
        "target":       "url(#stripe-pattern)",
    }

    # edge colors
    edge_colors: Dict[str, str] = {
        "default":   "#4b5563",
        "animating": "#a78bfa",
        "path":      "#ffffff",
    }

    # node
    node_radius:        int = 18
    node_stroke:        str = "#6b7280"
    node_stroke_width:  int = 2
    node_label_color:   str = "#ffffff"
    node_label_dark:    str = "#000000"   # on the white source node
    node_label_size:    int = 16
    node_label_weight:  str = "700"

    # edge
    edge_width:           float = 1.5
    edge_width_path:      float = 3
    edge_width_animating: float = 3.5
    edge_arrow_size:      int   = 10
    edge_weight_color:    str   = "#8b949e"
    edge_weight_size:     int   = 12


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# State lookups
# ---------------------------------------------------------------------------
def node_state(
    node_id: str,
    state: Optional[VisualState],
    start: Optional[str] = None,
    end: Optional[str] = None,
) -> NodeState:
    """Fill state for a node.  Source and target win over visited."""
    if node_id == start:
        return NodeState.SOURCE
    if node_id == end:
        return NodeState.TARGET
    if state and node_id in state.visited:
        return NodeState.VISITED
    return NodeState.DEFAULT


def edge_state(edge: Edge, state: Optional[VisualState]) -> EdgeState:
    if state is None:
        return EdgeState.DEFAULT
    key = edge.key
    if key in state.final_path:
        return EdgeState.PATH
    if key in state.animating:
        return EdgeState.ANIMATING
    return EdgeState.DEFAULT


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_canvas(
    graph: Graph,
    state: Optional[VisualState] = None,
    start: Optional[str] = None,
    end: Optional[str] = None,
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        graph  : The graph to render.  Nodes without a position are skipped.
        state  : Playback snapshot (or None for a static graph).
        start  : Source node id, drawn white.
        end    : Target node id, drawn striped.
        config : Visual config.
    """

    svg_parts = [
        f'<svg id="canvas-svg" width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        '<defs>',
        '  <pattern id="stripe-pattern" patternUnits="userSpaceOnUse" width="8" height="8">',
        '    <path d="M-2,2 l4,-4 M0,8 l8,-8 M6,10 l4,-4" stroke="white" stroke-width="1.5"/>',
        '  </pattern>',
        '</defs>',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]

    # -- edges (draw first so nodes sit on top) --
    for edge in graph.edges:
        svg_parts.append(_render_edge(graph, edge, state, config))

    # -- nodes --
    for node in graph.nodes.values():
        svg_parts.append(_render_node(node, state, start, end, config))

    svg_parts.append("</svg>")
    return "\n".join(part for part in svg_parts if part)


# ---------------------------------------------------------------------------
# Node Rendering
# ---------------------------------------------------------------------------
def _render_node(
    node: Node,
    state: Optional[VisualState],
    start: Optional[str],
    end: Optional[str],
    config: CanvasConfig,
) -> str:
    if not node.has_position:
        return ""

    kind = node_state(node.id, state, start, end)
    fill = config.node_colors[kind.value]
    label_color = config.node_label_dark if kind is NodeState.SOURCE else config.node_label_color

    cx, cy = node.x, node.y
    r = config.node_radius
    node_id = escape(node.id)

    parts = [f'<g class="node node-{kind.value}" data-id="{node_id}">']

    if state and state.intermediate_node == node.id:
        parts.append(
            f'  <circle class="pulse intermediate" cx="{cx}" cy="{cy}" r="{r + 8}" '
            f'fill="{config.node_colors["intermediate"]}" opacity="0.5"/>'
        )
    if state and state.current_node == node.id:
        parts.append(
            f'  <circle class="pulse current" cx="{cx}" cy="{cy}" r="{r + 8}" '
            f'fill="{config.node_colors["current"]}" opacity="0.35"/>'
        )

    parts += [
        f'  <circle class="node-circle" cx="{cx}" cy="{cy}" r="{r}" '
        f'fill="{fill}" stroke="{config.node_stroke}" stroke-width="{config.node_stroke_width}"/>',
        f'  <text x="{cx}" y="{cy + 6}" text-anchor="middle" '
        f'font-size="{config.node_label_size}" font-family="\'DM Sans\', sans-serif" '
        f'fill="{label_color}" font-weight="{config.node_label_weight}">{escape(node.label)}</text>',
        '</g>',
    ]
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Edge Rendering
# ---------------------------------------------------------------------------
def _render_edge(graph: Graph, edge: Edge, state: Optional[VisualState], config: CanvasConfig) -> str:
    src_node = graph.get_node(edge.source)
    tgt_node = graph.get_node(edge.target)
    if not src_node or not tgt_node:
        return ""
    if not (src_node.has_position and tgt_node.has_position):
        return ""

    kind = edge_state(edge, state)
    if kind is EdgeState.PATH:
        stroke, stroke_width = config.edge_colors["path"], config.edge_width_path
    else:
        stroke, stroke_width = config.edge_colors["default"], config.edge_width

    x1, y1 = src_node.x, src_node.y
    x2, y2 = tgt_node.x, tgt_node.y

    # shorten the line by node_radius on both ends
    dx, dy = x2 - x1, y2 - y1
    dist = math.sqrt(dx * dx + dy * dy)
    if dist < 0.001:
        return ""  # self-loop or stacked nodes

    ux, uy = dx / dist, dy / dist
    r = config.node_radius

    x1_adj = x1 + ux * r
    y1_adj = y1 + uy * r
    x2_adj = x2 - ux * r
    y2_adj = y2 - uy * r

    key = escape("--".join(edge.key))
    parts = [f'<g class="edge edge-{kind.value}" data-key="{key}">']

    parts.append(
        f'  <line x1="{x1_adj}" y1="{y1_adj}" x2="{x2_adj}" y2="{y2_adj}" '
        f'stroke="{stroke}" stroke-width="{stroke_width}"/>'
    )

    # traversal overlay, on top of the base line
    if kind is EdgeState.ANIMATING or (state and edge.key in state.animating):
        parts.append(
            f'  <line class="traversal" x1="{x1_adj}" y1="{y1_adj}" x2="{x2_adj}" y2="{y2_adj}" '
            f'stroke="{config.edge_colors["animating"]}" stroke-width="{config.edge_width_animating}" '
            f'stroke-dasharray="2 10"/>'
        )

    if edge.directed:
        parts.append(_render_arrow(x2_adj, y2_adj, ux, uy, stroke, config))

    # weight label, just above the midpoint
    mx = (x1 + x2) / 2
    my = (y1 + y2) / 2
    parts.append(
        f'  <text x="{mx}" y="{my - 8}" text-anchor="middle" '
        f'font-size="{config.edge_weight_size}" font-family="\'JetBrains Mono\', monospace" '
        f'fill="{config.edge_weight_color}">{edge.weight}</text>'
    )

    parts.append('</g>')
    return "\n".join(parts)


def _render_arrow(x: float, y: float, ux: float, uy: float, color: str, config: CanvasConfig) -> str:
    """Draw an arrowhead at (x, y) pointing in direction (ux, uy)."""
    size = config.edge_arrow_size
    # perpendicular
    px, py = -uy, ux
    p1_x = x - ux * size + px * (size * 0.5)
    p1_y = y - uy * size + py * (size * 0.5)
    p2_x = x - ux * size - px * (size * 0.5)
    p2_y = y - uy * size - py * (size * 0.5)
    return f'<polygon points="{x},{y} {p1_x},{p1_y} {p2_x},{p2_y}" fill="{color}"/>'
