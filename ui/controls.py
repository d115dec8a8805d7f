"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • graph_definition        – edge-list editor, build / reset / generate
  • algorithm_selector      – dropdown + run button
  • source_target_picker    – start / end dropdowns
  • playback_controls       – pause/resume, cancel, speed slider
  • results_panel           – time complexity + shortest distance

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

import math
from typing import Optional, List

from markupsafe import escape

import config
from algorithms import AlgoInfo


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------
def format_distance(distance: Optional[float]) -> Optional[str]:
    """None → None (not run yet), inf → "No Path", whole floats lose the .0"""
    if distance is None:
        return None
    if math.isinf(distance):
        return "No Path"
    if float(distance).is_integer():
        return str(int(distance))
    return f"{distance:.2f}"


# ---------------------------------------------------------------------------
# Graph Definition
# ---------------------------------------------------------------------------
def graph_definition(edge_list: str = config.DEFAULT_EDGE_LIST, layout: str = config.DEFAULT_LAYOUT) -> str:
    layouts = []
    for name in ("spring", "circle"):
        sel = 'selected' if name == layout else ''
        layouts.append(f'<option value="{name}" {sel}>{name.capitalize()}</option>')

    return f"""
    <div class="panel graph-definition">
      <h3>Graph Definition</h3>
      <p class="hint">One edge per line: <code>node1 node2 weight</code></p>
      <textarea id="edge-list" rows="10" spellcheck="false">{escape(edge_list)}</textarea>
      <label>Layout:
        <select id="layout-selector">
          {''.join(layouts)}
        </select>
      </label>
      <div class="button-row">
        <button id="btn-build" class="btn-secondary">Build Graph</button>
        <button id="btn-reset" class="btn-secondary">Reset</button>
      </div>
      <div class="generate-block">
        <input type="text" id="ai-prompt" placeholder="e.g. a small road network between 8 cities">
        <button id="btn-generate" class="btn-secondary">Generate with AI</button>
        <p id="ai-error" class="error"></p>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(
    algorithms: List[AlgoInfo],
    selected_key: str = config.DEFAULT_ALGORITHM,
    disabled: bool = False,
) -> str:
    options = []
    for algo in algorithms:
        sel = 'selected' if algo.key == selected_key else ''
        options.append(f'<option value="{algo.key}" {sel}>{algo.label}</option>')

    dis = 'disabled' if disabled else ''
    return f"""
    <div class="panel algorithm-selector">
      <h3>Algorithm</h3>
      <select id="algo-selector" {dis}>
        {''.join(options)}
      </select>
      <button id="btn-run" class="btn-primary" {dis}>▶ Visualize</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Source / Target Picker
# ---------------------------------------------------------------------------
def source_target_picker(
    node_ids: List[str],
    source: Optional[str] = None,
    target: Optional[str] = None,
) -> str:
    src_options = ['<option value="">--</option>']
    tgt_options = ['<option value="">--</option>']

    for nid in node_ids:
        value = escape(nid)
        src_sel = 'selected' if nid == source else ''
        tgt_sel = 'selected' if nid == target else ''
        src_options.append(f'<option value="{value}" {src_sel}>{value}</option>')
        tgt_options.append(f'<option value="{value}" {tgt_sel}>{value}</option>')

    return f"""
    <div class="panel source-target-picker">
      <h3>Start & End</h3>
      <label>Start:
        <select id="source-selector">
          {''.join(src_options)}
        </select>
      </label>
      <label>End:
        <select id="target-selector">
          {''.join(tgt_options)}
        </select>
      </label>
    </div>
    """


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    is_running: bool = False,
    is_paused: bool = False,
    speed_ms: int = config.DEFAULT_DELAY_MS,
    steps_applied: int = 0,
    total_steps: int = 0,
) -> str:
    pause_label = "▶ Resume" if is_paused else "⏸ Pause"
    dis = '' if is_running else 'disabled'
    slider_dis = 'disabled' if is_running else ''

    return f"""
    <div class="panel playback-controls">
      <h3>Playback</h3>
      <div class="button-row">
        <button id="btn-pause" {dis}>{pause_label}</button>
        <button id="btn-cancel" {dis}>■ Stop</button>
      </div>
      <div class="step-info">
        Step <span id="current-step">{steps_applied}</span> / <span id="total-steps">{total_steps}</span>
      </div>
      <div class="speed-control">
        <label>Delay: <span id="speed-val">{speed_ms}</span> ms</label>
        <input type="range" id="speed-slider" min="{config.MIN_DELAY_MS}" max="{config.MAX_DELAY_MS}"
               step="10" value="{speed_ms}" {slider_dis}>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Results Panel
# ---------------------------------------------------------------------------
def results_panel(algo: Optional[AlgoInfo] = None, distance: Optional[float] = None) -> str:
    complexity = algo.complexity_time if algo else ""
    shown = format_distance(distance)
    if shown is None:
        distance_html = '<p class="placeholder">Run an algorithm to see the result.</p>'
    else:
        distance_html = f'<p class="distance">{shown}</p>'

    return f"""
    <div class="panel results-panel">
      <h3>Results</h3>
      <p class="muted">Time Complexity:</p>
      <p class="complexity">{complexity}</p>
      <p class="hint">(V = Vertices, E = Edges)</p>
      <p class="muted">Shortest Distance:</p>
      {distance_html}
    </div>
    """
