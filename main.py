"""
main.py — pathtrace Flask App
==============================
The web server that powers the visualizer.

Routes:
  GET  /                       – main UI
  GET  /api/algorithms         – registry listing
  POST /api/graph/build        – parse edge-list text + lay it out
  POST /api/graph/reset        – restore the default edge list
  POST /api/graph/generate     – edge-list text from a description (Gemini)
  POST /api/graph/move         – drag a node
  POST /api/config             – algorithm / start / end / speed
  POST /api/run                – compute the trace and start playback
  POST /api/pause              – toggle pause
  POST /api/cancel             – abandon playback
  GET  /api/state              – visual state + SVG (polled by the page)

State management:
  One in-process Workspace per app (graph, edge-list text, selection,
  Player), guarded by a lock.  Engines run synchronously inside the
  request; playback runs on the Player's own thread and the page polls
  /api/state to redraw.
"""

import math
import secrets
import threading
from typing import Optional

from flask import Flask, render_template_string, request, jsonify, current_app

import config
from logsetup import setup_root_logger, get_logger
from graph import Graph, LAYOUTS
from algorithms import get_algorithm, list_algorithms, run_algorithm
from assistant import AssistantError, generate_edge_list
from playback import Player
from ui import (
    render_canvas,
    graph_definition,
    algorithm_selector,
    source_target_picker,
    playback_controls,
    results_panel,
    format_distance,
)

logger = get_logger("web")


# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------
class Workspace:
    """
    Everything one visualizer session owns.

    Attributes:
        graph     : The current Graph (positions included).
        edge_list : The text it was built from.
        layout    : Layout name used for the last build.
        algorithm : Selected registry key.
        start/end : Selected endpoints (None when the graph is empty).
        speed_ms  : Playback delay in milliseconds.
        player    : The Player replaying the latest trace.
    """

    def __init__(self, edge_list: str = config.DEFAULT_EDGE_LIST, layout: str = config.DEFAULT_LAYOUT):
        self.lock = threading.RLock()
        self.graph = Graph()
        self.edge_list = ""
        self.layout = layout
        self.algorithm = config.DEFAULT_ALGORITHM
        self.start: Optional[str] = None
        self.end: Optional[str] = None
        self.speed_ms = config.DEFAULT_DELAY_MS
        self.player = Player(delay=self.speed_ms / 1000)
        self.build(edge_list, layout)

    def build(self, text: str, layout: Optional[str] = None) -> Graph:
        """Replace the graph.  Start / end default to the first / last node."""
        layout = layout or self.layout
        if layout not in LAYOUTS:
            raise ValueError(f"Unknown layout: {layout}")

        graph = Graph.from_edge_list(text)
        options = {"seed": config.LAYOUT_SEED} if layout == "spring" else {}
        LAYOUTS[layout](graph, canvas_w=config.CANVAS_WIDTH, canvas_h=config.CANVAS_HEIGHT, **options)

        self.graph = graph
        self.edge_list = text
        self.layout = layout
        ids = graph.node_ids()
        self.start = ids[0] if ids else None
        self.end = ids[-1] if ids else None
        # a finished trace belongs to the old graph
        self.player = Player(delay=self.speed_ms / 1000)
        return graph

    def svg(self) -> str:
        return render_canvas(self.graph, self.player.snapshot(), self.start, self.end)

    def graph_payload(self) -> dict:
        return {
            "graph":    self.graph.to_dict(),
            "node_ids": self.graph.node_ids(),
            "start":    self.start,
            "end":      self.end,
            "svg":      self.svg(),
        }


def _workspace() -> Workspace:
    return current_app.extensions["workspace"]


def _busy():
    return jsonify({"error": "Playback in progress; cancel it first"}), 409


def _json_body() -> dict:
    """Request JSON as a dict; anything else reads as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(edge_list: str = config.DEFAULT_EDGE_LIST, layout: str = config.DEFAULT_LAYOUT) -> Flask:
    setup_root_logger(config.LOG_LEVEL)

    app = Flask(__name__)
    app.secret_key = config.FLASK_SECRET_KEY or secrets.token_hex(32)
    app.extensions["workspace"] = Workspace(edge_list, layout)

    # -----------------------------------------------------------------------
    # Main UI Route
    # -----------------------------------------------------------------------
    @app.route("/")
    def index():
        ws = _workspace()
        with ws.lock:
            snap = ws.player.snapshot()
            html = render_template_string(
                INDEX_TEMPLATE,
                svg=ws.svg(),
                graph_def=graph_definition(ws.edge_list, ws.layout),
                algo_selector=algorithm_selector(list_algorithms(), ws.algorithm, disabled=snap.is_active),
                picker=source_target_picker(ws.graph.node_ids(), ws.start, ws.end),
                playback=playback_controls(
                    is_running=snap.is_active,
                    is_paused=ws.player.is_paused,
                    speed_ms=ws.speed_ms,
                    steps_applied=snap.steps_applied,
                    total_steps=snap.total_steps,
                ),
                results=results_panel(get_algorithm(ws.algorithm), snap.distance),
                width=config.CANVAS_WIDTH,
                height=config.CANVAS_HEIGHT,
            )
        return html

    @app.route("/api/algorithms")
    def api_algorithms():
        return jsonify({"algorithms": [a.to_dict() for a in list_algorithms()]})

    # -----------------------------------------------------------------------
    # API: Graph
    # -----------------------------------------------------------------------
    @app.route("/api/graph/build", methods=["POST"])
    def api_graph_build():
        data = _json_body()
        text = data.get("text", "")
        layout = data.get("layout")
        if not isinstance(text, str) or not isinstance(layout, (str, type(None))):
            return jsonify({"error": "text and layout must be strings"}), 400
        ws = _workspace()
        with ws.lock:
            if ws.player.is_running:
                return _busy()
            try:
                ws.build(text, layout)
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
            return jsonify(ws.graph_payload())

    @app.route("/api/graph/reset", methods=["POST"])
    def api_graph_reset():
        ws = _workspace()
        with ws.lock:
            if ws.player.is_running:
                return _busy()
            ws.build(config.DEFAULT_EDGE_LIST)
            payload = ws.graph_payload()
            payload["text"] = ws.edge_list
            return jsonify(payload)

    @app.route("/api/graph/generate", methods=["POST"])
    def api_graph_generate():
        data = _json_body()
        prompt = data.get("prompt") or ""
        if not isinstance(prompt, str) or not prompt.strip():
            return jsonify({"error": "Describe the graph you want first"}), 400
        try:
            text = generate_edge_list(prompt.strip())
        except AssistantError as e:
            logger.warning("Graph generation failed: %s", e)
            return jsonify({"error": str(e)}), 502
        return jsonify({"text": text})

    @app.route("/api/graph/move", methods=["POST"])
    def api_graph_move():
        data = _json_body()
        try:
            x, y = float(data["x"]), float(data["y"])
        except (KeyError, TypeError, ValueError):
            return jsonify({"error": "x and y must be numbers"}), 400
        if not (math.isfinite(x) and math.isfinite(y)):
            return jsonify({"error": "x and y must be finite"}), 400

        node_id = data.get("id")
        if not isinstance(node_id, str):
            return jsonify({"error": "id must be a string"}), 400

        ws = _workspace()
        with ws.lock:
            if not ws.graph.move_node(node_id, x, y):
                return jsonify({"error": "Unknown node"}), 404
            return jsonify({"id": node_id, "x": x, "y": y})

    # -----------------------------------------------------------------------
    # API: Config
    # -----------------------------------------------------------------------
    @app.route("/api/config", methods=["POST"])
    def api_config():
        data = _json_body()
        ws = _workspace()
        with ws.lock:
            if ws.player.is_running:
                return _busy()

            if "algorithm" in data:
                if not isinstance(data["algorithm"], str) or get_algorithm(data["algorithm"]) is None:
                    return jsonify({"error": f"Unknown algorithm: {data['algorithm']}"}), 400
                ws.algorithm = data["algorithm"]

            for key in ("start", "end"):
                if key in data:
                    value = data[key] or None
                    if value is not None and not isinstance(value, str):
                        return jsonify({"error": f"{key} must be a node id string"}), 400
                    if value is not None and value not in ws.graph.nodes:
                        return jsonify({"error": f"Unknown node: {value}"}), 400
                    setattr(ws, key, value)

            if "speed_ms" in data:
                try:
                    speed = int(data["speed_ms"])
                except (TypeError, ValueError):
                    return jsonify({"error": "speed_ms must be an integer"}), 400
                ws.speed_ms = max(config.MIN_DELAY_MS, min(config.MAX_DELAY_MS, speed))
                ws.player.set_delay(ws.speed_ms / 1000)

            return jsonify({
                "algorithm": ws.algorithm,
                "start":     ws.start,
                "end":       ws.end,
                "speed_ms":  ws.speed_ms,
                "results":   results_panel(get_algorithm(ws.algorithm)),
            })

    # -----------------------------------------------------------------------
    # API: Run / Playback
    # -----------------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        ws = _workspace()
        with ws.lock:
            if ws.player.is_running:
                return _busy()

            info = get_algorithm(ws.algorithm)
            if not info.is_all_pairs and (not ws.start or not ws.end):
                return jsonify({"error": "Set start and end first"}), 400

            result = run_algorithm(ws.algorithm, ws.graph, ws.start, ws.end)
            ws.player.start(result)

        return jsonify({
            "algorithm":   info.key,
            "total_steps": len(result.steps),
            "result":      result.to_dict(),
        })

    @app.route("/api/pause", methods=["POST"])
    def api_pause():
        ws = _workspace()
        if not ws.player.is_running:
            return jsonify({"error": "Nothing is playing"}), 409
        paused = ws.player.toggle_pause()
        return jsonify({"paused": paused})

    @app.route("/api/cancel", methods=["POST"])
    def api_cancel():
        ws = _workspace()
        ws.player.cancel()
        return jsonify({"state": ws.player.snapshot().to_dict()})

    @app.route("/api/state")
    def api_state():
        ws = _workspace()
        with ws.lock:
            snap = ws.player.snapshot()
            return jsonify({
                "state":    snap.to_dict(),
                "running":  snap.is_active,
                "paused":   ws.player.is_paused,
                "distance": format_distance(snap.distance),
                "svg":      render_canvas(ws.graph, snap, ws.start, ws.end),
                "results":  results_panel(get_algorithm(ws.algorithm), snap.distance),
            })

    return app


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>pathtrace</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="https://fonts.googleapis.com/css2?family=JetBrains+Mono:wght@400;500;700&family=DM+Sans:wght@400;500;700&display=swap" rel="stylesheet">
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0a0a0a;
      --bg-panel: #18181b;
      --border: #27272a;
      --text-primary: #ffffff;
      --text-secondary: #a1a1aa;
      --text-muted: #71717a;
      --accent-violet: #a78bfa;
      --accent-rose: #f43f5e;
    }

    body {
      font-family: 'DM Sans', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-dark);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    /* Sidebar */
    #sidebar {
      width: 340px;
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 24px 16px;
    }

    /* Main area */
    #main {
      flex: 1;
      position: relative;
      display: flex;
      align-items: center;
      justify-content: center;
      background-color: var(--bg-dark);
      background-image:
        linear-gradient(rgba(255, 255, 255, 0.05) 1px, transparent 1px),
        linear-gradient(90deg, rgba(255, 255, 255, 0.05) 1px, transparent 1px);
      background-size: 20px 20px;
    }

    #results {
      position: absolute;
      top: 24px;
      left: 24px;
      width: 280px;
    }

    #canvas svg { max-width: 100%; max-height: 100%; }
    #canvas .node-circle { cursor: grab; }
    #canvas .traversal { animation: travel 0.5s linear infinite; }
    #canvas .pulse { animation: pulse 1.2s ease-out infinite; transform-box: fill-box; transform-origin: center; }

    @keyframes travel { from { stroke-dashoffset: 20; } to { stroke-dashoffset: -20; } }
    @keyframes pulse { 0% { transform: scale(0.6); opacity: 0.8; } 70% { transform: scale(1.6); opacity: 0; } 100% { opacity: 0; } }

    /* Panels */
    .panel {
      background: rgba(24, 24, 27, 0.7);
      border: 1px solid var(--border);
      border-radius: 16px;
      padding: 18px;
      margin-bottom: 16px;
    }

    .panel h3 {
      font-size: 13px;
      font-weight: 700;
      margin-bottom: 14px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
    }

    .button-row { display: flex; gap: 8px; margin: 8px 0; }

    button {
      background: var(--bg-panel);
      color: var(--text-primary);
      border: 1px solid var(--border);
      padding: 10px 16px;
      border-radius: 8px;
      cursor: pointer;
      font-size: 13px;
      font-weight: 600;
      font-family: 'DM Sans', sans-serif;
    }
    button:disabled { opacity: 0.4; cursor: not-allowed; }
    .btn-primary { background: #7c3aed; border-color: #7c3aed; width: 100%; margin-top: 8px; }

    select, input[type="text"], input[type="range"], textarea {
      width: 100%;
      padding: 10px 12px;
      margin: 6px 0;
      background: var(--bg-dark);
      border: 1px solid var(--border);
      border-radius: 8px;
      color: var(--text-primary);
      font-size: 13px;
    }
    textarea { font-family: 'JetBrains Mono', monospace; resize: vertical; min-height: 160px; }

    label {
      display: block;
      margin: 10px 0 4px;
      font-size: 12px;
      color: var(--text-secondary);
    }

    .step-info { font-family: 'JetBrains Mono', monospace; font-size: 13px; color: var(--text-secondary); }
    .hint { font-size: 11px; color: var(--text-muted); }
    .muted { font-size: 13px; color: var(--text-secondary); margin-top: 10px; }
    .complexity { font-family: 'JetBrains Mono', monospace; color: var(--accent-violet); }
    .distance { font-family: 'JetBrains Mono', monospace; font-size: 24px; font-weight: 700; }
    .placeholder { color: var(--text-muted); font-size: 13px; }
    .error { color: var(--accent-rose); font-size: 12px; min-height: 1em; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="graph-def">{{ graph_def|safe }}</div>
    <div id="algo">{{ algo_selector|safe }}</div>
    <div id="picker">{{ picker|safe }}</div>
    <div id="playback">{{ playback|safe }}</div>
  </div>

  <div id="main">
    <div id="results">{{ results|safe }}</div>
    <div id="canvas">{{ svg|safe }}</div>
  </div>

  <script>
    let polling = null;

    // API helpers
    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      return {ok: res.ok, data: await res.json()};
    }

    function setRunning(running, paused) {
      document.getElementById('btn-run').disabled = running;
      document.getElementById('algo-selector').disabled = running;
      document.getElementById('speed-slider').disabled = running;
      document.getElementById('btn-pause').disabled = !running;
      document.getElementById('btn-cancel').disabled = !running;
      document.getElementById('btn-pause').textContent = paused ? '▶ Resume' : '⏸ Pause';
    }

    function fillPicker(ids, start, end) {
      for (const [id, value] of [['source-selector', start], ['target-selector', end]]) {
        const sel = document.getElementById(id);
        sel.innerHTML = '<option value="">--</option>';
        for (const nid of ids) {
          const opt = document.createElement('option');
          opt.value = nid;
          opt.textContent = nid;
          opt.selected = nid === value;
          sel.appendChild(opt);
        }
      }
    }

    async function refresh() {
      const res = await fetch('/api/state');
      const data = await res.json();
      document.getElementById('canvas').innerHTML = data.svg;
      document.getElementById('results').innerHTML = data.results;
      document.getElementById('current-step').textContent = data.state.steps_applied;
      document.getElementById('total-steps').textContent = data.state.total_steps;
      setRunning(data.running, data.paused);
      if (!data.running && polling) {
        clearInterval(polling);
        polling = null;
      }
      bindDrag();
    }

    function startPolling() {
      if (!polling) polling = setInterval(refresh, 100);
    }

    // Graph definition
    async function build(text) {
      const {ok, data} = await post('/api/graph/build', {
        text: text,
        layout: document.getElementById('layout-selector').value,
      });
      if (!ok) return alert(data.error);
      fillPicker(data.node_ids, data.start, data.end);
      refresh();
    }

    document.getElementById('btn-build').addEventListener('click', () => {
      build(document.getElementById('edge-list').value);
    });

    document.getElementById('btn-reset').addEventListener('click', async () => {
      const {ok, data} = await post('/api/graph/reset');
      if (!ok) return alert(data.error);
      document.getElementById('edge-list').value = data.text;
      fillPicker(data.node_ids, data.start, data.end);
      refresh();
    });

    document.getElementById('btn-generate').addEventListener('click', async (e) => {
      const errorBox = document.getElementById('ai-error');
      errorBox.textContent = '';
      e.target.disabled = true;
      e.target.textContent = 'Generating…';
      const {ok, data} = await post('/api/graph/generate', {
        prompt: document.getElementById('ai-prompt').value,
      });
      e.target.disabled = false;
      e.target.textContent = 'Generate with AI';
      if (!ok) {
        errorBox.textContent = data.error;
        return;
      }
      document.getElementById('edge-list').value = data.text;
      build(data.text);
    });

    // Configuration
    document.getElementById('algo-selector').addEventListener('change', async (e) => {
      const {data} = await post('/api/config', {algorithm: e.target.value});
      if (data.results) document.getElementById('results').innerHTML = data.results;
    });
    document.getElementById('source-selector').addEventListener('change', async (e) => {
      await post('/api/config', {start: e.target.value});
      refresh();
    });
    document.getElementById('target-selector').addEventListener('change', async (e) => {
      await post('/api/config', {end: e.target.value});
      refresh();
    });
    document.getElementById('speed-slider').addEventListener('input', (e) => {
      document.getElementById('speed-val').textContent = e.target.value;
    });
    document.getElementById('speed-slider').addEventListener('change', async (e) => {
      await post('/api/config', {speed_ms: +e.target.value});
    });

    // Playback
    document.getElementById('btn-run').addEventListener('click', async () => {
      const {ok, data} = await post('/api/run');
      if (!ok) return alert(data.error);
      setRunning(true, false);
      startPolling();
    });
    document.getElementById('btn-pause').addEventListener('click', async () => {
      const {ok, data} = await post('/api/pause');
      if (ok) setRunning(true, data.paused);
    });
    document.getElementById('btn-cancel').addEventListener('click', async () => {
      await post('/api/cancel');
      refresh();
    });

    // Node dragging
    function bindDrag() {
      const svg = document.querySelector('#canvas svg');
      if (!svg) return;
      svg.querySelectorAll('.node').forEach(g => {
        g.querySelector('.node-circle').addEventListener('mousedown', (down) => {
          down.preventDefault();
          const id = g.dataset.id;
          const pt = svg.createSVGPoint();
          const toSvg = (ev) => {
            pt.x = ev.clientX;
            pt.y = ev.clientY;
            return pt.matrixTransform(svg.getScreenCTM().inverse());
          };
          const onMove = (ev) => {
            const p = toSvg(ev);
            g.querySelectorAll('circle').forEach(c => { c.setAttribute('cx', p.x); c.setAttribute('cy', p.y); });
            const label = g.querySelector('text');
            label.setAttribute('x', p.x);
            label.setAttribute('y', p.y + 6);
          };
          const onUp = async (ev) => {
            window.removeEventListener('mousemove', onMove);
            window.removeEventListener('mouseup', onUp);
            const p = toSvg(ev);
            await post('/api/graph/move', {id: id, x: p.x, y: p.y});
            refresh();
          };
          window.addEventListener('mousemove', onMove);
          window.addEventListener('mouseup', onUp);
        });
      });
    }

    bindDrag();
    refresh();
  </script>
</body>
</html>
"""


app = create_app()


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logger.info("pathtrace listening on http://localhost:5000")
    app.run(debug=False, threaded=True, port=5000)
