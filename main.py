"""
main.py — Sort Visualizer Flask App
=====================================
The web server that powers the visualizer.

Routes:
  GET  /                       – main UI
  POST /api/run                – start a run  {input, algorithm}
  GET  /api/state              – current run state + SVG of the latest frame (polled)
  POST /api/cancel             – cancel the in-flight run
  POST /api/preview            – unpaced dry run on a worker thread, full Step log
  POST /api/config/algo        – select algorithm, returns its pseudocode
  POST /api/config/speed       – set pacing  {speed} or {interval_ms}

State management:
  One RunController per app, stored in app.extensions.  It owns the
  worker thread of the current run; request handlers only submit,
  cancel, and read the run's last delivered frame.  The page polls
  /api/state and swaps the SVG in, so the request threads are the
  presentation context and never execute sorting code; even /api/preview
  hands its dry run to a worker thread.  Pacing is floored at twice the
  poll interval so the page sees every frame.
"""

from flask import Blueprint, Flask, current_app, jsonify, render_template_string, request
import sys
import os

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import structlog

from settings import AppSettings, settings
from logging_setup import configure_logging
from algorithms import get_algorithm, list_algorithms, resolve_algorithm
from engine import PlaybackScheduler, RunController, RunState
from ui import (
    render_bars,
    input_panel,
    algorithm_selector,
    playback_controls,
    analytics_panel,
    pseudocode_viewer,
    error_panel,
    step_explanation,
)

log = structlog.get_logger()

bp = Blueprint("visualizer", __name__)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(app_settings: AppSettings = settings) -> Flask:
    configure_logging(level=app_settings.log_level)

    app = Flask(__name__)
    app.config["SORTVIZ"] = app_settings
    app.extensions["run_controller"] = RunController(
        scheduler=PlaybackScheduler(
            interval_ms=app_settings.pacing_interval_ms,
            min_interval_ms=2 * app_settings.poll_interval_ms,
        ),
        default_algorithm=app_settings.algorithm,
    )
    app.register_blueprint(bp)
    return app


def get_controller() -> RunController:
    return current_app.extensions["run_controller"]


def _payload() -> dict:
    return request.get_json(silent=True) or {}


def _state_payload(controller: RunController) -> dict:
    """Everything the page needs to redraw after a poll."""
    run = controller.current
    scheduler = controller.scheduler

    if run is None:
        return {
            "run": None,
            "svg": render_bars(()),
            "explanation": step_explanation(None),
            "analytics": analytics_panel(None),
            "playback": playback_controls(interval_ms=scheduler.interval_ms),
            "pseudocode_line": -1,
        }

    step = run.last_step
    line = -1
    if step is not None and run.algorithm is not None:
        line = run.algorithm.tag_lines.get(step.tag, -1)

    return {
        "run": run.to_dict(),
        "svg": render_bars(run.frame, step),
        "explanation": step_explanation(step),
        "analytics": analytics_panel(run.metrics),
        "playback": playback_controls(
            current_step=run.steps_delivered,
            total_steps=run.total_steps,
            state=run.state.value,
            interval_ms=scheduler.interval_ms,
        ),
        "pseudocode_line": line,
    }


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@bp.route("/")
def index():
    controller = get_controller()
    selected = current_app.config["SORTVIZ"].algorithm
    algo_info = get_algorithm(selected)
    state = _state_payload(controller)

    raw = ""
    run = controller.current
    if run is not None and run.initial:
        raw = ", ".join(str(v) for v in run.initial)

    html = render_template_string(INDEX_TEMPLATE,
        svg=state["svg"],
        numbers=input_panel(raw),
        algo_selector=algorithm_selector(list_algorithms(), selected_key=algo_info.key.value),
        playback=state["playback"],
        analytics=state["analytics"],
        pseudocode=pseudocode_viewer(algo_info.pseudocode),
        explanation=state["explanation"],
        poll_ms=current_app.config["SORTVIZ"].poll_interval_ms,
    )
    return html


# ---------------------------------------------------------------------------
# API: Runs
# ---------------------------------------------------------------------------
@bp.route("/api/run", methods=["POST"])
def api_run():
    data = _payload()
    controller = get_controller()

    run = controller.submit(data.get("input"), data.get("algorithm"))
    if run.state == RunState.FAILED:
        return jsonify({"error": run.error, "error_html": error_panel(run.error)}), 400

    algo_info = run.algorithm
    return jsonify({
        "run": run.to_dict(),
        "svg": render_bars(run.frame),
        "pseudocode": pseudocode_viewer(algo_info.pseudocode),
    }), 202


@bp.route("/api/state", methods=["GET"])
def api_state():
    return jsonify(_state_payload(get_controller()))


@bp.route("/api/cancel", methods=["POST"])
def api_cancel():
    run = get_controller().cancel()
    return jsonify({"run": run.to_dict() if run else None})


@bp.route("/api/preview", methods=["POST"])
def api_preview():
    data = _payload()

    try:
        rec = get_controller().preview(data.get("input"), data.get("algorithm") or None, timeout=10)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except TimeoutError as e:
        return jsonify({"error": str(e)}), 503

    return jsonify(rec.export())


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@bp.route("/api/config/algo", methods=["POST"])
def api_config_algo():
    algo_key = _payload().get("algo_key", "bubble")
    try:
        algo_info = resolve_algorithm(algo_key)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({
        "algo_key": algo_info.key.value,
        "description": algo_info.description,
        "pseudocode": pseudocode_viewer(algo_info.pseudocode),
    })


@bp.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    data = _payload()
    scheduler = get_controller().scheduler

    try:
        if "interval_ms" in data:
            scheduler.set_interval_ms(int(data["interval_ms"]))
        else:
            scheduler.set_speed(data.get("speed", "medium"))
    except (TypeError, ValueError) as e:
        return jsonify({"error": str(e)}), 400

    log.info("playback.interval_changed", interval_ms=scheduler.interval_ms)
    return jsonify({"interval_ms": scheduler.interval_ms})


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Sort Visualizer</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="https://fonts.googleapis.com/css2?family=JetBrains+Mono:wght@400;500;700&family=DM+Sans:wght@400;500;700&display=swap" rel="stylesheet">
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-teal: #06b6d4;
      --accent-emerald: #10b981;
      --accent-rose: #f43f5e;
    }

    body {
      font-family: 'DM Sans', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar {
      width: 340px;
      background: linear-gradient(180deg, var(--bg-dark) 0%, var(--bg-darker) 100%);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 24px 16px;
    }

    #main { flex: 1; display: flex; flex-direction: column; }

    #canvas-container {
      flex: 1;
      display: flex;
      align-items: center;
      justify-content: center;
      border-bottom: 1px solid var(--border);
    }

    #bottom-panel {
      display: grid;
      grid-template-columns: 1fr 1fr;
      gap: 20px;
      padding: 20px;
      background: var(--bg-dark);
      max-height: 320px;
    }

    .panel, #pseudocode-container, #explanation-container {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 18px;
      margin-bottom: 16px;
    }

    .panel h3, #bottom-panel h3 {
      font-size: 13px;
      font-weight: 700;
      margin-bottom: 14px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
    }

    button {
      background: linear-gradient(135deg, var(--accent-cyan), var(--accent-teal));
      color: #fff;
      border: none;
      padding: 10px 16px;
      margin-top: 8px;
      border-radius: 8px;
      cursor: pointer;
      font-weight: 600;
    }
    .btn-primary { background: linear-gradient(135deg, var(--accent-emerald), #059669); }
    .btn-secondary { background: var(--bg-darker); border: 1px solid var(--border); }

    select, input[type="text"] {
      width: 100%;
      padding: 10px 12px;
      margin: 6px 0;
      background: var(--bg-darker);
      border: 1px solid var(--border);
      border-radius: 8px;
      color: var(--text-primary);
    }

    label { display: block; font-size: 12px; color: var(--text-secondary); text-transform: uppercase; }

    .step-info {
      font-family: 'JetBrains Mono', monospace;
      font-size: 13px;
      padding: 8px 12px;
      background: var(--bg-darker);
      border-left: 3px solid var(--accent-cyan);
      border-radius: 6px;
    }
    .state-badge { margin-left: 8px; font-size: 11px; font-weight: 700; }
    .state-completed { color: var(--accent-emerald); }
    .state-cancelled, .state-failed { color: var(--accent-rose); }

    .error-banner {
      background: rgba(244, 63, 94, 0.15);
      border: 1px solid var(--accent-rose);
      border-radius: 8px;
      padding: 10px 12px;
      margin-bottom: 16px;
    }

    .code-block { font-family: 'JetBrains Mono', monospace; font-size: 13px; line-height: 1.6; }
    .code-line { padding: 2px 10px; white-space: pre; border-radius: 6px; }
    .code-line.highlight { background: rgba(6, 182, 212, 0.15); border-left: 3px solid var(--accent-cyan); }

    .explanation-text, .placeholder { color: var(--text-secondary); line-height: 1.8; font-size: 14px; }
    table { width: 100%; font-size: 13px; }
    td:last-child { text-align: right; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="error">{{ error|default('')|safe }}</div>
    <div id="numbers">{{ numbers|safe }}</div>
    <div id="algo">{{ algo_selector|safe }}</div>
    <div id="playback">{{ playback|safe }}</div>
    <div id="analytics">{{ analytics|safe }}</div>
  </div>

  <div id="main">
    <div id="canvas-container">
      <div id="canvas-svg">{{ svg|safe }}</div>
    </div>

    <div id="bottom-panel">
      <div id="pseudocode-container">
        <h3>Pseudocode</h3>
        <div id="pseudocode">{{ pseudocode|safe }}</div>
      </div>
      <div id="explanation-container">
        <h3>Last Step</h3>
        <div id="explanation">{{ explanation|safe }}</div>
      </div>
    </div>
  </div>

  <script>
    const POLL_MS = {{ poll_ms }};
    let polling = null;

    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data),
      });
      return await res.json();
    }

    function highlightLine(line) {
      document.querySelectorAll('.code-line').forEach(el => {
        el.classList.toggle('highlight', +el.dataset.line === line);
      });
    }

    async function poll() {
      const res = await fetch('/api/state');
      const data = await res.json();
      document.getElementById('canvas-svg').innerHTML = data.svg;
      document.getElementById('explanation').innerHTML = data.explanation;
      document.getElementById('analytics').innerHTML = data.analytics;
      document.getElementById('current-step').textContent = data.run ? data.run.steps_delivered : 0;
      document.getElementById('total-steps').textContent = data.run ? data.run.total_steps : 0;
      const badge = document.getElementById('run-state');
      const state = data.run ? data.run.state : 'idle';
      badge.textContent = state.toUpperCase();
      badge.className = 'state-badge state-' + state;
      highlightLine(data.pseudocode_line);
      if (!data.run || data.run.state !== 'running') stopPolling();
    }

    function startPolling() {
      stopPolling();
      polling = setInterval(poll, POLL_MS);
    }

    function stopPolling() {
      if (polling) clearInterval(polling);
      polling = null;
    }

    document.getElementById('btn-run')?.addEventListener('click', async () => {
      const data = await post('/api/run', {
        input: document.getElementById('numbers-input').value,
        algorithm: document.getElementById('algo-selector').value,
      });
      document.getElementById('error').innerHTML = data.error_html || '';
      if (data.error) return;
      document.getElementById('canvas-svg').innerHTML = data.svg;
      document.getElementById('pseudocode').innerHTML = data.pseudocode;
      startPolling();
    });

    document.getElementById('btn-cancel')?.addEventListener('click', async () => {
      await post('/api/cancel', {});
      poll();
    });

    document.getElementById('algo-selector')?.addEventListener('change', async (e) => {
      const data = await post('/api/config/algo', {algo_key: e.target.value});
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
    });

    document.getElementById('speed-selector')?.addEventListener('change', async (e) => {
      await post('/api/config/speed', {speed: e.target.value});
    });
  </script>
</body>
</html>
"""


app = create_app()


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    print("=" * 60)
    print("  Sort Visualizer")
    print("  Starting Flask server...")
    print(f"  Open http://localhost:{settings.port}")
    print("=" * 60)
    app.run(debug=False, host=settings.host, port=settings.port, threaded=True)
