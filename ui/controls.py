"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • input_panel          – comma-separated numbers text field
  • algorithm_selector   – dropdown of the five engines + Start button
  • playback_controls    – step counter, run state, speed, cancel
  • analytics_panel      – swaps, overwrites, steps, wall time
  • pseudocode_viewer    – listing of the selected engine
  • error_panel          – the message of a rejected request
  • step_explanation     – what the last delivered Step did, and why

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from html import escape
from typing import List, Optional

from algorithms import AlgoInfo
from engine import RunMetrics, SPEED_PRESETS
from sequence import Step


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------
def input_panel(raw: str = "") -> str:
    return f"""
    <div class="panel input-panel">
      <h3>🔢 Numbers</h3>
      <label for="numbers-input">Enter numbers:</label>
      <input type="text" id="numbers-input" value="{escape(raw, quote=True)}" placeholder="5, 3, 8, 1">
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(algorithms: List[AlgoInfo], selected_key: str = "bubble") -> str:
    options = []
    for algo in algorithms:
        sel = 'selected' if algo.key.value == selected_key else ''
        options.append(
            f'<option value="{algo.key.value}" {sel}>{algo.label} — {algo.complexity_time}</option>'
        )

    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Algorithm</h3>
      <select id="algo-selector">
        {''.join(options)}
      </select>
      <button id="btn-run" class="btn-primary">▶ Start</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    current_step: int = 0,
    total_steps: int = 0,
    state: str = "idle",
    interval_ms: int = SPEED_PRESETS["medium"],
) -> str:
    options = []
    for name, ms in SPEED_PRESETS.items():
        sel = 'selected' if ms == interval_ms else ''
        options.append(f'<option value="{name}" {sel}>{name.capitalize()} ({ms} ms)</option>')

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="step-info">
        Step <span id="current-step">{current_step}</span> / <span id="total-steps">{total_steps}</span>
        <span id="run-state" class="state-badge state-{state}">{state.upper()}</span>
      </div>
      <div class="speed-control">
        <label>Speed:</label>
        <select id="speed-selector">
          {''.join(options)}
        </select>
      </div>
      <button id="btn-cancel" class="btn-secondary">■ Cancel</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics or not metrics.algo_key:
        return """
        <div class="panel analytics-panel">
          <h3>📊 Analytics</h3>
          <p class="placeholder">Start a run to see metrics.</p>
        </div>
        """

    extra = ""
    if metrics.pivots:
        extra = f"<tr><td>Partitions:</td><td><strong>{metrics.pivots}</strong></td></tr>"
    elif metrics.merges:
        extra = f"<tr><td>Merges:</td><td><strong>{metrics.merges}</strong></td></tr>"

    return f"""
    <div class="panel analytics-panel">
      <h3>📊 Analytics — {metrics.algo_label}</h3>
      <table>
        <tr><td>Values:</td><td><strong>{metrics.length}</strong></td></tr>
        <tr><td>Steps:</td><td><strong>{metrics.total_steps}</strong></td></tr>
        <tr><td>Swaps:</td><td><strong>{metrics.swaps}</strong></td></tr>
        <tr><td>Overwrites:</td><td><strong>{metrics.overwrites}</strong></td></tr>
        {extra}
        <tr><td>Wall Time:</td><td><strong>{metrics.wall_time_ms:.2f} ms</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(pseudocode_lines: List[str], current_line: int = -1) -> str:
    if not pseudocode_lines:
        return """
        <div class="code-block">
          <div class="placeholder">Select an algorithm to view pseudocode</div>
        </div>
        """

    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = 'highlight' if i == current_line else ''
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{escape(line)}</div>')

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Error Panel
# ---------------------------------------------------------------------------
def error_panel(message: str = "") -> str:
    if not message:
        return ""
    return f"""<div class="error-banner" role="alert">⚠️ {escape(message)}</div>"""


# ---------------------------------------------------------------------------
# Step Explanation
# ---------------------------------------------------------------------------
_TAG_TEXT = {
    "exchange":  "Adjacent pair was out of order",
    "select":    "Minimum of the unsorted part moved into place",
    "partition": "Value smaller than the pivot moved left",
    "pivot":     "Pivot placed; partition complete",
    "shift":     "Larger value shifted one slot right",
    "insert":    "Carried value dropped into its slot",
    "merge":     "Two sorted runs merged",
}


def step_explanation(step: Optional[Step] = None) -> str:
    if step is None:
        return """<div class="explanation-text">▶ Enter numbers and press <strong>Start</strong>.</div>"""

    why = _TAG_TEXT.get(step.tag, "Sequence changed")
    if step.kind == "swap":
        what = f"swap a[{step.i}] ↔ a[{step.j}]"
    elif len(step.values) == 1:
        what = f"a[{step.index}] ← {step.value}"
    else:
        what = f"a[{step.index}..{step.index + len(step.values) - 1}] ← {list(step.values)}"
    return f"""<div class="explanation-text"><strong>#{step.step_number + 1}</strong> {escape(why)}: <code>{escape(what)}</code></div>"""
