"""
ui/
---
Presentation layer.

    from ui import render_bars
    from ui import playback_controls, algorithm_selector, …
"""

from ui.canvas import render_bars, bar_geometry, CanvasConfig, Bar

from ui.controls import (
    input_panel,
    algorithm_selector,
    playback_controls,
    analytics_panel,
    pseudocode_viewer,
    error_panel,
    step_explanation,
)

__all__ = [
    "render_bars",
    "bar_geometry",
    "CanvasConfig",
    "Bar",
    "input_panel",
    "algorithm_selector",
    "playback_controls",
    "analytics_panel",
    "pseudocode_viewer",
    "error_panel",
    "step_explanation",
]
