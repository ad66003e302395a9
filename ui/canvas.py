"""
canvas.py — SVG Bar Renderer
==============================
Pure rendering function: snapshot (+ optional Step) → SVG string.

The renderer consumes:
  • values  – an immutable snapshot of the sequence
  • step    – the Step that produced this snapshot (or None)
  • config  – visual config (canvas size, colors, fonts, …)

Each value is drawn as a bar whose height is value / max(values) of the
drawing height minus a fixed top margin, with the number written just
above it.  Bars touched by the current Step are coloured by the Step's tag.

Design decisions:
  - NO mutation.  This function is stateless — the caller passes in
    everything it needs and gets back a string.
  - max(values) <= 0 scales against 1, and negative values draw as
    zero-height bars, so the label still shows the number.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from sequence import Step


# ---------------------------------------------------------------------------
# Visual Config — color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:       int = 800
    height:      int = 400
    bg:          str = "#0d1117"
    padding_top: int = 30     # room for the tallest bar's label
    bar_gap:     int = 2

    bar_color:   str = "#0ea5e9"
    label_color: str = "#e6edf3"
    label_size:  int = 12

    # touched-bar colors (step tag → fill)
    step_colors: Dict[str, str] = {
        "exchange":  "#f43f5e",
        "select":    "#f43f5e",
        "partition": "#f59e0b",
        "pivot":     "#a855f7",
        "shift":     "#f59e0b",
        "insert":    "#10b981",
        "merge":     "#10b981",
    }
    touched_default: str = "#f43f5e"


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Bar:
    index:  int
    value:  int
    x:      int
    y:      int
    width:  int
    height: int


def bar_geometry(values: Sequence[int], config: CanvasConfig = CONFIG) -> List[Bar]:
    """Lay the bars out centred horizontally, bottoms on the canvas floor."""
    n = len(values)
    if n == 0:
        return []

    width   = max(1, config.width // n)
    top     = max(values)
    scale   = top if top > 0 else 1
    start_x = (config.width - width * n) // 2
    usable  = config.height - config.padding_top

    bars = []
    for i, v in enumerate(values):
        h = max(0, int(v / scale * usable))
        bars.append(Bar(index=i, value=v, x=start_x + i * width, y=config.height - h, width=width, height=h))
    return bars


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_bars(
    values: Sequence[int],
    step: Optional[Step] = None,
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        values : Snapshot of the sequence to draw.
        step   : Step that produced the snapshot; its touched bars are highlighted.
        config : Visual config.
    """
    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]

    touched = set(step.touched) if step is not None else set()
    highlight = config.touched_default
    if step is not None:
        highlight = config.step_colors.get(step.tag, config.touched_default)

    for bar in bar_geometry(values, config):
        svg_parts.append(_render_bar(bar, highlight if bar.index in touched else config.bar_color, config))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


def _render_bar(bar: Bar, fill: str, config: CanvasConfig) -> str:
    parts = [
        f'<g class="bar" data-index="{bar.index}">',
        f'  <rect x="{bar.x}" y="{bar.y}" width="{max(1, bar.width - config.bar_gap)}" '
        f'height="{bar.height}" fill="{fill}"/>',
        f'  <text x="{bar.x + 2}" y="{bar.y - 5}" font-size="{config.label_size}" '
        f'font-family="\'DM Sans\', sans-serif" fill="{config.label_color}">{bar.value}</text>',
        '</g>',
    ]
    return "\n".join(parts)
