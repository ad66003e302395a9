"""
engine/
-------
Playback, run control & recording layer.

    from engine import RunController, PlaybackScheduler, Recorder
"""

from engine.cancel     import CancellationToken, CancellationSignal
from engine.playback   import PlaybackScheduler, SPEED_PRESETS
from engine.recorder   import Recorder, RunMetrics, record
from engine.controller import RunController, Run, RunState, TERMINAL_STATES

__all__ = [
    "CancellationToken",
    "CancellationSignal",
    "PlaybackScheduler",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
    "record",
    "RunController",
    "Run",
    "RunState",
    "TERMINAL_STATES",
]
