"""
recorder.py — Run Recorder & Analytics
========================================
Runs an engine to completion on a private store, with no pacing and no
observers, keeps every Step, and computes the numbers the Analytics
panel shows.

Usage:
    rec = Recorder()
    rec.start(algorithm="quick", values=[4, 2, 2])
    rec.run_to_completion()          # exhausts the generator
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # serialisable snapshot for preview / replay

The RunController uses a dry run to know a run's total step count before
the paced run starts, so the UI can show "Step k / N".
"""

import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from sequence import SequenceStore, Step, Swap, Overwrite, replay
from algorithms import Algorithm, AlgoInfo, resolve_algorithm


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str   = ""
    algo_label:    str   = ""
    length:        int   = 0
    total_steps:   int   = 0
    swaps:         int   = 0
    overwrites:    int   = 0
    pivots:        int   = 0          # quick sort partition completions
    merges:        int   = 0          # merge sort merge completions
    wall_time_ms:  float = 0.0
    is_sorted:     bool  = False

    def count(self, step: Step) -> None:
        self.total_steps += 1
        if isinstance(step, Swap):
            self.swaps += 1
        elif isinstance(step, Overwrite):
            self.overwrites += 1
        if step.tag == "pivot":
            self.pivots += 1
        elif step.tag == "merge":
            self.merges += 1


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps    : Full list of Steps from the run.
        initial  : Input values, as given.
        final    : Store contents after the run.
        metrics  : Computed RunMetrics (available after run_to_completion).
    """

    def __init__(self):
        self.steps:   List[Step]           = []
        self.initial: List[Any]            = []
        self.final:   List[Any]            = []
        self.metrics: Optional[RunMetrics] = None

        self._algo_info: Optional[AlgoInfo]      = None
        self._store:     Optional[SequenceStore] = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(
        self,
        algorithm: Union[str, Algorithm],
        values: Sequence[Any],
        key: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        """Pick the engine and load a private store for this run."""
        self._algo_info = resolve_algorithm(algorithm)
        self._store     = SequenceStore(values, key=key)
        self.initial    = list(values)
        self.final      = []
        self.steps      = []
        self.metrics    = None

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the engine, record every step, compute metrics."""
        if self._store is None or self._algo_info is None:
            raise RuntimeError("Call start() first.")

        info = self._algo_info
        metrics = RunMetrics(algo_key=info.key.value, algo_label=info.label, length=len(self._store))

        t0 = time.monotonic()
        for step in info.fn(self._store):
            self.steps.append(step)
            metrics.count(step)
        metrics.wall_time_ms = round((time.monotonic() - t0) * 1000, 2)

        self.final = list(self._store.snapshot())
        keys = [self._store.key(v) for v in self.final]
        metrics.is_sorted = all(a <= b for a, b in zip(keys, keys[1:]))

        self.metrics = metrics
        return metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    def replay(self) -> List[Any]:
        """Rebuild the final sequence from `initial` and the recorded Steps."""
        return replay(self.initial, self.steps)

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key.value if self._algo_info else "",
            "initial":  list(self.initial),
            "final":    list(self.final),
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "steps":    [s.to_dict() for s in self.steps],
        }


def record(
    algorithm: Union[str, Algorithm],
    values: Sequence[Any],
    key: Optional[Callable[[Any], Any]] = None,
) -> Recorder:
    """Convenience: start + run_to_completion in one call."""
    rec = Recorder()
    rec.start(algorithm, values, key=key)
    rec.run_to_completion()
    return rec
