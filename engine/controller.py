"""
controller.py — Run Controller
===============================
Orchestrates one sorting run end-to-end and is the only component that
knows about threads.

State machine (per Run):
    IDLE  →  submit()  →  PARSING
    PARSING  →  bad input / unknown algorithm  →  FAILED
    PARSING  →  ok                             →  RUNNING
    RUNNING  →  steps exhausted                →  COMPLETED
    RUNNING  →  preempted by a newer submit()  →  CANCELLED
    RUNNING  →  engine raised                  →  FAILED

COMPLETED, CANCELLED and FAILED are terminal.  Every submit() creates a
fresh Run; a Run is never restarted.

Threading:
  - One daemon worker thread per run executes the engine + scheduler,
    including the unpaced pass that counts the run's total Steps.
  - The caller's thread (Flask request / UI loop) never runs engine code.
    It reads `run.frame`, an immutable tuple replaced after every Step.
  - submit() cancels the in-flight run under the lock, then JOINS its
    worker with the lock released, and only installs the new run once
    the old worker has exited.  No Step of the old run is delivered
    after the new one is accepted.
  - on_step / on_finish run on the worker thread with no lock held.
    on_finish may call submit() or cancel(); on_step may call cancel().
  - A rejected submit (parse error) leaves the in-flight run alone.
"""

import threading
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import structlog

from sequence import SequenceStore, Step, parse_sequence
from algorithms import Algorithm, AlgoInfo, resolve_algorithm
from engine.cancel import CancellationSignal, CancellationToken
from engine.playback import PlaybackScheduler
from engine.recorder import Recorder, RunMetrics
from logging_setup import bind_context, clear_context

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class RunState(Enum):
    IDLE      = "idle"
    PARSING   = "parsing"
    RUNNING   = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED    = "failed"


TERMINAL_STATES = {RunState.COMPLETED, RunState.CANCELLED, RunState.FAILED}


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
@dataclass
class Run:
    """
    Attributes:
        run_id      : Short unique id, also bound into every log line of the run.
        raw_input   : What the requester sent, before decoding.
        algorithm   : Resolved engine card (None if resolution failed).
        initial     : Decoded input values.
        store       : The run's own SequenceStore.
        token       : Cancellation token checked at every Step boundary.
        frame       : Last delivered snapshot (initial values before the first Step).
        last_step   : Last delivered Step.
        total_steps : Step count of the whole run, from an unpaced dry run.
        metrics     : Live tally of delivered Steps.
        error       : User-facing message when FAILED.
    """

    run_id:      str
    raw_input:   Any                       = None
    algorithm:   Optional[AlgoInfo]        = None
    initial:     List[int]                 = field(default_factory=list)
    store:       Optional[SequenceStore]   = None
    token:       CancellationToken         = field(default_factory=CancellationToken)
    state:       RunState                  = RunState.IDLE
    frame:       Tuple[Any, ...]           = ()
    last_step:   Optional[Step]            = None
    total_steps: int                       = 0
    metrics:     RunMetrics                = field(default_factory=RunMetrics)
    error:       str                       = ""
    started_at:  Optional[float]           = None
    finished_at: Optional[float]           = None

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def steps_delivered(self) -> int:
        return self.metrics.total_steps

    @property
    def elapsed_s(self) -> float:
        if self.started_at is None:
            return 0.0
        end = self.finished_at if self.finished_at is not None else time.monotonic()
        return end - self.started_at

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run_id":          self.run_id,
            "state":           self.state.value,
            "algorithm":       self.algorithm.key.value if self.algorithm else None,
            "algo_label":      self.algorithm.label if self.algorithm else "",
            "initial":         list(self.initial),
            "values":          list(self.frame),
            "steps_delivered": self.steps_delivered,
            "total_steps":     self.total_steps,
            "last_step":       self.last_step.to_dict() if self.last_step else None,
            "error":           self.error,
        }


RunStepObserver = Callable[[Run, Step, Tuple[Any, ...]], None]
RunFinishObserver = Callable[[Run], None]


# ---------------------------------------------------------------------------
# RunController
# ---------------------------------------------------------------------------
class RunController:
    """
    Attributes:
        scheduler         : Shared PlaybackScheduler (its interval applies to every run).
        default_algorithm : Engine used when submit() is not told one.
        on_step           : Optional callback(run, step, frame) on the worker thread.
        on_finish         : Optional callback(run) once a run reaches a terminal state.
    """

    def __init__(
        self,
        scheduler: Optional[PlaybackScheduler] = None,
        default_algorithm: Union[str, Algorithm] = Algorithm.BUBBLE,
        on_step: Optional[RunStepObserver] = None,
        on_finish: Optional[RunFinishObserver] = None,
    ):
        self.scheduler:         PlaybackScheduler            = scheduler or PlaybackScheduler()
        self.default_algorithm: Union[str, Algorithm]        = default_algorithm
        self.on_step:           Optional[RunStepObserver]    = on_step
        self.on_finish:         Optional[RunFinishObserver]  = on_finish

        self._lock:    threading.Lock             = threading.Lock()
        self._current: Optional[Run]              = None
        self._thread:  Optional[threading.Thread] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def submit(self, raw: Any, algorithm: Union[str, Algorithm, None] = None) -> Run:
        """
        Start a new run on `raw` (text or list of ints).

        Always returns the new Run.  A FAILED run carries the reason in
        `error`; nothing was started and the previous run keeps going.
        No engine code runs on the calling thread.
        """
        run = Run(run_id=uuid.uuid4().hex[:8], raw_input=raw)
        run.state = RunState.PARSING

        try:
            info = resolve_algorithm(algorithm if algorithm is not None else self.default_algorithm)
            values = parse_sequence(raw)
        except ValueError as e:
            run.state = RunState.FAILED
            run.error = str(e)
            log.warning("run.rejected", run_id=run.run_id, error=run.error)
            self._notify_finish(run)
            return run

        run.algorithm = info
        run.initial   = values
        run.store     = SequenceStore(values)
        run.frame     = tuple(values)
        run.metrics   = RunMetrics(algo_key=info.key.value, algo_label=info.label, length=len(values))

        while True:
            with self._lock:
                old = self._preempt()
                if old is None:
                    self._current = run
                    self._thread  = None
                    log.info("run.submitted", run_id=run.run_id, algorithm=info.key.value, length=len(values))
                    if len(values) > 1:
                        run.state = RunState.RUNNING
                        self._thread = threading.Thread(
                            target=self._work, args=(run,), name=f"sort-{run.run_id}", daemon=True,
                        )
                        self._thread.start()
                        return run
                    # nothing to animate
                    run.state = RunState.COMPLETED
                    run.started_at = run.finished_at = time.monotonic()
                    run.metrics.is_sorted = True
                    break
            # outside the lock, so the old worker's callbacks may use the controller
            old.join()

        log.info("run.completed", run_id=run.run_id, delivered=0)
        self._notify_finish(run)
        return run

    def cancel(self) -> Optional[Run]:
        """Cancel the in-flight run (if any) and wait for its worker to stop."""
        with self._lock:
            old = self._preempt()
            run = self._current
        if old is not None:
            old.join()
        return run

    def preview(self, raw: Any, algorithm: Union[str, Algorithm, None] = None,
                timeout: Optional[float] = None) -> Recorder:
        """
        Unpaced dry run of `raw` on a throwaway worker thread.

        Raises ValueError (InputParseError included) for bad input or an
        unknown algorithm, TimeoutError if the dry run outlives `timeout`.
        """
        rec = Recorder()
        rec.start(algorithm if algorithm is not None else self.default_algorithm, parse_sequence(raw))

        worker = threading.Thread(target=rec.run_to_completion, name="sort-preview", daemon=True)
        worker.start()
        worker.join(timeout)
        if worker.is_alive():
            raise TimeoutError("Preview did not finish in time.")
        if rec.metrics is None:
            raise RuntimeError("Preview worker stopped without metrics.")
        return rec

    def wait(self, timeout: Optional[float] = None) -> Optional[Run]:
        """Block until the current run's worker exits (or `timeout` passes)."""
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
        return self._current

    def shutdown(self) -> None:
        self.cancel()

    # ------------------------------------------------------------------
    # Read-only accessors (safe from any thread)
    # ------------------------------------------------------------------
    @property
    def current(self) -> Optional[Run]:
        return self._current

    def snapshot(self) -> Tuple[Any, ...]:
        run = self._current
        return run.frame if run is not None else ()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _preempt(self) -> Optional[threading.Thread]:
        """
        Caller holds the lock.  Cancels the in-flight run and returns its
        worker if the caller still has to join it, else None.
        """
        run, thread = self._current, self._thread
        if run is not None and not run.is_terminal and not run.token.cancelled:
            run.token.cancel()
            log.info("run.preempted", run_id=run.run_id, state=run.state.value)
        if thread is None or thread is threading.current_thread() or not thread.is_alive():
            return None
        return thread

    def _work(self, run: Run) -> None:
        bind_context(run_id=run.run_id, algorithm=run.algorithm.key.value)
        run.started_at = time.monotonic()
        try:
            run.total_steps = self._count_steps(run)
            log.info(
                "run.started", length=len(run.initial),
                total_steps=run.total_steps, interval_ms=self.scheduler.interval_ms,
            )
            self.scheduler.play(
                run.algorithm.fn(run.store),
                run.store,
                run.token,
                on_step=lambda step, frame: self._deliver(run, step, frame),
            )
        except CancellationSignal:
            run.state = RunState.CANCELLED
            log.info("run.cancelled", delivered=run.steps_delivered)
        except Exception as exc:
            run.state = RunState.FAILED
            run.error = f"{type(exc).__name__}: {exc}"
            log.exception("run.failed", delivered=run.steps_delivered)
            raise
        else:
            run.state = RunState.COMPLETED
            run.metrics.is_sorted = True
            log.info("run.completed", delivered=run.steps_delivered)
        finally:
            run.finished_at = time.monotonic()
            run.metrics.wall_time_ms = round(run.elapsed_s * 1000, 2)
            clear_context()
            self._notify_finish(run)

    def _count_steps(self, run: Run) -> int:
        """Unpaced pass over a scratch store; stops early if the run is cancelled."""
        total = 0
        for _ in run.algorithm.fn(SequenceStore(run.initial)):
            run.token.raise_if_cancelled()
            total += 1
        return total

    def _deliver(self, run: Run, step: Step, frame: Tuple[Any, ...]) -> None:
        run.metrics.count(step)
        run.last_step = step
        run.frame = frame
        if self.on_step is not None:
            self.on_step(run, step, frame)

    def _notify_finish(self, run: Run) -> None:
        if self.on_finish is not None:
            self.on_finish(run)
