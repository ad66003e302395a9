"""
playback.py — Paced Step Delivery
==================================
The PlaybackScheduler is the ONLY place where computation speed meets
animation speed.  Engines yield Steps as fast as Python can run them;
the scheduler pulls one, hands it to whoever is watching, then sleeps
for the pacing interval before pulling the next.

    engine generator ──next()──▶ PlaybackScheduler ──(step, frame)──▶ observers
                                        │
                                  wait(interval) on the run's token

Guarantees:
  - Steps reach observers in exactly the order the engine yielded them.
  - Exactly one pause per Step.  Nothing is batched across a pause.
  - The run's cancellation token is checked before every delivery and
    the pause itself wakes up as soon as the token is cancelled.

Thread safety:
  play() runs on the worker thread.  Observers are called on that same
  thread and receive an immutable snapshot, never the live list.
  Changing the interval from another thread takes effect on the next pause.
"""

from typing import Any, Callable, Iterable, List, Optional, Tuple

import structlog

from sequence import SequenceStore, Step
from engine.cancel import CancellationSignal, CancellationToken

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Speed presets (milliseconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1000,   # teaching mode
    "medium": 300,
    "fast":   100,
    "turbo":  20,
}

StepObserver = Callable[[Step, Tuple[Any, ...]], None]


# ---------------------------------------------------------------------------
# PlaybackScheduler
# ---------------------------------------------------------------------------
class PlaybackScheduler:
    """
    Attributes:
        interval_ms     : Pause after each delivered Step.
        min_interval_ms : Floor for interval_ms.  A viewer that samples
                          frames every k ms needs at least 2k here, or it
                          misses frames.
    """

    def __init__(
        self,
        interval_ms: int = SPEED_PRESETS["medium"],
        on_step: Optional[StepObserver] = None,
        min_interval_ms: int = 0,
    ):
        self.min_interval_ms: int                = max(0, int(min_interval_ms))
        self.interval_ms:     int                = self._clamp(interval_ms)
        self._observers:      List[StepObserver] = []
        if on_step is not None:
            self.subscribe(on_step)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    def subscribe(self, observer: StepObserver) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: StepObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        if preset not in SPEED_PRESETS:
            raise ValueError(f"Unknown speed preset: {preset}")
        self.interval_ms = self._clamp(SPEED_PRESETS[preset])

    def set_interval_ms(self, ms: int) -> None:
        self.interval_ms = self._clamp(ms)

    def _clamp(self, ms: int) -> int:
        return max(self.min_interval_ms, int(ms))

    @property
    def interval_s(self) -> float:
        return self.interval_ms / 1000.0

    # ------------------------------------------------------------------
    # Play
    # ------------------------------------------------------------------
    def play(
        self,
        steps: Iterable[Step],
        store: SequenceStore,
        token: Optional[CancellationToken] = None,
        on_step: Optional[StepObserver] = None,
    ) -> int:
        """
        Drive `steps` to exhaustion, pacing each one.

        `on_step` is called before the subscribed observers, for the
        caller's own bookkeeping.  Returns the number of Steps delivered;
        raises CancellationSignal if `token` is cancelled first.
        """
        token = token or CancellationToken()
        delivered = 0

        token.raise_if_cancelled()
        for step in steps:
            token.raise_if_cancelled()

            frame = store.snapshot()
            if on_step is not None:
                on_step(step, frame)
            for observer in list(self._observers):
                observer(step, frame)
            delivered += 1

            if token.wait(self.interval_s):
                log.debug("playback.interrupted", delivered=delivered)
                raise CancellationSignal("run cancelled")

        log.debug("playback.exhausted", delivered=delivered)
        return delivered
