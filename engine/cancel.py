"""
cancel.py — Cooperative Cancellation
=====================================
A run's worker checks its token at every Step boundary.  Whoever wants
the run gone calls token.cancel(); the worker notices on its next check
(or immediately, if it is sleeping in token.wait()) and unwinds by
raising CancellationSignal.
"""

import threading


class CancellationSignal(Exception):
    """Raised inside a worker when its run has been superseded.  Not an error."""


class CancellationToken:

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancellationSignal("run cancelled")

    def wait(self, seconds: float) -> bool:
        """Sleep up to `seconds`; returns True early if cancelled meanwhile."""
        if seconds <= 0:
            return self._event.is_set()
        return self._event.wait(seconds)
