"""
step.py — Mutation Steps
=========================
Every engine is a generator that yields Step objects.
A Step is a frozen record of ONE mutation of the sequence:

    • Swap       – two positions exchanged their values
    • Overwrite  – a contiguous run of positions got new values
                   (a single slot for insertion sort, a whole merged
                   run for merge sort)

Design decisions:
  - Steps are produced by the SequenceStore, never built by hand inside
    an engine.  The store numbers them, so step_number is the emission
    order.
  - Each Step carries the resulting values of the slots it touched.
    That is enough to apply it to any copy of the sequence (replay)
    and enough for the renderer to highlight the touched bars.
  - `tag` names what produced the step ("exchange", "pivot", "merge", …)
    so the UI can colour it and the analytics can count it.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number : 0-based index of this step in the run.
        tag         : What kind of algorithmic event produced the mutation.
    """

    step_number: int = 0
    tag:         str = ""

    @property
    def kind(self) -> str:
        raise NotImplementedError

    @property
    def touched(self) -> Tuple[int, ...]:
        raise NotImplementedError

    def apply(self, seq: List[Any]) -> None:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        return {"step_number": self.step_number, "kind": self.kind, "tag": self.tag}


@dataclass(frozen=True)
class Swap(Step):
    """
    Attributes:
        i, j   : The two exchanged positions (i == j is a legal self-swap).
        result : Values at (i, j) after the exchange.
    """

    i:      int             = 0
    j:      int             = 0
    result: Tuple[Any, Any] = (None, None)

    @property
    def kind(self) -> str:
        return "swap"

    @property
    def touched(self) -> Tuple[int, ...]:
        return (self.i, self.j)

    def apply(self, seq: List[Any]) -> None:
        seq[self.i], seq[self.j] = seq[self.j], seq[self.i]

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d.update(i=self.i, j=self.j, result=list(self.result))
        return d


@dataclass(frozen=True)
class Overwrite(Step):
    """
    Attributes:
        index    : First overwritten position.
        values   : New values for index, index+1, …
        previous : Values that were there before.
    """

    index:    int             = 0
    values:   Tuple[Any, ...] = ()
    previous: Tuple[Any, ...] = ()

    @property
    def kind(self) -> str:
        return "overwrite"

    @property
    def value(self) -> Any:
        """The written value of a single-slot overwrite."""
        return self.values[0]

    @property
    def touched(self) -> Tuple[int, ...]:
        return tuple(range(self.index, self.index + len(self.values)))

    @property
    def is_in_place(self) -> bool:
        """True when nothing actually moved (the write restored the same values)."""
        return self.values == self.previous

    def apply(self, seq: List[Any]) -> None:
        seq[self.index:self.index + len(self.values)] = list(self.values)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d.update(index=self.index, values=list(self.values), previous=list(self.previous))
        return d


# ---------------------------------------------------------------------------
# Replay
# ---------------------------------------------------------------------------
def replay(initial: Iterable[Any], steps: Iterable[Step]) -> List[Any]:
    """Apply `steps` in order to a copy of `initial` and return the result."""
    values = list(initial)
    for step in steps:
        step.apply(values)
    return values
