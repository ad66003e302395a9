"""
store.py — Sequence Store
==========================
Single source of truth for the values being sorted.  The engine mutates
it, the renderer reads it; nobody else touches the underlying list.

Responsibilities:
  1. Indexed reads                       (store[i], key_at(i), len(store))
  2. Step-emitting mutations             (swap / overwrite / overwrite_run)
  3. Copy-out for the renderer           (snapshot)

Design decisions:
  - Every mutation RETURNS the Step it caused.  The engine yields that
    Step; the store never talks to a renderer or a scheduler.
  - Length is fixed at construction.  There is no append / delete.
  - Index checks are strict: a bad index is an engine bug, so it raises
    IndexFault instead of wrapping around like Python negative indices do.
  - `key` lets the same engines order records by one field (stability
    checks); for plain integers it is the identity.
"""

from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from sequence.step import Overwrite, Swap


class IndexFault(IndexError):
    """An engine addressed a position outside 0..len-1.  Not recoverable."""


class SequenceStore:
    """
    Attributes:
        key            : Ordering key applied by key_at() (identity by default).
        steps_emitted  : How many Steps this store has produced so far.
    """

    def __init__(self, values: Iterable[Any], key: Optional[Callable[[Any], Any]] = None):
        self._values:       List[Any] = list(values)
        self.key:           Callable[[Any], Any] = key or _identity
        self.steps_emitted: int       = 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, i: int) -> Any:
        self._check(i)
        return self._values[i]

    def key_at(self, i: int) -> Any:
        return self.key(self[i])

    def snapshot(self) -> Tuple[Any, ...]:
        """Immutable copy, safe to hand to another thread."""
        return tuple(self._values)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def swap(self, i: int, j: int, tag: str = "") -> Swap:
        self._check(i)
        self._check(j)
        v = self._values
        v[i], v[j] = v[j], v[i]
        return Swap(step_number=self._next_number(), tag=tag, i=i, j=j, result=(v[i], v[j]))

    def overwrite(self, i: int, value: Any, tag: str = "") -> Overwrite:
        return self.overwrite_run(i, [value], tag=tag)

    def overwrite_run(self, start: int, values: Sequence[Any], tag: str = "") -> Overwrite:
        """Replace positions start..start+len(values)-1 in one Step."""
        new = tuple(values)
        if not new:
            raise IndexFault("empty overwrite")
        self._check(start)
        self._check(start + len(new) - 1)
        previous = tuple(self._values[start:start + len(new)])
        self._values[start:start + len(new)] = list(new)
        return Overwrite(
            step_number=self._next_number(), tag=tag,
            index=start, values=new, previous=previous,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _check(self, i: int) -> None:
        if not isinstance(i, int) or not 0 <= i < len(self._values):
            raise IndexFault(f"index {i!r} out of range for sequence of length {len(self._values)}")

    def _next_number(self) -> int:
        n = self.steps_emitted
        self.steps_emitted += 1
        return n

    def __repr__(self) -> str:
        return f"SequenceStore({self._values!r})"


def _identity(value: Any) -> Any:
    return value
