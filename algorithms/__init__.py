"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every sorting engine the visualizer knows about.

    from algorithms import REGISTRY, Algorithm, get_algorithm, resolve_algorithm

REGISTRY is a dict:
    {
        Algorithm.BUBBLE: AlgoInfo(key, label, fn, pseudocode, stable, …),
        …
    }

Every engine has the same shape:

    fn(store: SequenceStore) -> Generator[Step, None, None]

It reads and mutates the store it is handed, yields each Step the store
returns, and leaves the store sorted ascending when exhausted.  Engines
keep no module-level state, so each call is an independent run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from algorithms.bubble    import bubble_sort    as _bubble,    PSEUDOCODE as _bubble_pc
from algorithms.selection import selection_sort as _selection, PSEUDOCODE as _selection_pc
from algorithms.insertion import insertion_sort as _insertion, PSEUDOCODE as _insertion_pc
from algorithms.merge     import merge_sort     as _merge,     PSEUDOCODE as _merge_pc
from algorithms.quick     import quick_sort     as _quick,     PSEUDOCODE as _quick_pc


# ---------------------------------------------------------------------------
# Algorithm — the closed set of engines
# ---------------------------------------------------------------------------
class Algorithm(str, Enum):
    BUBBLE    = "bubble"
    SELECTION = "selection"
    INSERTION = "insertion"
    MERGE     = "merge"
    QUICK     = "quick"


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              Algorithm
    label:            str                    # human label, e.g. "Bubble Sort"
    fn:               Callable               # the generator function
    pseudocode:       List[str]              # lines for the side-panel
    stable:           bool     = False
    complexity_time:  str      = ""          # e.g. "O(n²)"
    complexity_space: str      = ""
    tag_lines:        Dict[str, int] = field(default_factory=dict)   # step tag → pseudocode line
    description:      str      = ""          # one-liner for the UI card


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[Algorithm, AlgoInfo] = {

    Algorithm.BUBBLE: AlgoInfo(
        key=Algorithm.BUBBLE, label="Bubble Sort", fn=_bubble, pseudocode=_bubble_pc,
        stable=True, complexity_time="O(n²)", complexity_space="O(1)",
        tag_lines={"exchange": 4},
        description="Swaps adjacent out-of-order pairs. Always makes n-1 passes.",
    ),

    Algorithm.SELECTION: AlgoInfo(
        key=Algorithm.SELECTION, label="Selection Sort", fn=_selection, pseudocode=_selection_pc,
        complexity_time="O(n²)", complexity_space="O(1)",
        tag_lines={"select": 6},
        description="Finds the minimum of the unsorted part and swaps it into place.",
    ),

    Algorithm.INSERTION: AlgoInfo(
        key=Algorithm.INSERTION, label="Insertion Sort", fn=_insertion, pseudocode=_insertion_pc,
        stable=True, complexity_time="O(n²)", complexity_space="O(1)",
        tag_lines={"shift": 5, "insert": 7},
        description="Shifts larger values right and drops each value into its slot.",
    ),

    Algorithm.MERGE: AlgoInfo(
        key=Algorithm.MERGE, label="Merge Sort", fn=_merge, pseudocode=_merge_pc,
        stable=True, complexity_time="O(n log n)", complexity_space="O(n)",
        tag_lines={"merge": 10},
        description="Splits in half, sorts both halves, writes each merge back in one step.",
    ),

    Algorithm.QUICK: AlgoInfo(
        key=Algorithm.QUICK, label="Quick Sort", fn=_quick, pseudocode=_quick_pc,
        complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(log n)",
        tag_lines={"partition": 10, "pivot": 11},
        description="Lomuto partition around the last element, then recurse on both sides.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: Union[str, Algorithm]) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    try:
        return REGISTRY.get(Algorithm(key))
    except ValueError:
        return None


def resolve_algorithm(name: Union[str, Algorithm]) -> AlgoInfo:
    """
    Accepts a registry key ("quick"), a label ("Quick Sort") or the bare
    name ("Quick"), case-insensitively.  Raises ValueError otherwise.
    """
    info = get_algorithm(name)
    if info is not None:
        return info

    wanted = str(name).strip().lower()
    for info in REGISTRY.values():
        if wanted in (info.key.value, info.label.lower()):
            return info
    raise ValueError(f"Unknown algorithm: {name}")


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "Algorithm",
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "resolve_algorithm",
    "list_algorithms",
]
