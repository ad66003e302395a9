"""
quick.py — Quick Sort
======================
Quick sort with the Lomuto partition scheme; the last element of each
range is the pivot.

Steps:
  • one "partition" Swap for every value found smaller than the pivot
    (including self-swaps, where the value is already in place)
  • one "pivot" Swap when the pivot drops into its final slot; this is
    the partition-completion step
"""

from typing import Generator, List

from sequence import SequenceStore, Step


PSEUDOCODE: List[str] = [
    "def quick_sort(a, low, high):",               # 0
    "    if low < high:",                          # 1
    "        p ← partition(a, low, high)",         # 2
    "        quick_sort(a, low, p-1)",             # 3
    "        quick_sort(a, p+1, high)",            # 4
    "",                                            # 5
    "def partition(a, low, high):",                # 6
    "    pivot ← a[high];  i ← low - 1",           # 7
    "    for j in low .. high-1:",                 # 8
    "        if a[j] < pivot:",                    # 9
    "            i ← i + 1;  swap(a[i], a[j])",    # 10
    "    swap(a[i+1], a[high])",                   # 11
    "    return i + 1",                            # 12
]


def quick_sort(store: SequenceStore) -> Generator[Step, None, None]:
    yield from _sort(store, 0, len(store) - 1)


def _sort(store: SequenceStore, low: int, high: int) -> Generator[Step, None, None]:
    if low < high:
        p = yield from _partition(store, low, high)
        yield from _sort(store, low, p - 1)
        yield from _sort(store, p + 1, high)


def _partition(store: SequenceStore, low: int, high: int) -> Generator[Step, None, int]:
    """Yields the partition's Steps; returns the pivot's final index."""
    pivot = store.key_at(high)
    i = low - 1
    for j in range(low, high):
        if store.key_at(j) < pivot:
            i += 1
            yield store.swap(i, j, tag="partition")
    yield store.swap(i + 1, high, tag="pivot")
    return i + 1
