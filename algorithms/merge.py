"""
merge.py — Merge Sort
======================
Top-down merge sort, split at (left + right) // 2.

Granularity is one Step per completed merge: the two runs are merged
into a scratch list and written back over left..right as a single
"merge" Overwrite.  Ties take from the left run, which keeps the sort
stable.
"""

from typing import Any, Generator, List

from sequence import SequenceStore, Step


PSEUDOCODE: List[str] = [
    "def merge_sort(a, left, right):",             # 0
    "    if left < right:",                        # 1
    "        mid ← (left + right) / 2",            # 2
    "        merge_sort(a, left, mid)",            # 3
    "        merge_sort(a, mid+1, right)",         # 4
    "        merge(a, left, mid, right)",          # 5
    "",                                            # 6
    "def merge(a, left, mid, right):",             # 7
    "    take the smaller head, left run on ties", # 8
    "    copy what is left of either run",         # 9
    "    write temp back over a[left..right]",     # 10
]


def merge_sort(store: SequenceStore) -> Generator[Step, None, None]:
    yield from _sort(store, 0, len(store) - 1)


def _sort(store: SequenceStore, left: int, right: int) -> Generator[Step, None, None]:
    if left < right:
        mid = (left + right) // 2
        yield from _sort(store, left, mid)
        yield from _sort(store, mid + 1, right)
        yield _merge(store, left, mid, right)


def _merge(store: SequenceStore, left: int, mid: int, right: int) -> Step:
    temp: List[Any] = []
    i, j = left, mid + 1

    while i <= mid and j <= right:
        if store.key_at(i) <= store.key_at(j):
            temp.append(store[i])
            i += 1
        else:
            temp.append(store[j])
            j += 1
    temp.extend(store[k] for k in range(i, mid + 1))
    temp.extend(store[k] for k in range(j, right + 1))

    return store.overwrite_run(left, temp, tag="merge")
