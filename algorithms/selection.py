"""
selection.py — Selection Sort
==============================
For every position, scan the unsorted remainder for its minimum and
swap it into place.  One Step per position at most: when the minimum
already sits at the position no Step is emitted.
"""

from typing import Generator, List

from sequence import SequenceStore, Step


PSEUDOCODE: List[str] = [
    "def selection_sort(a):",                      # 0
    "    for i in 0 .. n-2:",                      # 1
    "        m ← i",                               # 2
    "        for j in i+1 .. n-1:",                # 3
    "            if a[j] < a[m]: m ← j",           # 4
    "        if m != i:",                          # 5
    "            swap(a[i], a[m])",                # 6
]


def selection_sort(store: SequenceStore) -> Generator[Step, None, None]:
    n = len(store)
    for i in range(n - 1):
        min_idx = i
        for j in range(i + 1, n):
            if store.key_at(j) < store.key_at(min_idx):
                min_idx = j
        if min_idx != i:
            yield store.swap(i, min_idx, tag="select")
