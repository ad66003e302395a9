"""
bubble.py — Bubble Sort
========================
Generator-based bubble sort.  Yields a Step for every exchange of two
adjacent, out-of-order values.

Always makes the full n-1 passes.  There is no "stop when a pass made
no swaps" shortcut, so the step trace matches the classic textbook loop.
"""

from typing import Generator, List

from sequence import SequenceStore, Step


PSEUDOCODE: List[str] = [
    "def bubble_sort(a):",                         # 0
    "    for i in 0 .. n-2:",                      # 1
    "        for j in 0 .. n-i-2:",                # 2
    "            if a[j] > a[j+1]:",               # 3
    "                swap(a[j], a[j+1])",          # 4
]


def bubble_sort(store: SequenceStore) -> Generator[Step, None, None]:
    n = len(store)
    for i in range(n - 1):
        for j in range(n - i - 1):
            if store.key_at(j) > store.key_at(j + 1):
                yield store.swap(j, j + 1, tag="exchange")
