"""
insertion.py — Insertion Sort
==============================
Carries a[i] to the left, shifting every larger value one slot right.

Steps:
  • one "shift" Overwrite per slot moved while scanning backwards
  • one terminal "insert" Overwrite dropping the carried value into its
    slot, even when that slot is the one it came from
"""

from typing import Generator, List

from sequence import SequenceStore, Step


PSEUDOCODE: List[str] = [
    "def insertion_sort(a):",                      # 0
    "    for i in 1 .. n-1:",                      # 1
    "        key ← a[i]",                          # 2
    "        j ← i - 1",                           # 3
    "        while j >= 0 and a[j] > key:",        # 4
    "            a[j+1] ← a[j]",                   # 5
    "            j ← j - 1",                       # 6
    "        a[j+1] ← key",                        # 7
]


def insertion_sort(store: SequenceStore) -> Generator[Step, None, None]:
    for i in range(1, len(store)):
        carried = store[i]
        carried_key = store.key(carried)
        j = i - 1
        while j >= 0 and store.key_at(j) > carried_key:
            yield store.overwrite(j + 1, store[j], tag="shift")
            j -= 1
        yield store.overwrite(j + 1, carried, tag="insert")
