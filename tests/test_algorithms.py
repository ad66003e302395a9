from __future__ import annotations

import random
from collections import Counter
from typing import Any, List

import pytest

from algorithms import REGISTRY, Algorithm, get_algorithm, list_algorithms, resolve_algorithm
from sequence import Overwrite, SequenceStore, Swap, replay

ALL = list(Algorithm)

SAMPLES: List[List[int]] = [
    [5, 3, 8, 1],
    [4, 2, 2],
    [1, 2, 3, 4, 5],
    [5, 4, 3, 2, 1],
    [7, 7, 7, 7],
    [0, -3, 12, -3, 5, 0, 99, -100],
    [2, 1],
]


def run_engine(algorithm: Algorithm, values: List[Any], key=None):
    store = SequenceStore(values, key=key)
    steps = list(REGISTRY[algorithm].fn(store))
    return store, steps


def _random_samples() -> List[List[int]]:
    rng = random.Random(1234)
    return [[rng.randint(-50, 50) for _ in range(rng.randint(0, 25))] for _ in range(30)]


# --- Correctness ----------------------------------------------------------


@pytest.mark.parametrize("algorithm", ALL)
def test_result_is_sorted_permutation(algorithm: Algorithm) -> None:
    for values in SAMPLES + _random_samples():
        store, _ = run_engine(algorithm, values)
        result = list(store.snapshot())

        assert result == sorted(values)
        assert Counter(result) == Counter(values)


@pytest.mark.parametrize("algorithm", ALL)
def test_steps_are_complete_mutation_log(algorithm: Algorithm) -> None:
    for values in SAMPLES + _random_samples():
        store, steps = run_engine(algorithm, values)

        assert replay(values, steps) == list(store.snapshot())
        assert [s.step_number for s in steps] == list(range(len(steps)))


@pytest.mark.parametrize("algorithm", ALL)
@pytest.mark.parametrize("values", [[], [42]])
def test_tiny_input_emits_no_steps(algorithm: Algorithm, values: List[int]) -> None:
    store, steps = run_engine(algorithm, values)

    assert steps == []
    assert list(store.snapshot()) == values


@pytest.mark.parametrize("algorithm", ALL)
def test_engine_is_lazy(algorithm: Algorithm) -> None:
    store = SequenceStore([3, 2, 1])
    gen = REGISTRY[algorithm].fn(store)

    assert store.snapshot() == (3, 2, 1)
    next(gen)
    assert store.steps_emitted == 1


# --- Already sorted input -------------------------------------------------


@pytest.mark.parametrize("algorithm", [Algorithm.BUBBLE, Algorithm.SELECTION, Algorithm.MERGE, Algorithm.QUICK])
def test_sorted_input_swaps_only_equal_values(algorithm: Algorithm) -> None:
    values = [1, 2, 2, 3, 5, 8]
    _, steps = run_engine(algorithm, values)

    swaps = [s for s in steps if isinstance(s, Swap)]
    assert all(s.result[0] == s.result[1] for s in swaps)


def test_insertion_sorted_input_one_in_place_overwrite_per_element() -> None:
    values = [1, 2, 3, 4]
    _, steps = run_engine(Algorithm.INSERTION, values)

    assert len(steps) == len(values) - 1
    assert all(isinstance(s, Overwrite) and s.tag == "insert" for s in steps)
    assert [s.index for s in steps] == [1, 2, 3]
    assert all(s.is_in_place for s in steps)


# --- Bubble ---------------------------------------------------------------


def test_bubble_trace() -> None:
    store, steps = run_engine(Algorithm.BUBBLE, [5, 3, 8, 1])

    assert [(s.i, s.j) for s in steps] == [(0, 1), (2, 3), (1, 2), (0, 1)]
    assert all(s.tag == "exchange" for s in steps)
    assert store.snapshot() == (1, 3, 5, 8)

    frames = []
    values = [5, 3, 8, 1]
    for s in steps:
        s.apply(values)
        frames.append(list(values))
    assert frames == [[3, 5, 8, 1], [3, 5, 1, 8], [3, 1, 5, 8], [1, 3, 5, 8]]


def test_bubble_makes_every_pass() -> None:
    # counts comparisons through the key function; no early exit on sorted data
    calls = []

    def key(v: int) -> int:
        calls.append(v)
        return v

    run_engine(Algorithm.BUBBLE, [1, 2, 3, 4, 5], key=key)

    n = 5
    assert len(calls) == 2 * (n * (n - 1) // 2)


# --- Selection ------------------------------------------------------------


def test_selection_swaps_once_per_misplaced_position() -> None:
    _, steps = run_engine(Algorithm.SELECTION, [3, 1, 2])

    assert [(s.i, s.j) for s in steps] == [(0, 1), (1, 2)]
    assert all(s.tag == "select" for s in steps)


def test_selection_no_noop_swaps() -> None:
    _, steps = run_engine(Algorithm.SELECTION, [1, 3, 2, 4])

    assert [(s.i, s.j) for s in steps] == [(1, 2)]


# --- Insertion ------------------------------------------------------------


def test_insertion_shift_then_insert() -> None:
    _, steps = run_engine(Algorithm.INSERTION, [3, 1, 2])

    assert [(s.tag, s.index, s.value) for s in steps] == [
        ("shift", 1, 3),
        ("insert", 0, 1),
        ("shift", 2, 3),
        ("insert", 1, 2),
    ]


def test_insertion_reverse_input_shifts_every_time() -> None:
    _, steps = run_engine(Algorithm.INSERTION, [4, 3, 2, 1])

    shifts = [s for s in steps if s.tag == "shift"]
    inserts = [s for s in steps if s.tag == "insert"]
    assert len(shifts) == 6
    assert [s.index for s in inserts] == [0, 0, 0]


# --- Merge ----------------------------------------------------------------


def test_merge_one_step_per_merge() -> None:
    store, steps = run_engine(Algorithm.MERGE, [5, 3, 8, 1])

    assert len(steps) == 3
    assert all(isinstance(s, Overwrite) and s.tag == "merge" for s in steps)
    assert [(s.index, s.values) for s in steps] == [
        (0, (3, 5)),
        (2, (1, 8)),
        (0, (1, 3, 5, 8)),
    ]
    assert store.snapshot() == (1, 3, 5, 8)


def test_merge_splits_at_floor_midpoint() -> None:
    _, steps = run_engine(Algorithm.MERGE, [3, 2, 1])

    # (0+2)//2 = 1: left run is 0..1, right run is 2..2
    assert [s.touched for s in steps] == [(0, 1), (0, 1, 2)]


def test_merge_is_stable() -> None:
    values = [(5, "a"), (3, "b"), (5, "c")]
    store, _ = run_engine(Algorithm.MERGE, values, key=lambda t: t[0])

    assert store.snapshot() == ((3, "b"), (5, "a"), (5, "c"))


# --- Quick ----------------------------------------------------------------


def test_quick_partition_trace() -> None:
    store, steps = run_engine(Algorithm.QUICK, [4, 2, 2])

    assert store.snapshot() == (2, 2, 4)
    assert [(s.tag, s.i, s.j) for s in steps] == [
        ("pivot", 0, 2),
        ("partition", 1, 1),
        ("pivot", 2, 2),
    ]

    top = steps[0]
    assert top.i == 0
    assert top.result[0] == 2


def test_quick_one_pivot_step_per_partition() -> None:
    _, steps = run_engine(Algorithm.QUICK, [3, 7, 1, 9, 4])

    # [3,7,1,9,4] pivot 4 → [3,1,4,9,7]; left [3,1] pivot 1; right [9,7] pivot 7
    pivots = [s for s in steps if s.tag == "pivot"]
    assert len(pivots) == 3
    assert pivots[0].i == 2 and pivots[0].result[0] == 4


# --- Registry -------------------------------------------------------------


def test_registry_has_five_engines_in_order() -> None:
    assert [a.label for a in list_algorithms()] == [
        "Bubble Sort", "Selection Sort", "Insertion Sort", "Merge Sort", "Quick Sort",
    ]


@pytest.mark.parametrize("name, expected", [
    ("bubble", Algorithm.BUBBLE),
    ("Merge Sort", Algorithm.MERGE),
    ("quick sort", Algorithm.QUICK),
    (" Insertion ", Algorithm.INSERTION),
    (Algorithm.SELECTION, Algorithm.SELECTION),
])
def test_resolve_algorithm(name, expected: Algorithm) -> None:
    assert resolve_algorithm(name).key is expected


def test_resolve_unknown_algorithm() -> None:
    with pytest.raises(ValueError, match="Unknown algorithm"):
        resolve_algorithm("bogo")
    assert get_algorithm("bogo") is None


def test_tag_lines_point_into_pseudocode() -> None:
    for info in list_algorithms():
        for tag, line in info.tag_lines.items():
            assert 0 <= line < len(info.pseudocode), (info.key, tag)
