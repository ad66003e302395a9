from __future__ import annotations

import json

import pytest

from engine import Recorder, record


def test_records_steps_and_metrics() -> None:
    rec = Recorder()
    rec.start("bubble", [5, 3, 8, 1])
    metrics = rec.run_to_completion()

    assert rec.final == [1, 3, 5, 8]
    assert rec.initial == [5, 3, 8, 1]
    assert metrics.total_steps == 4
    assert metrics.swaps == 4
    assert metrics.overwrites == 0
    assert metrics.is_sorted
    assert metrics.algo_label == "Bubble Sort"
    assert rec.get_metrics() is metrics


def test_replay_matches_final() -> None:
    rec = record("insertion", [9, -2, 4, 4, 0])

    assert rec.replay() == rec.final == [-2, 0, 4, 4, 9]


def test_counts_pivots_and_merges() -> None:
    assert record("quick", [4, 2, 2]).metrics.pivots == 2
    assert record("merge", [5, 3, 8, 1]).metrics.merges == 3


def test_export_is_json_serialisable() -> None:
    data = record("merge", [2, 1, 3]).export()

    text = json.dumps(data)
    assert json.loads(text)["final"] == [1, 2, 3]
    assert data["algo_key"] == "merge"
    assert data["steps"][0]["kind"] == "overwrite"
    assert data["metrics"]["total_steps"] == len(data["steps"])


def test_run_before_start_raises() -> None:
    with pytest.raises(RuntimeError):
        Recorder().run_to_completion()


def test_unknown_algorithm_raises() -> None:
    with pytest.raises(ValueError):
        Recorder().start("bogo", [1, 2])
