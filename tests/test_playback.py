from __future__ import annotations

import threading
import time

import pytest

from algorithms import REGISTRY, Algorithm
from engine import SPEED_PRESETS, CancellationSignal, CancellationToken, PlaybackScheduler
from sequence import SequenceStore


def test_delivers_every_step_in_order_with_frames() -> None:
    seen = []
    scheduler = PlaybackScheduler(interval_ms=0, on_step=lambda step, frame: seen.append((step, frame)))
    store = SequenceStore([5, 3, 8, 1])

    delivered = scheduler.play(REGISTRY[Algorithm.BUBBLE].fn(store), store)

    assert delivered == 4
    assert [s.step_number for s, _ in seen] == [0, 1, 2, 3]
    assert [f for _, f in seen] == [(3, 5, 8, 1), (3, 5, 1, 8), (3, 1, 5, 8), (1, 3, 5, 8)]
    assert all(isinstance(f, tuple) for _, f in seen)


def test_run_callback_precedes_observers() -> None:
    order = []
    scheduler = PlaybackScheduler(interval_ms=0, on_step=lambda s, f: order.append("observer"))
    store = SequenceStore([2, 1])

    scheduler.play(REGISTRY[Algorithm.BUBBLE].fn(store), store, on_step=lambda s, f: order.append("run"))

    assert order == ["run", "observer"]


def test_unsubscribe_stops_delivery() -> None:
    seen = []
    observer = lambda s, f: seen.append(s)
    scheduler = PlaybackScheduler(interval_ms=0, on_step=observer)
    scheduler.unsubscribe(observer)
    store = SequenceStore([2, 1])

    scheduler.play(REGISTRY[Algorithm.BUBBLE].fn(store), store)

    assert seen == []


def test_pauses_once_per_step() -> None:
    scheduler = PlaybackScheduler(interval_ms=30)
    store = SequenceStore([4, 3, 2, 1])   # 6 bubble swaps

    t0 = time.monotonic()
    scheduler.play(REGISTRY[Algorithm.BUBBLE].fn(store), store)
    elapsed = time.monotonic() - t0

    assert elapsed >= 6 * 0.03 * 0.9


def test_cancelled_token_stops_before_first_step() -> None:
    scheduler = PlaybackScheduler(interval_ms=0)
    store = SequenceStore([2, 1])
    token = CancellationToken()
    token.cancel()

    with pytest.raises(CancellationSignal):
        scheduler.play(REGISTRY[Algorithm.BUBBLE].fn(store), store, token)
    assert store.snapshot() == (2, 1)


def test_cancel_interrupts_the_pause() -> None:
    scheduler = PlaybackScheduler(interval_ms=10_000)
    store = SequenceStore([3, 2, 1])
    token = CancellationToken()
    delivered = []
    outcome = {}

    def worker() -> None:
        try:
            scheduler.play(REGISTRY[Algorithm.BUBBLE].fn(store), store, token, on_step=lambda s, f: delivered.append(s))
        except CancellationSignal:
            outcome["cancelled"] = True

    t = threading.Thread(target=worker)
    t.start()
    while not delivered:
        time.sleep(0.001)
    token.cancel()
    t.join(timeout=2)

    assert not t.is_alive()
    assert outcome == {"cancelled": True}
    assert len(delivered) == 1
    # partial state is left as it was
    assert store.snapshot() == (2, 3, 1)


def test_speed_presets_and_interval() -> None:
    scheduler = PlaybackScheduler()
    assert scheduler.interval_ms == 300

    scheduler.set_speed("fast")
    assert scheduler.interval_ms == SPEED_PRESETS["fast"]

    scheduler.set_interval_ms(-5)
    assert scheduler.interval_ms == 0

    with pytest.raises(ValueError):
        scheduler.set_speed("warp")


def test_interval_floor_applies_to_presets_and_raw_values() -> None:
    scheduler = PlaybackScheduler(interval_ms=5, min_interval_ms=100)
    assert scheduler.interval_ms == 100

    scheduler.set_speed("turbo")
    assert scheduler.interval_ms == 100

    scheduler.set_speed("slow")
    assert scheduler.interval_ms == SPEED_PRESETS["slow"]

    scheduler.set_interval_ms(20)
    assert scheduler.interval_ms == 100
