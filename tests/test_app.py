from __future__ import annotations

from engine import RunController
from main import create_app
from settings import AppSettings


def _controller(app) -> RunController:
    return app.extensions["run_controller"]


def test_index_renders(client) -> None:
    res = client.get("/")

    assert res.status_code == 200
    body = res.get_data(as_text=True)
    assert "Sort Visualizer" in body
    assert "Quick Sort" in body
    assert 'id="numbers-input"' in body


def test_run_then_poll_state(app, client) -> None:
    res = client.post("/api/run", json={"input": "5, 3, 8, 1", "algorithm": "bubble"})

    assert res.status_code == 202
    assert res.get_json()["run"]["state"] in ("running", "completed")

    _controller(app).wait(timeout=5)
    state = client.get("/api/state").get_json()

    assert state["run"]["state"] == "completed"
    assert state["run"]["values"] == [1, 3, 5, 8]
    assert state["run"]["steps_delivered"] == state["run"]["total_steps"] == 4
    assert state["svg"].startswith("<svg")
    assert state["pseudocode_line"] == 4


def test_state_before_any_run(client) -> None:
    state = client.get("/api/state").get_json()

    assert state["run"] is None
    assert state["pseudocode_line"] == -1


def test_bad_input_is_400_and_nothing_starts(app, client) -> None:
    res = client.post("/api/run", json={"input": "5,,1", "algorithm": "bubble"})

    assert res.status_code == 400
    assert "position 2" in res.get_json()["error"]
    assert "error-banner" in res.get_json()["error_html"]
    assert _controller(app).current is None


def test_missing_body_is_400(client) -> None:
    res = client.post("/api/run")

    assert res.status_code == 400


def test_cancel_without_run(client) -> None:
    res = client.post("/api/cancel")

    assert res.status_code == 200
    assert res.get_json() == {"run": None}


def test_preview_returns_full_log(client) -> None:
    res = client.post("/api/preview", json={"input": "4, 2, 2", "algorithm": "Quick Sort"})

    data = res.get_json()
    assert res.status_code == 200
    assert data["final"] == [2, 2, 4]
    assert [s["tag"] for s in data["steps"]] == ["pivot", "partition", "pivot"]


def test_preview_rejects_bad_input(client) -> None:
    assert client.post("/api/preview", json={"input": "abc"}).status_code == 400
    assert client.post("/api/preview", json={"input": "1", "algorithm": "bogo"}).status_code == 400


def test_config_speed(app, client) -> None:
    assert client.post("/api/config/speed", json={"speed": "fast"}).get_json() == {"interval_ms": 100}
    assert client.post("/api/config/speed", json={"interval_ms": 42}).get_json() == {"interval_ms": 42}
    assert _controller(app).scheduler.interval_ms == 42

    assert client.post("/api/config/speed", json={"speed": "warp"}).status_code == 400
    assert client.post("/api/config/speed", json={"interval_ms": "soon"}).status_code == 400


def test_config_algo(client) -> None:
    data = client.post("/api/config/algo", json={"algo_key": "Merge Sort"}).get_json()

    assert data["algo_key"] == "merge"
    assert "merge_sort" in data["pseudocode"]
    assert client.post("/api/config/algo", json={"algo_key": "bogo"}).status_code == 400


def test_pacing_never_drops_below_twice_the_poll_interval() -> None:
    app = create_app(AppSettings(pacing_interval_ms=0, poll_interval_ms=50, log_level="WARNING"))
    client = app.test_client()
    try:
        assert _controller(app).scheduler.interval_ms == 100
        assert client.post("/api/config/speed", json={"speed": "turbo"}).get_json() == {"interval_ms": 100}
        assert client.post("/api/config/speed", json={"interval_ms": 30}).get_json() == {"interval_ms": 100}
        assert client.post("/api/config/speed", json={"speed": "slow"}).get_json() == {"interval_ms": 1000}
        assert "const POLL_MS = 50;" in client.get("/").get_data(as_text=True)
    finally:
        _controller(app).shutdown()
