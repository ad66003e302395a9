from __future__ import annotations

from typing import Iterator

import pytest

from engine import PlaybackScheduler, RunController
from main import create_app
from settings import AppSettings


@pytest.fixture
def controller() -> Iterator[RunController]:
    ctl = RunController(scheduler=PlaybackScheduler(interval_ms=0))
    yield ctl
    ctl.shutdown()


@pytest.fixture
def app():
    app = create_app(AppSettings(pacing_interval_ms=0, poll_interval_ms=5, log_level="WARNING"))
    yield app
    app.extensions["run_controller"].shutdown()


@pytest.fixture
def client(app):
    return app.test_client()
