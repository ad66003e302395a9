from __future__ import annotations

import pytest
from pydantic import ValidationError

from algorithms import Algorithm
from settings import AppSettings


def test_defaults() -> None:
    cfg = AppSettings()

    assert cfg.pacing_interval_ms == 300
    assert cfg.algorithm is Algorithm.BUBBLE


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SORTVIZ_PACING_INTERVAL_MS", "25")
    monkeypatch.setenv("SORTVIZ_ALGORITHM", "quick")

    cfg = AppSettings()

    assert cfg.pacing_interval_ms == 25
    assert cfg.algorithm is Algorithm.QUICK


def test_negative_interval_rejected() -> None:
    with pytest.raises(ValidationError):
        AppSettings(pacing_interval_ms=-1)
