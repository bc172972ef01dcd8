from __future__ import annotations

import asyncio
from datetime import date
from pathlib import Path

import pytest

from yieldcast.config import ServiceConfig
from yieldcast.service.forecast import ForecastService
from yieldcast.storage import ForecastStore


def test_forecast_archive_round_trip(tmp_path: Path, clock, today: date) -> None:
    config = ServiceConfig()
    service = ForecastService.from_config(config, clock=clock, today=lambda: today)
    result = asyncio.run(service.run("Salento", "finca_cafetera", 24))
    store = ForecastStore(tmp_path / "archive" / "yieldcast.duckdb")

    store.save_forecast("run-1", result, config)

    assert store.run_exists("run-1")
    assert not store.run_exists("run-2")
    runs = store.list_runs()
    assert runs["run_id"].tolist() == ["run-1"]
    assert runs.loc[0, "location"] == "Salento"

    days = store.load_forecast_days("run-1")
    assert len(days) == 30
    assert days["day_offset"].tolist() == list(range(1, 31))
    assert int(days["is_critical"].sum()) == len(result.critical_periods)

    meta = store.load_run_meta("run-1")
    assert meta is not None
    assert meta["config"]["forecast"]["horizon_days"] == 30
    assert meta["config"]["breakers"]["external_apis"]["failure_threshold"] == 5
    assert meta["forecast_summary"]["property_type"] == "finca_cafetera"
    assert store.load_run_meta("missing") is None

    with pytest.raises(ValueError):
        store.save_forecast("run-1", result, config)
