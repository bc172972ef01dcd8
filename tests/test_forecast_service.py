from __future__ import annotations

import asyncio
import json
from datetime import date

import pytest

from yieldcast.config import ForecastConfig, MarketClass, OperationKey, PropertyType, ServiceConfig
from yieldcast.resilience import CircuitState, FailureKind
from yieldcast.seasonal import SeasonalModel
from yieldcast.service.forecast import Failure, ForecastResult, ForecastService


def _service(clock, today: date, config: ServiceConfig | None = None) -> ForecastService:
    return ForecastService.from_config(config, clock=clock, today=lambda: today)


def test_salento_end_to_end(clock, today: date) -> None:
    result = asyncio.run(_service(clock, today).run("Salento", "finca_cafetera", 24))
    assert isinstance(result, ForecastResult)
    assert len(result.forecast) == 30
    assert all(p.pricing_strategy is not None for p in result.forecast)
    below = [p for p in result.forecast if p.predicted_occupancy_pct < 30]
    assert len(result.critical_periods) == len(below)
    assert [c.day_offset for c in result.critical_periods] == [p.day_offset for p in below]
    assert result.next_7_days == result.forecast[:7]
    assert result.profile.market_class is MarketClass.COFFEE_REGION
    assert result.profile.property_type is PropertyType.FINCA_CAFETERA
    assert result.actionable_recommendations


def test_result_serializes_to_json(clock, today: date) -> None:
    result = asyncio.run(_service(clock, today).run("Salento", "finca_cafetera", 24))
    payload = json.loads(json.dumps(result.to_dict()))
    assert set(payload) == {
        "forecast_summary",
        "seasonal_analysis",
        "next_7_days",
        "critical_periods",
        "survival_metrics",
        "actionable_recommendations",
        "forecast",
    }
    assert payload["forecast_summary"]["horizon_days"] == 30
    assert payload["forecast_summary"]["generated_on"] == "2026-02-09"
    assert len(payload["next_7_days"]) == 7
    assert payload["next_7_days"][0]["date"] == "2026-02-10"


def test_runs_are_reproducible(clock, today: date) -> None:
    first = asyncio.run(_service(clock, today).run("Salento", "finca_cafetera", 24))
    second = asyncio.run(_service(clock, today).run("Salento", "finca_cafetera", 24))
    assert first.to_dict() == second.to_dict()


def test_second_call_too_soon_is_rate_limited(clock, today: date) -> None:
    service = _service(clock, today)
    assert isinstance(asyncio.run(service.run("Salento", "hostel", 10)), ForecastResult)
    clock.advance(0.5)
    failure = asyncio.run(service.run("Salento", "hostel", 10))
    assert isinstance(failure, Failure)
    assert failure.kind is FailureKind.RATE_LIMITED
    assert failure.label == "forecasting"
    assert failure.retry_after_sec == pytest.approx(0.5)
    clock.advance(0.5)
    assert isinstance(asyncio.run(service.run("Salento", "hostel", 10)), ForecastResult)


def test_repeated_failures_open_the_circuit(clock, today: date, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[int] = []

    def broken(self, history, run_date):
        calls.append(1)
        raise RuntimeError("model blew up")

    monkeypatch.setattr(SeasonalModel, "forecast", broken)
    service = _service(clock, today)
    for _ in range(3):
        failure = asyncio.run(service.run("Salento", "finca_cafetera", 24))
        assert failure.kind is FailureKind.COMPUTATION_FAILED
        clock.advance(1.0)
    assert service.registry.breaker(OperationKey.FORECASTING).state is CircuitState.OPEN

    failure = asyncio.run(service.run("Salento", "finca_cafetera", 24))
    assert failure.kind is FailureKind.CIRCUIT_OPEN
    assert failure.retry_after_sec == pytest.approx(29.0)
    assert len(calls) == 3
    assert failure.to_dict()["kind"] == "circuit_open"


def test_circuit_recovers_after_cooldown(clock, today: date, monkeypatch: pytest.MonkeyPatch) -> None:
    original = SeasonalModel.forecast

    def broken(self, history, run_date):
        raise RuntimeError("model blew up")

    monkeypatch.setattr(SeasonalModel, "forecast", broken)
    service = _service(clock, today)
    for _ in range(3):
        asyncio.run(service.run("Salento", "finca_cafetera", 24))
        clock.advance(1.0)
    monkeypatch.setattr(SeasonalModel, "forecast", original)
    clock.advance(30.0)
    result = asyncio.run(service.run("Salento", "finca_cafetera", 24))
    assert isinstance(result, ForecastResult)
    breaker = service.registry.breaker(OperationKey.FORECASTING)
    assert breaker.state is CircuitState.CLOSED
    assert breaker.failure_count == 0


def test_unknown_inputs_resolve_to_defaults(clock, today: date) -> None:
    result = asyncio.run(_service(clock, today).run("Somewhere else", "treehouse", 5))
    assert isinstance(result, ForecastResult)
    assert result.profile.market_class is MarketClass.DEFAULT
    assert result.profile.base_adr == 280_000


def test_custom_horizon(clock, today: date) -> None:
    config = ServiceConfig(forecast=ForecastConfig(horizon_days=10, lookback_months=13))
    result = asyncio.run(_service(clock, today, config).run("Pereira", "boutique", 12))
    assert len(result.forecast) == 10
    assert len(result.next_7_days) == 7
    assert result.history_days == (today - date(2025, 1, 9)).days


def test_rooms_must_be_positive(clock, today: date) -> None:
    with pytest.raises(ValueError):
        asyncio.run(_service(clock, today).run("Salento", "hostel", 0))
