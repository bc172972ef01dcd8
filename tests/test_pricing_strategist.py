from __future__ import annotations

from datetime import date, timedelta

import pytest

from yieldcast.pricing import (
    CashFlowPriority,
    PricingStrategist,
    PricingStrategy,
    RevenueFocus,
    price_day,
)
from yieldcast.seasonal import ForecastDay, SeasonType

START = date(2026, 3, 1)


def _days(*rows: tuple[SeasonType, float]) -> list[ForecastDay]:
    return [
        ForecastDay(
            day_offset=i,
            date=START + timedelta(days=i),
            occupancy_pct=occupancy,
            season=season,
            seasonal_multiplier=1.0,
        )
        for i, (season, occupancy) in enumerate(rows, start=1)
    ]


def test_pricing_table() -> None:
    assert price_day(SeasonType.LOW, 20) == (PricingStrategy.SURVIVAL_PRICING, 0.65, RevenueFocus.VOLUME)
    assert price_day(SeasonType.HIGH, 90) == (PricingStrategy.MAXIMIZE_REVENUE, 1.4, RevenueFocus.YIELD)
    assert price_day(SeasonType.MEDIUM, 50) == (PricingStrategy.OPTIMIZE_MIX, 1.1, RevenueFocus.YIELD)
    assert price_day(SeasonType.LOW, 25)[0] is PricingStrategy.FILL_INVENTORY
    assert price_day(SeasonType.LOW, 39)[0] is PricingStrategy.FILL_INVENTORY
    assert price_day(SeasonType.LOW, 40) == (PricingStrategy.COMPETITIVE_RATE, 0.90, RevenueFocus.VOLUME)
    assert price_day(SeasonType.HIGH, 15)[0] is PricingStrategy.MAXIMIZE_REVENUE


def test_recommended_adr_scales_base_rate() -> None:
    analysis = PricingStrategist().analyze(_days((SeasonType.HIGH, 90), (SeasonType.LOW, 20)), base_adr=220_000)
    high, low = analysis.points
    assert high.recommended_adr == 308_000
    assert high.price_multiplier == 1.4
    assert low.pricing_strategy is PricingStrategy.SURVIVAL_PRICING
    assert low.recommended_adr == 143_000


def test_critical_period_detection() -> None:
    analysis = PricingStrategist().analyze(_days((SeasonType.LOW, 25), (SeasonType.LOW, 35)), base_adr=220_000)
    assert len(analysis.critical_periods) == 1
    critical = analysis.critical_periods[0]
    assert critical.day_offset == 1
    assert critical.occupancy_pct == 25
    assert critical.break_even_occupancy_pct == 28
    assert critical.survival_rate_adr == 143_000


def test_cash_flow_priority_threshold() -> None:
    strategist = PricingStrategist()
    stable = strategist.analyze(_days(*[(SeasonType.LOW, 20)] * 10), base_adr=100_000)
    critical = strategist.analyze(_days(*[(SeasonType.LOW, 20)] * 11), base_adr=100_000)
    assert stable.seasonal_analysis.cash_flow_priority is CashFlowPriority.STABLE
    assert critical.seasonal_analysis.cash_flow_priority is CashFlowPriority.CRITICAL


def test_recommendations_follow_thresholds() -> None:
    strategist = PricingStrategist()
    premium = strategist.analyze(_days(*[(SeasonType.HIGH, 85)] * 8), base_adr=100_000).recommendations
    assert len(premium) == 1
    assert premium[0].startswith("Premium pricing")

    severe = strategist.analyze(_days(*[(SeasonType.LOW, 20)] * 16), base_adr=100_000).recommendations
    assert [r.split(":")[0] for r in severe] == ["Severe operational adjustment"]

    diversify = strategist.analyze(_days(*[(SeasonType.LOW, 20)] * 6), base_adr=100_000).recommendations
    assert [r.split(":")[0] for r in diversify] == ["Diversify demand"]

    steady = strategist.analyze(_days(*[(SeasonType.LOW, 50)] * 7), base_adr=100_000).recommendations
    assert [r.split(":")[0] for r in steady] == ["Steady state"]


def test_survival_metrics() -> None:
    analysis = PricingStrategist().analyze(
        _days((SeasonType.HIGH, 50), (SeasonType.HIGH, 50), (SeasonType.LOW, 20)),
        base_adr=100_000,
        rooms=10,
    )
    metrics = analysis.survival_metrics
    assert metrics.survival_rate_adr == 65_000
    assert metrics.critical_days == 1
    assert metrics.days_below_break_even == 1
    assert metrics.min_occupancy_pct == 20
    assert metrics.avg_occupancy_pct == 40.0
    assert metrics.projected_room_revenue == 1_400_000 + 130_000
    assert analysis.seasonal_analysis.high_days == 2
    assert analysis.seasonal_analysis.low_days == 1


def test_configurable_thresholds() -> None:
    strategist = PricingStrategist(critical_occupancy_threshold=40, break_even_occupancy_pct=33)
    analysis = strategist.analyze(_days((SeasonType.LOW, 35)), base_adr=100_000)
    assert analysis.critical_periods[0].break_even_occupancy_pct == 33


def test_malformed_input_is_rejected() -> None:
    strategist = PricingStrategist()
    days = _days((SeasonType.LOW, 30), (SeasonType.LOW, 30))
    with pytest.raises(ValueError):
        strategist.analyze(list(reversed(days)), base_adr=100_000)
    with pytest.raises(ValueError):
        strategist.analyze(_days((SeasonType.LOW, float("nan"))), base_adr=100_000)
