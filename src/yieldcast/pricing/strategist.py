from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from yieldcast.pricing.models import (
    CashFlowPriority,
    CriticalPeriod,
    ForecastPoint,
    PricingAnalysis,
    PricingStrategy,
    RevenueFocus,
    SeasonalAnalysis,
    SurvivalMetrics,
)
from yieldcast.seasonal import ForecastDay, SeasonType

SURVIVAL_MULTIPLIER = 0.65
CRITICAL_CASH_FLOW_DAYS = 10
PREMIUM_HIGH_DAYS = 7
SEVERE_CRITICAL_DAYS = 15
DIVERSIFY_CRITICAL_DAYS = 5


def price_day(season: SeasonType, occupancy_pct: float) -> tuple[PricingStrategy, float, RevenueFocus]:
    if season is SeasonType.HIGH:
        return PricingStrategy.MAXIMIZE_REVENUE, 1.4, RevenueFocus.YIELD
    if season is SeasonType.MEDIUM:
        return PricingStrategy.OPTIMIZE_MIX, 1.1, RevenueFocus.YIELD
    if occupancy_pct < 25:
        return PricingStrategy.SURVIVAL_PRICING, 0.65, RevenueFocus.VOLUME
    if occupancy_pct < 40:
        return PricingStrategy.FILL_INVENTORY, 0.80, RevenueFocus.VOLUME
    return PricingStrategy.COMPETITIVE_RATE, 0.90, RevenueFocus.VOLUME


@dataclass(frozen=True, slots=True)
class PricingStrategist:
    critical_occupancy_threshold: int = 30
    break_even_occupancy_pct: int = 28

    def analyze(self, days: Sequence[ForecastDay], base_adr: int, rooms: int = 1) -> PricingAnalysis:
        _validate(days)
        survival_adr = int(round(base_adr * SURVIVAL_MULTIPLIER))
        points: list[ForecastPoint] = []
        critical: list[CriticalPeriod] = []
        for day in days:
            strategy, multiplier, focus = price_day(day.season, day.occupancy_pct)
            points.append(
                ForecastPoint(
                    day_offset=day.day_offset,
                    date=day.date,
                    predicted_occupancy_pct=day.occupancy_pct,
                    season_type=day.season,
                    pricing_strategy=strategy,
                    price_multiplier=multiplier,
                    recommended_adr=int(round(base_adr * multiplier)),
                    revenue_focus=focus,
                )
            )
            if day.occupancy_pct < self.critical_occupancy_threshold:
                critical.append(
                    CriticalPeriod(
                        day_offset=day.day_offset,
                        date=day.date,
                        occupancy_pct=day.occupancy_pct,
                        survival_rate_adr=survival_adr,
                        break_even_occupancy_pct=self.break_even_occupancy_pct,
                    )
                )

        seasons = [p.season_type for p in points]
        priority = CashFlowPriority.CRITICAL if len(critical) > CRITICAL_CASH_FLOW_DAYS else CashFlowPriority.STABLE
        analysis = SeasonalAnalysis(
            high_days=seasons.count(SeasonType.HIGH),
            medium_days=seasons.count(SeasonType.MEDIUM),
            low_days=seasons.count(SeasonType.LOW),
            critical_days=len(critical),
            cash_flow_priority=priority,
        )
        return PricingAnalysis(
            points=points,
            critical_periods=critical,
            seasonal_analysis=analysis,
            survival_metrics=self._survival_metrics(points, survival_adr, len(critical), rooms),
            recommendations=self._recommendations(analysis, base_adr),
        )

    def _survival_metrics(
        self,
        points: list[ForecastPoint],
        survival_adr: int,
        critical_days: int,
        rooms: int,
    ) -> SurvivalMetrics:
        occupancy = np.array([p.predicted_occupancy_pct for p in points], dtype=float)
        adr = np.array([p.recommended_adr for p in points], dtype=float)
        if occupancy.size == 0:
            return SurvivalMetrics(survival_adr, self.break_even_occupancy_pct, 0, 0, 0, 0.0, 0)
        revenue = float(np.sum(occupancy / 100.0 * rooms * adr))
        return SurvivalMetrics(
            survival_rate_adr=survival_adr,
            break_even_occupancy_pct=self.break_even_occupancy_pct,
            critical_days=critical_days,
            days_below_break_even=int(np.sum(occupancy < self.break_even_occupancy_pct)),
            min_occupancy_pct=int(occupancy.min()),
            avg_occupancy_pct=round(float(occupancy.mean()), 1),
            projected_room_revenue=int(round(revenue)),
        )

    def _recommendations(self, analysis: SeasonalAnalysis, base_adr: int) -> list[str]:
        recommendations: list[str] = []
        if analysis.high_days > PREMIUM_HIGH_DAYS:
            recommendations.append(
                f"Premium pricing: {analysis.high_days} high-season days ahead; hold rates near "
                f"{int(round(base_adr * 1.4))} and enforce minimum stays."
            )
        if analysis.critical_days > SEVERE_CRITICAL_DAYS:
            recommendations.append(
                f"Severe operational adjustment: {analysis.critical_days} days below "
                f"{self.critical_occupancy_threshold}% occupancy; cut variable costs and close unused inventory."
            )
        elif analysis.critical_days > DIVERSIFY_CRITICAL_DAYS:
            recommendations.append(
                f"Diversify demand: {analysis.critical_days} critical days; target long-stay, corporate "
                "and domestic segments."
            )
        if not recommendations:
            recommendations.append("Steady state: keep the current rate ladder and review weekly.")
        return recommendations


def _validate(days: Sequence[ForecastDay]) -> None:
    for expected, day in enumerate(days, start=1):
        if day.day_offset != expected:
            msg = f"Forecast day {day.day_offset} out of sequence, expected {expected}"
            raise ValueError(msg)
        if not math.isfinite(day.occupancy_pct):
            msg = f"Non-finite occupancy on day {day.day_offset}"
            raise ValueError(msg)
