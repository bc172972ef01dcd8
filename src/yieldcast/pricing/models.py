from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from yieldcast.seasonal import SeasonType


class PricingStrategy(str, Enum):
    MAXIMIZE_REVENUE = "MAXIMIZE_REVENUE"
    OPTIMIZE_MIX = "OPTIMIZE_MIX"
    SURVIVAL_PRICING = "SURVIVAL_PRICING"
    FILL_INVENTORY = "FILL_INVENTORY"
    COMPETITIVE_RATE = "COMPETITIVE_RATE"


class RevenueFocus(str, Enum):
    VOLUME = "VOLUME"
    YIELD = "YIELD"


class CashFlowPriority(str, Enum):
    CRITICAL = "CRITICAL"
    STABLE = "STABLE"


@dataclass(frozen=True, slots=True)
class ForecastPoint:
    day_offset: int
    date: date
    predicted_occupancy_pct: int
    season_type: SeasonType
    pricing_strategy: PricingStrategy
    price_multiplier: float
    recommended_adr: int
    revenue_focus: RevenueFocus


@dataclass(frozen=True, slots=True)
class CriticalPeriod:
    day_offset: int
    date: date
    occupancy_pct: int
    survival_rate_adr: int
    break_even_occupancy_pct: int


@dataclass(frozen=True, slots=True)
class SeasonalAnalysis:
    high_days: int
    medium_days: int
    low_days: int
    critical_days: int
    cash_flow_priority: CashFlowPriority


@dataclass(frozen=True, slots=True)
class SurvivalMetrics:
    survival_rate_adr: int
    break_even_occupancy_pct: int
    critical_days: int
    days_below_break_even: int
    min_occupancy_pct: int
    avg_occupancy_pct: float
    projected_room_revenue: int


@dataclass(frozen=True, slots=True)
class PricingAnalysis:
    points: list[ForecastPoint]
    critical_periods: list[CriticalPeriod]
    seasonal_analysis: SeasonalAnalysis
    survival_metrics: SurvivalMetrics
    recommendations: list[str]
