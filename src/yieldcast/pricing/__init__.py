from __future__ import annotations

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
from yieldcast.pricing.strategist import PricingStrategist, price_day

__all__ = [
    "CashFlowPriority",
    "CriticalPeriod",
    "ForecastPoint",
    "PricingAnalysis",
    "PricingStrategist",
    "PricingStrategy",
    "RevenueFocus",
    "SeasonalAnalysis",
    "SurvivalMetrics",
    "price_day",
]
