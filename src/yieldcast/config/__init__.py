from __future__ import annotations

from yieldcast.config.markets import (
    BASE_ADR,
    MarketClass,
    MarketProfile,
    PropertyType,
    resolve_market,
)
from yieldcast.config.models import (
    BreakerConfig,
    ForecastConfig,
    OperationKey,
    ServiceConfig,
)

__all__ = [
    "BASE_ADR",
    "BreakerConfig",
    "ForecastConfig",
    "MarketClass",
    "MarketProfile",
    "OperationKey",
    "PropertyType",
    "ServiceConfig",
    "resolve_market",
]
