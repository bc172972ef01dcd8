from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class OperationKey(str, Enum):
    FORECASTING = "forecasting"
    EXTERNAL_APIS = "external_apis"


@dataclass(frozen=True, slots=True)
class BreakerConfig:
    failure_threshold: int = 3
    open_cooldown_sec: float = 30.0


def _default_breakers() -> dict[OperationKey, BreakerConfig]:
    return {
        OperationKey.FORECASTING: BreakerConfig(failure_threshold=3, open_cooldown_sec=30.0),
        OperationKey.EXTERNAL_APIS: BreakerConfig(failure_threshold=5, open_cooldown_sec=60.0),
    }


@dataclass(frozen=True, slots=True)
class ForecastConfig:
    lookback_months: int = 24
    horizon_days: int = 30
    seed: int = 7
    critical_occupancy_threshold: int = 30
    break_even_occupancy_pct: int = 28


@dataclass(frozen=True, slots=True)
class ServiceConfig:
    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    breakers: Mapping[OperationKey, BreakerConfig] = field(default_factory=_default_breakers)
    min_request_interval_sec: float = 1.0
    operation_timeout_sec: float = 30.0

    def breaker_for(self, key: OperationKey) -> BreakerConfig:
        """Return the configured breaker for ``key``, else its per-key default."""
        override = self.breakers.get(key)
        return override if override is not None else _default_breakers()[key]

    def to_metadata(self) -> Mapping[str, Any]:
        return {
            "forecast": {
                "lookback_months": self.forecast.lookback_months,
                "horizon_days": self.forecast.horizon_days,
                "seed": self.forecast.seed,
                "critical_occupancy_threshold": self.forecast.critical_occupancy_threshold,
                "break_even_occupancy_pct": self.forecast.break_even_occupancy_pct,
            },
            "breakers": {
                key.value: {
                    "failure_threshold": self.breaker_for(key).failure_threshold,
                    "open_cooldown_sec": self.breaker_for(key).open_cooldown_sec,
                }
                for key in OperationKey
            },
            "min_request_interval_sec": self.min_request_interval_sec,
            "operation_timeout_sec": self.operation_timeout_sec,
        }
