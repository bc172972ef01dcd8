from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from functools import partial
from typing import Any, Callable, Mapping

from yieldcast.config import MarketProfile, OperationKey, PropertyType, ServiceConfig, resolve_market
from yieldcast.pricing import CriticalPeriod, ForecastPoint, PricingAnalysis, PricingStrategist
from yieldcast.resilience import FailureKind, ResilienceError, ResilienceRegistry, build_registry
from yieldcast.seasonal import SeasonCalendar, SeasonalModel

logger = logging.getLogger(__name__)

NEXT_DAYS = 7


@dataclass(frozen=True, slots=True)
class Failure:
    kind: FailureKind
    label: str
    message: str
    retry_after_sec: float | None = None

    def to_dict(self) -> Mapping[str, Any]:
        return {
            "kind": self.kind.value,
            "label": self.label,
            "message": self.message,
            "retry_after_sec": self.retry_after_sec,
        }


@dataclass(frozen=True, slots=True)
class ForecastResult:
    profile: MarketProfile
    rooms: int
    generated_on: date
    history_days: int
    analysis: PricingAnalysis

    @property
    def forecast(self) -> list[ForecastPoint]:
        return self.analysis.points

    @property
    def next_7_days(self) -> list[ForecastPoint]:
        return self.analysis.points[:NEXT_DAYS]

    @property
    def critical_periods(self) -> list[CriticalPeriod]:
        return self.analysis.critical_periods

    @property
    def actionable_recommendations(self) -> list[str]:
        return self.analysis.recommendations

    def forecast_summary(self) -> Mapping[str, Any]:
        metrics = self.analysis.survival_metrics
        points = self.analysis.points
        avg_adr = round(sum(p.recommended_adr for p in points) / len(points)) if points else 0
        return {
            "location": self.profile.location,
            "property_type": self.profile.property_type.value,
            "market_class": self.profile.market_class.value,
            "extreme_seasonality": self.profile.extreme_seasonality,
            "rooms": self.rooms,
            "base_adr": self.profile.base_adr,
            "generated_on": self.generated_on.isoformat(),
            "history_days": self.history_days,
            "horizon_days": len(points),
            "avg_occupancy_pct": metrics.avg_occupancy_pct,
            "avg_recommended_adr": avg_adr,
            "projected_room_revenue": metrics.projected_room_revenue,
        }

    def to_dict(self) -> Mapping[str, Any]:
        return {
            "forecast_summary": dict(self.forecast_summary()),
            "seasonal_analysis": _plain(asdict(self.analysis.seasonal_analysis)),
            "next_7_days": [_plain(asdict(p)) for p in self.next_7_days],
            "critical_periods": [_plain(asdict(c)) for c in self.critical_periods],
            "survival_metrics": _plain(asdict(self.analysis.survival_metrics)),
            "actionable_recommendations": list(self.actionable_recommendations),
            "forecast": [_plain(asdict(p)) for p in self.forecast],
        }


def _plain(row: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in row.items():
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, date):
            value = value.isoformat()
        out[key] = value
    return out


@dataclass(slots=True)
class ForecastService:
    config: ServiceConfig
    registry: ResilienceRegistry
    today: Callable[[], date] = date.today
    strategist: PricingStrategist = field(init=False)

    def __post_init__(self) -> None:
        self.strategist = PricingStrategist(
            critical_occupancy_threshold=self.config.forecast.critical_occupancy_threshold,
            break_even_occupancy_pct=self.config.forecast.break_even_occupancy_pct,
        )

    @classmethod
    def from_config(
        cls,
        config: ServiceConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
        today: Callable[[], date] = date.today,
    ) -> ForecastService:
        config = config or ServiceConfig()
        return cls(config=config, registry=build_registry(config, clock=clock), today=today)

    async def run(
        self,
        location: str,
        property_type: PropertyType | str,
        rooms: int,
    ) -> ForecastResult | Failure:
        if rooms < 1:
            msg = f"rooms must be positive, got {rooms}"
            raise ValueError(msg)
        profile = resolve_market(location, property_type)
        key = OperationKey.FORECASTING
        run_date = self.today()
        try:
            self.registry.gate(key).check()
            history_days, analysis = await self.registry.breaker(key).call(
                partial(self._compute, profile, rooms, run_date),
                key.value,
            )
        except ResilienceError as exc:
            logger.warning(
                "%s failed (%s) location=%r property_type=%s: %s",
                exc.label,
                exc.kind.value,
                location,
                profile.property_type.value,
                exc,
            )
            return Failure(kind=exc.kind, label=exc.label, message=str(exc), retry_after_sec=exc.retry_after_sec)
        logger.info(
            "%s ok location=%r market=%s days=%d critical=%d",
            key.value,
            location,
            profile.market_class.value,
            len(analysis.points),
            len(analysis.critical_periods),
        )
        return ForecastResult(
            profile=profile,
            rooms=rooms,
            generated_on=run_date,
            history_days=history_days,
            analysis=analysis,
        )

    def _compute(self, profile: MarketProfile, rooms: int, run_date: date) -> tuple[int, PricingAnalysis]:
        cfg = self.config.forecast
        model = SeasonalModel(
            calendar=SeasonCalendar(profile.market_class),
            base_adr=profile.base_adr,
            lookback_months=cfg.lookback_months,
            horizon_days=cfg.horizon_days,
            seed=cfg.seed,
        )
        history = model.generate(run_date)
        days = model.forecast(history, run_date)
        if len(days) != cfg.horizon_days:
            msg = f"Expected {cfg.horizon_days} forecast days, got {len(days)}"
            raise ValueError(msg)
        return len(history), self.strategist.analyze(days, profile.base_adr, rooms)
