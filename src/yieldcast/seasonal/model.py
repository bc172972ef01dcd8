from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Sequence

import numpy as np

from yieldcast.seasonal.base import ForecastDay, HistoricalPoint, SeasonType, is_weekend
from yieldcast.seasonal.calendar import SeasonCalendar, is_rain_season
from yieldcast.seasonal.history import generate_history

AR_WINDOW = 14
SEASONAL_LAG_DAYS = 365
AR_WEIGHT = 0.3
SEASONAL_WEIGHT = 0.5
WEEKEND_WEIGHT = 0.2
WEEKEND_BOOST: dict[SeasonType, float] = {
    SeasonType.LOW: 20.0,
    SeasonType.MEDIUM: 5.0,
    SeasonType.HIGH: -5.0,
}
RAIN_PENALTY = -5.0
MIN_FORECAST = 15
MAX_FORECAST = 95


@dataclass(frozen=True, slots=True)
class SeasonalModel:
    """
    Seasonal occupancy model.

    Often called "ARIMA" upstream, but there is no differencing and nothing
    is fitted: each day is a fixed blend of a short autoregressive average,
    last year's value scaled by the season multiplier, a weekend term and a
    rain-season penalty. The weights are tuned together with the pricing
    thresholds, so they are kept as plain constants.
    """

    calendar: SeasonCalendar
    base_adr: int
    lookback_months: int = 24
    horizon_days: int = 30
    seed: int = 7

    def generate(self, today: date) -> list[HistoricalPoint]:
        return generate_history(self.calendar, self.base_adr, today, self.lookback_months, self.seed)

    def forecast(self, history: Sequence[HistoricalPoint], today: date) -> list[ForecastDay]:
        if not history:
            msg = "Cannot forecast without history"
            raise ValueError(msg)
        # Each prediction is appended here and feeds the AR term of the
        # following days, so momentum compounds across the horizon.
        working: list[float] = [float(point.occupancy_pct) for point in history]
        # History ends the day before today, so last year is looked up by date.
        by_date: dict[date, float] = {point.date: float(point.occupancy_pct) for point in history}
        days: list[ForecastDay] = []
        for offset in range(1, self.horizon_days + 1):
            target = today + timedelta(days=offset)
            season, multiplier = self.calendar.classify(target)
            ar = self._autoregressive(working)
            seasonal = self._last_year(by_date, target, fallback=ar) * multiplier
            boost = WEEKEND_BOOST[season] if is_weekend(target) else 0.0
            rain = RAIN_PENALTY if is_rain_season(target) else 0.0
            raw = AR_WEIGHT * ar + SEASONAL_WEIGHT * seasonal + WEEKEND_WEIGHT * boost + rain
            predicted = min(MAX_FORECAST, max(MIN_FORECAST, int(round(raw))))
            working.append(float(predicted))
            by_date[target] = float(predicted)
            days.append(
                ForecastDay(
                    day_offset=offset,
                    date=target,
                    occupancy_pct=predicted,
                    season=season,
                    seasonal_multiplier=multiplier,
                )
            )
        return days

    @staticmethod
    def _autoregressive(series: list[float]) -> float:
        window = np.asarray(series[-AR_WINDOW:], dtype=float)
        weights = np.arange(1, len(window) + 1, dtype=float)
        return float(np.average(window, weights=weights))

    @staticmethod
    def _last_year(by_date: dict[date, float], target: date, fallback: float) -> float:
        return by_date.get(target - timedelta(days=SEASONAL_LAG_DAYS), fallback)
