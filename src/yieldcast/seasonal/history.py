from __future__ import annotations

from datetime import date, timedelta

import numpy as np
import pandas as pd

from yieldcast.config import MarketClass
from yieldcast.seasonal.base import HistoricalPoint, SeasonType, is_weekend
from yieldcast.seasonal.calendar import SeasonCalendar, is_rain_season

BASE_OCCUPANCY: dict[MarketClass, dict[SeasonType, float]] = {
    MarketClass.COFFEE_REGION: {SeasonType.HIGH: 80.0, SeasonType.MEDIUM: 55.0, SeasonType.LOW: 30.0},
    MarketClass.DEFAULT: {SeasonType.HIGH: 75.0, SeasonType.MEDIUM: 62.0, SeasonType.LOW: 50.0},
}
LOW_WEEKEND_LIFT = 12.0
WEEKEND_LIFT = 5.0
RAIN_PENALTY = -8.0
NOISE_SIGMA = 4.0
NOISE_LIMIT = 8.0
MIN_OCCUPANCY = 10
MAX_OCCUPANCY = 95


def adr_for(base_adr: int, occupancy_pct: float) -> int:
    return int(round(base_adr * (0.7 + 0.6 * occupancy_pct / 100.0)))


def generate_history(
    calendar: SeasonCalendar,
    base_adr: int,
    today: date,
    lookback_months: int,
    seed: int,
) -> list[HistoricalPoint]:
    """Synthesize one point per day from ``today - lookback_months`` through yesterday."""
    start = (pd.Timestamp(today) - pd.DateOffset(months=lookback_months)).date()
    days = pd.date_range(start=start, end=today - timedelta(days=1), freq="D")
    rng = np.random.default_rng(seed)
    noise = np.clip(rng.normal(0.0, NOISE_SIGMA, size=len(days)), -NOISE_LIMIT, NOISE_LIMIT)
    base = BASE_OCCUPANCY[calendar.market_class]

    points: list[HistoricalPoint] = []
    for stamp, jitter in zip(days, noise):
        day = stamp.date()
        season = calendar.season_for(day)
        occupancy = base[season]
        if is_weekend(day):
            occupancy += LOW_WEEKEND_LIFT if season is SeasonType.LOW else WEEKEND_LIFT
        if is_rain_season(day):
            occupancy += RAIN_PENALTY
        value = min(MAX_OCCUPANCY, max(MIN_OCCUPANCY, int(round(occupancy + float(jitter)))))
        points.append(HistoricalPoint(date=day, occupancy_pct=value, adr=adr_for(base_adr, value), season=season))
    return points
