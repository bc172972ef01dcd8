from __future__ import annotations

from yieldcast.seasonal.base import ForecastDay, HistoricalPoint, SeasonType
from yieldcast.seasonal.calendar import SeasonCalendar, is_rain_season
from yieldcast.seasonal.history import generate_history
from yieldcast.seasonal.model import SeasonalModel

__all__ = [
    "ForecastDay",
    "HistoricalPoint",
    "SeasonCalendar",
    "SeasonType",
    "SeasonalModel",
    "generate_history",
    "is_rain_season",
]
