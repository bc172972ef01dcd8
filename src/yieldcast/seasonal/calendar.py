from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from yieldcast.config import MarketClass
from yieldcast.seasonal.base import SeasonType, is_weekend

MonthDay = tuple[int, int]
Window = tuple[MonthDay, MonthDay]

YEAR_END: Window = ((12, 15), (1, 15))
HOLY_WEEK: Window = ((3, 20), (4, 10))
MID_YEAR: Window = ((6, 15), (7, 31))
SHOULDER_WINDOWS: tuple[Window, ...] = (((8, 1), (9, 15)), ((10, 15), (11, 20)))
RAIN_WINDOWS: tuple[Window, ...] = (((4, 15), (5, 31)), ((10, 1), (11, 30)))

MULTIPLIERS: dict[MarketClass, dict[SeasonType, float]] = {
    MarketClass.COFFEE_REGION: {SeasonType.HIGH: 1.35, SeasonType.MEDIUM: 1.10, SeasonType.LOW: 0.70},
    MarketClass.DEFAULT: {SeasonType.HIGH: 1.15, SeasonType.MEDIUM: 1.00, SeasonType.LOW: 0.90},
}


def in_window(day: date, window: Window) -> bool:
    start, end = window
    key = (day.month, day.day)
    if start <= end:
        return start <= key <= end
    # wraps the new year
    return key >= start or key <= end


def is_rain_season(day: date) -> bool:
    return any(in_window(day, window) for window in RAIN_WINDOWS)


@dataclass(frozen=True, slots=True)
class SeasonCalendar:
    market_class: MarketClass

    def season_for(self, day: date) -> SeasonType:
        if self.market_class is MarketClass.COFFEE_REGION:
            return self._coffee_region_season(day)
        return self._default_season(day)

    def classify(self, day: date) -> tuple[SeasonType, float]:
        season = self.season_for(day)
        return season, MULTIPLIERS[self.market_class][season]

    def _coffee_region_season(self, day: date) -> SeasonType:
        if in_window(day, YEAR_END) or in_window(day, HOLY_WEEK) or in_window(day, MID_YEAR):
            return SeasonType.HIGH
        if is_weekend(day) and any(in_window(day, window) for window in SHOULDER_WINDOWS):
            return SeasonType.MEDIUM
        return SeasonType.LOW

    def _default_season(self, day: date) -> SeasonType:
        if in_window(day, YEAR_END) or in_window(day, MID_YEAR):
            return SeasonType.HIGH
        if in_window(day, HOLY_WEEK) or is_weekend(day):
            return SeasonType.MEDIUM
        return SeasonType.LOW
