from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class SeasonType(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


@dataclass(frozen=True, slots=True)
class HistoricalPoint:
    date: date
    occupancy_pct: int
    adr: int
    season: SeasonType


@dataclass(frozen=True, slots=True)
class ForecastDay:
    day_offset: int
    date: date
    occupancy_pct: int
    season: SeasonType
    seasonal_multiplier: float


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5
