from __future__ import annotations

from dataclasses import dataclass
from datetime import date

import pytest


@dataclass
class FakeClock:
    now: float = 1_000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def today() -> date:
    # A Monday in the coffee-region low season, outside the rain windows.
    return date(2026, 2, 9)
