from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable

from yieldcast.resilience.errors import RateLimitExceeded

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RateGate:
    """Rejects calls that arrive less than ``min_interval_sec`` after the last accepted one."""

    name: str
    min_interval_sec: float
    clock: Callable[[], float] = time.monotonic
    last_call_at: float | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def check(self) -> None:
        with self._lock:
            now = self.clock()
            if self.last_call_at is not None:
                elapsed = now - self.last_call_at
                if elapsed < self.min_interval_sec:
                    retry_after = self.min_interval_sec - elapsed
                    logger.warning("[RateGate:%s] rejected, retry in %.3fs", self.name, retry_after)
                    raise RateLimitExceeded(self.name, retry_after)
            self.last_call_at = now
