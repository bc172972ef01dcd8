from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Mapping

from yieldcast.config import OperationKey, ServiceConfig
from yieldcast.resilience.breaker import CircuitBreaker
from yieldcast.resilience.gate import RateGate


@dataclass(frozen=True, slots=True)
class ResilienceRegistry:
    """Process-wide owner of one breaker and one gate per operation key."""

    breakers: Mapping[OperationKey, CircuitBreaker]
    gates: Mapping[OperationKey, RateGate]

    def breaker(self, key: OperationKey) -> CircuitBreaker:
        try:
            return self.breakers[key]
        except KeyError:
            msg = f"No circuit breaker registered for {key!r}"
            raise KeyError(msg) from None

    def gate(self, key: OperationKey) -> RateGate:
        try:
            return self.gates[key]
        except KeyError:
            msg = f"No rate gate registered for {key!r}"
            raise KeyError(msg) from None

    def snapshot(self) -> dict[str, dict[str, object]]:
        return {key.value: breaker.snapshot() for key, breaker in self.breakers.items()}


def build_registry(
    config: ServiceConfig,
    clock: Callable[[], float] = time.monotonic,
) -> ResilienceRegistry:
    breakers: dict[OperationKey, CircuitBreaker] = {}
    gates: dict[OperationKey, RateGate] = {}
    for key in OperationKey:
        cfg = config.breaker_for(key)
        breakers[key] = CircuitBreaker(
            name=key.value,
            failure_threshold=cfg.failure_threshold,
            open_cooldown_sec=cfg.open_cooldown_sec,
            timeout_sec=config.operation_timeout_sec,
            clock=clock,
        )
        gates[key] = RateGate(
            name=key.value,
            min_interval_sec=config.min_request_interval_sec,
            clock=clock,
        )
    return ResilienceRegistry(breakers=breakers, gates=gates)
