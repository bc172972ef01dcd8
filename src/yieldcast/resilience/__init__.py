from __future__ import annotations

from yieldcast.resilience.breaker import CircuitBreaker, CircuitState
from yieldcast.resilience.errors import (
    CircuitOpen,
    ComputationFailed,
    FailureKind,
    OperationTimeout,
    RateLimitExceeded,
    ResilienceError,
)
from yieldcast.resilience.gate import RateGate
from yieldcast.resilience.registry import ResilienceRegistry, build_registry

__all__ = [
    "CircuitBreaker",
    "CircuitOpen",
    "CircuitState",
    "ComputationFailed",
    "FailureKind",
    "OperationTimeout",
    "RateGate",
    "RateLimitExceeded",
    "ResilienceError",
    "ResilienceRegistry",
    "build_registry",
]
