from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    RATE_LIMITED = "rate_limited"
    CIRCUIT_OPEN = "circuit_open"
    TIMEOUT = "timeout"
    COMPUTATION_FAILED = "computation_failed"


class ResilienceError(Exception):
    """Base class for failures raised by a protected operation."""

    kind: FailureKind

    def __init__(self, label: str, message: str, retry_after_sec: float | None = None) -> None:
        super().__init__(message)
        self.label = label
        self.retry_after_sec = retry_after_sec


class RateLimitExceeded(ResilienceError):
    kind = FailureKind.RATE_LIMITED

    def __init__(self, label: str, retry_after_sec: float) -> None:
        super().__init__(
            label,
            f"{label}: called too soon, retry in {retry_after_sec:.3f}s",
            retry_after_sec=retry_after_sec,
        )


class CircuitOpen(ResilienceError):
    kind = FailureKind.CIRCUIT_OPEN

    def __init__(self, label: str, retry_after_sec: float) -> None:
        super().__init__(
            label,
            f"{label}: circuit open, retry in {retry_after_sec:.1f}s",
            retry_after_sec=retry_after_sec,
        )


class OperationTimeout(ResilienceError):
    kind = FailureKind.TIMEOUT

    def __init__(self, label: str, timeout_sec: float) -> None:
        super().__init__(label, f"{label}: timed out after {timeout_sec:.1f}s")
        self.timeout_sec = timeout_sec


class ComputationFailed(ResilienceError):
    kind = FailureKind.COMPUTATION_FAILED

    def __init__(self, label: str, cause: BaseException) -> None:
        super().__init__(label, f"{label}: {type(cause).__name__}: {cause}")
        self.cause = cause
