from __future__ import annotations

import asyncio
import inspect
import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, TypeVar

from yieldcast.resilience.errors import CircuitOpen, ComputationFailed, OperationTimeout

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


@dataclass(slots=True)
class CircuitBreaker:
    """
    Consecutive-failure circuit breaker with a per-call timeout.

    Transitions:
        CLOSED -> OPEN: failure_count reaches failure_threshold
        OPEN -> HALF_OPEN: first call after next_attempt_at
        HALF_OPEN -> CLOSED: the single trial call succeeds
        HALF_OPEN -> OPEN: the trial call fails (cooldown restarts)

    State is only touched under ``_lock`` and never across an await, so
    tasks on the event loop and worker threads see consistent transitions.
    """

    name: str
    failure_threshold: int
    open_cooldown_sec: float
    timeout_sec: float = 30.0
    clock: Callable[[], float] = time.monotonic
    state: CircuitState = CircuitState.CLOSED
    failure_count: int = 0
    opened_at: float | None = None
    next_attempt_at: float | None = None
    _trial_in_flight: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    async def call(self, fn: Callable[[], Awaitable[T]] | Callable[[], T], label: str | None = None) -> T:
        """
        Run ``fn`` through the breaker.

        Coroutine functions are awaited; plain callables run in a worker
        thread so the timeout can still fire on CPU-bound work. If a plain
        callable hands back an awaitable (``lambda: fetch(url)``), that is
        awaited too, under the same timeout. A result that arrives after the
        timeout is discarded.

        Raises:
            CircuitOpen: the breaker is open or a half-open trial is running
            OperationTimeout: ``fn`` did not finish within ``timeout_sec``
            ComputationFailed: ``fn`` raised
        """
        label = label or self.name
        is_trial = self._admit(label)
        settled = False
        try:
            result = await asyncio.wait_for(self._invoke(fn, label), timeout=self.timeout_sec)
        except asyncio.TimeoutError as exc:
            # Only wait_for raises this here; errors from fn arrive wrapped.
            settled = True
            self._on_failure(label, is_trial, "timeout")
            raise OperationTimeout(label, self.timeout_sec) from exc
        except ComputationFailed as exc:
            settled = True
            self._on_failure(label, is_trial, repr(exc.cause))
            raise
        else:
            settled = True
            self._on_success(label, is_trial)
            return result
        finally:
            if not settled:
                self._release(label, is_trial)

    @staticmethod
    async def _invoke(fn: Callable[[], Any], label: str) -> Any:
        try:
            if inspect.iscoroutinefunction(fn):
                result = await fn()
            else:
                result = await asyncio.to_thread(fn)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            raise ComputationFailed(label, exc) from exc
        return result

    def remaining_cooldown(self) -> float:
        if self.next_attempt_at is None:
            return 0.0
        return max(0.0, self.next_attempt_at - self.clock())

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return {
                "name": self.name,
                "state": self.state.value,
                "failure_count": self.failure_count,
                "failure_threshold": self.failure_threshold,
                "open_cooldown_sec": self.open_cooldown_sec,
                "opened_at": self.opened_at,
                "next_attempt_at": self.next_attempt_at,
                "trial_in_flight": self._trial_in_flight,
            }

    def reset(self) -> None:
        with self._lock:
            logger.info("[CircuitBreaker:%s] manual reset", self.name)
            self.state = CircuitState.CLOSED
            self.failure_count = 0
            self.opened_at = None
            self.next_attempt_at = None
            self._trial_in_flight = False

    def _admit(self, label: str) -> bool:
        """Return True when the caller is the half-open trial."""
        with self._lock:
            if self.state is CircuitState.CLOSED:
                return False
            if self.state is CircuitState.OPEN:
                remaining = self.remaining_cooldown()
                if remaining > 0.0:
                    logger.warning("[CircuitBreaker:%s] %s rejected, open for %.1fs", self.name, label, remaining)
                    raise CircuitOpen(label, remaining)
                logger.info("[CircuitBreaker:%s] OPEN -> HALF_OPEN", self.name)
                self.state = CircuitState.HALF_OPEN
            if self._trial_in_flight:
                logger.warning("[CircuitBreaker:%s] %s rejected, trial in flight", self.name, label)
                raise CircuitOpen(label, 0.0)
            self._trial_in_flight = True
            return True

    def _on_success(self, label: str, is_trial: bool) -> None:
        with self._lock:
            if is_trial:
                logger.info("[CircuitBreaker:%s] HALF_OPEN -> CLOSED after %s", self.name, label)
                self.state = CircuitState.CLOSED
                self.failure_count = 0
                self.opened_at = None
                self.next_attempt_at = None
                self._trial_in_flight = False
            elif self.state is CircuitState.CLOSED:
                self.failure_count = 0

    def _on_failure(self, label: str, is_trial: bool, reason: str) -> None:
        with self._lock:
            self.failure_count += 1
            if is_trial:
                self._trial_in_flight = False
                self._open()
                logger.error("[CircuitBreaker:%s] HALF_OPEN -> OPEN, %s failed: %s", self.name, label, reason)
                return
            logger.warning(
                "[CircuitBreaker:%s] %s failed (%d/%d): %s",
                self.name,
                label,
                self.failure_count,
                self.failure_threshold,
                reason,
            )
            if self.state is CircuitState.CLOSED and self.failure_count >= self.failure_threshold:
                self._open()
                logger.error(
                    "[CircuitBreaker:%s] CLOSED -> OPEN for %.1fs", self.name, self.open_cooldown_sec
                )

    def _release(self, label: str, is_trial: bool) -> None:
        if not is_trial:
            return
        with self._lock:
            # Abandoned trial: leave the breaker ready to admit a new one.
            logger.info("[CircuitBreaker:%s] %s abandoned during trial", self.name, label)
            self._trial_in_flight = False
            self.state = CircuitState.OPEN

    def _open(self) -> None:
        now = self.clock()
        self.state = CircuitState.OPEN
        self.opened_at = now
        self.next_attempt_at = now + self.open_cooldown_sec
