"""Retry budget for render requests."""

from __future__ import annotations

import random
from dataclasses import dataclass

from ..config import RetryConfig


def is_retryable_http_status(http_status: int | None) -> bool:
    return http_status is not None and http_status >= 500


def backoff_seconds(attempt: int, *, ceiling: float, rng: random.Random) -> float:
    """``2**(attempt-1)`` seconds capped at ``ceiling``, with +/-10% jitter."""

    base = min(ceiling, float(2 ** (attempt - 1)))
    if base <= 0:
        return 0.0
    return max(0.0, base * (1.0 + 0.1 * (rng.random() * 2.0 - 1.0)))


@dataclass(slots=True)
class RetryBudget:
    """Attempt counter bounded by count and elapsed time."""

    config: RetryConfig
    started_at: float
    attempt: int = 0

    def begin_attempt(self) -> int:
        self.attempt += 1
        return self.attempt

    def allows_retry(self, now: float) -> bool:
        if self.attempt >= self.config.max_attempts:
            return False
        return (now - self.started_at) <= self.config.total_retry_budget_seconds

    def next_delay(self, rng: random.Random) -> float:
        return backoff_seconds(
            self.attempt,
            ceiling=self.config.max_backoff_seconds,
            rng=rng,
        )


__all__ = [
    "is_retryable_http_status",
    "backoff_seconds",
    "RetryBudget",
]
