from __future__ import annotations

import random

import pytest

from graphite_adapter.config import RetryConfig
from graphite_adapter.core.retry import RetryBudget, backoff_seconds, is_retryable_http_status


def test_budget_stops_at_max_attempts():
    budget = RetryBudget(RetryConfig(max_attempts=2, total_retry_budget_seconds=60.0), started_at=0.0)
    budget.begin_attempt()
    assert budget.allows_retry(1.0)
    budget.begin_attempt()
    assert not budget.allows_retry(1.0)


def test_budget_stops_when_time_is_spent():
    budget = RetryBudget(RetryConfig(max_attempts=5, total_retry_budget_seconds=60.0), started_at=0.0)
    budget.begin_attempt()
    assert not budget.allows_retry(61.0)


def test_backoff_stays_within_jitter_band():
    value = backoff_seconds(3, ceiling=30.0, rng=random.Random(7))
    assert 3.6 <= value <= 4.4


def test_backoff_is_capped_and_zero_when_disabled():
    assert backoff_seconds(10, ceiling=0.0, rng=random.Random(1)) == 0.0
    assert backoff_seconds(10, ceiling=5.0, rng=random.Random(1)) <= 5.5


@pytest.mark.parametrize(("status", "expected"), [(500, True), (503, True), (404, False), (None, False)])
def test_is_retryable_http_status(status, expected):
    assert is_retryable_http_status(status) is expected
