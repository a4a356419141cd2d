from __future__ import annotations

from collections.abc import Sequence

from graphite_adapter.config import CacheConfig, GraphiteClientConfig, RetryConfig


class Response:
    def __init__(self, status_code: int, payload: object):
        self.status_code = status_code
        self._payload = payload

    def json(self) -> object:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


Step = Response | Exception


class SyncSequencedClient:
    def __init__(self, steps: Sequence[Step]):
        self.steps = list(steps)
        self.calls: list[tuple[str, list[tuple[str, str]]]] = []
        self.closed = False

    def get(self, endpoint: str, params):
        self.calls.append((endpoint, list(params)))
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        return step

    def close(self):
        self.closed = True


def build_config(*, max_attempts: int = 3, cache_enabled: bool = True) -> GraphiteClientConfig:
    cfg = GraphiteClientConfig(
        retry=RetryConfig(
            max_attempts=max_attempts,
            max_backoff_seconds=0.0,
            total_retry_budget_seconds=60.0,
        ),
        cache=CacheConfig(enabled=cache_enabled),
    )
    cfg.validate()
    return cfg
