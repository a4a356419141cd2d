"""Sync HTTP transport for the render endpoint with retry and status mapping."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable, Sequence
from typing import Protocol

import httpx

from ..config import GraphiteClientConfig
from ..timeseries.models import RawResponse
from ..timeseries.queries import RENDER_ENDPOINT, RenderRequest
from .errors import GraphiteTransportError, classify_http_status
from .response_parsing import parse_json_payload, parse_render_payload
from .retry import RetryBudget, is_retryable_http_status

logger = logging.getLogger("graphite_adapter")


class SyncTransportClient(Protocol):
    def get(self, endpoint: str, params: Sequence[tuple[str, str]]) -> object: ...
    def close(self) -> None: ...


def build_default_headers(config: GraphiteClientConfig) -> dict[str, str]:
    headers = {
        "Accept": "application/json",
        "Accept-Encoding": "gzip",
        "User-Agent": config.user_agent,
    }
    headers.update(config.headers)
    return headers


def build_default_timeout(config: GraphiteClientConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=config.transport.timeout_read_seconds,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


class GraphiteTransport:
    """Synchronous transport for a Graphite render API."""

    def __init__(
        self,
        config: GraphiteClientConfig,
        *,
        client: SyncTransportClient | None = None,
        sleeper: Callable[[float], None] | None = None,
        clock: Callable[[], float] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config
        self._sleep = sleeper or time.sleep
        self._clock = clock or time.monotonic
        self._rng = rng or random.Random()
        self._closed = False

        self._owns_client = client is None
        normalized_base_url = config.base_url.rstrip("/") + "/"
        self._client = client or httpx.Client(
            base_url=normalized_base_url,
            headers=build_default_headers(config),
            timeout=build_default_timeout(config),
        )

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            self._client.close()

    def query(self, request: RenderRequest) -> RawResponse:
        if self._closed:
            raise GraphiteTransportError("transport is already closed")

        budget = RetryBudget(self._config.retry, started_at=self._clock())
        endpoint = RENDER_ENDPOINT.lstrip("/")
        params = request.params()

        while True:
            attempt = budget.begin_attempt()
            logger.debug("render start targets=%s attempt=%s", list(request.targets), attempt)

            try:
                response = self._client.get(endpoint, params=params)
            except Exception as exc:
                if budget.allows_retry(self._clock()):
                    logger.warning(
                        "render network error; retrying attempt=%s error=%s",
                        attempt,
                        exc.__class__.__name__,
                    )
                    self._sleep(budget.next_delay(self._rng))
                    continue
                logger.error(
                    "render network error; giving up attempt=%s error=%s",
                    attempt,
                    exc.__class__.__name__,
                )
                raise GraphiteTransportError(
                    "network/transport error",
                    cause="network",
                ) from exc

            http_status = getattr(response, "status_code", None)
            mapped_error = classify_http_status(http_status)
            if mapped_error is None:
                payload = parse_json_payload(response, http_status=http_status)
                raw = parse_render_payload(payload, http_status=http_status)
                logger.debug("render success attempt=%s series=%s", attempt, len(raw))
                return raw

            if is_retryable_http_status(http_status) and budget.allows_retry(self._clock()):
                logger.warning(
                    "render transient failure; retrying attempt=%s http_status=%s",
                    attempt,
                    http_status,
                )
                self._sleep(budget.next_delay(self._rng))
                continue

            logger.error("render failed attempt=%s http_status=%s", attempt, http_status)
            raise mapped_error


__all__ = [
    "SyncTransportClient",
    "GraphiteTransport",
    "build_default_headers",
    "build_default_timeout",
]
