"""Single-window request execution through the query cache."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from ..core.cache import QueryCache
from .models import RawResponse
from .queries import RenderRequest

logger = logging.getLogger("graphite_adapter")


class RenderTransport(Protocol):
    def query(self, request: RenderRequest) -> RawResponse: ...


@dataclass(slots=True, frozen=True)
class WindowResult:
    request: RenderRequest
    response: RawResponse
    cache_hit: bool


class WindowQueryExecutor:
    """Runs one render request; retries belong to the transport."""

    def __init__(self, transport: RenderTransport, *, cache: QueryCache | None = None) -> None:
        self._transport = transport
        self._cache = cache

    def execute(
        self,
        request: RenderRequest,
        *,
        audit_log: list[RenderRequest],
    ) -> WindowResult:
        # Recorded before the lookup so failed windows still show up.
        audit_log.append(request)
        key = request.cache_key
        logger.debug(
            "window query key=%s start=%s end=%s",
            key,
            request.start.isoformat(),
            request.end.isoformat(),
        )
        if self._cache is None:
            return WindowResult(request=request, response=self._transport.query(request), cache_hit=False)

        response, hit = self._cache.get(key, lambda: self._transport.query(request))
        logger.debug("window cache key=%s hit=%s", key, hit)
        return WindowResult(request=request, response=response, cache_hit=hit)


__all__ = [
    "RenderTransport",
    "WindowResult",
    "WindowQueryExecutor",
]
