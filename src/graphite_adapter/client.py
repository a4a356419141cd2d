"""Public client entrypoint."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from types import TracebackType

from .client_shared import resolve_query_cache, validate_client_config
from .config import GraphiteClientConfig
from .core.cache import QueryCache
from .core.errors import GraphiteClientClosedError
from .core.transport import GraphiteTransport
from .timeseries.executor import RenderTransport, WindowQueryExecutor
from .timeseries.models import ResultSet
from .timeseries.orchestrator import QueryService
from .timeseries.queries import BandQuery, RenderRequest, SeriesQuery
from .timeseries.tags import tag_keys_from_format


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GraphiteClient:
    """Public Graphite band/query client.

    ``queries`` lists every render request issued through this client, in
    issue order, including windows whose execution failed.
    """

    def __init__(
        self,
        *,
        config: GraphiteClientConfig | None = None,
        transport: RenderTransport | None = None,
        cache: QueryCache | None = None,
        clock: Callable[[], datetime] | None = None,
        query_service: QueryService | None = None,
    ) -> None:
        self._config = config or GraphiteClientConfig()
        validate_client_config(self._config)

        self._transport = transport or GraphiteTransport(self._config)
        self._clock = clock or _utc_now
        resolved_cache = resolve_query_cache(config=self._config, cache=cache)
        self._service = query_service or QueryService(
            WindowQueryExecutor(self._transport, cache=resolved_cache),
            max_windows=self._config.band.max_windows,
        )
        self.queries: list[RenderRequest] = []
        self._closed = False

    def _ensure_open(self) -> None:
        if self._closed:
            raise GraphiteClientClosedError("GraphiteClient is already closed")

    def band(
        self,
        target: str,
        duration: str,
        period: str,
        format: str,
        num: float,
        *,
        now: datetime | None = None,
    ) -> ResultSet:
        self._ensure_open()
        return self._service.band(
            BandQuery(
                target=target,
                duration=duration,
                period=period,
                format=format,
                num=num,
            ),
            now=now or self._clock(),
            audit_log=self.queries,
        )

    def query(
        self,
        target: str,
        start_duration: str,
        end_duration: str,
        format: str,
        *,
        now: datetime | None = None,
    ) -> ResultSet:
        self._ensure_open()
        return self._service.query(
            SeriesQuery(
                target=target,
                start_duration=start_duration,
                end_duration=end_duration,
                format=format,
            ),
            now=now or self._clock(),
            audit_log=self.queries,
        )

    @staticmethod
    def tag_keys(format: str) -> frozenset[str]:
        return tag_keys_from_format(format)

    def close(self) -> None:
        if self._closed:
            return
        close = getattr(self._transport, "close", None)
        if close is not None:
            close()
        self._closed = True

    def __enter__(self) -> "GraphiteClient":
        self._ensure_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.close()
        return False


__all__ = [
    "GraphiteClient",
]
