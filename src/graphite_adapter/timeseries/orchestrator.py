"""Band and single-window query orchestration."""

from __future__ import annotations

import logging
from datetime import datetime

from ..config import MAX_BAND_WINDOWS
from ..core.errors import tag_operation
from .aggregation import cause_from_error, merge_window_elements
from .executor import WindowQueryExecutor
from .models import ResultSet
from .parser import decode_response
from .planner import plan_band_windows
from .queries import BandQuery, RenderRequest, SeriesQuery
from .validators import validate_band_query, validate_series_query

logger = logging.getLogger("graphite_adapter")

BAND_OPERATION = "graphiteBand"
QUERY_OPERATION = "graphite"


class QueryService:
    """Runs band and single-window queries over a window executor."""

    def __init__(
        self,
        executor: WindowQueryExecutor,
        *,
        max_windows: int = MAX_BAND_WINDOWS,
    ) -> None:
        self._executor = executor
        self._max_windows = max_windows

    def band(
        self,
        query: BandQuery,
        *,
        now: datetime,
        audit_log: list[RenderRequest],
    ) -> ResultSet:
        try:
            return self._band(query, now=now, audit_log=audit_log)
        except Exception as exc:
            error = tag_operation(exc, BAND_OPERATION)
            logger.error(
                "band failure target=%s cause=%s",
                query.target,
                cause_from_error(error),
            )
            if error is exc:
                raise
            raise error from exc

    def query(
        self,
        query: SeriesQuery,
        *,
        now: datetime,
        audit_log: list[RenderRequest],
    ) -> ResultSet:
        try:
            return self._query(query, now=now, audit_log=audit_log)
        except Exception as exc:
            error = tag_operation(exc, QUERY_OPERATION)
            logger.error(
                "query failure target=%s cause=%s",
                query.target,
                cause_from_error(error),
            )
            if error is exc:
                raise
            raise error from exc

    def _band(
        self,
        query: BandQuery,
        *,
        now: datetime,
        audit_log: list[RenderRequest],
    ) -> ResultSet:
        validated = validate_band_query(query, max_windows=self._max_windows)
        windows = plan_band_windows(
            now=now,
            duration=validated.duration,
            period=validated.period,
            num=validated.num,
            max_windows=self._max_windows,
        )
        logger.info(
            "band start target=%s windows=%s duration=%s period=%s",
            validated.target,
            len(windows),
            validated.duration,
            validated.period,
        )

        result = ResultSet(ignore_unjoined=True, ignore_other_unjoined=True)
        for window in windows:
            request = RenderRequest(
                targets=(validated.target,),
                start=window.start,
                end=window.end,
            )
            executed = self._executor.execute(request, audit_log=audit_log)
            elements = decode_response(request, executed.response, validated.format_segments)
            if window.index == 0:
                result.elements = elements
            else:
                merge_window_elements(result, elements)
            logger.debug(
                "band window done index=%s decoded=%s accumulated=%s cache_hit=%s",
                window.index,
                len(elements),
                len(result),
                executed.cache_hit,
            )

        logger.info("band done target=%s series=%s", validated.target, len(result))
        return result

    def _query(
        self,
        query: SeriesQuery,
        *,
        now: datetime,
        audit_log: list[RenderRequest],
    ) -> ResultSet:
        validated = validate_series_query(query)
        request = RenderRequest(
            targets=(validated.target,),
            start=now - validated.start_offset,
            end=now - validated.end_offset,
        )
        logger.info(
            "query start target=%s start=%s end=%s",
            validated.target,
            request.start.isoformat(),
            request.end.isoformat(),
        )
        executed = self._executor.execute(request, audit_log=audit_log)
        elements = decode_response(request, executed.response, validated.format_segments)
        logger.info(
            "query done target=%s series=%s cache_hit=%s",
            validated.target,
            len(elements),
            executed.cache_hit,
        )
        return ResultSet(elements=elements)


__all__ = [
    "BAND_OPERATION",
    "QUERY_OPERATION",
    "QueryService",
]
