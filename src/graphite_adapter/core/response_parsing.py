"""Render JSON payload parsing."""

from __future__ import annotations

from typing import Protocol

from ..timeseries.models import RawResponse, RawSeries
from .errors import GraphiteProtocolError


class JsonPayloadResponse(Protocol):
    def json(self) -> object: ...


def parse_json_payload(
    response: JsonPayloadResponse,
    *,
    http_status: int | None,
) -> object:
    try:
        return response.json()
    except Exception as exc:
        raise GraphiteProtocolError(
            "response body is not valid JSON",
            http_status=http_status,
        ) from exc


def _raw_series_from_item(item: object, *, http_status: int | None) -> RawSeries:
    if not isinstance(item, dict):
        raise GraphiteProtocolError(
            "render series must be an object",
            http_status=http_status,
        )
    target = item.get("target")
    if not isinstance(target, str):
        raise GraphiteProtocolError(
            "render series target must be a string",
            http_status=http_status,
        )
    datapoints = item.get("datapoints", [])
    if datapoints is None:
        datapoints = []
    if not isinstance(datapoints, list):
        raise GraphiteProtocolError(
            "render series datapoints must be a list",
            http_status=http_status,
        )
    for datapoint in datapoints:
        if not isinstance(datapoint, list):
            raise GraphiteProtocolError(
                "render datapoint must be a list",
                http_status=http_status,
            )
    return RawSeries(target=target, datapoints=[tuple(dp) for dp in datapoints])


def parse_render_payload(payload: object, *, http_status: int | None = None) -> RawResponse:
    """Map the ``[{"target": ..., "datapoints": [[v, ts], ...]}]`` body."""

    if payload is None:
        return RawResponse()
    if not isinstance(payload, list):
        raise GraphiteProtocolError(
            "response JSON root must be a list",
            http_status=http_status,
        )
    return RawResponse(
        series=[_raw_series_from_item(item, http_status=http_status) for item in payload]
    )


__all__ = [
    "parse_json_payload",
    "parse_render_payload",
]
