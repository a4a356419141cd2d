"""Decoders from render responses into tagged series elements."""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import datetime, timezone

from ..core.errors import GraphiteDecodeError
from .models import Element, RawResponse, RawSeries, Series, TagSet
from .queries import RenderRequest
from .tags import SINGLE_KEY_TAG, is_single_key_format


def is_no_value(token: object) -> bool:
    return token is None or token == ""


def _decode_value(token: object) -> float:
    if isinstance(token, bool):
        raise ValueError("boolean is not a number")
    if isinstance(token, (int, float)):
        return float(token)
    if isinstance(token, str):
        return float(token.strip())
    raise ValueError(f"unsupported token type {type(token).__name__}")


def _decode_timestamp(token: object) -> int:
    if isinstance(token, bool):
        raise ValueError("boolean is not an integer")
    if isinstance(token, int):
        return token
    if isinstance(token, float):
        if not math.isfinite(token) or not token.is_integer():
            raise ValueError("timestamp is not integral")
        return int(token)
    if isinstance(token, str):
        return int(token.strip(), 10)
    raise ValueError(f"unsupported token type {type(token).__name__}")


def build_tags(
    request: RenderRequest,
    series: RawSeries,
    format_segments: Sequence[str],
) -> TagSet:
    if is_single_key_format(format_segments):
        return TagSet({SINGLE_KEY_TAG: series.target})

    nodes = series.target.split(".")
    if len(nodes) < len(format_segments):
        raise GraphiteDecodeError(
            request.describe(),
            f"returned target '{series.target}' does not match format "
            f"'{','.join(format_segments)}'",
        )
    return TagSet(
        (key, nodes[index]) for index, key in enumerate(format_segments) if key
    )


def decode_datapoints(request: RenderRequest, series: RawSeries) -> Series:
    points: Series = {}
    for datapoint in series.datapoints:
        if len(datapoint) != 2:
            raise GraphiteDecodeError(
                request.describe(),
                f"Datapoint has != 2 fields: {list(datapoint)!r}",
            )
        raw_value, raw_timestamp = datapoint
        if is_no_value(raw_value):
            continue
        try:
            value = _decode_value(raw_value)
        except ValueError as exc:
            raise GraphiteDecodeError(
                request.describe(),
                f"value '{raw_value}' cannot be decoded to float: {exc}",
            ) from exc
        try:
            unix_ts = _decode_timestamp(raw_timestamp)
        except ValueError as exc:
            raise GraphiteDecodeError(
                request.describe(),
                f"timestamp '{raw_timestamp}' cannot be decoded to int: {exc}",
            ) from exc
        points[datetime.fromtimestamp(unix_ts, tz=timezone.utc)] = value
    return points


def decode_response(
    request: RenderRequest,
    response: RawResponse,
    format_segments: Sequence[str],
) -> list[Element]:
    """Decode every series of one response, in response order.

    Raises GraphiteDecodeError on the first problem; an empty response is
    itself an error so callers can tell it apart from a decoded result.
    """

    if len(response) == 0:
        raise GraphiteDecodeError(request.describe(), "empty response")

    seen: set[str] = set()
    elements: list[Element] = []
    for series in response.series:
        tags = build_tags(request, series, format_segments)
        if not tags.is_valid():
            raise GraphiteDecodeError(
                request.describe(),
                f"returned target '{series.target}' would make an invalid tag '{tags}'",
            )
        canonical = tags.canonical()
        if canonical in seen:
            raise GraphiteDecodeError(
                request.describe(),
                f"More than 1 series identified by tagset '{canonical}'",
            )
        seen.add(canonical)
        elements.append(Element(tags=tags, series=decode_datapoints(request, series)))
    return elements


__all__ = [
    "is_no_value",
    "build_tags",
    "decode_datapoints",
    "decode_response",
]
