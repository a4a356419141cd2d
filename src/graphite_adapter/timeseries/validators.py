"""Input validation for band and single-window queries."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import timedelta

from ..config import MAX_BAND_WINDOWS
from ..core.durations import parse_duration, parse_optional_duration
from ..core.errors import GraphiteValidationError
from .queries import BandQuery, SeriesQuery
from .tags import split_format


@dataclass(slots=True, frozen=True)
class ValidatedBandQuery:
    target: str
    duration: timedelta
    period: timedelta
    format_segments: tuple[str, ...]
    num: int


@dataclass(slots=True, frozen=True)
class ValidatedSeriesQuery:
    target: str
    start_offset: timedelta
    end_offset: timedelta
    format_segments: tuple[str, ...]


def _ensure_target(target: str) -> str:
    if not isinstance(target, str) or target.strip() == "":
        raise GraphiteValidationError("target is required")
    return target


def _ensure_format(format: str) -> tuple[str, ...]:
    if not isinstance(format, str):
        raise GraphiteValidationError("format must be str")
    return split_format(format)


def validate_num(num: float, *, max_windows: int = MAX_BAND_WINDOWS) -> int:
    if isinstance(num, bool) or not isinstance(num, (int, float)):
        raise GraphiteValidationError("num must be a number")
    upper = min(max_windows, MAX_BAND_WINDOWS)
    if not math.isfinite(num) or num < 1 or num > upper:
        raise GraphiteValidationError("num out of bounds")
    # fractional counts truncate like the expression language's int conversion
    return int(num)


def validate_band_query(
    query: BandQuery,
    *,
    max_windows: int = MAX_BAND_WINDOWS,
) -> ValidatedBandQuery:
    duration = parse_duration(query.duration)
    period = parse_duration(query.period)
    num = validate_num(query.num, max_windows=max_windows)
    return ValidatedBandQuery(
        target=_ensure_target(query.target),
        duration=duration,
        period=period,
        format_segments=_ensure_format(query.format),
        num=num,
    )


def validate_series_query(query: SeriesQuery) -> ValidatedSeriesQuery:
    return ValidatedSeriesQuery(
        target=_ensure_target(query.target),
        start_offset=parse_duration(query.start_duration),
        end_offset=parse_optional_duration(query.end_duration),
        format_segments=_ensure_format(query.format),
    )


__all__ = [
    "ValidatedBandQuery",
    "ValidatedSeriesQuery",
    "validate_num",
    "validate_band_query",
    "validate_series_query",
]
