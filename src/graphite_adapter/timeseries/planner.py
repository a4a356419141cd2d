"""Window planning for band queries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..config import MAX_BAND_WINDOWS


@dataclass(slots=True, frozen=True)
class BandWindow:
    index: int
    start: datetime
    end: datetime


def plan_band_windows(
    *,
    now: datetime,
    duration: timedelta,
    period: timedelta,
    num: int,
    max_windows: int = MAX_BAND_WINDOWS,
) -> list[BandWindow]:
    """Windows ending one ``period`` apart, newest first.

    The first window already ends one period before ``now``.
    """

    upper = min(max_windows, MAX_BAND_WINDOWS)
    if num < 1 or num > upper:
        raise ValueError(f"num must be within [1, {upper}]")

    windows: list[BandWindow] = []
    end = now
    for index in range(num):
        end = end - period
        windows.append(BandWindow(index=index, start=end - duration, end=end))
    return windows


__all__ = [
    "BandWindow",
    "plan_band_windows",
]
