"""Relative duration parsing (``1h``, ``1h30m``, ``1.5d``, ``2w``).

A duration is ``0`` or a run of ``<number><unit>`` components whose numbers
may carry a fraction. Units are Go's ``ns``/``us``/``ms``/``s``/``m``/``h``
plus OpenTSDB's fixed-length ``d``, ``w``, ``n`` (30 days) and ``y`` (365 days).
"""

from __future__ import annotations

import re
from datetime import timedelta
from decimal import Decimal

from .errors import GraphiteValidationError

# longer unit names come first so "ms" is never read as "m" followed by junk
_COMPONENT = r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h|d|w|n|y)"
_COMPONENT_RE = re.compile(_COMPONENT)
_DURATION_RE = re.compile(f"(?:{_COMPONENT})+")

_NANOS_PER_UNIT: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
    "d": 86400 * 1_000_000_000,
    "w": 7 * 86400 * 1_000_000_000,
    "n": 30 * 86400 * 1_000_000_000,
    "y": 365 * 86400 * 1_000_000_000,
}


def parse_duration(text: str) -> timedelta:
    if not isinstance(text, str):
        raise GraphiteValidationError("duration must be str")
    stripped = text.strip()
    if stripped == "0":
        return timedelta(0)
    if _DURATION_RE.fullmatch(stripped) is None:
        raise GraphiteValidationError(f"invalid duration '{text}'")
    nanos = Decimal(0)
    for amount, unit in _COMPONENT_RE.findall(stripped):
        nanos += Decimal(amount) * _NANOS_PER_UNIT[unit]
    # timedelta resolution is one microsecond; finer remainders truncate
    return timedelta(microseconds=int(nanos // 1000))


def parse_optional_duration(text: str | None) -> timedelta:
    """Empty or missing durations mean a zero offset."""

    if text is None or text == "":
        return timedelta(0)
    return parse_duration(text)


__all__ = [
    "parse_duration",
    "parse_optional_duration",
]
