"""Query models."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from urllib.parse import urlencode

RENDER_ENDPOINT = "/render"


@dataclass(slots=True, frozen=True)
class RenderRequest:
    """One render call covering ``[start, end]``."""

    targets: Sequence[str]
    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if isinstance(self.targets, str):
            raise TypeError("targets must be a sequence of str, not str")
        normalized: list[str] = []
        for target in self.targets:
            if not isinstance(target, str):
                raise TypeError("targets entries must be str")
            normalized.append(target)
        object.__setattr__(self, "targets", tuple(normalized))

    @property
    def cache_key(self) -> str:
        return "graphite-{}-{}-{}".format(
            int(self.start.timestamp()),
            int(self.end.timestamp()),
            json.dumps(list(self.targets)),
        )

    def params(self) -> list[tuple[str, str]]:
        params = [
            ("format", "json"),
            ("from", str(int(self.start.timestamp()))),
            ("until", str(int(self.end.timestamp()))),
        ]
        params.extend(("target", target) for target in self.targets)
        return params

    def describe(self) -> str:
        return f"{RENDER_ENDPOINT}?{urlencode(self.params())}"


@dataclass(slots=True, frozen=True)
class BandQuery:
    """Repeat a query over ``num`` windows stepped back by ``period``."""

    target: str
    duration: str
    period: str
    format: str
    num: float


@dataclass(slots=True, frozen=True)
class SeriesQuery:
    target: str
    start_duration: str
    format: str
    end_duration: str = ""


__all__ = [
    "RENDER_ENDPOINT",
    "RenderRequest",
    "BandQuery",
    "SeriesQuery",
]
