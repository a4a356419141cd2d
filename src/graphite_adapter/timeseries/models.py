"""Timeseries domain and response models."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime

Series = dict[datetime, float]
"""Datapoints keyed by UTC timestamp; a later write at a timestamp wins."""

_TAG_EXTRA_CHARS = frozenset("-_./")


def is_valid_tag_text(text: str) -> bool:
    if not isinstance(text, str) or text == "":
        return False
    return all(ch.isalpha() or ch.isdecimal() or ch in _TAG_EXTRA_CHARS for ch in text)


class TagSet(Mapping[str, str]):
    """Immutable tag key/value labels identifying one series.

    Equality and hashing use the sorted key/value pairs, so two tag sets
    built in a different insertion order are the same identity.
    """

    __slots__ = ("_data", "_pairs")

    def __init__(self, tags: Mapping[str, str] | Iterable[tuple[str, str]] = ()) -> None:
        data = dict(tags)
        self._data = data
        self._pairs = tuple(sorted(data.items()))

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TagSet):
            return self._pairs == other._pairs
        if isinstance(other, Mapping):
            return self._pairs == tuple(sorted(other.items()))
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._pairs)

    def is_valid(self) -> bool:
        return all(is_valid_tag_text(k) and is_valid_tag_text(v) for k, v in self._pairs)

    def canonical(self) -> str:
        return "{" + ",".join(f"{k}={v}" for k, v in self._pairs) + "}"

    def __str__(self) -> str:
        return self.canonical()

    def __repr__(self) -> str:
        return f"TagSet({dict(self._pairs)!r})"


@dataclass(slots=True)
class Element:
    tags: TagSet
    series: Series = field(default_factory=dict)


@dataclass(slots=True)
class ResultSet:
    """Ordered elements plus join flags interpreted by the caller."""

    elements: list[Element] = field(default_factory=list)
    ignore_unjoined: bool = False
    ignore_other_unjoined: bool = False

    def append(self, element: Element) -> int:
        self.elements.append(element)
        return len(self.elements) - 1

    def find(self, tags: TagSet) -> int | None:
        for index, existing in enumerate(self.elements):
            if existing.tags == tags:
                return index
        return None

    def __len__(self) -> int:
        return len(self.elements)


@dataclass(slots=True, frozen=True)
class RawSeries:
    target: str
    datapoints: tuple[tuple[object, ...], ...] | list[tuple[object, ...]] = ()

    def __post_init__(self) -> None:
        if isinstance(self.datapoints, tuple) and all(
            isinstance(dp, tuple) for dp in self.datapoints
        ):
            return
        object.__setattr__(self, "datapoints", tuple(tuple(dp) for dp in self.datapoints))


@dataclass(slots=True, frozen=True)
class RawResponse:
    series: tuple[RawSeries, ...] | list[RawSeries] = ()

    def __post_init__(self) -> None:
        if isinstance(self.series, tuple):
            return
        object.__setattr__(self, "series", tuple(self.series))

    def __len__(self) -> int:
        return len(self.series)


__all__ = [
    "Series",
    "TagSet",
    "Element",
    "ResultSet",
    "RawSeries",
    "RawResponse",
    "is_valid_tag_text",
]
