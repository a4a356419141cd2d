"""Cross-window merge helpers for band orchestration."""

from __future__ import annotations

from collections.abc import Iterable

from ..core.errors import GraphiteAdapterError, GraphiteValidationError
from .models import Element, ResultSet


def cause_from_error(exc: BaseException) -> str:
    if isinstance(exc, GraphiteAdapterError) and exc.cause:
        return exc.cause
    if isinstance(exc, GraphiteValidationError):
        return "validation"
    return "network"


def merge_element(existing: Element, incoming: Element) -> None:
    existing.series.update(incoming.series)


def merge_window_elements(result: ResultSet, elements: Iterable[Element]) -> None:
    """Fold one window's elements into ``result`` by tag set identity.

    Windows may list different series in a different order, so matching is
    by tags, never by position. Unmatched elements are appended; matched
    ones have their datapoints overwritten by the incoming window.
    """

    for element in elements:
        index = result.find(element.tags)
        if index is None:
            result.append(element)
            continue
        merge_element(result.elements[index], element)


__all__ = [
    "cause_from_error",
    "merge_element",
    "merge_window_elements",
]
