"""Tag formats: which dot-separated target segments become tag keys."""

from __future__ import annotations

from collections.abc import Sequence

SINGLE_KEY_TAG = "key"


def split_format(format: str) -> tuple[str, ...]:
    return tuple(format.split("."))


def is_single_key_format(segments: Sequence[str]) -> bool:
    """``("",)`` tags the whole target under ``key`` instead of splitting it."""

    return len(segments) == 1 and segments[0] == ""


def tag_keys_from_format(format: str) -> frozenset[str]:
    return frozenset(segment for segment in split_format(format) if segment != "")


__all__ = [
    "SINGLE_KEY_TAG",
    "split_format",
    "is_single_key_format",
    "tag_keys_from_format",
]
