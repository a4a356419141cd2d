"""Query cache abstraction and in-memory implementation."""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from ..timeseries.models import RawResponse

DEFAULT_MAX_ENTRIES = 1024
logger = logging.getLogger("graphite_adapter")


class QueryCache(Protocol):
    """Get-or-compute contract used by the window executor."""

    def get(
        self,
        key: str,
        compute: Callable[[], RawResponse],
    ) -> tuple[RawResponse, bool]:
        """Return ``(value, was_hit)``; ``compute`` runs at most once per key at a time."""


@dataclass(slots=True)
class _CachedResponse:
    expires_at: float
    value: RawResponse


@dataclass(slots=True)
class _InFlight:
    done: threading.Event = field(default_factory=threading.Event)
    value: RawResponse = field(default_factory=RawResponse)
    error: BaseException | None = None


class MemoryQueryCache:
    """Process-local TTL cache with per-key single flight.

    Callers that wait on another thread's computation share its outcome and
    report a miss. Failures are handed to waiters and never stored.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] | None = None,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._ttl_seconds = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock or time.monotonic
        self._lock = threading.RLock()
        self._items: OrderedDict[str, _CachedResponse] = OrderedDict()
        self._inflight: dict[str, _InFlight] = {}

    def get(
        self,
        key: str,
        compute: Callable[[], RawResponse],
    ) -> tuple[RawResponse, bool]:
        with self._lock:
            now = self._clock()
            self._purge_expired_locked(now)
            stored = self._items.get(key)
            if stored is not None:
                self._items.move_to_end(key)
                return stored.value, True
            pending = self._inflight.get(key)
            owner = pending is None
            if pending is None:
                pending = _InFlight()
                self._inflight[key] = pending

        if not owner:
            logger.debug("cache wait for in-flight key=%s", key)
            pending.done.wait()
            if pending.error is not None:
                raise pending.error
            return pending.value, False

        try:
            value = compute()
        except BaseException as exc:
            pending.error = exc
            with self._lock:
                del self._inflight[key]
            pending.done.set()
            raise

        with self._lock:
            self._items[key] = _CachedResponse(
                expires_at=self._clock() + self._ttl_seconds,
                value=value,
            )
            self._items.move_to_end(key)
            while len(self._items) > self._max_entries:
                self._items.popitem(last=False)
            del self._inflight[key]
        pending.value = value
        pending.done.set()
        return value, False

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def _purge_expired_locked(self, now: float) -> None:
        expired = [key for key, item in self._items.items() if item.expires_at <= now]
        for key in expired:
            del self._items[key]


__all__ = [
    "DEFAULT_MAX_ENTRIES",
    "QueryCache",
    "MemoryQueryCache",
]
