"""Helpers for client bootstrap."""

from __future__ import annotations

from .config import GraphiteClientConfig
from .core.cache import MemoryQueryCache, QueryCache
from .core.errors import GraphiteValidationError


def validate_client_config(config: GraphiteClientConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise GraphiteValidationError(str(exc)) from exc


def resolve_query_cache(
    *,
    config: GraphiteClientConfig,
    cache: QueryCache | None,
) -> QueryCache | None:
    if cache is not None:
        return cache
    if config.cache.enabled:
        return MemoryQueryCache(
            ttl_seconds=config.cache.ttl_seconds,
            max_entries=config.cache.max_entries,
        )
    return None


__all__ = [
    "validate_client_config",
    "resolve_query_cache",
]
