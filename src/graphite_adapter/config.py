"""Client configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

DEFAULT_CACHE_TTL_SECONDS = 60.0
MAX_BAND_WINDOWS = 100


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Transport-related settings."""

    timeout_connect_seconds: float = 5.0
    timeout_read_seconds: float = 30.0
    timeout_write_seconds: float = 30.0
    timeout_pool_seconds: float = 5.0

    def validate(self) -> None:
        for field_name in (
            "timeout_connect_seconds",
            "timeout_read_seconds",
            "timeout_write_seconds",
            "timeout_pool_seconds",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"transport.{field_name} must be > 0")


@dataclass(slots=True, frozen=True)
class RetryConfig:
    """Retry-related settings."""

    max_attempts: int = 3
    max_backoff_seconds: float = 10.0
    total_retry_budget_seconds: float = 60.0

    def validate(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("retry.max_attempts must be >= 1")
        if self.max_backoff_seconds < 0:
            raise ValueError("retry.max_backoff_seconds must be >= 0")
        if self.total_retry_budget_seconds < 0:
            raise ValueError("retry.total_retry_budget_seconds must be >= 0")


@dataclass(slots=True, frozen=True)
class CacheConfig:
    """Query cache settings."""

    enabled: bool = True
    ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS
    max_entries: int = 1024

    def validate(self) -> None:
        if not isinstance(self.enabled, bool):
            raise ValueError("cache.enabled must be bool")
        if self.ttl_seconds <= 0:
            raise ValueError("cache.ttl_seconds must be > 0")
        if self.max_entries < 1:
            raise ValueError("cache.max_entries must be >= 1")


@dataclass(slots=True, frozen=True)
class BandConfig:
    """Band query limits."""

    max_windows: int = MAX_BAND_WINDOWS

    def validate(self) -> None:
        if not 1 <= self.max_windows <= MAX_BAND_WINDOWS:
            raise ValueError(f"band.max_windows must be within [1, {MAX_BAND_WINDOWS}]")


@dataclass(slots=True, frozen=True)
class GraphiteClientConfig:
    """Runtime configuration for the Graphite client."""

    base_url: str = "http://localhost:8080"
    user_agent: str = "graphite-band-adapter/0.1.0"
    headers: Mapping[str, str] = field(default_factory=dict)

    transport: TransportConfig = field(default_factory=TransportConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    band: BandConfig = field(default_factory=BandConfig)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def validate(self) -> None:
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        for name, value in self.headers.items():
            if not isinstance(name, str) or not isinstance(value, str):
                raise ValueError("headers must map str to str")
        self.transport.validate()
        self.retry.validate()
        self.cache.validate()
        self.band.validate()


__all__ = [
    "DEFAULT_CACHE_TTL_SECONDS",
    "MAX_BAND_WINDOWS",
    "TransportConfig",
    "RetryConfig",
    "CacheConfig",
    "BandConfig",
    "GraphiteClientConfig",
]
