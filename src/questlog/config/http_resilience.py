"""Configuration types for the rate-limited upstream clients."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

import httpx

from .errors import InvalidConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

# Receives the decoded JSON body of a response; False keeps it out of the cache.
ShouldCacheHook = Callable[[object], bool]


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Retries for idempotent reads; the catalog's POST queries are never retried."""

    total: int = 2
    backoff_factor: float = 0.5
    max_backoff_wait: float = 30.0
    respect_retry_after_header: bool = True
    allowed_methods: frozenset[str] = field(default_factory=lambda: frozenset({"GET", "HEAD"}))
    status_forcelist: frozenset[int] = field(
        default_factory=lambda: frozenset({429, 500, 502, 503, 504})
    )
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )
    backoff_jitter: float = 1.0


NO_RETRIES = RetryPolicy(total=0, allowed_methods=frozenset())


@dataclass(slots=True, frozen=True)
class RateLimit:
    """Request budget: ``max_calls`` per ``per_seconds``, optionally bounding in-flight calls."""

    max_calls: float
    per_seconds: float
    max_in_flight: int | None = None

    def __post_init__(self) -> None:
        if self.max_calls <= 0 or self.per_seconds <= 0:
            raise InvalidConfigurationError(
                "ratelimit", f"{self.max_calls}/{self.per_seconds}s", "budget must be positive"
            )
        if self.max_in_flight is not None and self.max_in_flight < 1:
            raise InvalidConfigurationError(
                "max_in_flight", str(self.max_in_flight), "must allow at least one request"
            )


@dataclass(slots=True, frozen=True)
class CacheConfig:
    enabled: bool = True
    backend: Literal["sqlite", "memory"] = "memory"
    sqlite_path: str | None = None
    default_ttl_seconds: float | None = None
    refresh_ttl_on_access: bool = True
    should_cache: ShouldCacheHook | None = None


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    """Everything one upstream needs: where it lives, its budget, retries and caching."""

    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = field(default_factory=CacheConfig)
    default_headers: Mapping[str, str] | None = None
    cookies: Mapping[str, str] | None = None
