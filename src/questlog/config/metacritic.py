"""Metacritic scraping configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_METACRITIC_BASE_URL = "https://www.metacritic.com/"
DEFAULT_USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64) questlog"


@dataclass(frozen=True, slots=True)
class MetacriticConfig:
    resilience: ResilienceConfig


def get_metacritic_config() -> MetacriticConfig:
    resilience = ResilienceConfig(
        name="metacritic",
        base_url=DEFAULT_METACRITIC_BASE_URL,
        ratelimit=RateLimit(max_calls=1, per_seconds=1.0, max_in_flight=2),
        retry=RetryPolicy(total=1),
        cache=CacheConfig(enabled=True, backend="memory"),
        default_headers={"User-Agent": DEFAULT_USER_AGENT},
    )
    return MetacriticConfig(resilience=resilience)
