"""Steam configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_STEAM_STORE_URL = "https://store.steampowered.com/"
DEFAULT_STEAM_WEB_API_URL = "https://api.steampowered.com/"

# Skips the age gate on store pages and appdetails.
AGE_GATE_COOKIES = {"birthtime": "0"}


def cacheable_store_payload(payload: object) -> bool:
    """Keep failed store answers out of the cache so the next run asks again.

    appdetails reports a delisted or region-locked app as ``{"<appid>": {"success":
    false}}``; appreviews uses a top-level ``success`` flag.
    """
    if not isinstance(payload, dict):
        return True
    if payload.get("success", True) in (False, 0):
        return False
    return all(
        not isinstance(value, dict) or value.get("success", True) is not False
        for value in payload.values()
    )


@dataclass(frozen=True, slots=True)
class SteamConfig:
    store: ResilienceConfig
    web_api: ResilienceConfig
    api_key: str | None = None
    user_id: str | None = None


def get_steam_config() -> SteamConfig:
    store = ResilienceConfig(
        name="steam-store",
        base_url=DEFAULT_STEAM_STORE_URL,
        ratelimit=RateLimit(max_calls=200, per_seconds=5 * 60.0, max_in_flight=7),
        retry=RetryPolicy(total=2),
        cache=CacheConfig(
            enabled=True,
            backend="memory",
            default_ttl_seconds=3600.0,
            should_cache=cacheable_store_payload,
        ),
        cookies=AGE_GATE_COOKIES,
    )
    web_api = ResilienceConfig(
        name="steam-web-api",
        base_url=DEFAULT_STEAM_WEB_API_URL,
        ratelimit=RateLimit(max_calls=1, per_seconds=1.0),
        retry=RetryPolicy(total=2),
        cache=None,
    )
    return SteamConfig(
        store=store,
        web_api=web_api,
        api_key=optional_env_var("STEAM_API_KEY"),
        user_id=optional_env_var("STEAM_USER_ID"),
    )
