"""IGDB configuration values."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .env import optional_env_var, optional_positive_float, require_env_vars
from .errors import MissingConfigurationError
from .http_resilience import NO_RETRIES, RateLimit, ResilienceConfig

DEFAULT_IGDB_BASE_URL = "https://api.igdb.com/v4/"
DEFAULT_TWITCH_TOKEN_URL = "https://id.twitch.tv/oauth2/token"

# IGDB allows 4 requests per second and a handful of open requests per client.
IGDB_RATELIMIT = RateLimit(max_calls=4, per_seconds=1.0, max_in_flight=6)


@dataclass(frozen=True, slots=True)
class IgdbConfig:
    client_id: str
    client_secret: str | None
    access_token: str | None
    resilience: ResilienceConfig
    token_url: str = DEFAULT_TWITCH_TOKEN_URL


def get_igdb_config() -> IgdbConfig:
    values = require_env_vars(("IGDB_CLIENT_ID",))
    client_secret = optional_env_var("IGDB_CLIENT_SECRET")
    access_token = optional_env_var("IGDB_ACCESS_TOKEN")
    if client_secret is None and access_token is None:
        raise MissingConfigurationError(
            ("IGDB_ACCESS_TOKEN", "IGDB_CLIENT_SECRET"), alternatives=True
        )

    ratelimit = IGDB_RATELIMIT
    # Partner accounts get a larger budget than the public default.
    requests_per_second = optional_positive_float("IGDB_REQUESTS_PER_SECOND")
    if requests_per_second is not None:
        ratelimit = replace(ratelimit, max_calls=requests_per_second)

    resilience = ResilienceConfig(
        name="igdb",
        base_url=optional_env_var("IGDB_BASE_URL") or DEFAULT_IGDB_BASE_URL,
        ratelimit=ratelimit,
        retry=NO_RETRIES,
        cache=None,
    )

    return IgdbConfig(
        client_id=values["IGDB_CLIENT_ID"],
        client_secret=client_secret,
        access_token=access_token,
        resilience=resilience,
    )
