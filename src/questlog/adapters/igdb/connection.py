"""Credentials and request budget for the IGDB API."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from questlog.adapters.http_resilience import RateLimiter, ResilientClient
from questlog.config.http_resilience import ResilienceConfig
from questlog.config.igdb import IGDB_RATELIMIT
from questlog.domain.errors import InternalError, RequestError

if TYPE_CHECKING:
    from collections.abc import Callable

    from questlog.config.igdb import IgdbConfig

log = getLogger(__name__)


@dataclass(slots=True)
class IgdbConnection:
    """Client id, bearer token and the rate limiter every IGDB call must pass."""

    client_id: str
    access_token: str
    limiter: RateLimiter

    @classmethod
    def create(cls, client_id: str, access_token: str) -> IgdbConnection:
        return cls(client_id, access_token, RateLimiter.from_config(IGDB_RATELIMIT))

    @classmethod
    async def authenticate(
        cls,
        config: IgdbConfig,
        *,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> IgdbConnection:
        """Use the configured token, or exchange client credentials for one."""

        ratelimit = config.resilience.ratelimit or IGDB_RATELIMIT
        limiter = RateLimiter.from_config(ratelimit)
        if config.access_token is not None:
            return cls(config.client_id, config.access_token, limiter)

        factory = client_factory or ResilientClient
        params = {
            "client_id": config.client_id,
            "client_secret": config.client_secret or "",
            "grant_type": "client_credentials",
        }
        async with factory(ResilienceConfig(name="twitch-oauth", cache=None)) as client:
            try:
                response = await client.post(config.token_url, params=params)
                response.raise_for_status()
            except httpx.HTTPError as exc:
                raise RequestError(f"Twitch token request failed: {exc}") from exc

        payload = response.json()
        if not isinstance(payload, dict) or "access_token" not in payload:
            raise InternalError("Unexpected Twitch token response payload")
        log.info("Obtained IGDB access token (expires in %ss)", payload.get("expires_in"))
        return cls(config.client_id, str(payload["access_token"]), limiter)

    def headers(self) -> dict[str, str]:
        return {
            "Client-ID": self.client_id,
            "Authorization": f"Bearer {self.access_token}",
        }
