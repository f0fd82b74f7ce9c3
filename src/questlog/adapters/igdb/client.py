"""Low-level HTTP client for IGDB endpoints."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any, Protocol

import httpx

from questlog.adapters.http_resilience import ResilientClient
from questlog.domain.errors import InternalError, RequestError

if TYPE_CHECKING:
    from types import TracebackType

    from questlog.adapters.http_resilience import RateLimiter
    from questlog.config.http_resilience import ResilienceConfig

    from .connection import IgdbConnection
    from .query import IgdbQuery

log = getLogger(__name__)

ENDPOINTS = frozenset(
    {
        "games",
        "companies",
        "collections",
        "franchises",
        "genres",
        "keywords",
        "covers",
        "artworks",
        "screenshots",
        "websites",
        "external_games",
        "involved_companies",
        "release_dates",
    }
)


class IgdbClientFactory(Protocol):
    def __call__(
        self, config: ResilienceConfig, *, limiter: RateLimiter | None = None
    ) -> ResilientClient: ...


class IgdbClient:
    """POSTs apicalypse queries; every request is gated by the connection's limiter."""

    def __init__(
        self,
        connection: IgdbConnection,
        resilience: ResilienceConfig,
        *,
        client_factory: IgdbClientFactory | None = None,
    ) -> None:
        self._connection = connection
        factory = client_factory or ResilientClient
        self._http = factory(resilience, limiter=connection.limiter)

    async def __aenter__(self) -> IgdbClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def post(self, endpoint: str, query: IgdbQuery) -> list[dict[str, Any]]:
        if endpoint not in ENDPOINTS:
            raise InternalError(f"Unknown IGDB endpoint: {endpoint}")
        body = str(query)
        log.debug("IGDB %s: %s", endpoint, body)
        try:
            response = await self._http.post(
                f"{endpoint}/",
                content=body,
                headers=self._connection.headers(),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise RequestError(
                f"IGDB /{endpoint} returned {exc.response.status_code}: {exc.response.text}"
            ) from exc
        except httpx.HTTPError as exc:
            raise RequestError(f"IGDB /{endpoint} request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise InternalError(f"IGDB /{endpoint} returned invalid JSON") from exc
        if not isinstance(payload, list):
            raise InternalError(f"Unexpected IGDB /{endpoint} response payload")
        return payload
