"""Metacritic review score scraper."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from bs4 import BeautifulSoup

from questlog.adapters.http_resilience import ResilientClient
from questlog.domain.errors import RequestError

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from questlog.config.http_resilience import ResilienceConfig
    from questlog.config.metacritic import MetacriticConfig

log = getLogger(__name__)

SCORE_CLASS = "c-productScoreInfo_scoreNumber"


def guess_slug(igdb_url: str | None) -> str | None:
    """Metacritic and IGDB usually agree on the slug, the url's last path segment."""
    if not igdb_url:
        return None
    slug = igdb_url.rstrip("/").rsplit("/", 1)[-1]
    return slug or None


def parse_score(html: str) -> int | None:
    soup = BeautifulSoup(html, "html.parser")
    container = soup.find(class_=SCORE_CLASS)
    if container is None:
        return None
    span = container.find("span")
    if span is None:
        return None
    text = span.get_text(strip=True)
    return int(text) if text.isdigit() else None


class MetacriticClient:
    def __init__(
        self,
        *,
        config: MetacriticConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        factory = client_factory or ResilientClient
        self._http = factory(config.resilience)

    async def __aenter__(self) -> MetacriticClient:
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

    async def get_score(self, slug: str) -> int | None:
        """Critic score for ``slug``, or None when the page has none."""

        try:
            response = await self._http.get(f"game/{slug}/")
        except httpx.HTTPError as exc:
            raise RequestError(f"Metacritic page for '{slug}' failed: {exc}") from exc
        if response.status_code == httpx.codes.NOT_FOUND:
            log.info("No Metacritic page for '%s'", slug)
            return None
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise RequestError(f"Metacritic page for '{slug}' failed: {exc}") from exc
        return parse_score(response.text)
