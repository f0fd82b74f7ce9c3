"""Steam storefront client: app details, review summaries, owned games and user tags."""

from __future__ import annotations

import re
from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from bs4 import BeautifulSoup
from pydantic import ValidationError

from questlog.adapters.http_resilience import ResilientClient
from questlog.config.errors import MissingConfigurationError
from questlog.domain.errors import InternalError, NotFoundError, RequestError
from questlog.domain.model import SteamData, SteamScore, StoreEntry, Storefront

from .schema import SteamAppDetails, SteamOwnedGames, SteamReviews

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from questlog.config.http_resilience import ResilienceConfig
    from questlog.config.steam import SteamConfig

log = getLogger(__name__)

STEAM_APP_URL = re.compile(r"https?://store\.steampowered\.com/app/(?P<appid>\d+)")


def parse_steam_appid(url: str) -> int | None:
    match = STEAM_APP_URL.match(url)
    return int(match.group("appid")) if match else None


class SteamClient:
    def __init__(
        self,
        *,
        config: SteamConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        factory = client_factory or ResilientClient
        self._store = factory(config.store)
        self._web_api = factory(config.web_api)

    async def __aenter__(self) -> SteamClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._store.aclose()
        await self._web_api.aclose()

    async def get_steam_data(self, appid: int) -> SteamData:
        """App details with the review summary attached; a missing summary is not fatal."""

        try:
            score: SteamScore | None = await self.get_app_score(appid)
        except (RequestError, InternalError) as exc:
            log.warning("Steam review summary for app %s unavailable: %s", appid, exc)
            score = None
        steam_data = await self.get_app_details(appid)
        steam_data.score = score
        return steam_data

    async def get_app_details(self, appid: int) -> SteamData:
        payload = await self._get_json(
            self._store, "api/appdetails", params={"appids": str(appid), "l": "english"}
        )
        if not isinstance(payload, dict) or str(appid) not in payload:
            raise InternalError(f"Unexpected Steam appdetails payload for app {appid}")
        try:
            details = SteamAppDetails.model_validate(payload[str(appid)])
        except ValidationError as exc:
            raise InternalError(f"Invalid Steam appdetails for app {appid}: {exc}") from exc
        if not details.success or details.data is None:
            raise NotFoundError(f"Steam app {appid} not found")
        return details.data

    async def get_app_score(self, appid: int) -> SteamScore:
        payload = await self._get_json(self._store, f"appreviews/{appid}", params={"json": "1"})
        try:
            reviews = SteamReviews.model_validate(payload)
        except ValidationError as exc:
            raise InternalError(f"Invalid Steam review summary for app {appid}: {exc}") from exc
        summary = reviews.query_summary
        return SteamScore(
            review_score=summary.thumbs,
            total_reviews=summary.total_reviews,
            review_score_desc=summary.review_score_desc,
        )

    async def scrape_user_tags(self, appid: int) -> list[str]:
        try:
            response = await self._store.get(f"app/{appid}/")
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise RequestError(f"Steam store page for app {appid} failed: {exc}") from exc
        soup = BeautifulSoup(response.text, "html.parser")
        return [
            text
            for anchor in soup.select(".glance_tags a")
            if (text := anchor.get_text(strip=True))
        ]

    async def get_owned_games(self) -> list[StoreEntry]:
        if not self._config.api_key or not self._config.user_id:
            raise MissingConfigurationError(
                name
                for name, value in (
                    ("STEAM_API_KEY", self._config.api_key),
                    ("STEAM_USER_ID", self._config.user_id),
                )
                if not value
            )
        payload = await self._get_json(
            self._web_api,
            "IPlayerService/GetOwnedGames/v0001/",
            params={
                "key": self._config.api_key,
                "steamid": self._config.user_id,
                "include_appinfo": "true",
                "format": "json",
            },
        )
        try:
            owned = SteamOwnedGames.model_validate(payload)
        except ValidationError as exc:
            raise InternalError(f"Invalid Steam owned games payload: {exc}") from exc
        log.info("Steam account %s owns %s games", self._config.user_id, owned.response.game_count)
        return [
            StoreEntry(
                storefront_name=Storefront.STEAM.value,
                id=str(game.appid),
                title=game.name,
                image=game.img_icon_url,
            )
            for game in owned.response.games
        ]

    async def _get_json(
        self, client: ResilientClient, path: str, *, params: dict[str, str]
    ) -> Any:
        try:
            response = await client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise RequestError(f"Steam /{path} request failed: {exc}") from exc
        try:
            return response.json()
        except ValueError as exc:
            raise InternalError(f"Steam /{path} returned invalid JSON") from exc
