"""Typed IGDB lookups used by the resolver and reconciler."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ValidationError

from questlog.domain.errors import InternalError, InvalidArgumentError, NotFoundError
from questlog.domain.model import CanonicalGame, Storefront

from .query import IgdbQuery, id_in
from .schema import (
    IgdbAnnotation,
    IgdbCompany,
    IgdbExternalGame,
    IgdbImage,
    IgdbInvolvedCompany,
    IgdbReleaseDate,
    IgdbWebsite,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .client import IgdbClient

log = getLogger(__name__)

# IGDB platform ids: PC (Windows), Mac, Linux.
PC_PLATFORMS = (6, 13, 14)

EXTERNAL_GAME_CATEGORY: dict[str, int] = {
    Storefront.STEAM: 1,
    Storefront.GOG: 5,
}
STEAM_EXTERNAL_CATEGORY = EXTERNAL_GAME_CATEGORY[Storefront.STEAM]
GOG_EXTERNAL_CATEGORY = EXTERNAL_GAME_CATEGORY[Storefront.GOG]

SEARCH_LIMIT = 50


class IgdbLookup:
    def __init__(self, client: IgdbClient) -> None:
        self._client = client

    async def get_game(self, game_id: int) -> CanonicalGame:
        games = await self._records("games", IgdbQuery(where=f"id = {game_id}"), CanonicalGame)
        if not games:
            raise NotFoundError(f"IGDB game {game_id} not found")
        return games[0]

    async def get_games(self, ids: Sequence[int]) -> list[CanonicalGame]:
        if not ids:
            return []
        query = IgdbQuery(where=id_in(ids), limit=len(ids))
        return await self._records("games", query, CanonicalGame)

    async def search(self, title: str, *, limit: int = SEARCH_LIMIT) -> list[CanonicalGame]:
        query = IgdbQuery(search=title, where=id_in(PC_PLATFORMS, "platforms"), limit=limit)
        return await self._records("games", query, CanonicalGame)

    async def get_bundle_game_ids(self, bundle_id: int) -> list[int]:
        query = IgdbQuery(fields=("id", "name"), where=f"bundles = ({bundle_id})", limit=500)
        rows = await self._client.post("games", query)
        return [int(row["id"]) for row in rows if "id" in row]

    async def get_cover(self, cover_id: int) -> IgdbImage | None:
        covers = await self._by_ids("covers", [cover_id], IgdbImage)
        return covers[0] if covers else None

    async def get_covers(self, ids: Sequence[int]) -> list[IgdbImage]:
        return await self._by_ids("covers", ids, IgdbImage)

    async def get_artwork(self, ids: Sequence[int]) -> list[IgdbImage]:
        return await self._by_ids("artworks", ids, IgdbImage)

    async def get_screenshots(self, ids: Sequence[int]) -> list[IgdbImage]:
        return await self._by_ids("screenshots", ids, IgdbImage)

    async def get_websites(self, ids: Sequence[int]) -> list[IgdbWebsite]:
        return await self._by_ids("websites", ids, IgdbWebsite)

    async def get_involved_companies(self, ids: Sequence[int]) -> list[IgdbInvolvedCompany]:
        return await self._by_ids("involved_companies", ids, IgdbInvolvedCompany)

    async def get_companies(self, ids: Sequence[int]) -> list[IgdbCompany]:
        return await self._by_ids("companies", ids, IgdbCompany)

    async def get_collections(self, ids: Sequence[int]) -> list[IgdbAnnotation]:
        return await self._by_ids("collections", ids, IgdbAnnotation)

    async def get_franchises(self, ids: Sequence[int]) -> list[IgdbAnnotation]:
        return await self._by_ids("franchises", ids, IgdbAnnotation)

    async def get_keywords(self, ids: Sequence[int]) -> list[IgdbAnnotation]:
        return await self._by_ids("keywords", ids, IgdbAnnotation)

    async def get_genres(self, ids: Sequence[int]) -> list[IgdbAnnotation]:
        return await self._by_ids("genres", ids, IgdbAnnotation)

    async def get_release_dates(self, ids: Sequence[int]) -> list[IgdbReleaseDate]:
        return await self._by_ids(
            "release_dates", ids, IgdbReleaseDate, fields=("category", "date", "status.name")
        )

    async def get_external_games(self, ids: Sequence[int]) -> list[IgdbExternalGame]:
        return await self._by_ids("external_games", ids, IgdbExternalGame)

    async def get_external_game(self, store_name: str, store_id: str) -> IgdbExternalGame:
        """Map a storefront id to its IGDB record; only Steam and GOG are indexed."""

        category = EXTERNAL_GAME_CATEGORY.get(store_name)
        if category is None:
            raise InvalidArgumentError(f"Unsupported storefront '{store_name}'")
        uid = store_id.replace('"', "")
        query = IgdbQuery(where=f'uid = "{uid}" & category = {category}')
        records = await self._records("external_games", query, IgdbExternalGame)
        if not records:
            raise NotFoundError(f"No IGDB mapping for {store_name} id {store_id}")
        return records[0]

    async def _by_ids[M: BaseModel](
        self,
        endpoint: str,
        ids: Sequence[int],
        model: type[M],
        *,
        fields: tuple[str, ...] = ("*",),
    ) -> list[M]:
        if not ids:
            return []
        query = IgdbQuery(fields=fields, where=id_in(ids), limit=len(ids))
        return await self._records(endpoint, query, model)

    async def _records[M: BaseModel](
        self, endpoint: str, query: IgdbQuery, model: type[M]
    ) -> list[M]:
        rows = await self._client.post(endpoint, query)
        try:
            return [model.model_validate(row) for row in rows]
        except ValidationError as exc:
            raise InternalError(f"Unexpected IGDB /{endpoint} record: {exc}") from exc
