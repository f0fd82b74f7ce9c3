"""Upstream collaborators the resolver depends on."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from questlog.adapters.igdb import (
        IgdbAnnotation,
        IgdbCompany,
        IgdbExternalGame,
        IgdbImage,
        IgdbInvolvedCompany,
        IgdbReleaseDate,
        IgdbWebsite,
    )
    from questlog.domain.model import CanonicalGame, SteamData


@runtime_checkable
class CatalogLookup(Protocol):
    """Primary catalog queries (implemented by ``IgdbLookup``)."""

    async def get_game(self, game_id: int) -> CanonicalGame: ...

    async def get_games(self, ids: Sequence[int]) -> list[CanonicalGame]: ...

    async def search(self, title: str) -> list[CanonicalGame]: ...

    async def get_bundle_game_ids(self, bundle_id: int) -> list[int]: ...

    async def get_cover(self, cover_id: int) -> IgdbImage | None: ...

    async def get_covers(self, ids: Sequence[int]) -> list[IgdbImage]: ...

    async def get_artwork(self, ids: Sequence[int]) -> list[IgdbImage]: ...

    async def get_screenshots(self, ids: Sequence[int]) -> list[IgdbImage]: ...

    async def get_websites(self, ids: Sequence[int]) -> list[IgdbWebsite]: ...

    async def get_involved_companies(self, ids: Sequence[int]) -> list[IgdbInvolvedCompany]: ...

    async def get_companies(self, ids: Sequence[int]) -> list[IgdbCompany]: ...

    async def get_collections(self, ids: Sequence[int]) -> list[IgdbAnnotation]: ...

    async def get_franchises(self, ids: Sequence[int]) -> list[IgdbAnnotation]: ...

    async def get_keywords(self, ids: Sequence[int]) -> list[IgdbAnnotation]: ...

    async def get_genres(self, ids: Sequence[int]) -> list[IgdbAnnotation]: ...

    async def get_release_dates(self, ids: Sequence[int]) -> list[IgdbReleaseDate]: ...

    async def get_external_games(self, ids: Sequence[int]) -> list[IgdbExternalGame]: ...

    async def get_external_game(self, store_name: str, store_id: str) -> IgdbExternalGame: ...


@runtime_checkable
class SteamSource(Protocol):
    async def get_steam_data(self, appid: int) -> SteamData: ...

    async def scrape_user_tags(self, appid: int) -> list[str]: ...


@runtime_checkable
class CriticScoreSource(Protocol):
    async def get_score(self, slug: str) -> int | None: ...
