"""The resolver client surface: retrieve, resolve, digest and search."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from questlog.domain.errors import NotFoundError, QuestlogError
from questlog.domain.model import GameCategory, GameDigest, GameEntry
from questlog.domain.ports.documents import DocumentCollection
from questlog.domain.ranking import RelevanceRanker

from .aggregates import AggregateUpdater
from .digest import DigestResolver
from .fetch import parse_document
from .info import InfoResolver

if TYPE_CHECKING:
    from questlog.domain.model import CanonicalGame

    from .sources import ResolverSources

log = getLogger(__name__)

BASE_GAME_CATEGORIES = frozenset({GameCategory.MAIN, GameCategory.REMAKE, GameCategory.REMASTER})


class Resolver:
    def __init__(self, sources: ResolverSources) -> None:
        self.sources = sources
        self.aggregates = AggregateUpdater(sources.store)
        self._digests = DigestResolver(sources, self.aggregates)
        self._info = InfoResolver(sources, self._digests)

    async def retrieve(self, game_id: int) -> GameEntry:
        """Stored entry for ``game_id``, resolving and storing it on a miss."""

        stored = await self._stored_entry(game_id)
        if stored is not None:
            return stored
        game = await self.sources.catalog.get_game(game_id)
        return await self.resolve(game)

    async def resolve(self, game: CanonicalGame) -> GameEntry:
        """Run the Digest and Info paths for ``game`` and persist the result."""

        entry = await self._digests.resolve(game)
        entry = await self._info.resolve(entry, game)
        await self.sources.store.write(
            DocumentCollection.GAMES, entry.id, entry.model_dump(mode="json")
        )
        log.info("Resolved game %s '%s'", entry.id, entry.name)
        return entry

    async def resolve_digest(self, game: CanonicalGame) -> GameEntry:
        """Digest path only; the entry is not persisted."""
        return await self._digests.resolve(game)

    async def digest(self, game_id: int) -> GameDigest:
        return (await self.digest_entry(game_id)).digest()

    async def digest_entry(self, game_id: int) -> GameEntry:
        stored = await self._stored_entry(game_id)
        if stored is not None:
            return stored
        game = await self.sources.catalog.get_game(game_id)
        return await self.resolve_digest(game)

    async def entry_for(self, game: CanonicalGame) -> GameEntry:
        """Stored entry for an already fetched catalog record, else its digest-path entry."""

        stored = await self._stored_entry(game.id)
        if stored is not None:
            return stored
        return await self.resolve_digest(game)

    async def search(self, title: str, *, base_game_only: bool = False) -> list[GameDigest]:
        catalog = self.sources.catalog
        candidates = await catalog.search(title)
        ranked = RelevanceRanker(title).rank_above(candidates, lambda game: game.name)
        games = [item.candidate for item in ranked]
        if base_game_only:
            games = [game for game in games if game.game_category in BASE_GAME_CATEGORIES]
        if not games:
            return []

        cover_ids = [game.cover for game in games if game.cover is not None]
        try:
            covers = await catalog.get_covers(cover_ids)
        except QuestlogError as exc:
            log.warning("Fetching covers for search '%s' failed: %s", title, exc)
            covers = []
        image_by_cover = {cover.id: cover.image_id for cover in covers}
        return [
            GameDigest(
                id=game.id,
                name=game.name,
                category=game.game_category,
                status=game.game_status,
                cover=image_by_cover.get(game.cover) if game.cover is not None else None,
                release_date=game.first_release_date or None,
                rating=round(game.aggregated_rating) if game.aggregated_rating else None,
                parent_id=game.parent_id(),
            )
            for game in games
        ]

    async def _stored_entry(self, game_id: int) -> GameEntry | None:
        try:
            document = await self.sources.store.read(DocumentCollection.GAMES, game_id)
        except NotFoundError:
            return None
        return parse_document(GameEntry, document)
