"""Digest path: the cross-referenced identity record of a game."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from questlog.adapters.igdb import GOG_EXTERNAL_CATEGORY, STEAM_EXTERNAL_CATEGORY
from questlog.adapters.metacritic import guess_slug
from questlog.domain.companies import company_role, company_slug, narrow_companies
from questlog.domain.errors import NotFoundError
from questlog.domain.model import (
    CollectionDigest,
    CollectionType,
    CompanyDigest,
    ExternalGameMapping,
    GameEntry,
    GenreAnnotation,
    Image,
    ScoreSource,
    WikipediaData,
    external_game_doc_id,
)
from questlog.domain.ports.documents import DocumentCollection

from .cached_lookup import cached_lookup
from .fetch import PrimaryFetches, best_effort, parse_document
from .release_date import catalog_release_date, choose_release_date

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from questlog.adapters.igdb import IgdbAnnotation, IgdbExternalGame
    from questlog.domain.model import CanonicalGame, GogData, SteamData

    from .aggregates import AggregateUpdater
    from .sources import ResolverSources

log = getLogger(__name__)


def _store_uid(externals: list[IgdbExternalGame], category: int) -> str | None:
    for external in externals:
        if external.category == category and external.uid:
            return external.uid
    return None


class DigestResolver:
    def __init__(self, sources: ResolverSources, aggregates: AggregateUpdater) -> None:
        self._sources = sources
        self._aggregates = aggregates

    async def resolve(self, game: CanonicalGame) -> GameEntry:
        """Build the identity-level entry for ``game``.

        Enrichment failures leave their field empty. Raises ``RequestError`` only when
        every primary-catalog lookup failed to reach IGDB.
        """
        catalog = self._sources.catalog
        primary = PrimaryFetches(game.id)

        (
            cover,
            collections,
            franchises,
            companies,
            genres,
            externals,
            release_dates,
            metacritic,
            wikipedia,
            annotation,
        ) = await asyncio.gather(
            primary.run(self._cover(game), None, "cover"),
            primary.run(
                self._annotations(
                    DocumentCollection.COLLECTIONS,
                    game.collection_ids(),
                    catalog.get_collections,
                    CollectionType.COLLECTION,
                ),
                [],
                "collections",
            ),
            primary.run(
                self._annotations(
                    DocumentCollection.FRANCHISES,
                    game.franchise_ids(),
                    catalog.get_franchises,
                    CollectionType.FRANCHISE,
                ),
                [],
                "franchises",
            ),
            primary.run(self._companies(game), [], "companies"),
            primary.run(catalog.get_genres(game.genres), [], "genres"),
            primary.run(catalog.get_external_games(game.external_games), [], "external games"),
            primary.run(catalog.get_release_dates(game.release_dates), [], "release dates"),
            best_effort(self._metacritic_score(game), None, "metacritic score", game.id),
            best_effort(self._wikipedia(game.id), None, "wikipedia data", game.id),
            best_effort(self._annotation(game.id), None, "genre annotation", game.id),
        )
        primary.raise_if_unreachable()

        steam_appid = _store_uid(externals, STEAM_EXTERNAL_CATEGORY)
        gog_id = _store_uid(externals, GOG_EXTERNAL_CATEGORY)
        steam_data, gog_data = await asyncio.gather(
            best_effort(self._steam_data(steam_appid), None, "steam data", game.id),
            best_effort(self._gog_data(gog_id), None, "gog data", game.id),
        )

        entry = GameEntry.from_canonical(game)
        entry.cover = cover
        entry.collections = collections
        entry.franchises = franchises
        entry.developers = [company for company in companies if company.role.develops]
        entry.publishers = [company for company in companies if company.role.publishes]
        entry.genres = [genre.name for genre in genres]

        if steam_data is not None:
            entry.steam_data = steam_data
            entry.scores.add_steam(steam_data)
            entry.developers = narrow_companies(entry.developers, steam_data.developers)
            entry.publishers = narrow_companies(entry.publishers, steam_data.publishers)
        elif wikipedia is not None:
            entry.developers = narrow_companies(entry.developers, wikipedia.developers)
            entry.publishers = narrow_companies(entry.publishers, wikipedia.publishers)

        catalog_date, category = catalog_release_date(release_dates, game.first_release_date)
        store_date = steam_data.release_timestamp() if steam_data is not None else None
        if store_date is None and gog_data is not None:
            store_date = gog_data.release_timestamp()
        entry.release_date = choose_release_date(catalog_date, category, store_date)

        entry.scores.add_aggregator(metacritic, ScoreSource.METACRITIC)
        if wikipedia is not None:
            entry.scores.add_aggregator(wikipedia.score, ScoreSource.WIKIPEDIA)
        if gog_data is not None:
            entry.scores.add_aggregator(gog_data.critic_score, ScoreSource.GOG)
        entry.scores.finalize(entry.release_date)

        if annotation is not None:
            entry.espy_genres = list(annotation.espy_genres)
        else:
            await best_effort(self._request_annotation(entry), None, "annotation request", game.id)

        await self._aggregates.update(entry)
        return entry

    async def _cover(self, game: CanonicalGame) -> Image | None:
        if game.cover is None:
            return None
        cover = await self._sources.catalog.get_cover(game.cover)
        if cover is None:
            return None
        return Image(image_id=cover.image_id, height=cover.height, width=cover.width)

    async def _annotations(
        self,
        collection: DocumentCollection,
        ids: list[int],
        fetch: Callable[[list[int]], Awaitable[list[IgdbAnnotation]]],
        kind: CollectionType,
    ) -> list[CollectionDigest]:
        async def fetch_missing(missing: list[int]) -> list[CollectionDigest]:
            return [
                CollectionDigest(id=item.id, name=item.name, slug=item.slug, type=kind)
                for item in await fetch(missing)
            ]

        def from_document(document: dict[str, object]) -> CollectionDigest:
            digest = parse_document(CollectionDigest, document)
            return digest.model_copy(update={"type": kind})

        return await cached_lookup(
            self._sources.store,
            collection,
            ids,
            from_document=from_document,
            fetch_missing=fetch_missing,
            key=lambda item: item.id,
        )

    async def _companies(self, game: CanonicalGame) -> list[CompanyDigest]:
        """Developers and publishers with their roles; other involvements are dropped."""

        catalog = self._sources.catalog
        involved = await catalog.get_involved_companies(game.involved_companies)

        flags: dict[int, list[bool]] = {}
        for item in involved:
            merged = flags.setdefault(item.company, [False, False, False, False])
            for index, flag in enumerate(
                (item.developer, item.publisher, item.porting, item.supporting)
            ):
                merged[index] = merged[index] or flag
        roles = {
            company_id: company_role(
                developer=dev, publisher=pub, porting=port, supporting=support
            )
            for company_id, (dev, pub, port, support) in flags.items()
        }
        roles = {
            company_id: role
            for company_id, role in roles.items()
            if role.develops or role.publishes
        }

        async def fetch_missing(missing: list[int]) -> list[CompanyDigest]:
            return [
                CompanyDigest(id=company.id, name=company.name, slug=company_slug(company.name))
                for company in await catalog.get_companies(missing)
            ]

        companies = await cached_lookup(
            self._sources.store,
            DocumentCollection.COMPANIES,
            list(roles),
            from_document=lambda document: parse_document(CompanyDigest, document),
            fetch_missing=fetch_missing,
            key=lambda company: company.id,
        )
        return [company.model_copy(update={"role": roles[company.id]}) for company in companies]

    async def _steam_data(self, appid: str | None) -> SteamData | None:
        if appid is None or self._sources.steam is None or not appid.isdigit():
            return None
        return await self._sources.steam.get_steam_data(int(appid))

    async def _gog_data(self, gog_id: str | None) -> GogData | None:
        if gog_id is None:
            return None
        try:
            document = await self._sources.store.read(
                DocumentCollection.EXTERNAL_GAMES, external_game_doc_id("gog", gog_id)
            )
        except NotFoundError:
            return None
        return parse_document(ExternalGameMapping, document).gog_data

    async def _metacritic_score(self, game: CanonicalGame) -> int | None:
        slug = guess_slug(game.url)
        if slug is None or self._sources.metacritic is None:
            return None
        return await self._sources.metacritic.get_score(slug)

    async def _wikipedia(self, game_id: int) -> WikipediaData | None:
        try:
            document = await self._sources.store.read(DocumentCollection.WIKIPEDIA, game_id)
        except NotFoundError:
            return None
        return parse_document(WikipediaData, document)

    async def _annotation(self, game_id: int) -> GenreAnnotation | None:
        try:
            document = await self._sources.store.read(DocumentCollection.GENRES, game_id)
        except NotFoundError:
            return None
        return parse_document(GenreAnnotation, document)

    async def _request_annotation(self, entry: GameEntry) -> None:
        await self._sources.store.write(
            DocumentCollection.NEEDS_ANNOTATION,
            entry.id,
            {"id": entry.id, "name": entry.name},
        )
