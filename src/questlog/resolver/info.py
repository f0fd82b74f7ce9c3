"""Info path: extends a digest-resolved entry into the full game entry."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from questlog.adapters.steam import parse_steam_appid
from questlog.domain.model import GameEntry, Image, Keyword, Website, WebsiteAuthority
from questlog.domain.ports.documents import DocumentCollection

from .cached_lookup import cached_lookup
from .fetch import best_effort, parse_document

if TYPE_CHECKING:
    from collections.abc import Iterable

    from questlog.adapters.igdb import IgdbImage, IgdbWebsite
    from questlog.domain.model import CanonicalGame, GameDigest, SteamData

    from .digest import DigestResolver
    from .sources import ResolverSources

log = getLogger(__name__)

WEBSITE_AUTHORITY: dict[int, WebsiteAuthority] = {
    1: WebsiteAuthority.OFFICIAL,
    3: WebsiteAuthority.WIKIPEDIA,
    9: WebsiteAuthority.YOUTUBE,
    13: WebsiteAuthority.STEAM,
    16: WebsiteAuthority.EGS,
    17: WebsiteAuthority.GOG,
}


def map_websites(websites: Iterable[IgdbWebsite]) -> list[Website]:
    return [
        Website(url=website.url, authority=authority)
        for website in websites
        if website.url and (authority := WEBSITE_AUTHORITY.get(website.category or 0))
    ]


def _images(images: Iterable[IgdbImage]) -> list[Image]:
    return [
        Image(image_id=image.image_id, height=image.height, width=image.width)
        for image in images
        if image.image_id
    ]


class RelatedDigests:
    """Resolves related-title ids into digests, each id at most once.

    The root game's own id is pre-seeded with its digest, so a title listed as its
    own parent or expansion never triggers another resolution.
    """

    def __init__(self, sources: ResolverSources, digests: DigestResolver, root: GameDigest) -> None:
        self._sources = sources
        self._digests = digests
        self._resolved: dict[int, GameDigest] = {root.id: root}
        self._visited: set[int] = {root.id}

    async def resolve(self, ids: Iterable[int]) -> dict[int, GameDigest]:
        worklist = [game_id for game_id in dict.fromkeys(ids) if game_id not in self._visited]
        self._visited.update(worklist)
        if worklist:
            await self._resolve_batch(worklist)
        return self._resolved

    async def _resolve_batch(self, ids: list[int]) -> None:
        store = self._sources.store
        batch = await store.batch_read(DocumentCollection.GAMES, ids)
        for document in batch.found:
            digest = parse_document(GameEntry, document).digest()
            self._resolved[digest.id] = digest

        missing = [int(doc_id) for doc_id in batch.not_found]
        if not missing:
            return
        games = await self._sources.catalog.get_games(missing)
        entries = await asyncio.gather(
            *(
                best_effort(self._digests.resolve(game), None, "related digest", game.id)
                for game in games
            )
        )
        for entry in entries:
            if entry is not None:
                self._resolved[entry.id] = entry.digest()

    @staticmethod
    def pick(resolved: dict[int, GameDigest], ids: Iterable[int]) -> list[GameDigest]:
        return [resolved[game_id] for game_id in dict.fromkeys(ids) if game_id in resolved]


class InfoResolver:
    def __init__(self, sources: ResolverSources, digests: DigestResolver) -> None:
        self._sources = sources
        self._digests = digests

    async def resolve(self, entry: GameEntry, game: CanonicalGame) -> GameEntry:
        """Attach keywords, websites, media and related titles to ``entry``."""

        catalog = self._sources.catalog
        related = RelatedDigests(self._sources, self._digests, entry.digest())

        keywords, websites, artwork, content_ids = await asyncio.gather(
            best_effort(self._keywords(game.keywords), [], "keywords", game.id),
            best_effort(catalog.get_websites(game.websites), [], "websites", game.id),
            best_effort(catalog.get_artwork(game.artworks), [], "artwork", game.id),
            best_effort(self._content_ids(entry), [], "bundle contents", game.id),
        )

        parent_id = game.parent_id()
        expansion_ids = [*game.expansions, *game.standalone_expansions]
        related_ids = [
            *([parent_id] if parent_id is not None else []),
            *expansion_ids,
            *game.dlcs,
            *game.remakes,
            *game.remasters,
            *content_ids,
        ]

        entry.keywords = [keyword.name for keyword in keywords]
        entry.websites = [*entry.websites, *map_websites(websites)]
        entry.artwork = _images(artwork)

        resolved, _ = await asyncio.gather(
            best_effort(related.resolve(related_ids), {}, "related titles", game.id),
            self._attach_store_media(entry, game),
        )
        if parent_id is not None and parent_id != game.id:
            entry.parent = resolved.get(parent_id)
        entry.expansions = RelatedDigests.pick(resolved, expansion_ids)
        entry.dlcs = RelatedDigests.pick(resolved, game.dlcs)
        entry.remakes = RelatedDigests.pick(resolved, game.remakes)
        entry.remasters = RelatedDigests.pick(resolved, game.remasters)
        entry.contents = RelatedDigests.pick(resolved, content_ids)
        return entry

    async def _attach_store_media(self, entry: GameEntry, game: CanonicalGame) -> None:
        """Find steam data through the store website if needed, then screenshots and tags."""

        if entry.steam_data is None:
            entry.steam_data = await best_effort(
                self._steam_from_websites(entry.websites), None, "steam data", game.id
            )
            if entry.steam_data is not None:
                entry.scores.add_steam(entry.steam_data)
                entry.scores.finalize(entry.release_date)

        steam_data = entry.steam_data
        has_store_screenshots = steam_data is not None and bool(steam_data.screenshots)
        screenshots, tags = await asyncio.gather(
            best_effort(
                self._catalog_screenshots(game, skip=has_store_screenshots),
                [],
                "screenshots",
                game.id,
            ),
            best_effort(self._user_tags(steam_data), [], "steam user tags", game.id),
        )
        if not has_store_screenshots:
            entry.screenshots = _images(screenshots)
        if steam_data is not None and tags:
            steam_data.user_tags = tags

    async def _catalog_screenshots(self, game: CanonicalGame, *, skip: bool) -> list[IgdbImage]:
        if skip:
            return []
        return await self._sources.catalog.get_screenshots(game.screenshots)

    async def _user_tags(self, steam_data: SteamData | None) -> list[str]:
        if steam_data is None or self._sources.steam is None:
            return []
        return await self._sources.steam.scrape_user_tags(steam_data.steam_appid)

    async def _keywords(self, ids: list[int]) -> list[Keyword]:
        async def fetch_missing(missing: list[int]) -> list[Keyword]:
            return [
                Keyword(id=item.id, slug=item.slug, name=item.name)
                for item in await self._sources.catalog.get_keywords(missing)
            ]

        return await cached_lookup(
            self._sources.store,
            DocumentCollection.KEYWORDS,
            ids,
            from_document=lambda document: parse_document(Keyword, document),
            fetch_missing=fetch_missing,
            key=lambda keyword: keyword.id,
        )

    async def _content_ids(self, entry: GameEntry) -> list[int]:
        if not entry.category.has_contents:
            return []
        return await self._sources.catalog.get_bundle_game_ids(entry.id)

    async def _steam_from_websites(self, websites: list[Website]) -> SteamData | None:
        if self._sources.steam is None:
            return None
        for website in websites:
            if website.authority != WebsiteAuthority.STEAM:
                continue
            appid = parse_steam_appid(website.url)
            if appid is not None:
                return await self._sources.steam.get_steam_data(appid)
        return None
