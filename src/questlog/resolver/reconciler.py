"""Maps storefront ownership records onto catalog entries."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from questlog.adapters.igdb.lookups import EXTERNAL_GAME_CATEGORY
from questlog.domain.errors import InvalidArgumentError, NotFoundError, QuestlogError
from questlog.domain.model import ExternalGameMapping, Storefront, external_game_doc_id
from questlog.domain.ports.documents import DocumentCollection
from questlog.domain.ranking import RelevanceRanker

from .fetch import parse_document

if TYPE_CHECKING:
    from questlog.domain.model import CanonicalGame, GameEntry, StoreEntry

    from .service import Resolver

log = getLogger(__name__)


class Reconciler:
    """Resolves a ``StoreEntry`` to zero, one or (for bundles) many game entries.

    An exact ``(storefront, id)`` mapping is tried first; free-text title search is
    the fallback. Finding nothing is a valid outcome and yields an empty list.
    """

    def __init__(self, resolver: Resolver) -> None:
        self._resolver = resolver
        self._catalog = resolver.sources.catalog
        self._store = resolver.sources.store

    async def reconcile(self, store_entry: StoreEntry) -> list[GameEntry]:
        storefront = _storefront(store_entry.storefront_name)

        entry: GameEntry | None = None
        if store_entry.id:
            game_id = await self._mapped_game_id(storefront, store_entry.id)
            if game_id is not None:
                entry = await self._entry_for_id(game_id)
        if entry is None:
            entry = await self._match_by_title(store_entry.title)
        if entry is None:
            log.info(
                "No match for %s entry '%s' (%s)",
                storefront,
                store_entry.title,
                store_entry.id or "no id",
            )
            return []

        if not entry.category.has_contents:
            return [entry]
        return [entry, *await self._bundle_contents(entry)]

    async def _mapped_game_id(self, storefront: Storefront, store_id: str) -> int | None:
        try:
            document = await self._store.read(
                DocumentCollection.EXTERNAL_GAMES, external_game_doc_id(storefront, store_id)
            )
        except NotFoundError:
            pass
        else:
            return parse_document(ExternalGameMapping, document).igdb_id

        if storefront not in EXTERNAL_GAME_CATEGORY:
            return None
        try:
            external = await self._catalog.get_external_game(storefront, store_id)
        except NotFoundError:
            return None
        mapping = ExternalGameMapping(
            store_name=storefront.value,
            store_id=store_id,
            igdb_id=external.game,
            store_url=external.url,
        )
        try:
            await self._store.write(
                DocumentCollection.EXTERNAL_GAMES, mapping.doc_id, mapping.model_dump(mode="json")
            )
        except QuestlogError as exc:
            log.warning("Storing mapping %s failed: %s", mapping.doc_id, exc)
        return external.game

    async def _entry_for_id(self, game_id: int) -> GameEntry | None:
        try:
            return await self._resolver.digest_entry(game_id)
        except NotFoundError:
            log.info("Mapped game %s no longer exists in the catalog", game_id)
            return None

    async def _match_by_title(self, title: str) -> GameEntry | None:
        if not title.strip():
            return None
        candidates = await self._catalog.search(title)
        ranked = RelevanceRanker(title).rank_above(candidates, lambda game: game.name)
        if not ranked:
            return None
        best: CanonicalGame = ranked[0].candidate
        log.info("Matched '%s' to game %s '%s'", title, best.id, best.name)
        try:
            return await self._resolver.entry_for(best)
        except NotFoundError:
            return None

    async def _bundle_contents(self, bundle: GameEntry) -> list[GameEntry]:
        if bundle.contents:
            ids = [digest.id for digest in bundle.contents]
        else:
            ids = await self._catalog.get_bundle_game_ids(bundle.id)
        ids = [game_id for game_id in dict.fromkeys(ids) if game_id != bundle.id]
        entries = await asyncio.gather(*(self._entry_for_id(game_id) for game_id in ids))
        return [entry for entry in entries if entry is not None]


def _storefront(name: str) -> Storefront:
    try:
        return Storefront(name.lower())
    except ValueError as exc:
        raise InvalidArgumentError(f"Unsupported storefront '{name}'") from exc
