"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, AsyncExitStack, asynccontextmanager
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from questlog.adapters.igdb import IgdbClient, IgdbConnection, IgdbLookup
from questlog.adapters.metacritic import MetacriticClient
from questlog.adapters.sqlalchemy import SqlAlchemyDocumentStore, is_started, shutdown, startup
from questlog.adapters.steam import SteamClient
from questlog.config import get_igdb_config, get_metacritic_config, get_steam_config
from questlog.domain.errors import NotFoundError, QuestlogError
from questlog.domain.model import StoreEntry
from questlog.resolver import Reconciler, Resolver, ResolverSources

if TYPE_CHECKING:
    from collections.abc import Sequence

    from questlog.domain.model import GameDigest, GameEntry
    from questlog.domain.ports.documents import DocumentStore

ResolverFactory = Callable[[], AbstractAsyncContextManager[Resolver]]

log = getLogger(__name__)


@asynccontextmanager
async def build_resolver(*, store: DocumentStore | None = None) -> AsyncIterator[Resolver]:
    """Wire configuration, rate limiters, upstream clients and the document store."""

    async with AsyncExitStack() as stack:
        if store is None:
            if not is_started():
                await startup()
                stack.push_async_callback(shutdown)
            store = SqlAlchemyDocumentStore()

        igdb_config = get_igdb_config()
        connection = await IgdbConnection.authenticate(igdb_config)
        igdb = await stack.enter_async_context(IgdbClient(connection, igdb_config.resilience))
        steam = await stack.enter_async_context(SteamClient(config=get_steam_config()))
        metacritic = await stack.enter_async_context(
            MetacriticClient(config=get_metacritic_config())
        )
        yield Resolver(
            ResolverSources(
                catalog=IgdbLookup(igdb),
                store=store,
                steam=steam,
                metacritic=metacritic,
            )
        )


def retrieve_game(game_id: int, *, resolver_factory: ResolverFactory = build_resolver) -> GameEntry:
    async def run() -> GameEntry:
        async with resolver_factory() as resolver:
            return await resolver.retrieve(game_id)

    return asyncio.run(run())


def resolve_game(game_id: int, *, resolver_factory: ResolverFactory = build_resolver) -> GameEntry:
    """Re-resolve ``game_id`` from upstream and overwrite its stored entry."""

    async def run() -> GameEntry:
        async with resolver_factory() as resolver:
            game = await resolver.sources.catalog.get_game(game_id)
            return await resolver.resolve(game)

    return asyncio.run(run())


def digest_game(game_id: int, *, resolver_factory: ResolverFactory = build_resolver) -> GameDigest:
    async def run() -> GameDigest:
        async with resolver_factory() as resolver:
            return await resolver.digest(game_id)

    return asyncio.run(run())


def search_games(
    title: str,
    *,
    base_game_only: bool = False,
    resolver_factory: ResolverFactory = build_resolver,
) -> list[GameDigest]:
    async def run() -> list[GameDigest]:
        async with resolver_factory() as resolver:
            return await resolver.search(title, base_game_only=base_game_only)

    return asyncio.run(run())


def reconcile_entry(
    storefront_name: str,
    store_id: str,
    title: str,
    *,
    resolver_factory: ResolverFactory = build_resolver,
) -> list[GameEntry]:
    store_entry = StoreEntry(storefront_name=storefront_name, id=store_id, title=title)

    async def run() -> list[GameEntry]:
        async with resolver_factory() as resolver:
            return await Reconciler(resolver).reconcile(store_entry)

    return asyncio.run(run())


@dataclass(slots=True)
class SyncLibraryResult:
    fetched: int = 0
    resolved: int = 0
    unresolved: list[StoreEntry] = field(default_factory=list)
    failed: list[StoreEntry] = field(default_factory=list)
    game_ids: list[int] = field(default_factory=list)


def sync_steam_library(
    *,
    library: Sequence[StoreEntry] | None = None,
    resolver_factory: ResolverFactory = build_resolver,
) -> SyncLibraryResult:
    """Reconcile every owned Steam title; one failing title never stops the run."""

    async def run() -> SyncLibraryResult:
        entries = list(library) if library is not None else await _owned_steam_games()
        result = SyncLibraryResult(fetched=len(entries))
        log.info("Starting Steam library sync: entries=%s", result.fetched)
        async with resolver_factory() as resolver:
            reconciler = Reconciler(resolver)
            for store_entry in entries:
                try:
                    matched = await reconciler.reconcile(store_entry)
                except NotFoundError:
                    matched = []
                except QuestlogError:
                    log.exception(
                        "Reconciling Steam app %s '%s' failed", store_entry.id, store_entry.title
                    )
                    result.failed.append(store_entry)
                    continue
                if not matched:
                    result.unresolved.append(store_entry)
                    continue
                result.resolved += 1
                result.game_ids.extend(entry.id for entry in matched)
        log.info(
            f"Finished Steam library sync: fetched={result.fetched}, "
            f"resolved={result.resolved}, unresolved={len(result.unresolved)}, "
            f"failed={len(result.failed)}"
        )
        return result

    return asyncio.run(run())


async def _owned_steam_games() -> list[StoreEntry]:
    async with SteamClient(config=get_steam_config()) as steam:
        return await steam.get_owned_games()
