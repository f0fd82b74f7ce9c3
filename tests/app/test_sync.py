from __future__ import annotations

import pytest

from questlog import app
from questlog.adapters.memory import InMemoryDocumentStore
from questlog.app import SyncLibraryResult, reconcile_entry, search_games, sync_steam_library
from questlog.domain.model import StoreEntry
from questlog.domain.ports.documents import DocumentCollection
from tests.helpers.games import (
    PORTAL_2,
    make_resolver,
    portal_catalog,
    portal_steam,
    resolver_factory,
)


def test_sync_counts_resolved_unresolved_and_failed() -> None:
    catalog = portal_catalog()
    catalog.search_results = [catalog.games[PORTAL_2]]
    store = InMemoryDocumentStore()
    resolver = make_resolver(catalog, store=store, steam=portal_steam())
    library = [
        StoreEntry(storefront_name="steam", id="620", title="Portal 2"),
        StoreEntry(storefront_name="steam", id="12345", title="Sid Meier's Pirates!"),
        StoreEntry(storefront_name="origin", id="1", title="Portal 2"),
    ]

    result = sync_steam_library(library=library, resolver_factory=resolver_factory(resolver))

    assert isinstance(result, SyncLibraryResult)
    assert result.fetched == 3
    assert result.resolved == 1
    assert result.game_ids == [PORTAL_2]
    assert [entry.id for entry in result.unresolved] == ["12345"]
    assert [entry.storefront_name for entry in result.failed] == ["origin"]
    assert "steam_620" in store.collections[DocumentCollection.EXTERNAL_GAMES]


def test_sync_reads_owned_games_when_no_library_given(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_owned() -> list[StoreEntry]:
        return [StoreEntry(storefront_name="steam", id="620", title="Portal 2")]

    monkeypatch.setattr(app, "_owned_steam_games", fake_owned)
    resolver = make_resolver(portal_catalog(), steam=portal_steam())

    result = sync_steam_library(resolver_factory=resolver_factory(resolver))

    assert result.fetched == 1
    assert result.game_ids == [PORTAL_2]


def test_reconcile_entry_wraps_reconciler() -> None:
    resolver = make_resolver(portal_catalog(), steam=portal_steam())

    entries = reconcile_entry(
        "steam", "620", "Portal 2", resolver_factory=resolver_factory(resolver)
    )

    assert [entry.name for entry in entries] == ["Portal 2"]


def test_search_games_wraps_resolver_search() -> None:
    catalog = portal_catalog()
    catalog.search_results = [catalog.games[PORTAL_2]]
    resolver = make_resolver(catalog)

    digests = search_games("portal 2", resolver_factory=resolver_factory(resolver))

    assert [digest.id for digest in digests] == [PORTAL_2]
