"""Reusable fakes and builders for resolver and reconciler tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from questlog.adapters.http_resilience import ResilientClient
from questlog.adapters.igdb import (
    IgdbAnnotation,
    IgdbCompany,
    IgdbExternalGame,
    IgdbImage,
    IgdbInvolvedCompany,
    IgdbReleaseDate,
    IgdbWebsite,
)
from questlog.adapters.igdb.lookups import EXTERNAL_GAME_CATEGORY
from questlog.adapters.memory import InMemoryDocumentStore
from questlog.domain.errors import InvalidArgumentError, NotFoundError, RequestError
from questlog.domain.model import CanonicalGame, SteamData
from questlog.resolver import Resolver, ResolverSources

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from questlog.config.http_resilience import ResilienceConfig


def make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[..., ResilientClient]:
    """ResilientClient factory whose requests are answered by ``handler``."""

    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig, **kwargs: Any) -> ResilientClient:
        client = ResilientClient(resilience, **kwargs)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            transport=httpx.MockTransport(async_handler),
            base_url=resilience.base_url or "",
            headers=dict(resilience.default_headers or {}),
            cookies=dict(resilience.cookies or {}),
        )
        return client

    return factory


def make_game(game_id: int, name: str = "", **fields: Any) -> CanonicalGame:
    return CanonicalGame(id=game_id, name=name or f"Game {game_id}", **fields)


def _pick[M](records: dict[int, M], ids: Sequence[int]) -> list[M]:
    return [records[record_id] for record_id in ids if record_id in records]


@dataclass
class FakeCatalog:
    """In-memory catalog lookup.

    ``unreachable`` fails every call with RequestError; ``failing`` names single lookups
    that do.
    """

    games: dict[int, CanonicalGame] = field(default_factory=dict)
    covers: dict[int, IgdbImage] = field(default_factory=dict)
    artworks: dict[int, IgdbImage] = field(default_factory=dict)
    screenshots: dict[int, IgdbImage] = field(default_factory=dict)
    websites: dict[int, IgdbWebsite] = field(default_factory=dict)
    involved_companies: dict[int, IgdbInvolvedCompany] = field(default_factory=dict)
    companies: dict[int, IgdbCompany] = field(default_factory=dict)
    collections: dict[int, IgdbAnnotation] = field(default_factory=dict)
    franchises: dict[int, IgdbAnnotation] = field(default_factory=dict)
    keywords: dict[int, IgdbAnnotation] = field(default_factory=dict)
    genres: dict[int, IgdbAnnotation] = field(default_factory=dict)
    release_dates: dict[int, IgdbReleaseDate] = field(default_factory=dict)
    external_games: dict[int, IgdbExternalGame] = field(default_factory=dict)
    bundles: dict[int, list[int]] = field(default_factory=dict)
    search_results: list[CanonicalGame] = field(default_factory=list)
    unreachable: bool = False
    failing: set[str] = field(default_factory=set)
    calls: list[str] = field(default_factory=list)

    def add_game(self, game: CanonicalGame) -> CanonicalGame:
        self.games[game.id] = game
        return game

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.unreachable or name in self.failing:
            raise RequestError(f"catalog unreachable during {name}")

    async def get_game(self, game_id: int) -> CanonicalGame:
        self._record("get_game")
        if game_id not in self.games:
            raise NotFoundError(f"IGDB game {game_id} not found")
        return self.games[game_id]

    async def get_games(self, ids: Sequence[int]) -> list[CanonicalGame]:
        self._record("get_games")
        return _pick(self.games, ids)

    async def search(self, title: str) -> list[CanonicalGame]:
        self._record("search")
        return list(self.search_results)

    async def get_bundle_game_ids(self, bundle_id: int) -> list[int]:
        self._record("get_bundle_game_ids")
        return list(self.bundles.get(bundle_id, []))

    async def get_cover(self, cover_id: int) -> IgdbImage | None:
        self._record("get_cover")
        return self.covers.get(cover_id)

    async def get_covers(self, ids: Sequence[int]) -> list[IgdbImage]:
        self._record("get_covers")
        return _pick(self.covers, ids)

    async def get_artwork(self, ids: Sequence[int]) -> list[IgdbImage]:
        self._record("get_artwork")
        return _pick(self.artworks, ids)

    async def get_screenshots(self, ids: Sequence[int]) -> list[IgdbImage]:
        self._record("get_screenshots")
        return _pick(self.screenshots, ids)

    async def get_websites(self, ids: Sequence[int]) -> list[IgdbWebsite]:
        self._record("get_websites")
        return _pick(self.websites, ids)

    async def get_involved_companies(self, ids: Sequence[int]) -> list[IgdbInvolvedCompany]:
        self._record("get_involved_companies")
        return _pick(self.involved_companies, ids)

    async def get_companies(self, ids: Sequence[int]) -> list[IgdbCompany]:
        self._record("get_companies")
        return _pick(self.companies, ids)

    async def get_collections(self, ids: Sequence[int]) -> list[IgdbAnnotation]:
        self._record("get_collections")
        return _pick(self.collections, ids)

    async def get_franchises(self, ids: Sequence[int]) -> list[IgdbAnnotation]:
        self._record("get_franchises")
        return _pick(self.franchises, ids)

    async def get_keywords(self, ids: Sequence[int]) -> list[IgdbAnnotation]:
        self._record("get_keywords")
        return _pick(self.keywords, ids)

    async def get_genres(self, ids: Sequence[int]) -> list[IgdbAnnotation]:
        self._record("get_genres")
        return _pick(self.genres, ids)

    async def get_release_dates(self, ids: Sequence[int]) -> list[IgdbReleaseDate]:
        self._record("get_release_dates")
        return _pick(self.release_dates, ids)

    async def get_external_games(self, ids: Sequence[int]) -> list[IgdbExternalGame]:
        self._record("get_external_games")
        return _pick(self.external_games, ids)

    async def get_external_game(self, store_name: str, store_id: str) -> IgdbExternalGame:
        self._record("get_external_game")
        category = EXTERNAL_GAME_CATEGORY.get(store_name)
        if category is None:
            raise InvalidArgumentError(f"Unsupported storefront '{store_name}'")
        for external in self.external_games.values():
            if external.category == category and external.uid == store_id:
                return external
        raise NotFoundError(f"No IGDB mapping for {store_name} id {store_id}")


@dataclass
class FakeSteam:
    apps: dict[int, SteamData] = field(default_factory=dict)
    tags: dict[int, list[str]] = field(default_factory=dict)
    failing: bool = False
    requested: list[int] = field(default_factory=list)

    async def get_steam_data(self, appid: int) -> SteamData:
        self.requested.append(appid)
        if self.failing:
            raise RequestError(f"Steam app {appid} unavailable")
        if appid not in self.apps:
            raise NotFoundError(f"Steam app {appid} not found")
        return self.apps[appid].model_copy(deep=True)

    async def scrape_user_tags(self, appid: int) -> list[str]:
        if self.failing:
            raise RequestError(f"Steam store page for {appid} unavailable")
        return list(self.tags.get(appid, []))


@dataclass
class FakeMetacritic:
    scores: dict[str, int] = field(default_factory=dict)

    async def get_score(self, slug: str) -> int | None:
        return self.scores.get(slug)


def make_resolver(
    catalog: FakeCatalog,
    *,
    store: InMemoryDocumentStore | None = None,
    steam: FakeSteam | None = None,
    metacritic: FakeMetacritic | None = None,
) -> Resolver:
    return Resolver(
        ResolverSources(
            catalog=catalog,
            store=store if store is not None else InMemoryDocumentStore(),
            steam=steam,
            metacritic=metacritic,
        )
    )


def resolver_factory(resolver: Resolver) -> Callable[[], Any]:
    """Factory in the shape ``questlog.app`` expects, yielding a prepared resolver."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[Resolver]:
        yield resolver

    return factory


PORTAL_2 = 72
PEER_REVIEW = 200
PORTAL_2_RELEASE = 1303171200  # 2011-04-19
STEAM_SCREENSHOT = {"id": 0, "path_thumbnail": "thumb.jpg", "path_full": "full.jpg"}


def portal_catalog() -> FakeCatalog:
    """A main game with a DLC, wired through every catalog table the resolver reads."""

    catalog = FakeCatalog()
    catalog.add_game(
        make_game(
            PORTAL_2,
            "Portal 2",
            url="https://www.igdb.com/games/portal-2",
            cover=1,
            collection=5,
            franchises=[6],
            involved_companies=[11, 12, 13],
            genres=[31],
            keywords=[41, 42],
            screenshots=[51],
            artworks=[61],
            websites=[71, 72, 73, 74],
            release_dates=[81],
            external_games=[91],
            dlcs=[PEER_REVIEW],
            follows=30,
            hypes=0,
        )
    )
    catalog.add_game(
        make_game(PEER_REVIEW, "Portal 2: Peer Review", category=1, parent_game=PORTAL_2)
    )
    catalog.covers[1] = IgdbImage(id=1, image_id="co1rs4", height=1200, width=900)
    catalog.collections[5] = IgdbAnnotation(id=5, name="Portal", slug="portal")
    catalog.franchises[6] = IgdbAnnotation(id=6, name="Aperture Science", slug="aperture")
    catalog.involved_companies[11] = IgdbInvolvedCompany(id=11, company=101, developer=True)
    catalog.involved_companies[12] = IgdbInvolvedCompany(id=12, company=101, publisher=True)
    catalog.involved_companies[13] = IgdbInvolvedCompany(id=13, company=102, supporting=True)
    catalog.companies[101] = IgdbCompany(id=101, name="Valve Corporation", slug="valve")
    catalog.companies[102] = IgdbCompany(id=102, name="NVIDIA", slug="nvidia")
    catalog.genres[31] = IgdbAnnotation(id=31, name="Puzzle", slug="puzzle")
    catalog.keywords[41] = IgdbAnnotation(id=41, name="portal gun", slug="portal-gun")
    catalog.keywords[42] = IgdbAnnotation(id=42, name="co-op", slug="co-op")
    catalog.screenshots[51] = IgdbImage(id=51, image_id="sc1")
    catalog.artworks[61] = IgdbImage(id=61, image_id="ar1")
    catalog.websites[71] = IgdbWebsite(id=71, url="https://thinkwithportals.com", category=1)
    catalog.websites[72] = IgdbWebsite(
        id=72, url="https://store.steampowered.com/app/620", category=13
    )
    catalog.websites[73] = IgdbWebsite(id=73, url="https://twitch.tv/portal", category=6)
    catalog.websites[74] = IgdbWebsite(
        id=74, url="https://en.wikipedia.org/wiki/Portal_2", category=3
    )
    catalog.release_dates[81] = IgdbReleaseDate(id=81, category=0, date=PORTAL_2_RELEASE)
    catalog.external_games[91] = IgdbExternalGame(id=91, game=PORTAL_2, uid="620", category=1)
    return catalog


def portal_steam() -> FakeSteam:
    return FakeSteam(
        apps={
            620: SteamData.model_validate(
                {
                    "name": "Portal 2",
                    "steam_appid": 620,
                    "developers": ["Valve"],
                    "publishers": ["Valve"],
                    "release_date": {"coming_soon": False, "date": "18 Apr, 2011"},
                    "score": {"review_score": 98, "total_reviews": 300_000},
                    "screenshots": [STEAM_SCREENSHOT],
                }
            )
        },
        tags={620: ["Puzzle", "Co-op", "First-Person"]},
    )


def portal_metacritic() -> FakeMetacritic:
    return FakeMetacritic(scores={"portal-2": 95})
