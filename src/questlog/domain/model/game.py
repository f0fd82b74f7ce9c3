"""Game documents: the catalog record, the resolved entry and its digest."""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field

from .enums import (
    CollectionType,
    CompanyRole,
    GameCategory,
    GameStatus,
    ScoreTier,
    WebsiteAuthority,
)
from .scores import Scores
from .secondary import SteamData

_CATEGORY_BY_CODE: dict[int, GameCategory] = {
    0: GameCategory.MAIN,
    1: GameCategory.DLC,
    2: GameCategory.EXPANSION,
    3: GameCategory.BUNDLE,
    4: GameCategory.STANDALONE_EXPANSION,
    6: GameCategory.EPISODE,
    7: GameCategory.SEASON,
    8: GameCategory.REMAKE,
    9: GameCategory.REMASTER,
    10: GameCategory.REMASTER,
    14: GameCategory.REMASTER,
}

_STATUS_BY_CODE: dict[int, GameStatus] = {
    0: GameStatus.RELEASED,
    2: GameStatus.ALPHA,
    3: GameStatus.BETA,
    4: GameStatus.EARLY_ACCESS,
    5: GameStatus.OFFLINE,
    6: GameStatus.CANCELLED,
    7: GameStatus.RUMORED,
    8: GameStatus.DELISTED,
}


class CanonicalGame(BaseModel):
    """A game record as returned by the primary catalog.

    Unmodelled upstream fields are kept as extras so the raw payload survives.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    id: int
    name: str = ""
    category: int = 0
    status: int | None = None
    url: str | None = None
    summary: str | None = None
    storyline: str | None = None
    first_release_date: int | None = None
    aggregated_rating: float | None = None
    follows: int | None = None
    hypes: int | None = None

    cover: int | None = None
    collection: int | None = None
    collections: list[int] = Field(default_factory=list)
    franchise: int | None = None
    franchises: list[int] = Field(default_factory=list)
    involved_companies: list[int] = Field(default_factory=list)
    genres: list[int] = Field(default_factory=list)
    keywords: list[int] = Field(default_factory=list)
    screenshots: list[int] = Field(default_factory=list)
    artworks: list[int] = Field(default_factory=list)
    websites: list[int] = Field(default_factory=list)
    release_dates: list[int] = Field(default_factory=list)
    external_games: list[int] = Field(default_factory=list)

    parent_game: int | None = None
    version_parent: int | None = None
    expansions: list[int] = Field(default_factory=list)
    standalone_expansions: list[int] = Field(default_factory=list)
    dlcs: list[int] = Field(default_factory=list)
    remakes: list[int] = Field(default_factory=list)
    remasters: list[int] = Field(default_factory=list)

    @property
    def game_category(self) -> GameCategory:
        if self.version_parent is not None:
            return GameCategory.VERSION
        return _CATEGORY_BY_CODE.get(self.category, GameCategory.IGNORE)

    @property
    def game_status(self) -> GameStatus:
        if self.status is None:
            return GameStatus.RELEASED
        return _STATUS_BY_CODE.get(self.status, GameStatus.UNKNOWN)

    @property
    def raw(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def collection_ids(self) -> list[int]:
        return _dedupe([self.collection, *self.collections])

    def franchise_ids(self) -> list[int]:
        return _dedupe([self.franchise, *self.franchises])

    def parent_id(self) -> int | None:
        return self.parent_game if self.parent_game is not None else self.version_parent


def _dedupe(ids: list[int | None]) -> list[int]:
    seen: dict[int, None] = {}
    for value in ids:
        if value is not None:
            seen.setdefault(value, None)
    return list(seen)


class Image(BaseModel):
    image_id: str
    height: int | None = None
    width: int | None = None


class Website(BaseModel):
    url: str
    authority: WebsiteAuthority


class CompanyDigest(BaseModel):
    id: int
    name: str
    slug: str
    role: CompanyRole = CompanyRole.UNKNOWN


class CollectionDigest(BaseModel):
    id: int
    name: str
    slug: str
    type: CollectionType = CollectionType.NULL


class GameDigest(BaseModel):
    id: int
    name: str
    category: GameCategory = GameCategory.MAIN
    status: GameStatus = GameStatus.RELEASED
    cover: str | None = None
    release_date: int | None = None
    rating: int | None = None
    tier: ScoreTier | None = None
    parent_id: int | None = None
    collections: list[str] = Field(default_factory=list)
    franchises: list[str] = Field(default_factory=list)
    developers: list[str] = Field(default_factory=list)
    publishers: list[str] = Field(default_factory=list)
    espy_genres: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)

    def compact(self) -> Self:
        """Copy without the fields aggregate documents do not need."""
        return self.model_copy(update={"developers": [], "publishers": [], "keywords": []})


class GameEntry(BaseModel):
    id: int
    name: str
    category: GameCategory = GameCategory.MAIN
    status: GameStatus = GameStatus.RELEASED
    summary: str | None = None
    storyline: str | None = None
    url: str | None = None
    release_date: int | None = None

    cover: Image | None = None
    genres: list[str] = Field(default_factory=list)
    espy_genres: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    collections: list[CollectionDigest] = Field(default_factory=list)
    franchises: list[CollectionDigest] = Field(default_factory=list)
    developers: list[CompanyDigest] = Field(default_factory=list)
    publishers: list[CompanyDigest] = Field(default_factory=list)

    parent: GameDigest | None = None
    expansions: list[GameDigest] = Field(default_factory=list)
    dlcs: list[GameDigest] = Field(default_factory=list)
    remakes: list[GameDigest] = Field(default_factory=list)
    remasters: list[GameDigest] = Field(default_factory=list)
    contents: list[GameDigest] = Field(default_factory=list)

    websites: list[Website] = Field(default_factory=list)
    screenshots: list[Image] = Field(default_factory=list)
    artwork: list[Image] = Field(default_factory=list)

    steam_data: SteamData | None = None
    scores: Scores = Field(default_factory=Scores)

    igdb_game: CanonicalGame | None = None

    @classmethod
    def from_canonical(cls, game: CanonicalGame) -> GameEntry:
        entry = cls(
            id=game.id,
            name=game.name,
            category=game.game_category,
            status=game.game_status,
            summary=game.summary,
            storyline=game.storyline,
            url=game.url,
            release_date=game.first_release_date or None,
            igdb_game=game,
        )
        if game.url:
            entry.websites.append(Website(url=game.url, authority=WebsiteAuthority.IGDB))
        entry.scores.add_hype(game.follows, game.hypes)
        return entry

    @property
    def is_main_category(self) -> bool:
        return self.category.is_main

    def digest(self) -> GameDigest:
        parent_id = self.parent.id if self.parent is not None else None
        if parent_id is None and self.igdb_game is not None:
            parent_id = self.igdb_game.parent_id()
        return GameDigest(
            id=self.id,
            name=self.name,
            category=self.category,
            status=self.status,
            cover=self.cover.image_id if self.cover is not None else None,
            release_date=self.release_date,
            rating=self.scores.espy_score,
            tier=self.scores.tier,
            parent_id=parent_id,
            collections=[c.name for c in self.collections],
            franchises=[f.name for f in self.franchises],
            developers=[c.name for c in self.developers],
            publishers=[c.name for c in self.publishers],
            espy_genres=list(self.espy_genres),
            keywords=list(self.keywords),
        )
