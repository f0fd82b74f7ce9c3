"""Aggregate and mapping documents kept next to game entries."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .enums import CollectionType
from .game import GameDigest, Image
from .secondary import GogData


def upsert_digest(digests: list[GameDigest], digest: GameDigest) -> None:
    """Replace the digest sharing ``digest.id`` in place, or append it."""
    for index, existing in enumerate(digests):
        if existing.id == digest.id:
            digests[index] = digest
            return
    digests.append(digest)


class Company(BaseModel):
    id: int
    name: str
    slug: str
    logo: Image | None = None
    developed: list[GameDigest] = Field(default_factory=list)
    published: list[GameDigest] = Field(default_factory=list)


class Collection(BaseModel):
    id: int
    name: str
    slug: str
    type: CollectionType = CollectionType.COLLECTION
    games: list[GameDigest] = Field(default_factory=list)


class ExternalGameMapping(BaseModel):
    store_name: str
    store_id: str
    igdb_id: int
    store_url: str | None = None
    gog_data: GogData | None = None

    @property
    def doc_id(self) -> str:
        return external_game_doc_id(self.store_name, self.store_id)


def external_game_doc_id(store_name: str, store_id: str) -> str:
    return f"{store_name}_{store_id}"


class StoreEntry(BaseModel):
    """A title owned on a storefront, as reported by that storefront."""

    storefront_name: str
    id: str = ""
    title: str
    image: str | None = None


class GenreAnnotation(BaseModel):
    id: int
    name: str
    espy_genres: list[str] = Field(default_factory=list)


class Keyword(BaseModel):
    id: int
    slug: str = ""
    name: str
