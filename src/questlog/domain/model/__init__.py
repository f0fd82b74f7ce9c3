"""Domain model for resolved game documents."""

from __future__ import annotations

from .documents import (
    Collection,
    Company,
    ExternalGameMapping,
    GenreAnnotation,
    Keyword,
    StoreEntry,
    external_game_doc_id,
    upsert_digest,
)
from .enums import (
    CollectionType,
    CompanyRole,
    GameCategory,
    GameStatus,
    ScoreSource,
    ScoreTier,
    Storefront,
    WebsiteAuthority,
)
from .game import (
    CanonicalGame,
    CollectionDigest,
    CompanyDigest,
    GameDigest,
    GameEntry,
    Image,
    Website,
)
from .scores import Scores
from .secondary import GogData, SteamData, SteamScore, WikipediaData

__all__ = [
    "CanonicalGame",
    "Collection",
    "CollectionDigest",
    "CollectionType",
    "Company",
    "CompanyDigest",
    "CompanyRole",
    "ExternalGameMapping",
    "GameCategory",
    "GameDigest",
    "GameEntry",
    "GameStatus",
    "GenreAnnotation",
    "GogData",
    "Image",
    "Keyword",
    "ScoreSource",
    "ScoreTier",
    "Scores",
    "SteamData",
    "SteamScore",
    "StoreEntry",
    "Storefront",
    "Website",
    "WebsiteAuthority",
    "WikipediaData",
    "external_game_doc_id",
    "upsert_digest",
]
