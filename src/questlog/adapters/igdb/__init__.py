"""IGDB adapter: connection, client and typed lookups."""

from __future__ import annotations

from .client import IgdbClient, IgdbClientFactory
from .connection import IgdbConnection
from .lookups import (
    GOG_EXTERNAL_CATEGORY,
    STEAM_EXTERNAL_CATEGORY,
    IgdbLookup,
)
from .query import IgdbQuery, id_in
from .schema import (
    IgdbAnnotation,
    IgdbCompany,
    IgdbExternalGame,
    IgdbImage,
    IgdbInvolvedCompany,
    IgdbReleaseDate,
    IgdbReleaseStatus,
    IgdbWebsite,
)

__all__ = [
    "GOG_EXTERNAL_CATEGORY",
    "STEAM_EXTERNAL_CATEGORY",
    "IgdbAnnotation",
    "IgdbClient",
    "IgdbClientFactory",
    "IgdbCompany",
    "IgdbConnection",
    "IgdbExternalGame",
    "IgdbImage",
    "IgdbInvolvedCompany",
    "IgdbLookup",
    "IgdbQuery",
    "IgdbReleaseDate",
    "IgdbReleaseStatus",
    "IgdbWebsite",
    "id_in",
]
