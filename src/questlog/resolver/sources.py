from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from questlog.domain.ports.documents import DocumentStore

    from .ports import CatalogLookup, CriticScoreSource, SteamSource


@dataclass(slots=True, frozen=True)
class ResolverSources:
    catalog: CatalogLookup
    store: DocumentStore
    steam: SteamSource | None = None
    metacritic: CriticScoreSource | None = None
