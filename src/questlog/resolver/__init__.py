"""Reconciliation and resolution of catalog games into enriched entries."""

from __future__ import annotations

from .aggregates import AggregateUpdater
from .cached_lookup import cached_lookup
from .digest import DigestResolver
from .info import InfoResolver, RelatedDigests
from .ports import CatalogLookup, CriticScoreSource, SteamSource
from .reconciler import Reconciler
from .release_date import catalog_release_date, choose_release_date
from .service import Resolver
from .sources import ResolverSources

__all__ = [
    "AggregateUpdater",
    "CatalogLookup",
    "CriticScoreSource",
    "DigestResolver",
    "InfoResolver",
    "Reconciler",
    "RelatedDigests",
    "Resolver",
    "ResolverSources",
    "SteamSource",
    "cached_lookup",
    "catalog_release_date",
    "choose_release_date",
]
