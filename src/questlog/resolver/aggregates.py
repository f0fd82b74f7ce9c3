"""Propagates resolved entries into company and collection documents."""

from __future__ import annotations

import asyncio
from collections import defaultdict
from logging import getLogger
from typing import TYPE_CHECKING

from questlog.domain.errors import NotFoundError, QuestlogError
from questlog.domain.model import Collection, Company, upsert_digest
from questlog.domain.ports.documents import DocumentCollection

from .fetch import parse_document

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from questlog.domain.model import CollectionDigest, CompanyDigest, GameDigest, GameEntry
    from questlog.domain.ports.documents import DocumentStore

log = getLogger(__name__)


class AggregateUpdater:
    """Best-effort read-modify-write of Company and Collection documents.

    Updates to one document are serialised within this process; across processes
    the store is last-writer-wins and a concurrent update can be lost.
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store
        self._locks: defaultdict[tuple[str, int], asyncio.Lock] = defaultdict(asyncio.Lock)

    async def update(self, entry: GameEntry) -> None:
        if not entry.is_main_category:
            return
        digest = entry.digest().compact()

        roles: dict[int, tuple[CompanyDigest, bool, bool]] = {}
        for company in entry.developers:
            roles[company.id] = (company, True, False)
        for company in entry.publishers:
            known, developed, _ = roles.get(company.id, (company, False, False))
            roles[company.id] = (known, developed, True)

        await asyncio.gather(
            *(
                self._guarded(
                    self._update_company(company, digest, developed=dev, published=pub),
                    DocumentCollection.COMPANIES,
                    company.id,
                )
                for company, dev, pub in roles.values()
            ),
            *(
                self._guarded(
                    self._update_collection(DocumentCollection.COLLECTIONS, collection, digest),
                    DocumentCollection.COLLECTIONS,
                    collection.id,
                )
                for collection in entry.collections
            ),
            *(
                self._guarded(
                    self._update_collection(DocumentCollection.FRANCHISES, franchise, digest),
                    DocumentCollection.FRANCHISES,
                    franchise.id,
                )
                for franchise in entry.franchises
            ),
        )

    async def _update_company(
        self,
        company: CompanyDigest,
        digest: GameDigest,
        *,
        developed: bool,
        published: bool,
    ) -> None:
        collection = DocumentCollection.COMPANIES
        async with self._locks[(collection, company.id)]:
            try:
                document = parse_document(Company, await self._store.read(collection, company.id))
            except NotFoundError:
                document = Company(id=company.id, name=company.name, slug=company.slug)
            if developed:
                upsert_digest(document.developed, digest)
            if published:
                upsert_digest(document.published, digest)
            await self._store.write(collection, company.id, document.model_dump(mode="json"))

    async def _update_collection(
        self,
        collection: DocumentCollection,
        annotation: CollectionDigest,
        digest: GameDigest,
    ) -> None:
        async with self._locks[(collection, annotation.id)]:
            try:
                document = parse_document(
                    Collection, await self._store.read(collection, annotation.id)
                )
            except NotFoundError:
                document = Collection(
                    id=annotation.id,
                    name=annotation.name,
                    slug=annotation.slug,
                    type=annotation.type,
                )
            upsert_digest(document.games, digest)
            await self._store.write(collection, annotation.id, document.model_dump(mode="json"))

    async def _guarded(self, update: Awaitable[None], collection: str, doc_id: int) -> None:
        try:
            await update
        except QuestlogError as exc:
            log.warning("Updating %s/%s failed: %s", collection, doc_id, exc)
