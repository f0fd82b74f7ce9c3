"""In-process document store, used by tests and dry runs."""

from __future__ import annotations

import copy
import uuid
from typing import TYPE_CHECKING

from questlog.domain.errors import NotFoundError
from questlog.domain.ports.documents import BatchReadResult, document_key, document_matches

if TYPE_CHECKING:
    from collections.abc import Sequence

    from questlog.domain.ports.documents import Document, DocumentId, QueryOp


class InMemoryDocumentStore:
    def __init__(self) -> None:
        self.collections: dict[str, dict[str, Document]] = {}
        self.writes: list[tuple[str, str]] = []

    def seed(self, collection: str, doc_id: DocumentId, document: Document) -> None:
        self.collections.setdefault(collection, {})[document_key(doc_id)] = copy.deepcopy(document)

    async def read(self, collection: str, doc_id: DocumentId) -> Document:
        documents = self.collections.get(collection, {})
        key = document_key(doc_id)
        if key not in documents:
            raise NotFoundError(f"'{collection}/{key}' not found")
        return copy.deepcopy(documents[key])

    async def write(self, collection: str, doc_id: DocumentId | None, document: Document) -> str:
        key = document_key(doc_id) if doc_id is not None else uuid.uuid4().hex
        self.collections.setdefault(collection, {})[key] = copy.deepcopy(document)
        self.writes.append((collection, key))
        return key

    async def batch_read(self, collection: str, doc_ids: Sequence[DocumentId]) -> BatchReadResult:
        documents = self.collections.get(collection, {})
        result = BatchReadResult()
        for doc_id in doc_ids:
            key = document_key(doc_id)
            if key in documents:
                result.found.append(copy.deepcopy(documents[key]))
            else:
                result.not_found.append(doc_id)
        return result

    async def query(
        self, collection: str, field_path: str, op: QueryOp, value: object
    ) -> list[Document]:
        documents = self.collections.get(collection, {})
        return [
            copy.deepcopy(document)
            for _, document in sorted(documents.items())
            if document_matches(document, field_path, op, value)
        ]

    async def delete(self, collection: str, doc_id: DocumentId) -> None:
        self.collections.get(collection, {}).pop(document_key(doc_id), None)
