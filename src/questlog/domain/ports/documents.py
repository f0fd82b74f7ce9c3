"""Document store port: per-collection JSON documents addressed by id."""

from __future__ import annotations

import operator
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

type Document = dict[str, Any]
type DocumentId = str | int


class DocumentCollection(StrEnum):
    GAMES = "games"
    EXTERNAL_GAMES = "external_games"
    COMPANIES = "companies"
    COLLECTIONS = "collections"
    FRANCHISES = "franchises"
    KEYWORDS = "keywords"
    GENRES = "genres"
    NEEDS_ANNOTATION = "needs_annotation"
    WIKIPEDIA = "wikipedia"


class QueryOp(StrEnum):
    EQUAL = "=="
    NOT_EQUAL = "!="
    LESS = "<"
    LESS_EQUAL = "<="
    GREATER = ">"
    GREATER_EQUAL = ">="
    ARRAY_CONTAINS = "array_contains"
    IN = "in"


_COMPARATORS: dict[QueryOp, Callable[[Any, Any], bool]] = {
    QueryOp.EQUAL: operator.eq,
    QueryOp.NOT_EQUAL: operator.ne,
    QueryOp.LESS: operator.lt,
    QueryOp.LESS_EQUAL: operator.le,
    QueryOp.GREATER: operator.gt,
    QueryOp.GREATER_EQUAL: operator.ge,
    QueryOp.ARRAY_CONTAINS: lambda actual, expected: isinstance(actual, list)
    and expected in actual,
    QueryOp.IN: lambda actual, expected: actual in expected,
}


def document_matches(document: Document, path: str, op: QueryOp, value: object) -> bool:
    """Evaluate ``document[path] op value``; ``path`` may be dotted into nested objects."""

    current: object = document
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return False
        current = current[part]
    try:
        return _COMPARATORS[op](current, value)
    except TypeError:
        return False


def document_key(doc_id: DocumentId) -> str:
    return str(doc_id)


@dataclass(slots=True)
class BatchReadResult:
    found: list[Document] = field(default_factory=list)
    not_found: list[DocumentId] = field(default_factory=list)


@runtime_checkable
class DocumentStore(Protocol):
    """Remote-style key/document store.

    ``read`` raises ``NotFoundError`` for a missing document; every other failure is
    surfaced as a different ``QuestlogError``.
    """

    async def read(self, collection: str, doc_id: DocumentId) -> Document: ...

    async def write(self, collection: str, doc_id: DocumentId | None, document: Document) -> str: ...

    async def batch_read(
        self, collection: str, doc_ids: Sequence[DocumentId]
    ) -> BatchReadResult: ...

    async def query(
        self, collection: str, field_path: str, op: QueryOp, value: object
    ) -> list[Document]: ...

    async def delete(self, collection: str, doc_id: DocumentId) -> None: ...
