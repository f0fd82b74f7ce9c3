"""Domain ports."""

from __future__ import annotations

from .documents import (
    BatchReadResult,
    Document,
    DocumentCollection,
    DocumentId,
    DocumentStore,
    QueryOp,
    document_key,
    document_matches,
)

__all__ = [
    "BatchReadResult",
    "Document",
    "DocumentCollection",
    "DocumentId",
    "DocumentStore",
    "QueryOp",
    "document_key",
    "document_matches",
]
