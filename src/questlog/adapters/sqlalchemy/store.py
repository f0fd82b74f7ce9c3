"""SQLAlchemy-backed document store running on an async engine."""

from __future__ import annotations

import operator
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from questlog.adapters.sqlalchemy.mappings import documents_table
from questlog.adapters.sqlalchemy.migrations import upgrade_engine
from questlog.config.storage import get_database_config
from questlog.domain.errors import InternalError, NotFoundError
from questlog.domain.ports.documents import (
    BatchReadResult,
    QueryOp,
    document_key,
    document_matches,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import ColumnElement
    from sqlalchemy.ext.asyncio import AsyncEngine

    from questlog.domain.ports.documents import Document, DocumentId

log = getLogger(__name__)

# NOT_EQUAL stays in Python: SQL drops JSON nulls that the Python comparison keeps.
_SQL_COMPARISONS = {
    QueryOp.EQUAL: operator.eq,
    QueryOp.LESS: operator.lt,
    QueryOp.LESS_EQUAL: operator.le,
    QueryOp.GREATER: operator.gt,
    QueryOp.GREATER_EQUAL: operator.ge,
}


class StartupError(RuntimeError):
    """Raised when the SQLAlchemy store is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: AsyncEngine | None = None
    _session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine | None:
        return self._engine

    @engine.setter
    def engine(self, value: AsyncEngine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Await questlog.adapters.sqlalchemy."
                "store.startup() before creating a document store."
            )
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


async def startup(
    *,
    engine: AsyncEngine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Initialise the engine, run migrations and prepare the session factory."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    resolved_engine = engine or create_async_engine(database_uri or get_database_config().uri)
    await upgrade_engine(resolved_engine)
    _STATE.engine = resolved_engine


def is_started() -> bool:
    return _STATE.engine is not None


async def shutdown() -> None:
    """Dispose the managed engine and reset state."""

    if _STATE.engine is not None:
        await _STATE.engine.dispose()
    _STATE.engine = None


def _scalar_kind(value: object) -> type | None:
    if isinstance(value, bool):
        return bool
    if isinstance(value, int | float):
        return float
    if isinstance(value, str):
        return str
    return None


def _pushdown(field_path: str, op: QueryOp, value: object) -> ColumnElement[bool] | None:
    """Translate the comparison to SQL where the JSON accessors can express it.

    The clause may match more rows than ``document_matches`` does, never fewer; the
    caller re-checks each row. ``None`` leaves the filtering to Python.
    """
    if op is QueryOp.IN:
        if not isinstance(value, list | tuple | set | frozenset) or not value:
            return None
        values = list(value)
    elif op in _SQL_COMPARISONS:
        values = [value]
    else:
        return None
    kinds = {_scalar_kind(item) for item in values}
    if len(kinds) != 1 or None in kinds:
        return None
    (kind,) = kinds

    element = documents_table.c.payload[tuple(field_path.split("."))]
    if kind is bool:
        accessor = element.as_boolean()
    elif kind is float:
        accessor = element.as_float()
    else:
        accessor = element.as_string()
    if op is QueryOp.IN:
        return accessor.in_(values)
    return _SQL_COMPARISONS[op](accessor, value)


class SqlAlchemyDocumentStore:
    """Document store over a single ``documents`` table keyed by (collection, id)."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None) -> None:
        self._session_factory = session_factory or _STATE.session_factory

    async def read(self, collection: str, doc_id: DocumentId) -> Document:
        key = document_key(doc_id)
        stmt = select(documents_table.c.payload).where(
            documents_table.c.collection == collection,
            documents_table.c.doc_id == key,
        )
        try:
            async with self._session_factory() as session:
                payload = (await session.execute(stmt)).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise InternalError(f"Failed to read '{collection}/{key}': {exc}") from exc
        if payload is None:
            raise NotFoundError(f"'{collection}/{key}' not found")
        return payload

    async def write(self, collection: str, doc_id: DocumentId | None, document: Document) -> str:
        key = document_key(doc_id) if doc_id is not None else uuid.uuid4().hex
        now = datetime.now(UTC)
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    update(documents_table)
                    .where(
                        documents_table.c.collection == collection,
                        documents_table.c.doc_id == key,
                    )
                    .values(payload=document, updated_at=now)
                )
                if result.rowcount == 0:
                    await session.execute(
                        insert(documents_table).values(
                            collection=collection,
                            doc_id=key,
                            payload=document,
                            updated_at=now,
                        )
                    )
                await session.commit()
        except SQLAlchemyError as exc:
            raise InternalError(f"Failed to write '{collection}/{key}': {exc}") from exc
        log.debug("Wrote %s/%s", collection, key)
        return key

    async def batch_read(self, collection: str, doc_ids: Sequence[DocumentId]) -> BatchReadResult:
        keys = [document_key(doc_id) for doc_id in doc_ids]
        stmt = select(documents_table.c.doc_id, documents_table.c.payload).where(
            documents_table.c.collection == collection,
            documents_table.c.doc_id.in_(keys),
        )
        try:
            async with self._session_factory() as session:
                rows = dict((await session.execute(stmt)).tuples().all())
        except SQLAlchemyError as exc:
            raise InternalError(f"Failed to batch read '{collection}': {exc}") from exc

        result = BatchReadResult()
        for doc_id, key in zip(doc_ids, keys, strict=True):
            if key in rows:
                result.found.append(rows[key])
            else:
                result.not_found.append(doc_id)
        return result

    async def query(
        self, collection: str, field_path: str, op: QueryOp, value: object
    ) -> list[Document]:
        stmt = (
            select(documents_table.c.payload)
            .where(documents_table.c.collection == collection)
            .order_by(documents_table.c.doc_id)
        )
        clause = _pushdown(field_path, op, value)
        if clause is not None:
            stmt = stmt.where(clause)
        try:
            async with self._session_factory() as session:
                payloads = (await session.execute(stmt)).scalars().all()
        except SQLAlchemyError as exc:
            raise InternalError(f"Failed to query '{collection}': {exc}") from exc
        return [payload for payload in payloads if document_matches(payload, field_path, op, value)]

    async def delete(self, collection: str, doc_id: DocumentId) -> None:
        key = document_key(doc_id)
        try:
            async with self._session_factory() as session:
                await session.execute(
                    delete(documents_table).where(
                        documents_table.c.collection == collection,
                        documents_table.c.doc_id == key,
                    )
                )
                await session.commit()
        except SQLAlchemyError as exc:
            raise InternalError(f"Failed to delete '{collection}/{key}': {exc}") from exc
