from __future__ import annotations

import asyncio
import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from questlog.adapters.memory import InMemoryDocumentStore
from questlog.adapters.sqlalchemy.migrations import upgrade_engine
from questlog.adapters.sqlalchemy.store import SqlAlchemyDocumentStore, shutdown, startup

os.environ.setdefault("DATABASE_URI", "sqlite+aiosqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture
def sqlite_engine(tmp_path: Path) -> Iterator[AsyncEngine]:
    # Each test step runs its own event loop, so connections are never pooled across loops.
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'documents.db'}", poolclass=NullPool
    )
    asyncio.run(upgrade_engine(engine))
    try:
        yield engine
    finally:
        asyncio.run(engine.dispose())


@pytest.fixture
def sqlite_store(sqlite_engine: AsyncEngine) -> Iterator[SqlAlchemyDocumentStore]:
    asyncio.run(startup(engine=sqlite_engine, force=True))
    try:
        yield SqlAlchemyDocumentStore()
    finally:
        asyncio.run(shutdown())


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()
