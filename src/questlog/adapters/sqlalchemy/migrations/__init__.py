"""Utilities for managing Alembic migrations within the SQLAlchemy adapter."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Final

from alembic import command
from alembic.config import Config

from questlog.config.storage import get_database_config

MIGRATIONS_PATH: Final[Path] = Path(__file__).resolve().parent

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection
    from sqlalchemy.ext.asyncio import AsyncEngine


def _build_config() -> Config:
    """Return an Alembic Config pointing at the packaged migration scripts."""

    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_PATH))
    return config


def upgrade_head(*, connection: Connection | None = None, database_uri: str | None = None) -> None:
    """Upgrade the database schema to the latest revision.

    Without ``connection`` the migration environment opens its own async engine and
    drives it with ``asyncio.run``, so that form must not be called from a running loop.
    """

    config = _build_config()
    if connection is not None:
        config.attributes["connection"] = connection
    else:
        config.set_main_option("sqlalchemy.url", database_uri or get_database_config().uri)
    command.upgrade(config, "head")


async def upgrade_engine(engine: AsyncEngine) -> None:
    """Upgrade through an already running async engine."""

    async with engine.begin() as connection:
        await connection.run_sync(lambda sync_connection: upgrade_head(connection=sync_connection))
