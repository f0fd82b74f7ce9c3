"""Where the document store and the HTTP cache live on disk."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from .env import optional_env_var
from .errors import InvalidConfigurationError

APP_DIR_NAME: Final[str] = "questlog"
DATABASE_FILENAME: Final[str] = "documents.db"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"

# The store runs on the event loop, so the blocking sqlite drivers are swapped out.
ASYNC_SQLITE_DRIVER: Final[str] = "sqlite+aiosqlite"
_SYNC_SQLITE_DRIVERS: Final[frozenset[str]] = frozenset({"sqlite", "sqlite+pysqlite"})


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def _in_data_dir(self, filename: str, *, ensure: bool) -> Path:
        data_dir = self.resolve_data_dir()
        if ensure:
            data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir / filename

    def database_path(self, *, ensure: bool = True) -> Path:
        return self._in_data_dir(DATABASE_FILENAME, ensure=ensure)

    def http_cache_path(self, *, ensure: bool = True) -> Path:
        return self._in_data_dir(HTTP_CACHE_FILENAME, ensure=ensure)

    def database_uri(self) -> str:
        return f"{ASYNC_SQLITE_DRIVER}:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def normalize_database_uri(uri: str) -> str:
    """Map plain sqlite URIs onto aiosqlite and reject every other driver."""
    try:
        url = make_url(uri)
    except ArgumentError as exc:
        raise InvalidConfigurationError("DATABASE_URI", uri, "not a database URL") from exc
    if url.drivername in _SYNC_SQLITE_DRIVERS:
        url = url.set(drivername=ASYNC_SQLITE_DRIVER)
    if url.drivername != ASYNC_SQLITE_DRIVER:
        raise InvalidConfigurationError(
            "DATABASE_URI",
            uri,
            f"driver {url.drivername!r} is not supported, use {ASYNC_SQLITE_DRIVER}",
        )
    return url.render_as_string(hide_password=False)


def _platform_data_home() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        return Path(base) if base else Path.home() / "AppData" / "Local"
    base = os.getenv("XDG_DATA_HOME")
    return Path(base) if base else Path.home() / ".local" / "share"


def get_storage_config() -> StorageConfig:
    env_dir = optional_env_var("QUESTLOG_DATA_DIR")
    data_dir = Path(env_dir) if env_dir else _platform_data_home() / APP_DIR_NAME
    return StorageConfig(data_dir=data_dir)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    env_uri = optional_env_var("DATABASE_URI")
    if env_uri:
        return DatabaseConfig(uri=normalize_database_uri(env_uri))
    storage_config = storage or get_storage_config()
    return DatabaseConfig(uri=storage_config.database_uri())
