from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest  # noqa: TC002

from questlog.config import InvalidConfigurationError, storage


def test_storage_config_prefers_explicit_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    custom = tmp_path / "custom-data"
    monkeypatch.setenv("QUESTLOG_DATA_DIR", str(custom))

    config = storage.get_storage_config()

    assert config.resolve_data_dir() == custom.resolve()


def test_database_config_moves_plain_sqlite_onto_aiosqlite(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite:///override.db")

    assert storage.get_database_config().uri == "sqlite+aiosqlite:///override.db"


def test_database_config_keeps_async_uri(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+aiosqlite:///:memory:")

    assert storage.get_database_config().uri == "sqlite+aiosqlite:///:memory:"


def test_database_config_rejects_blocking_driver(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "postgresql+psycopg2://user@localhost/games")

    with pytest.raises(InvalidConfigurationError) as exc:
        storage.get_database_config()

    assert exc.value.name == "DATABASE_URI"
    assert "psycopg2" in str(exc.value)


def test_database_config_creates_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("QUESTLOG_DATA_DIR", str(tmp_path / "data-dir"))

    uri = storage.get_database_config().uri

    expected_path = (tmp_path / "data-dir" / storage.DATABASE_FILENAME).resolve()
    assert uri == f"sqlite+aiosqlite:///{expected_path}"
    assert expected_path.parent.exists()


def test_http_cache_path_lives_in_data_dir(tmp_path: Path) -> None:
    config = storage.StorageConfig(data_dir=tmp_path / "cache-dir")

    path = config.http_cache_path()

    assert path == (tmp_path / "cache-dir" / storage.HTTP_CACHE_FILENAME).resolve()
    assert path.parent.exists()
