from __future__ import annotations

import pytest

from questlog.config import (
    InvalidConfigurationError,
    MissingConfigurationError,
    RateLimit,
    get_igdb_config,
    get_steam_config,
    optional_env_var,
    require_env_vars,
)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_names_every_missing_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_ONE", raising=False)
    monkeypatch.setenv("MISSING_TWO", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_ONE", "MISSING_TWO"])

    assert "MISSING_ONE" in str(exc.value)
    assert "MISSING_TWO" in str(exc.value)


def test_optional_env_var_strips_and_treats_blank_as_missing(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("PADDED_VAR", "  value  ")
    monkeypatch.setenv("BLANK_VAR", "  ")

    assert optional_env_var("PADDED_VAR") == "value"
    assert optional_env_var("BLANK_VAR") is None


def test_igdb_config_requires_token_or_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IGDB_CLIENT_ID", "client")
    monkeypatch.delenv("IGDB_CLIENT_SECRET", raising=False)
    monkeypatch.delenv("IGDB_ACCESS_TOKEN", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        get_igdb_config()

    assert exc.value.names == ("IGDB_ACCESS_TOKEN", "IGDB_CLIENT_SECRET")
    assert "IGDB_ACCESS_TOKEN or IGDB_CLIENT_SECRET" in str(exc.value)


def test_igdb_config_budget_and_no_retries(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IGDB_CLIENT_ID", "client")
    monkeypatch.setenv("IGDB_ACCESS_TOKEN", "token")
    monkeypatch.delenv("IGDB_BASE_URL", raising=False)
    monkeypatch.delenv("IGDB_REQUESTS_PER_SECOND", raising=False)

    config = get_igdb_config()

    assert config.client_id == "client"
    assert config.access_token == "token"
    assert config.resilience.base_url == "https://api.igdb.com/v4/"
    assert config.resilience.ratelimit is not None
    assert config.resilience.ratelimit.max_calls == 4
    assert config.resilience.ratelimit.max_in_flight == 6
    assert config.resilience.retry.total == 0


def test_steam_config_credentials_are_optional(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("STEAM_API_KEY", raising=False)
    monkeypatch.setenv("STEAM_USER_ID", "76561198000000000")

    config = get_steam_config()

    assert config.api_key is None
    assert config.user_id == "76561198000000000"
    assert config.store.cookies == {"birthtime": "0"}


def test_igdb_requests_per_second_overrides_budget(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IGDB_CLIENT_ID", "client")
    monkeypatch.setenv("IGDB_ACCESS_TOKEN", "token")
    monkeypatch.setenv("IGDB_REQUESTS_PER_SECOND", "8")

    ratelimit = get_igdb_config().resilience.ratelimit

    assert ratelimit is not None
    assert ratelimit.max_calls == 8.0
    assert ratelimit.max_in_flight == 6


@pytest.mark.parametrize(
    ("raw", "reason"), [("fast", "expected a number"), ("0", "greater than zero")]
)
def test_igdb_requests_per_second_rejects_bad_values(
    monkeypatch: pytest.MonkeyPatch, raw: str, reason: str
) -> None:
    monkeypatch.setenv("IGDB_CLIENT_ID", "client")
    monkeypatch.setenv("IGDB_ACCESS_TOKEN", "token")
    monkeypatch.setenv("IGDB_REQUESTS_PER_SECOND", raw)

    with pytest.raises(InvalidConfigurationError) as exc:
        get_igdb_config()

    assert exc.value.name == "IGDB_REQUESTS_PER_SECOND"
    assert exc.value.value == raw
    assert reason in str(exc.value)


def test_ratelimit_rejects_empty_budget() -> None:
    with pytest.raises(InvalidConfigurationError):
        RateLimit(max_calls=0, per_seconds=1.0)


def test_steam_store_cache_skips_failed_appdetails() -> None:
    store_cache = get_steam_config().store.cache

    assert store_cache is not None
    assert store_cache.should_cache is not None
    assert store_cache.should_cache({"620": {"success": True, "data": {"name": "Portal 2"}}})
    assert not store_cache.should_cache({"620": {"success": False}})
    assert not store_cache.should_cache({"success": 0, "query_summary": {}})
