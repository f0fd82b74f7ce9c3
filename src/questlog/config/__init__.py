"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, optional_positive_float, require_env_vars
from .errors import ConfigurationError, InvalidConfigurationError, MissingConfigurationError
from .http_resilience import NO_RETRIES, CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .igdb import IgdbConfig, get_igdb_config
from .logging import configure_logging
from .metacritic import MetacriticConfig, get_metacritic_config
from .steam import SteamConfig, get_steam_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "NO_RETRIES",
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "IgdbConfig",
    "InvalidConfigurationError",
    "MetacriticConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SteamConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_igdb_config",
    "get_metacritic_config",
    "get_steam_config",
    "get_storage_config",
    "optional_env_var",
    "optional_positive_float",
    "require_env_vars",
]
