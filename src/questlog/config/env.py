"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import InvalidConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Return the given environment variables or raise naming every missing one."""

    values = {name: optional_env_var(name) for name in names}
    missing = sorted(name for name, value in values.items() if value is None)
    if missing:
        raise MissingConfigurationError(missing)
    return {name: value for name, value in values.items() if value is not None}


def optional_env_var(name: str) -> str | None:
    """Return a stripped environment variable, treating blank values as unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def optional_positive_float(name: str) -> float | None:
    """Numeric override such as a request budget; blank means "use the default"."""

    raw = optional_env_var(name)
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise InvalidConfigurationError(name, raw, "expected a number") from exc
    if value <= 0:
        raise InvalidConfigurationError(name, raw, "must be greater than zero")
    return value
