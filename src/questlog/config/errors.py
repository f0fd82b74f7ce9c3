"""Configuration error definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid."""


class MissingConfigurationError(ConfigurationError):
    """Required environment variables are absent or blank.

    ``names`` lists every missing variable so one run reports all of them.
    """

    def __init__(self, names: Iterable[str], *, alternatives: bool = False) -> None:
        self.names = tuple(names)
        joiner = " or " if alternatives else ", "
        super().__init__(f"Missing configuration for: {joiner.join(self.names)}")


class InvalidConfigurationError(ConfigurationError):
    """An environment variable is set to a value questlog cannot use."""

    def __init__(self, name: str, value: str, reason: str) -> None:
        self.name = name
        self.value = value
        super().__init__(f"{name}={value!r}: {reason}")
