"""Error taxonomy shared by the resolver, reconciler and adapters."""

from __future__ import annotations

from typing import ClassVar


class QuestlogError(RuntimeError):
    """Base class for typed resolution failures."""

    status_code: ClassVar[int] = 500


class NotFoundError(QuestlogError):
    """A document, mapping or upstream record does not exist."""

    status_code: ClassVar[int] = 404


class InvalidArgumentError(QuestlogError):
    """Caller supplied malformed input, e.g. an unsupported storefront name."""

    status_code: ClassVar[int] = 400


class InternalError(QuestlogError):
    """Unexpected upstream payload shape, parse failure or broken invariant."""


class RequestError(QuestlogError):
    """Network or transport failure talking to an upstream service."""


def http_status_for(exc: BaseException) -> int:
    """Status code the HTTP boundary reports for ``exc``."""

    if isinstance(exc, QuestlogError):
        return exc.status_code
    return 500


__all__ = [
    "InternalError",
    "InvalidArgumentError",
    "NotFoundError",
    "QuestlogError",
    "RequestError",
    "http_status_for",
]
