"""Failure policy for the concurrent sub-fetches of a resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ValidationError

from questlog.domain.errors import InternalError, QuestlogError, RequestError

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from questlog.domain.ports.documents import Document

log = getLogger(__name__)


async def best_effort[T](awaitable: Awaitable[T], default: T, what: str, game_id: int) -> T:
    """Await an enrichment fetch; a failure is logged and replaced by ``default``."""

    try:
        return await awaitable
    except QuestlogError as exc:
        log.warning("Fetching %s for game %s failed: %s", what, game_id, exc)
        return default


@dataclass(slots=True)
class PrimaryFetches:
    """Tracks primary-catalog sub-fetches so total unavailability can be told apart."""

    game_id: int
    answered: int = 0
    unreachable: list[RequestError] = field(default_factory=list)

    async def run[T](self, awaitable: Awaitable[T], default: T, what: str) -> T:
        try:
            result = await awaitable
        except RequestError as exc:
            self.unreachable.append(exc)
            log.warning("Fetching %s for game %s failed: %s", what, self.game_id, exc)
            return default
        except QuestlogError as exc:
            log.warning("Fetching %s for game %s failed: %s", what, self.game_id, exc)
            return default
        # An empty answer still proves the catalog is reachable.
        self.answered += 1
        return result

    def raise_if_unreachable(self) -> None:
        if self.unreachable and not self.answered:
            raise RequestError(
                f"IGDB unreachable while resolving game {self.game_id}"
            ) from self.unreachable[-1]


def parse_document[M: BaseModel](model: type[M], document: Document) -> M:
    try:
        return model.model_validate(document)
    except ValidationError as exc:
        raise InternalError(f"Malformed {model.__name__} document: {exc}") from exc
