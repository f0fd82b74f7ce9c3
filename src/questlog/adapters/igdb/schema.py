"""IGDB response records used by the resolver."""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict

log = logging.getLogger(__name__)


class IgdbBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow")
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug(
            "IGDB %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class IgdbImage(IgdbBaseModel):
    id: int
    image_id: str
    height: int | None = None
    width: int | None = None


class IgdbWebsite(IgdbBaseModel):
    id: int
    url: str
    category: int | None = None


class IgdbInvolvedCompany(IgdbBaseModel):
    id: int
    company: int
    developer: bool = False
    publisher: bool = False
    porting: bool = False
    supporting: bool = False


class IgdbCompany(IgdbBaseModel):
    id: int
    name: str
    slug: str = ""
    url: str | None = None
    logo: int | None = None


class IgdbAnnotation(IgdbBaseModel):
    """Shape shared by collections, franchises, genres and keywords."""

    id: int
    name: str
    slug: str = ""
    url: str | None = None


class IgdbReleaseStatus(IgdbBaseModel):
    id: int | None = None
    name: str = ""


class IgdbReleaseDate(IgdbBaseModel):
    id: int
    category: int | None = None
    date: int | None = None
    status: IgdbReleaseStatus | None = None

    @property
    def is_early_access(self) -> bool:
        return self.status is not None and self.status.name == "Early Access"


class IgdbExternalGame(IgdbBaseModel):
    id: int
    game: int
    uid: str = ""
    category: int | None = None
    url: str | None = None
