"""Company name normalisation and role handling."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from questlog.domain.model import CompanyRole

if TYPE_CHECKING:
    from collections.abc import Sequence

    from questlog.domain.model import CompanyDigest

FLUFF = frozenset(
    {
        "ag", "and", "co", "corporation", "development", "east", "entertainment", "game",
        "games", "gmbh", "inc", "interactive", "international", "limited", "llc", "ltd",
        "media", "north", "northwest", "on-line", "online", "partners", "production",
        "productions", "publishing", "software", "softworks", "studio", "studios",
        "technologies", "the", "victor", "west",
    }
)  # fmt: skip

LOCATIONS = frozenset(
    {
        "albany", "asia-pacific", "asia", "austin", "australia", "baltimore", "birmingham",
        "boston", "bucharest", "budapest", "canada", "casablanca", "chicago", "china",
        "czech", "deutschland", "edmonton", "europe", "france", "frankfurt", "hawaii",
        "italia", "japan", "kiev", "london", "manchester", "marin", "milan", "montpellier",
        "montreal", "montréal", "nordic", "paris", "poland", "quebec", "québec",
        "shanghai", "sofia", "southam", "teesside", "tokyo", "toronto", "uk", "usa",
        "vancouver",
    }
)  # fmt: skip

_IGNORED_TOKENS = FLUFF | LOCATIONS
_NON_ALNUM = re.compile(r"[^0-9a-z]+")


def normalize_company_name(name: str) -> str:
    """Drop punctuation, legal-entity fluff and location qualifiers from a company name."""
    tokens = name.replace(".", "").replace(",", "").split()
    kept = [token for token in tokens if token.lower() not in _IGNORED_TOKENS]
    # A name made only of fluff ("Interactive Studios") keeps its original tokens.
    return " ".join(kept or tokens)


def company_slug(name: str) -> str:
    return _NON_ALNUM.sub("-", normalize_company_name(name).lower()).strip("-")


def company_role(
    *, developer: bool, publisher: bool, porting: bool, supporting: bool
) -> CompanyRole:
    if developer and publisher:
        return CompanyRole.DEV_PUB
    if developer:
        return CompanyRole.DEVELOPER
    if publisher:
        return CompanyRole.PUBLISHER
    if porting:
        return CompanyRole.PORTING
    if supporting:
        return CompanyRole.SUPPORT
    return CompanyRole.UNKNOWN


def narrow_companies(
    companies: list[CompanyDigest], external_names: Sequence[str]
) -> list[CompanyDigest]:
    """Keep only companies the secondary source also lists.

    The list is left untouched when the secondary source names nobody or when
    narrowing would drop every company.
    """
    if not external_names:
        return companies
    allowed = {company_slug(name) for name in external_names}
    narrowed = [company for company in companies if company.slug.lower() in allowed]
    return narrowed or companies
