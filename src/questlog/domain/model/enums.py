"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class GameCategory(StrEnum):
    MAIN = "Main"
    DLC = "Dlc"
    EXPANSION = "Expansion"
    BUNDLE = "Bundle"
    STANDALONE_EXPANSION = "StandaloneExpansion"
    EPISODE = "Episode"
    SEASON = "Season"
    REMAKE = "Remake"
    REMASTER = "Remaster"
    VERSION = "Version"
    IGNORE = "Ignore"

    @property
    def is_main(self) -> bool:
        return self in _MAIN_CATEGORIES

    @property
    def has_contents(self) -> bool:
        return self in {GameCategory.BUNDLE, GameCategory.VERSION}


_MAIN_CATEGORIES = frozenset(
    {
        GameCategory.MAIN,
        GameCategory.EXPANSION,
        GameCategory.STANDALONE_EXPANSION,
        GameCategory.REMAKE,
        GameCategory.REMASTER,
    }
)


class GameStatus(StrEnum):
    RELEASED = "Released"
    ALPHA = "Alpha"
    BETA = "Beta"
    EARLY_ACCESS = "EarlyAccess"
    OFFLINE = "Offline"
    CANCELLED = "Cancelled"
    RUMORED = "Rumored"
    DELISTED = "Delisted"
    UNKNOWN = "Unknown"


class WebsiteAuthority(StrEnum):
    NULL = "Null"
    OFFICIAL = "Official"
    WIKIPEDIA = "Wikipedia"
    IGDB = "Igdb"
    GOG = "Gog"
    STEAM = "Steam"
    EGS = "Egs"
    YOUTUBE = "Youtube"


class CompanyRole(StrEnum):
    UNKNOWN = "Unknown"
    DEVELOPER = "Developer"
    PUBLISHER = "Publisher"
    PORTING = "Porting"
    SUPPORT = "Support"
    DEV_PUB = "DevPub"

    @property
    def develops(self) -> bool:
        return self in {CompanyRole.DEVELOPER, CompanyRole.DEV_PUB}

    @property
    def publishes(self) -> bool:
        return self in {CompanyRole.PUBLISHER, CompanyRole.DEV_PUB}


class CollectionType(StrEnum):
    NULL = "Null"
    COLLECTION = "Collection"
    FRANCHISE = "Franchise"


class ScoreSource(StrEnum):
    """Aggregator score sources, declared in precedence order (highest first)."""

    METACRITIC = "Metacritic"
    WIKIPEDIA = "Wikipedia"
    STEAM = "Steam"
    GOG = "Gog"

    @property
    def precedence(self) -> int:
        return list(ScoreSource).index(self)


class ScoreTier(StrEnum):
    MASTERPIECE = "Masterpiece"
    EXCELLENT = "Excellent"
    GREAT = "Great"
    GOOD = "Good"
    MIXED = "Mixed"
    BAD = "Bad"

    @classmethod
    def from_score(cls, score: int | None) -> ScoreTier | None:
        if score is None:
            return None
        if score >= 95:  # noqa: PLR2004
            return cls.MASTERPIECE
        if score >= 90:  # noqa: PLR2004
            return cls.EXCELLENT
        if score >= 80:  # noqa: PLR2004
            return cls.GREAT
        if score >= 70:  # noqa: PLR2004
            return cls.GOOD
        if score > 60:  # noqa: PLR2004
            return cls.MIXED
        if score > 0:
            return cls.BAD
        return None


class Storefront(StrEnum):
    STEAM = "steam"
    GOG = "gog"
    EGS = "egs"
