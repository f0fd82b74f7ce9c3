"""Payloads contributed by secondary providers (Steam, GOG, Wikipedia)."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

STEAM_DATE_FORMATS = ("%b %d, %Y", "%d %b, %Y")
GOG_DATE_FORMAT = "%Y-%m-%d"


def _noon_utc_timestamp(value: str, formats: tuple[str, ...]) -> int | None:
    for fmt in formats:
        try:
            parsed = datetime.strptime(value.strip(), fmt)  # noqa: DTZ007
        except ValueError:
            continue
        return int(parsed.replace(hour=12, tzinfo=UTC).timestamp())
    return None


class SecondaryModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class SteamReleaseDate(SecondaryModel):
    coming_soon: bool = False
    date: str = ""


class SteamScore(SecondaryModel):
    review_score: int = 0
    total_reviews: int = 0
    review_score_desc: str = ""


class SteamMetacritic(SecondaryModel):
    score: int
    url: str | None = None


class SteamRecommendations(SecondaryModel):
    total: int = 0


class SteamGenre(SecondaryModel):
    id: str
    description: str


class SteamScreenshot(SecondaryModel):
    id: int
    path_thumbnail: str
    path_full: str


class SteamData(SecondaryModel):
    name: str
    steam_appid: int
    short_description: str = ""
    about_the_game: str = ""
    release_date: SteamReleaseDate | None = None
    header_image: str | None = None
    developers: list[str] = Field(default_factory=list)
    publishers: list[str] = Field(default_factory=list)
    dlc: list[int] = Field(default_factory=list)
    score: SteamScore | None = None
    metacritic: SteamMetacritic | None = None
    recommendations: SteamRecommendations | None = None
    genres: list[SteamGenre] = Field(default_factory=list)
    user_tags: list[str] = Field(default_factory=list)
    screenshots: list[SteamScreenshot] = Field(default_factory=list)

    def release_timestamp(self) -> int | None:
        """Store release date at noon UTC, or None when absent or unparseable."""
        if self.release_date is None or not self.release_date.date:
            return None
        return _noon_utc_timestamp(self.release_date.date, STEAM_DATE_FORMATS)


class GogData(SecondaryModel):
    release_date: str | None = None
    logo: str | None = None
    critic_score: int | None = None
    genres: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    description: str | None = None

    def release_timestamp(self) -> int | None:
        if not self.release_date:
            return None
        return _noon_utc_timestamp(self.release_date, (GOG_DATE_FORMAT,))


class WikipediaData(SecondaryModel):
    developers: list[str] = Field(default_factory=list)
    publishers: list[str] = Field(default_factory=list)
    genres: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    score: int | None = None
