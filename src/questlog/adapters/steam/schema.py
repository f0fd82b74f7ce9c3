"""Steam store and Web API response envelopes."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from questlog.domain.model import SteamData


class SteamModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class SteamAppDetails(SteamModel):
    success: bool
    data: SteamData | None = None


class SteamReviewSummary(SteamModel):
    total_positive: int = 0
    total_negative: int = 0
    total_reviews: int = 0
    review_score_desc: str = ""

    @property
    def thumbs(self) -> int:
        if self.total_reviews <= 0:
            return 0
        return round(self.total_positive / self.total_reviews * 100)


class SteamReviews(SteamModel):
    success: int
    query_summary: SteamReviewSummary


class SteamOwnedGame(SteamModel):
    appid: int
    name: str = ""
    playtime_forever: int = 0
    img_icon_url: str | None = None


class SteamOwnedGamesBody(SteamModel):
    game_count: int = 0
    games: list[SteamOwnedGame] = Field(default_factory=list)


class SteamOwnedGames(SteamModel):
    response: SteamOwnedGamesBody
