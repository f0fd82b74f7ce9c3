"""Score merging and tiering."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel

from .enums import ScoreSource, ScoreTier

if TYPE_CHECKING:
    from .secondary import SteamData

# Titles released before this year keep their raw aggregator score: review counts
# on today's storefronts say little about how popular they were at release.
CLASSIC_CUTOFF_YEAR = 2011

# (minimum review count, multiplier), checked top-down.
POPULARITY_MULTIPLIERS: tuple[tuple[int, float], ...] = (
    (10_000, 1.0),
    (1_000, 0.95),
    (100, 0.9),
    (0, 0.8),
)


def popularity_multiplier(popularity: int | None) -> float:
    if popularity is None:
        return 1.0
    for threshold, multiplier in POPULARITY_MULTIPLIERS:
        if popularity >= threshold:
            return multiplier
    return POPULARITY_MULTIPLIERS[-1][1]


class Scores(BaseModel):
    thumbs: int | None = None
    popularity: int | None = None
    hype: int | None = None
    metacritic: int | None = None
    metacritic_source: ScoreSource | None = None
    espy_score: int | None = None
    tier: ScoreTier | None = None

    def add_aggregator(self, score: int | None, source: ScoreSource) -> bool:
        """Record ``score`` unless a source of equal or higher precedence already has.

        Returns whether the score was taken.
        """
        if score is None or score <= 0:
            return False
        current = self.metacritic_source
        if current is not None and current.precedence <= source.precedence:
            return False
        self.metacritic = score
        self.metacritic_source = source
        return True

    def add_steam(self, steam_data: SteamData) -> None:
        if steam_data.score is not None:
            self.thumbs = steam_data.score.review_score
            if steam_data.score.total_reviews > 0:
                self.popularity = steam_data.score.total_reviews
        if steam_data.metacritic is not None:
            self.add_aggregator(steam_data.metacritic.score, ScoreSource.STEAM)

    def add_hype(self, follows: int | None, hypes: int | None) -> None:
        total = (follows or 0) + (hypes or 0)
        self.hype = total or None

    def finalize(self, release_date: int | None) -> None:
        """Derive ``espy_score`` and ``tier`` from the merged aggregator score."""
        if self.metacritic is None:
            self.espy_score = None
        elif _is_classic(release_date):
            self.espy_score = self.metacritic
        else:
            self.espy_score = round(self.metacritic * popularity_multiplier(self.popularity))
        self.tier = ScoreTier.from_score(self.espy_score)


def _is_classic(release_date: int | None) -> bool:
    if not release_date:
        return False
    return datetime.fromtimestamp(release_date, tz=UTC).year < CLASSIC_CUTOFF_YEAR
