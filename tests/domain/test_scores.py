from __future__ import annotations

from datetime import UTC, datetime

import pytest

from questlog.domain.model import ScoreSource, Scores, ScoreTier, SteamData, SteamScore
from questlog.domain.model.scores import popularity_multiplier
from questlog.domain.model.secondary import SteamMetacritic

MODERN = int(datetime(2020, 5, 1, tzinfo=UTC).timestamp())
CLASSIC = int(datetime(1998, 11, 19, tzinfo=UTC).timestamp())


@pytest.mark.parametrize(
    ("score", "tier"),
    [
        (96, ScoreTier.MASTERPIECE),
        (95, ScoreTier.MASTERPIECE),
        (90, ScoreTier.EXCELLENT),
        (85, ScoreTier.GREAT),
        (70, ScoreTier.GOOD),
        (65, ScoreTier.MIXED),
        (60, ScoreTier.BAD),
        (1, ScoreTier.BAD),
        (0, None),
        (None, None),
    ],
)
def test_tier_thresholds(score: int | None, tier: ScoreTier | None) -> None:
    assert ScoreTier.from_score(score) is tier


def test_higher_precedence_source_replaces_lower() -> None:
    scores = Scores()

    assert scores.add_aggregator(80, ScoreSource.GOG)
    assert scores.add_aggregator(88, ScoreSource.METACRITIC)

    assert scores.metacritic == 88
    assert scores.metacritic_source is ScoreSource.METACRITIC


def test_lower_precedence_source_never_overwrites() -> None:
    scores = Scores()
    scores.add_aggregator(88, ScoreSource.WIKIPEDIA)

    assert not scores.add_aggregator(50, ScoreSource.STEAM)
    assert not scores.add_aggregator(70, ScoreSource.WIKIPEDIA)
    assert not scores.add_aggregator(None, ScoreSource.METACRITIC)

    assert scores.metacritic == 88
    assert scores.metacritic_source is ScoreSource.WIKIPEDIA


def test_add_steam_sets_thumbs_popularity_and_aggregator() -> None:
    steam_data = SteamData(
        name="Portal 2",
        steam_appid=620,
        score=SteamScore(review_score=98, total_reviews=250_000),
        metacritic=SteamMetacritic(score=95),
    )
    scores = Scores()

    scores.add_steam(steam_data)

    assert scores.thumbs == 98
    assert scores.popularity == 250_000
    assert scores.metacritic == 95
    assert scores.metacritic_source is ScoreSource.STEAM


@pytest.mark.parametrize(
    ("popularity", "multiplier"),
    [(None, 1.0), (50_000, 1.0), (2_000, 0.95), (150, 0.9), (3, 0.8)],
)
def test_popularity_multiplier(popularity: int | None, multiplier: float) -> None:
    assert popularity_multiplier(popularity) == multiplier


def test_finalize_discounts_modern_titles_with_few_reviews() -> None:
    scores = Scores(metacritic=90, metacritic_source=ScoreSource.METACRITIC, popularity=150)

    scores.finalize(MODERN)

    assert scores.espy_score == 81
    assert scores.tier is ScoreTier.GREAT


def test_finalize_keeps_raw_score_for_classics() -> None:
    scores = Scores(metacritic=96, metacritic_source=ScoreSource.METACRITIC, popularity=10)

    scores.finalize(CLASSIC)

    assert scores.espy_score == 96
    assert scores.tier is ScoreTier.MASTERPIECE


def test_finalize_without_aggregator_has_no_tier() -> None:
    scores = Scores(thumbs=90, popularity=1000)

    scores.finalize(MODERN)

    assert scores.espy_score is None
    assert scores.tier is None
