"""Relevance ranking of free-text search candidates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rapidfuzz import fuzz, process, utils

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

# WRatio scale is 0-100; unrelated titles typically land well below this.
DEFAULT_THRESHOLD = 60.0
# A candidate must contain a word this close to one of the query's words. One-letter
# edits of short words ("doom"/"room" is 75) fall below it, typos of longer ones do not.
WORD_FLOOR = 80.0


def _collapse(title: str) -> str:
    return " ".join(utils.default_process(title).split())


@dataclass(slots=True, frozen=True)
class Ranked[T]:
    candidate: T
    score: float
    exact: bool


class RelevanceRanker:
    """Scores candidates against a query title; exact title matches always rank first.

    WRatio alone rewards character overlap, so ``rank_above`` also requires that the
    candidate shares a word with the query.
    """

    def __init__(self, title: str) -> None:
        self.title = title
        self._processed = _collapse(title)
        self._words = self._processed.split()

    def score(self, name: str) -> float:
        return fuzz.WRatio(self.title, name, processor=utils.default_process)

    def is_exact(self, name: str) -> bool:
        return bool(self._processed) and _collapse(name) == self._processed

    def shares_word(self, name: str) -> bool:
        words = _collapse(name).split()
        if not words:
            return False
        return any(
            process.extractOne(word, words, scorer=fuzz.ratio, score_cutoff=WORD_FLOOR)
            is not None
            for word in self._words
        )

    def rank[T](self, candidates: Iterable[T], name: Callable[[T], str]) -> list[Ranked[T]]:
        ranked = [
            Ranked(candidate, self.score(name(candidate)), self.is_exact(name(candidate)))
            for candidate in candidates
        ]
        ranked.sort(key=lambda item: (item.exact, item.score), reverse=True)
        return ranked

    def rank_above[T](
        self,
        candidates: Iterable[T],
        name: Callable[[T], str],
        threshold: float = DEFAULT_THRESHOLD,
    ) -> list[Ranked[T]]:
        return [
            item
            for item in self.rank(candidates, name)
            if item.exact or (item.score >= threshold and self.shares_word(name(item.candidate)))
        ]
