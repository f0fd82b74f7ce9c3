"""Apicalypse query rendering for IGDB endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(slots=True, frozen=True)
class IgdbQuery:
    fields: tuple[str, ...] = ("*",)
    where: str | None = None
    search: str | None = None
    sort: str | None = None
    limit: int | None = None
    offset: int | None = None

    def __str__(self) -> str:
        clauses: list[str] = []
        if self.search is not None:
            # IGDB has no escaping for quotes inside a search term.
            term = self.search.replace('"', "")
            clauses.append(f'search "{term}";')
        clauses.append(f"fields {', '.join(self.fields)};")
        if self.where:
            clauses.append(f"where {self.where};")
        if self.sort:
            clauses.append(f"sort {self.sort};")
        if self.limit is not None:
            clauses.append(f"limit {self.limit};")
        if self.offset is not None:
            clauses.append(f"offset {self.offset};")
        return " ".join(clauses)


def id_in(ids: Iterable[int], field: str = "id") -> str:
    joined = ",".join(str(value) for value in ids)
    return f"{field} = ({joined})"
