"""Release date precedence between the catalog and storefront data."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from questlog.adapters.igdb import IgdbReleaseDate

# IGDB release date category 0 means an exact YYYY-MM-DD date.
EXACT_DATE_CATEGORY = 0

# Storefront dates for titles older than this are re-release dates.
STORE_CUTOFF_YEAR = 2005


def catalog_release_date(
    release_dates: Sequence[IgdbReleaseDate], first_release_date: int | None
) -> tuple[int | None, int | None]:
    """Earliest positive release date, Early Access entries last, with its category."""

    ordered = sorted(release_dates, key=lambda item: (item.is_early_access, item.date or 0))
    for item in ordered:
        if item.date is not None and item.date > 0:
            return item.date, item.category
    return (first_release_date or None), None


def choose_release_date(
    catalog_date: int | None,
    catalog_category: int | None,
    store_date: int | None,
    *,
    now: datetime | None = None,
) -> int | None:
    if store_date is None:
        return catalog_date or None
    current = int((now or datetime.now(UTC)).timestamp())
    if not catalog_date or catalog_date > current:
        return store_date
    if catalog_category == EXACT_DATE_CATEGORY:
        return catalog_date
    if datetime.fromtimestamp(catalog_date, tz=UTC).year < STORE_CUTOFF_YEAR:
        return catalog_date
    return store_date
