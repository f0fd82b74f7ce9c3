"""Read-through lookup: document store first, primary catalog for the misses."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from questlog.domain.ports.documents import Document, DocumentStore


async def cached_lookup[T](
    store: DocumentStore,
    collection: str,
    ids: Sequence[int],
    *,
    from_document: Callable[[Document], T],
    fetch_missing: Callable[[list[int]], Awaitable[list[T]]],
    key: Callable[[T], int],
) -> list[T]:
    """Resolve ``ids`` through ``collection``, fetching only the ids it lacks.

    Results come back in the order of ``ids``; ids nobody knows are dropped.
    """
    unique = list(dict.fromkeys(ids))
    if not unique:
        return []

    batch = await store.batch_read(collection, unique)
    results = [from_document(document) for document in batch.found]
    missing = [int(doc_id) for doc_id in batch.not_found]
    if missing:
        results.extend(await fetch_missing(missing))

    position = {value: index for index, value in enumerate(unique)}
    by_id: dict[int, T] = {}
    for item in results:
        by_id.setdefault(key(item), item)
    return sorted(
        (item for item_id, item in by_id.items() if item_id in position),
        key=lambda item: position[key(item)],
    )
