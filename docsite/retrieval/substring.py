"""Case-insensitive substring search over the docs snapshot."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Union

from docsite.domain.document import DocumentRecord
from docsite.storage.snapshot import SnapshotStore

DEFAULT_LIMIT = 8

SnapshotEntry = Union[Mapping[str, Any], DocumentRecord]


def _fields(entry: SnapshotEntry) -> tuple[Any, Any, Any, Any]:
    if isinstance(entry, DocumentRecord):
        return entry.title, entry.excerpt, entry.category, entry.tags
    return (
        entry.get("title"),
        entry.get("excerpt"),
        entry.get("category"),
        entry.get("tags"),
    )


def matches(entry: SnapshotEntry, needle: str) -> bool:
    """Check title, excerpt, category and tags for a lowercased needle."""
    title, excerpt, category, tags = _fields(entry)
    for value in (title, excerpt, category):
        if isinstance(value, str) and needle in value.lower():
            return True
    if isinstance(tags, (list, tuple)):
        return any(isinstance(tag, str) and needle in tag.lower() for tag in tags)
    return False


def search(
    query: str, snapshot: Iterable[SnapshotEntry], limit: int = DEFAULT_LIMIT
) -> list[SnapshotEntry]:
    """Filter a snapshot by substring.

    No ranking: matches keep snapshot order and are cut at ``limit``.
    An empty query returns no results.
    """
    needle = (query or "").strip().lower()
    if not needle or limit < 1:
        return []

    results: list[SnapshotEntry] = []
    for entry in snapshot:
        if matches(entry, needle):
            results.append(entry)
            if len(results) >= limit:
                break
    return results


class SnapshotSearcher:
    """Search bound to a snapshot file."""

    def __init__(self, store: SnapshotStore, limit: int = DEFAULT_LIMIT):
        """Initialize searcher.

        Args:
            store: Snapshot store to read entries from
            limit: Maximum number of results per query
        """
        self._store = store
        self._limit = limit
        self._entries: list[dict[str, Any]] | None = None

    @property
    def limit(self) -> int:
        return self._limit

    def entries(self) -> list[dict[str, Any]]:
        # Loaded once per searcher; a missing snapshot reads as empty.
        if self._entries is None:
            self._entries = self._store.load()
        return self._entries

    def search(self, query: str, limit: int | None = None) -> list[dict[str, Any]]:
        cap = self._limit if limit is None else min(limit, self._limit)
        return search(query, self.entries(), cap)
