"""Snapshot retrieval."""

from docsite.retrieval.substring import DEFAULT_LIMIT, SnapshotSearcher, search

__all__ = ["DEFAULT_LIMIT", "SnapshotSearcher", "search"]
