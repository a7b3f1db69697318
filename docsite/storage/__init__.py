"""Storage adapters for the docs index."""

from docsite.storage.snapshot import SnapshotStore

__all__ = ["SnapshotStore"]
