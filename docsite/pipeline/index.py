"""Index building - enumerates, loads, sorts and persists document records."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable

from tqdm import tqdm

from docsite.domain.document import DocumentRecord
from docsite.pipeline.config import Config
from docsite.pipeline.loader import DocumentLoader
from docsite.storage.snapshot import SnapshotStore

logger = logging.getLogger(__name__)


def sort_records(records: Iterable[DocumentRecord]) -> list[DocumentRecord]:
    """Stable sort by category, then order."""
    return sorted(records, key=lambda r: (r.category, r.order))


class IndexBuilder:
    """Main index builder orchestrator."""

    def __init__(
        self,
        config: Config | None = None,
        loader: DocumentLoader | None = None,
        store: SnapshotStore | None = None,
    ):
        """Initialize index builder.

        Args:
            config: Pipeline configuration
            loader: Document loader (built from config when omitted)
            store: Snapshot store (built from config.index_path when omitted)
        """
        self._config = config or Config()
        self._loader = loader or DocumentLoader(self._config)
        self._store = store or SnapshotStore(self._config.index_path)

    @property
    def loader(self) -> DocumentLoader:
        return self._loader

    @property
    def store(self) -> SnapshotStore:
        return self._store

    def list_slugs(self) -> list[str]:
        """Enumerate slugs from the docs directory.

        A missing directory is created and yields no slugs; an unreadable
        one is logged and also yields no slugs.
        """
        docs_dir = self._loader.docs_dir
        extension = self._config.file_extension

        try:
            docs_dir.mkdir(parents=True, exist_ok=True)
            names = sorted(
                p.name
                for p in docs_dir.iterdir()
                if p.suffix == extension and p.is_file() and not p.name.startswith(".")
            )
        except OSError as e:
            logger.error(f"Error getting doc slugs from {docs_dir}: {e}")
            return []

        return [name[: -len(extension)] for name in names]

    def get_by_slug(self, slug: str) -> DocumentRecord | None:
        return self._loader.load(slug)

    def build_index(self) -> list[DocumentRecord]:
        """Load every document and return them sorted.

        Loads run concurrently; results are collected in enumeration order
        so that the final order never depends on completion order.

        Returns:
            Records sorted by (category, order)
        """
        return self._load_all(self.list_slugs())

    def _load_all(self, slugs: list[str]) -> list[DocumentRecord]:
        build = self._config.build

        if build.max_workers > 1 and len(slugs) > 1:
            with ThreadPoolExecutor(max_workers=build.max_workers) as executor:
                loaded = list(
                    tqdm(
                        executor.map(self._loader.load, slugs),
                        total=len(slugs),
                        desc="Indexing",
                        disable=not build.progress,
                    )
                )
        else:
            loaded = [
                self._loader.load(slug)
                for slug in tqdm(slugs, desc="Indexing", disable=not build.progress)
            ]

        records = [record for record in loaded if record is not None]
        skipped = len(slugs) - len(records)
        if skipped:
            logger.warning(f"Skipped {skipped} of {len(slugs)} documents")

        return sort_records(records)

    def persist(
        self,
        records: Iterable[DocumentRecord],
        path: str | Path | None = None,
        summary: bool = False,
    ) -> Path:
        """Write records as a JSON snapshot.

        Args:
            records: Ordered records
            path: Destination (defaults to the configured index path)
            summary: Write the reduced search projection

        Returns:
            Path of the written snapshot
        """
        store = SnapshotStore(path) if path is not None else self._store
        return store.write(records, summary=summary)

    def build_and_persist(
        self, path: str | Path | None = None, summary: bool = False
    ) -> dict:
        """Regenerate the index and write it to disk.

        Returns:
            Build statistics dict
        """
        slugs = self.list_slugs()
        records = self._load_all(slugs)
        output = self.persist(records, path=path, summary=summary)

        indexed = {record.slug for record in records}
        stats = {
            "total": len(slugs),
            "indexed": len(records),
            "skipped": [slug for slug in slugs if slug not in indexed],
            "categories": len(all_categories(records)),
            "tags": len(all_tags(records)),
            "output": str(output),
        }

        logger.info(f"Generated docs index with {len(records)} documents")
        return stats


# ========== Aggregations ==========


def all_tags(records: Iterable[DocumentRecord]) -> list[str]:
    """Unique tags in first-seen order."""
    seen: dict[str, None] = {}
    for record in records:
        for tag in record.tags:
            seen.setdefault(tag, None)
    return list(seen)


def all_categories(records: Iterable[DocumentRecord]) -> list[str]:
    """Unique categories in first-seen order."""
    seen: dict[str, None] = {}
    for record in records:
        seen.setdefault(record.category, None)
    return list(seen)


def docs_by_tag(records: Iterable[DocumentRecord], tag: str) -> list[DocumentRecord]:
    return [record for record in records if tag in record.tags]


def group_by_category(
    records: Iterable[DocumentRecord],
) -> dict[str, list[DocumentRecord]]:
    """Group records for navigation: categories sorted, each group by order."""
    grouped: dict[str, list[DocumentRecord]] = {}
    for record in records:
        grouped.setdefault(record.category, []).append(record)
    return {
        category: sorted(grouped[category], key=lambda r: r.order)
        for category in sorted(grouped)
    }


# ========== Lookup helpers for rendering ==========


def get_doc_slugs(config: Config | None = None) -> list[str]:
    return IndexBuilder(config).list_slugs()


def get_all_docs(config: Config | None = None) -> list[DocumentRecord]:
    return IndexBuilder(config).build_index()
