"""JSON snapshot storage for the docs index."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable

from docsite.domain.document import DocumentRecord, check_entry

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Snapshot storage adapter.

    The snapshot is a cache regenerated from the docs directory, never a
    source of truth: a missing or unreadable file reads as an empty index.
    """

    def __init__(self, path: str | Path):
        """Initialize SnapshotStore.

        Args:
            path: Location of the JSON index file
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def write(self, records: Iterable[DocumentRecord], summary: bool = False) -> Path:
        """Serialize records and replace the snapshot atomically.

        Args:
            records: Ordered records to persist
            summary: Write the reduced search projection instead of full records

        Returns:
            Path of the written snapshot
        """
        entries = [r.to_summary() if summary else r.to_dict() for r in records]
        payload = json.dumps(entries, indent=2, ensure_ascii=False) + "\n"

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, self._path)
        except Exception:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        return self._path

    def load(self) -> list[dict[str, Any]]:
        """Read the snapshot.

        Returns:
            Entries that pass ``check_entry``, empty when the file is missing
            or corrupt
        """
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as e:
            logger.warning(f"Error reading docs index {self._path}: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"Docs index {self._path} is not a JSON array")
            return []

        entries = []
        for position, entry in enumerate(data):
            try:
                check_entry(entry)
            except ValueError as e:
                logger.warning(f"Skipping docs index entry {position}: {e}")
                continue
            entries.append(entry)
        return entries

    def load_records(self) -> list[DocumentRecord]:
        """Read the snapshot as records, skipping malformed entries."""
        return [DocumentRecord.from_dict(entry) for entry in self.load()]
