"""FastAPI dependencies for dependency injection."""

from functools import lru_cache
import os
from pathlib import Path

from fastapi import Depends

from docsite.pipeline.config import Config, load_config
from docsite.pipeline.loader import DocumentLoader
from docsite.retrieval.substring import SnapshotSearcher
from docsite.storage.snapshot import SnapshotStore


def get_default_config_path() -> Path:
    """Packaged config, used when DOCSITE_CONFIG is not set."""
    return Path(__file__).parent.parent / "config.yaml"


@lru_cache
def get_config() -> Config:
    """Get cached configuration.

    Returns:
        Config from DOCSITE_CONFIG, the packaged config.yaml, or the environment
    """
    config_path = os.environ.get("DOCSITE_CONFIG") or get_default_config_path()
    return load_config(config_path)


def get_snapshot_store(config: Config = Depends(get_config)) -> SnapshotStore:
    """Snapshot store; read per request so regenerated indexes are picked up."""
    return SnapshotStore(config.index_path)


def get_loader(config: Config = Depends(get_config)) -> DocumentLoader:
    return DocumentLoader(config)


def get_searcher(
    config: Config = Depends(get_config),
    store: SnapshotStore = Depends(get_snapshot_store),
) -> SnapshotSearcher:
    return SnapshotSearcher(store, limit=config.search.limit)
