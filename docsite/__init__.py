"""Documentation index builder and read API."""

__version__ = "0.1.0"

# Domain entities
from docsite.domain.document import DocumentRecord

# Storage adapters
from docsite.storage.snapshot import SnapshotStore

# Pipeline components
from docsite.pipeline.config import Config
from docsite.pipeline.loader import DocumentLoader, get_doc_by_slug
from docsite.pipeline.index import IndexBuilder, get_all_docs, get_doc_slugs
from docsite.pipeline.pipeline import run_full_pipeline

# Retrieval
from docsite.retrieval.substring import SnapshotSearcher, search

__all__ = [
    # Domain
    "DocumentRecord",
    # Storage
    "SnapshotStore",
    # Pipeline
    "Config",
    "DocumentLoader",
    "IndexBuilder",
    "get_all_docs",
    "get_doc_by_slug",
    "get_doc_slugs",
    "run_full_pipeline",
    # Retrieval
    "SnapshotSearcher",
    "search",
]
