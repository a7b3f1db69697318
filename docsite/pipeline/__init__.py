"""Docs indexing pipeline components."""

from docsite.pipeline.config import Config, DocumentConfig, load_config
from docsite.pipeline.frontmatter import parse_front_matter
from docsite.pipeline.loader import (
    DocumentLoader,
    compute_excerpt,
    compute_reading_time,
    get_doc_by_slug,
)
from docsite.pipeline.index import (
    IndexBuilder,
    all_categories,
    all_tags,
    docs_by_tag,
    get_all_docs,
    get_doc_slugs,
    group_by_category,
)
from docsite.pipeline.pipeline import run_full_pipeline

__all__ = [
    # Configuration
    "Config",
    "DocumentConfig",
    "load_config",
    # Pipeline components
    "DocumentLoader",
    "IndexBuilder",
    # Functions
    "all_categories",
    "all_tags",
    "compute_excerpt",
    "compute_reading_time",
    "docs_by_tag",
    "get_all_docs",
    "get_doc_by_slug",
    "get_doc_slugs",
    "group_by_category",
    "parse_front_matter",
    "run_full_pipeline",
]
