"""Domain entities for the docs index.

This module contains immutable data structures that represent the documents
flowing through the indexing pipeline.
"""

from docsite.domain.document import DocumentRecord, FrontMatterValue

__all__ = ["DocumentRecord", "FrontMatterValue"]
