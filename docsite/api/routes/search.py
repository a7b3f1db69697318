"""Substring search over the docs index."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from docsite.api.dependencies import get_searcher
from docsite.api.schemas import DocumentSummary, SearchResponse
from docsite.domain.document import DocumentRecord
from docsite.retrieval.substring import SnapshotSearcher

router = APIRouter(prefix="/search", tags=["search"])


@router.get("", response_model=SearchResponse)
def search(
    q: str = Query("", description="Case-insensitive substring"),
    limit: Optional[int] = Query(None, ge=1, description="Result cap"),
    searcher: SnapshotSearcher = Depends(get_searcher),
) -> SearchResponse:
    """Match title, excerpt, category and tags.

    An empty query returns no results; the configured cap always applies.
    """
    # the store has already dropped malformed entries
    return [
        DocumentSummary.from_record(DocumentRecord.from_dict(entry))
        for entry in searcher.search(q, limit=limit)
    ]
