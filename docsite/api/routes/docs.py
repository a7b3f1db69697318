"""Document listing and lookup endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from docsite.api.dependencies import get_loader, get_snapshot_store
from docsite.api.schemas import DocumentDetail, DocumentSummary
from docsite.pipeline.index import docs_by_tag
from docsite.pipeline.loader import DocumentLoader
from docsite.storage.snapshot import SnapshotStore

router = APIRouter(prefix="/docs", tags=["docs"])


@router.get("", response_model=List[DocumentSummary])
def list_docs(
    category: Optional[str] = None,
    tag: Optional[str] = None,
    store: SnapshotStore = Depends(get_snapshot_store),
) -> List[DocumentSummary]:
    """List indexed documents in index order.

    Args:
        category: Only documents in this category
        tag: Only documents carrying this tag
        store: Snapshot store dependency

    Returns:
        Document summaries (empty when the index has not been built)
    """
    records = store.load_records()
    if category is not None:
        records = [r for r in records if r.category == category]
    if tag is not None:
        records = docs_by_tag(records, tag)
    return [DocumentSummary.from_record(r) for r in records]


@router.get("/{slug}", response_model=DocumentDetail)
def get_doc(
    slug: str,
    loader: DocumentLoader = Depends(get_loader),
) -> DocumentDetail:
    """Load a single document from source.

    Raises:
        HTTPException: 404 if the document is absent, unreadable or the slug is invalid
    """
    record = loader.load(slug)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Document not found: {slug}")
    return DocumentDetail.from_record(record)
