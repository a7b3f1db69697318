"""Tag and category aggregation endpoints."""

from typing import List

from fastapi import APIRouter, Depends

from docsite.api.dependencies import get_snapshot_store
from docsite.api.schemas import CategoryGroup, DocumentSummary, TagsResponse
from docsite.pipeline.index import all_tags, docs_by_tag, group_by_category
from docsite.storage.snapshot import SnapshotStore

router = APIRouter(tags=["taxonomy"])


@router.get("/tags", response_model=TagsResponse)
def list_tags(store: SnapshotStore = Depends(get_snapshot_store)) -> TagsResponse:
    return TagsResponse(tags=all_tags(store.load_records()))


@router.get("/tags/{tag}", response_model=List[DocumentSummary])
def list_docs_for_tag(
    tag: str, store: SnapshotStore = Depends(get_snapshot_store)
) -> List[DocumentSummary]:
    return [
        DocumentSummary.from_record(r) for r in docs_by_tag(store.load_records(), tag)
    ]


@router.get("/categories", response_model=List[CategoryGroup])
def list_categories(
    store: SnapshotStore = Depends(get_snapshot_store),
) -> List[CategoryGroup]:
    """Documents grouped by category for the navigation sidebar."""
    grouped = group_by_category(store.load_records())
    return [
        CategoryGroup(
            category=category,
            docs=[DocumentSummary.from_record(r) for r in records],
        )
        for category, records in grouped.items()
    ]
