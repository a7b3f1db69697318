"""Pydantic schemas for API response models."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from docsite.domain.document import DocumentRecord


# ========== Response Schemas ==========


class DocumentSummary(BaseModel):
    """Listing and search entry."""

    slug: str = Field(..., description="Document identifier")
    title: str = Field(..., description="Document title")
    excerpt: str = Field("", description="Short summary for listings")
    category: str = Field(..., description="Navigation category")
    tags: List[str] = Field(default_factory=list, description="Document tags")
    order: int = Field(999, description="Sort key within the category")
    reading_time: int = Field(0, ge=0, description="Estimated reading time in minutes")
    date: Optional[str] = Field(None, description="ISO-8601 creation timestamp")
    updated: Optional[str] = Field(None, description="ISO-8601 last-modified timestamp")

    @classmethod
    def from_record(cls, record: DocumentRecord) -> "DocumentSummary":
        return cls(
            slug=record.slug,
            title=record.title,
            excerpt=record.excerpt,
            category=record.category,
            tags=list(record.tags),
            order=record.order,
            reading_time=record.reading_time,
            date=record.date,
            updated=record.updated,
        )


class DocumentDetail(DocumentSummary):
    """Full document for page rendering."""

    content: str = Field(..., description="Markdown body")
    file_name: str = Field(..., description="Source file name")
    metadata: Dict[str, Any] = Field(
        default_factory=dict, description="Pass-through front-matter keys"
    )

    @classmethod
    def from_record(cls, record: DocumentRecord) -> "DocumentDetail":
        summary = DocumentSummary.from_record(record)
        return cls(
            **summary.model_dump(),
            content=record.content,
            file_name=record.file_name,
            metadata=dict(record.extra),
        )


class CategoryGroup(BaseModel):
    """Documents of one category, ordered for navigation."""

    category: str = Field(..., description="Category name")
    docs: List[DocumentSummary] = Field(default_factory=list)


class TagsResponse(BaseModel):
    """All tags in first-seen order."""

    tags: List[str] = Field(default_factory=list)


# Type alias for search response
SearchResponse = List[DocumentSummary]


# ========== Error Schemas ==========


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")
