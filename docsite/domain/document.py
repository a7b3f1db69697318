"""Document record entity for the docs index."""

from dataclasses import dataclass, field
from typing import Any, Union

# Closed variant for front-matter values after normalization.
FrontMatterValue = Union[
    str,
    int,
    float,
    bool,
    None,
    list["FrontMatterValue"],
    dict[str, "FrontMatterValue"],
]

# Serialized keys owned by the record; pass-through metadata never overrides them.
RECORD_KEYS = frozenset(
    {
        "slug",
        "title",
        "content",
        "category",
        "tags",
        "order",
        "excerpt",
        "readingTime",
        "date",
        "updated",
        "lastUpdated",
        "fileName",
    }
)

SUMMARY_KEYS = (
    "slug",
    "title",
    "excerpt",
    "category",
    "tags",
    "order",
    "readingTime",
    "date",
    "updated",
    "lastUpdated",
)

_TEXT_KEYS = ("title", "content", "category", "excerpt", "fileName")
_INT_KEYS = ("order", "readingTime")
_TIMESTAMP_KEYS = ("date", "updated", "lastUpdated")


def check_entry(data: Any) -> None:
    """Validate the typed keys of a snapshot entry.

    Absent keys are fine; ``from_dict`` fills defaults for them.

    Raises:
        ValueError: If the slug is missing or a typed key has the wrong type
    """
    if not isinstance(data, dict):
        raise ValueError(f"entry must be an object, got {type(data).__name__}")
    slug = data.get("slug")
    if not isinstance(slug, str) or not slug:
        raise ValueError("entry has no slug")
    for key in _TEXT_KEYS:
        if key in data and not isinstance(data[key], str):
            raise ValueError(f"{slug}: {key} must be a string")
    for key in _INT_KEYS:
        # bool is an int subclass
        if key in data and (
            not isinstance(data[key], int) or isinstance(data[key], bool)
        ):
            raise ValueError(f"{slug}: {key} must be an integer")
    for key in _TIMESTAMP_KEYS:
        if data.get(key) is not None and not isinstance(data[key], str):
            raise ValueError(f"{slug}: {key} must be a string or null")
    tags = data.get("tags")
    if tags is not None and (
        not isinstance(tags, list) or not all(isinstance(t, str) for t in tags)
    ):
        raise ValueError(f"{slug}: tags must be a list of strings")


@dataclass(frozen=True, slots=True)
class DocumentRecord:
    """Immutable documentation record.

    Represents a single Markdown document after front-matter parsing and
    normalization. Records are built fresh on every load.

    Attributes:
        slug: Identifier derived from the source file name (e.g. "getting-started")
        title: Document title, "Untitled" when the front matter has none
        content: Markdown body without the front-matter block
        category: Grouping key, "General" when absent
        tags: Tags in first-seen order, duplicates removed
        order: Secondary sort key within a category (999 when absent)
        excerpt: Summary text for listings
        reading_time: Estimated reading time in minutes
        date: ISO-8601 creation timestamp
        updated: ISO-8601 last-modified timestamp
        file_name: Source file name (e.g. "getting-started.md")
        extra: Unrecognized front-matter keys, passed through unchanged
    """

    slug: str
    title: str
    content: str
    category: str
    tags: tuple[str, ...] = ()
    order: int = 999
    excerpt: str = ""
    reading_time: int = 0
    date: str | None = None
    updated: str | None = None
    file_name: str = ""
    extra: dict[str, FrontMatterValue] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert record to the snapshot JSON shape."""
        data: dict[str, Any] = {
            "slug": self.slug,
            "title": self.title,
            "content": self.content,
            "category": self.category,
            "tags": list(self.tags),
            "order": self.order,
            "excerpt": self.excerpt,
            "readingTime": self.reading_time,
            "date": self.date,
            "updated": self.updated,
            "lastUpdated": self.updated,
            "fileName": self.file_name,
        }
        for key, value in self.extra.items():
            if key not in RECORD_KEYS:
                data[key] = value
        return data

    def to_summary(self) -> dict[str, Any]:
        """Reduced projection used by the search-facing snapshot."""
        data = self.to_dict()
        return {key: data[key] for key in SUMMARY_KEYS}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DocumentRecord":
        """Create record from a snapshot entry.

        Args:
            data: Dictionary in the shape produced by ``to_dict``

        Returns:
            DocumentRecord instance

        Raises:
            ValueError: If the entry fails ``check_entry``
        """
        check_entry(data)
        return cls(
            slug=data["slug"],
            title=data.get("title", "Untitled"),
            content=data.get("content", ""),
            category=data.get("category", "General"),
            tags=tuple(data.get("tags") or ()),
            order=data.get("order", 999),
            excerpt=data.get("excerpt", ""),
            reading_time=data.get("readingTime", 0),
            date=data.get("date"),
            updated=data.get("updated", data.get("lastUpdated")),
            file_name=data.get("fileName", ""),
            extra={k: v for k, v in data.items() if k not in RECORD_KEYS},
        )
