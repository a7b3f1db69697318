"""Document loading - one slug in, one normalized record (or nothing) out."""

from __future__ import annotations

import logging
import math
import os
from datetime import datetime, timezone
from pathlib import Path

from docsite.domain.document import DocumentRecord, FrontMatterValue
from docsite.errors import DocsiteError, DocumentNotFoundError, InvalidSlugError
from docsite.pipeline.config import Config, DocumentConfig
from docsite.pipeline.frontmatter import parse_front_matter

logger = logging.getLogger(__name__)

# Front-matter keys mapped onto typed record fields; everything else passes through.
KNOWN_KEYS = frozenset(
    {"title", "date", "updated", "tags", "excerpt", "category", "order"}
)

# ".." is covered by the leading-dot rule; "v1..2-notes" stays a legal slug.
_FORBIDDEN = ("/", "\\", "\x00")


def compute_excerpt(
    content: str,
    explicit: FrontMatterValue = None,
    separator: str = "<!-- excerpt -->",
    length: int = 150,
) -> str:
    """Derive a listing excerpt.

    Precedence: explicit front-matter excerpt, then the text before the
    separator, then the first ``length`` characters of the body plus "...".
    """
    if explicit is not None and str(explicit).strip():
        return str(explicit).strip()

    if not content.strip():
        return ""

    if separator and separator in content:
        head = content.split(separator, 1)[0].strip()
        if head:
            return head

    return content[:length].strip() + "..."


def compute_reading_time(content: str, words_per_minute: int = 200) -> int:
    """Minutes to read ``content``, rounded up."""
    words = len(content.split())
    return math.ceil(words / words_per_minute)


def _iso_timestamp(seconds: float) -> str:
    stamp = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _birth_time(stat: os.stat_result) -> float:
    # st_birthtime is missing on most Linux filesystems
    return getattr(stat, "st_birthtime", stat.st_ctime)


def _normalize_tags(value: FrontMatterValue) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, int, float)):
        value = [value]
    if not isinstance(value, list):
        return ()

    seen: dict[str, None] = {}
    for item in value:
        if item is None or isinstance(item, (list, dict)):
            continue
        tag = str(item).strip()
        if tag:
            seen.setdefault(tag, None)
    return tuple(seen)


def _normalize_order(value: FrontMatterValue, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return default


def _text_or(value: FrontMatterValue, default: str) -> str:
    if value is None or isinstance(value, (list, dict)):
        return default
    text = str(value).strip()
    return text or default


class DocumentLoader:
    """Loads single documents from the docs directory.

    ``load`` never raises: any failure is logged and reported as ``None`` so
    that one broken document degrades to a not-found page.
    """

    def __init__(self, config: Config | None = None):
        """Initialize loader.

        Args:
            config: Pipeline configuration (defaults apply when omitted)
        """
        self._config = config or Config()
        self._docs_dir = Path(self._config.docs_dir)
        self._extension = self._config.file_extension
        self._rules: DocumentConfig = self._config.document

    @property
    def docs_dir(self) -> Path:
        return self._docs_dir

    def resolve_path(self, slug: str) -> Path:
        """Map a slug onto its source path inside the docs directory.

        Raises:
            InvalidSlugError: If the slug is malformed or escapes the docs directory
        """
        if not isinstance(slug, str) or not slug.strip():
            raise InvalidSlugError(str(slug), "slug is empty")
        for token in _FORBIDDEN:
            if token in slug:
                raise InvalidSlugError(slug, f"slug contains {token!r}")
        if slug.startswith("."):
            raise InvalidSlugError(slug, "slug starts with '.'")

        root = self._docs_dir.resolve()
        path = (root / f"{slug}{self._extension}").resolve()
        if path.parent != root:
            raise InvalidSlugError(slug, "slug resolves outside the docs directory")
        return path

    def load_or_raise(self, slug: str) -> DocumentRecord:
        """Load a document, raising on any failure.

        Raises:
            InvalidSlugError: If the slug is rejected
            DocumentNotFoundError: If no source file exists
            FrontMatterError: If the metadata block is malformed
            OSError, UnicodeDecodeError: If the file cannot be read
        """
        path = self.resolve_path(slug)

        # Content and timestamps come from the same open descriptor.
        try:
            with open(path, "rb") as f:
                stat = os.fstat(f.fileno())
                raw = f.read()
        except FileNotFoundError as e:
            raise DocumentNotFoundError(slug) from e

        text = raw.decode("utf-8")
        data, content = parse_front_matter(text)
        return self._build_record(slug, path.name, data, content, stat)

    def load(self, slug: str) -> DocumentRecord | None:
        """Load a document by slug.

        Args:
            slug: Document identifier (file name without extension)

        Returns:
            DocumentRecord, or None when the document is absent or unreadable
        """
        try:
            return self.load_or_raise(slug)
        except InvalidSlugError as e:
            logger.warning(f"Rejected slug {slug!r}: {e.reason}")
        except DocumentNotFoundError:
            logger.debug(f"No document for slug {slug!r}")
        except (DocsiteError, OSError, UnicodeDecodeError) as e:
            logger.error(f"Error getting doc for slug {slug!r}: {e}")
        except (ValueError, RecursionError) as e:
            # deeply nested YAML or a constructor error outside YAMLError
            logger.error(f"Error getting doc for slug {slug!r}: {e!r}")
        return None

    def _build_record(
        self,
        slug: str,
        file_name: str,
        data: dict[str, FrontMatterValue],
        content: str,
        stat: os.stat_result,
    ) -> DocumentRecord:
        rules = self._rules
        return DocumentRecord(
            slug=slug,
            title=_text_or(data.get("title"), rules.default_title),
            content=content,
            category=_text_or(data.get("category"), rules.default_category),
            tags=_normalize_tags(data.get("tags")),
            order=_normalize_order(data.get("order"), rules.default_order),
            excerpt=compute_excerpt(
                content,
                explicit=data.get("excerpt"),
                separator=rules.excerpt_separator,
                length=rules.excerpt_length,
            ),
            reading_time=compute_reading_time(content, rules.words_per_minute),
            date=_text_or(data.get("date"), _iso_timestamp(_birth_time(stat))),
            updated=_text_or(data.get("updated"), _iso_timestamp(stat.st_mtime)),
            file_name=file_name,
            extra={k: v for k, v in data.items() if k not in KNOWN_KEYS},
        )


def get_doc_by_slug(slug: str, config: Config | None = None) -> DocumentRecord | None:
    """Convenience wrapper for rendering collaborators."""
    return DocumentLoader(config).load(slug)
