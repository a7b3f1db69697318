"""Exception hierarchy for the docs indexing pipeline."""


class DocsiteError(Exception):
    """Base class for all docsite errors."""


class DocumentNotFoundError(DocsiteError):
    """No source file exists for the requested slug."""

    def __init__(self, slug: str, message: str | None = None):
        self.slug = slug
        super().__init__(message or f"Document not found: {slug!r}")


class InvalidSlugError(DocumentNotFoundError):
    """Slug is empty, malformed or escapes the docs directory."""

    def __init__(self, slug: str, reason: str):
        self.reason = reason
        super().__init__(slug, f"Invalid slug {slug!r}: {reason}")


class FrontMatterError(DocsiteError):
    """Front-matter block could not be parsed."""


class ConfigError(DocsiteError):
    """Configuration value is out of range or malformed."""
