"""Tests for single-document loading."""

import logging
import os

import pytest

from docsite.errors import DocumentNotFoundError, FrontMatterError, InvalidSlugError
from docsite.pipeline.loader import (
    DocumentLoader,
    compute_excerpt,
    compute_reading_time,
    get_doc_by_slug,
)


@pytest.fixture
def loader(config):
    return DocumentLoader(config)


class TestLoad:
    """Test DocumentLoader.load."""

    def test_load_returns_matching_slug(self, loader, sample_docs):
        """Test that every present slug loads with the same slug."""
        for slug in ("getting-started", "configuration", "endpoints", "notes"):
            record = loader.load(slug)
            assert record is not None
            assert record.slug == slug
            assert record.file_name == f"{slug}.md"

    def test_front_matter_fields(self, loader, sample_docs):
        record = loader.load("getting-started")

        assert record.title == "Getting Started"
        assert record.category == "Guides"
        assert record.order == 1
        assert record.tags == ("intro", "setup")
        assert record.content.startswith("\n# Getting Started")
        assert "title:" not in record.content

    def test_defaults_without_front_matter(self, loader, sample_docs):
        record = loader.load("notes")

        assert record.title == "Untitled"
        assert record.category == "General"
        assert record.order == 999
        assert record.tags == ()
        assert record.content == "Plain notes without any front matter.\n"

    def test_absent_slug_returns_none(self, loader, sample_docs):
        assert loader.load("does-not-exist") is None

    def test_absent_slug_raises_not_found(self, loader):
        with pytest.raises(DocumentNotFoundError):
            loader.load_or_raise("does-not-exist")

    def test_malformed_front_matter_returns_none_and_logs(self, loader, write_doc, caplog):
        write_doc("broken", "---\ntitle: [unclosed\n---\nBody\n")

        with caplog.at_level(logging.ERROR):
            assert loader.load("broken") is None

        assert "broken" in caplog.text

    def test_malformed_front_matter_raises_from_load_or_raise(self, loader, write_doc):
        write_doc("broken", "---\ntitle: [unclosed\n---\nBody\n")

        with pytest.raises(FrontMatterError):
            loader.load_or_raise("broken")

    @pytest.mark.parametrize(
        "text",
        [
            "---\ndate: 2024-13-45\n---\nBody",
            "---\nupdated: 2024-02-30\n---\nBody",
            "---\nextra: &a [*a]\n---\nBody",
        ],
    )
    def test_unusable_front_matter_returns_none_and_logs(self, loader, write_doc, caplog, text):
        write_doc("bad-meta", text)

        with caplog.at_level(logging.ERROR):
            assert loader.load("bad-meta") is None

        assert "bad-meta" in caplog.text
        with pytest.raises(FrontMatterError):
            loader.load_or_raise("bad-meta")

    def test_deeply_nested_front_matter_returns_none(self, loader, write_doc):
        write_doc("deep", "---\nx: " + "[" * 5000 + "]" * 5000 + "\n---\nBody")

        assert loader.load("deep") is None

    def test_non_finite_extra_values_are_null(self, loader, write_doc):
        write_doc("floats", "---\nweight: .nan\nscore: -.inf\n---\nBody")

        record = loader.load("floats")

        assert record.extra == {"weight": None, "score": None}

    def test_undecodable_file_returns_none(self, loader, docs_dir):
        (docs_dir / "binary.md").write_bytes(b"\xff\xfe\x00bad")

        assert loader.load("binary") is None

    def test_extra_keys_pass_through(self, loader, write_doc):
        write_doc("extra", "---\ntitle: X\nauthor: sam\nsidebar:\n  hidden: true\n---\nBody")

        record = loader.load("extra")

        assert record.extra == {"author": "sam", "sidebar": {"hidden": True}}
        assert record.to_dict()["author"] == "sam"

    def test_duplicate_tags_are_dropped_in_order(self, loader, write_doc):
        write_doc("tags", "---\ntags: [b, a, b, '', 3]\n---\nBody")

        assert loader.load("tags").tags == ("b", "a", "3")

    def test_scalar_tag_becomes_single_tag(self, loader, write_doc):
        write_doc("tag", "---\ntags: solo\n---\nBody")

        assert loader.load("tag").tags == ("solo",)

    def test_order_zero_is_kept(self, loader, write_doc):
        write_doc("first", "---\norder: 0\n---\nBody")

        assert loader.load("first").order == 0

    def test_non_numeric_order_falls_back(self, loader, write_doc):
        write_doc("odd", "---\norder: soon\n---\nBody")

        assert loader.load("odd").order == 999

    def test_module_helper(self, config, sample_docs):
        assert get_doc_by_slug("endpoints", config).title == "Endpoints"
        assert get_doc_by_slug("missing", config) is None


class TestSlugValidation:
    """Test path traversal protection."""

    @pytest.mark.parametrize(
        "slug",
        ["../secret", "..", "sub/doc", "..\\secret", "", "   ", ".hidden", "a\x00b", "/etc/passwd"],
    )
    def test_invalid_slugs_are_rejected(self, loader, slug):
        with pytest.raises(InvalidSlugError):
            loader.resolve_path(slug)

    @pytest.mark.parametrize("slug", ["../secret", "..%2Fsecret", "docs/../../secret"])
    def test_traversal_never_reads_outside_docs(self, loader, tmp_path, slug):
        (tmp_path / "secret.md").write_text("---\ntitle: Secret\n---\nclassified")

        assert loader.load(slug) is None

    def test_invalid_slug_is_not_found(self, loader):
        with pytest.raises(DocumentNotFoundError):
            loader.load_or_raise("../secret")

    @pytest.mark.parametrize("slug", ["v1..2-notes", "release..final", "a.b"])
    def test_inner_dots_are_legal(self, loader, write_doc, docs_dir, slug):
        write_doc(slug, "---\ntitle: Dotted\n---\nBody")

        assert loader.resolve_path(slug) == (docs_dir / f"{slug}.md").resolve()
        assert loader.load(slug).title == "Dotted"

    def test_resolve_path_inside_docs(self, loader, docs_dir):
        assert loader.resolve_path("guide") == (docs_dir / "guide.md").resolve()


class TestExcerpt:
    """Test excerpt precedence."""

    def test_explicit_excerpt_wins(self, loader, sample_docs):
        assert loader.load("endpoints").excerpt == "Every route the server exposes."

    def test_separator_excerpt(self, loader, write_doc):
        write_doc("sep", "---\ntitle: S\n---\nShort intro.\n<!-- excerpt -->\nThe rest of the page.")

        record = loader.load("sep")

        assert record.excerpt == "Short intro."
        assert "<!-- excerpt -->" in record.content

    def test_explicit_beats_separator(self, loader, write_doc):
        write_doc("both", "---\nexcerpt: From metadata\n---\nIntro\n<!-- excerpt -->\nRest")

        assert loader.load("both").excerpt == "From metadata"

    def test_blank_text_before_separator_falls_back(self):
        content = "\n<!-- excerpt -->\nBody after the separator."

        assert compute_excerpt(content) == content[:150].strip() + "..."

    def test_truncated_fallback(self, loader, write_doc):
        body = "x" * 200
        write_doc("long", body)

        excerpt = loader.load("long").excerpt

        assert excerpt.endswith("...")
        assert excerpt == "x" * 150 + "..."

    def test_configured_length(self):
        assert compute_excerpt("abcdefghij", length=4) == "abcd..."

    def test_blank_explicit_excerpt_is_ignored(self):
        assert compute_excerpt("Body", explicit="   ") == "Body..."

    def test_empty_content(self):
        assert compute_excerpt("") == ""
        assert compute_excerpt("", explicit="Given") == "Given"


class TestReadingTime:
    """Test reading time estimation."""

    def test_four_hundred_words(self, loader, write_doc):
        write_doc("words", "---\ntitle: W\n---\n" + " ".join(["word"] * 400))

        assert loader.load("words").reading_time == 2

    def test_single_word(self):
        assert compute_reading_time("hello") == 1

    def test_rounds_up(self):
        assert compute_reading_time(" ".join(["w"] * 201)) == 2

    def test_empty(self):
        assert compute_reading_time("") == 0


class TestTimestamps:
    """Test timestamp fallback."""

    def test_front_matter_dates_win(self, loader, write_doc):
        write_doc("dated", "---\ndate: 2024-01-15\nupdated: '2024-03-01'\n---\nBody")

        record = loader.load("dated")

        assert record.date == "2024-01-15"
        assert record.updated == "2024-03-01"

    def test_file_times_fill_missing_dates(self, loader, write_doc):
        path = write_doc("undated", "Body")
        os.utime(path, (1_700_000_000, 1_700_000_000))

        record = loader.load("undated")

        assert record.updated == "2023-11-14T22:13:20.000Z"
        assert record.date.endswith("Z")
