"""Tests for substring search over the snapshot."""

import pytest

from docsite.domain.document import DocumentRecord
from docsite.pipeline.index import IndexBuilder
from docsite.retrieval.substring import DEFAULT_LIMIT, SnapshotSearcher, search
from docsite.storage.snapshot import SnapshotStore


@pytest.fixture
def snapshot():
    return [
        {"slug": "start", "title": "Getting Started", "excerpt": "Install it.", "category": "Guides", "tags": ["intro"]},
        {"slug": "api", "title": "Endpoints", "excerpt": "Routes.", "category": "API", "tags": ["http"]},
        {"slug": "faq", "title": "FAQ", "excerpt": "Common questions.", "category": "Help", "tags": ["Troubleshooting"]},
    ]


def test_title_substring_matches(snapshot):
    results = search("get", snapshot)

    assert [r["slug"] for r in results] == ["start"]


def test_match_is_case_insensitive(snapshot):
    assert [r["slug"] for r in search("ENDPOINTS", snapshot)] == ["api"]


@pytest.mark.parametrize(
    "query, slug",
    [("routes", "api"), ("api", "api"), ("trouble", "faq"), ("help", "faq")],
)
def test_excerpt_category_and_tags_match(snapshot, query, slug):
    assert [r["slug"] for r in search(query, snapshot)] == [slug]


@pytest.mark.parametrize("query", ["", "   ", None])
def test_empty_query_returns_nothing(snapshot, query):
    assert search(query, snapshot) == []


def test_no_match(snapshot):
    assert search("kubernetes", snapshot) == []


def test_results_are_capped_in_source_order():
    entries = [{"slug": f"guide-{i}", "title": f"Guide {i}"} for i in range(20)]

    results = search("guide", entries)

    assert len(results) == DEFAULT_LIMIT == 8
    assert [r["slug"] for r in results] == [f"guide-{i}" for i in range(8)]


def test_custom_limit():
    entries = [{"slug": f"g{i}", "title": "Guide"} for i in range(5)]

    assert len(search("guide", entries, limit=2)) == 2
    assert search("guide", entries, limit=0) == []


def test_missing_and_malformed_fields_are_ignored():
    entries = [
        {"slug": "a"},
        {"slug": "b", "title": None, "tags": "guide"},
        {"slug": "c", "tags": [None, 3, "guide"]},
    ]

    assert [r["slug"] for r in search("guide", entries)] == ["c"]


def test_accepts_records():
    record = DocumentRecord(slug="r", title="Getting Started", content="", category="Guides")

    assert search("started", [record]) == [record]


class TestSnapshotSearcher:
    """Test searcher bound to a snapshot file."""

    def test_missing_snapshot_gives_no_results(self, tmp_path):
        searcher = SnapshotSearcher(SnapshotStore(tmp_path / "missing.json"))

        assert searcher.search("anything") == []

    def test_searches_built_index(self, config, sample_docs):
        IndexBuilder(config).build_and_persist()
        searcher = SnapshotSearcher(SnapshotStore(config.index_path))

        assert [r["slug"] for r in searcher.search("get")] == ["getting-started"]
        assert [r["slug"] for r in searcher.search("setup")] == ["getting-started", "configuration"]

    def test_request_limit_cannot_exceed_cap(self, tmp_path):
        store = SnapshotStore(tmp_path / "index.json")
        store.write(
            [DocumentRecord(slug=f"d{i}", title="Doc", content="", category="G") for i in range(12)]
        )
        searcher = SnapshotSearcher(store, limit=5)

        assert len(searcher.search("doc", limit=50)) == 5
        assert len(searcher.search("doc", limit=3)) == 3
