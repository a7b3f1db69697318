"""Pytest configuration for docs index tests."""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from docsite.pipeline.config import BuildConfig, Config  # noqa: E402


@pytest.fixture
def docs_dir(tmp_path):
    """Empty docs directory."""
    path = tmp_path / "docs"
    path.mkdir()
    return path


@pytest.fixture
def config(tmp_path, docs_dir):
    """Config pointing at the temporary docs tree."""
    return Config(
        docs_dir=str(docs_dir),
        index_path=str(tmp_path / "public" / "docs-index.json"),
        build=BuildConfig(max_workers=2, progress=False),
    )


@pytest.fixture
def write_doc(docs_dir):
    """Write a Markdown file into the docs directory."""

    def _write(slug: str, text: str) -> Path:
        path = docs_dir / f"{slug}.md"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_docs(write_doc):
    """Small docs tree spanning several categories."""
    write_doc(
        "getting-started",
        """---
title: Getting Started
category: Guides
order: 1
tags: [intro, setup]
---

# Getting Started

Install the tool and run your first build.
""",
    )
    write_doc(
        "configuration",
        """---
title: Configuration
category: Guides
order: 2
tags: [setup]
---

Configure the build with a YAML file.
""",
    )
    write_doc(
        "endpoints",
        """---
title: Endpoints
category: API
order: 1
tags: [http]
excerpt: Every route the server exposes.
---

GET /docs lists documents.
""",
    )
    write_doc("notes", "Plain notes without any front matter.\n")
