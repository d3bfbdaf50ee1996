"""Shared fixtures for the search engine tests."""

from datetime import UTC, datetime
from pathlib import Path

import pytest

from docsearch.config import Settings
from docsearch.engine import QueryEngine, SearchIndex
from docsearch.engine.core import fallback_documents
from docsearch.models import IndexedDocument


@pytest.fixture
def make_document():
    """Factory for documents with sensible defaults."""

    def _make(doc_id: str, **fields) -> IndexedDocument:
        fields.setdefault("title", doc_id.replace("-", " ").title())
        fields.setdefault("url", f"/docs/{doc_id}")
        fields.setdefault("last_modified", datetime(2025, 1, 1, tzinfo=UTC))
        return IndexedDocument(id=doc_id, **fields)

    return _make


@pytest.fixture
def documents() -> list[IndexedDocument]:
    return fallback_documents()


@pytest.fixture
def index(documents) -> SearchIndex:
    return SearchIndex.build(documents)


@pytest.fixture
def engine(index) -> QueryEngine:
    return QueryEngine(index)


@pytest.fixture
def content_tree(tmp_path) -> Path:
    """A small docs tree covering front-matter, drafts and inference."""
    root = tmp_path / "docs"
    (root / "guide").mkdir(parents=True)
    (root / "api").mkdir()

    (root / "index.md").write_text("# Welcome\n\nWelcome to the documentation.\n", encoding="utf-8")
    (root / "guide" / "getting-started.md").write_text(
        "---\n"
        "title: Getting Started\n"
        "category: Guides\n"
        "tags: [cli, setup]\n"
        "difficulty: beginner\n"
        "lastUpdated: 2025-06-10\n"
        "featured: true\n"
        "---\n"
        "# Getting Started\n\n"
        "Install the command line tool. Then create your first project.\n",
        encoding="utf-8",
    )
    (root / "guide" / "draft.md").write_text(
        "---\ntitle: Upcoming Feature\ndraft: true\n---\nThis page is not finished yet.\n",
        encoding="utf-8",
    )
    (root / "api" / "endpoints.mdx").write_text(
        "# Endpoints\n\nThe REST API returns JSON documents.\n",
        encoding="utf-8",
    )
    (root / "empty.md").write_text("---\ntitle: Empty\n---\n\n   \n", encoding="utf-8")
    (root / "notes.txt").write_text("Not markdown.\n", encoding="utf-8")
    return root


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at temporary paths with no content by default."""
    return Settings(
        _env_file=None,
        content_roots_str=str(tmp_path / "docs"),
        index_path=str(tmp_path / "public" / "search-index.json"),
        index_url=None,
        lazy_initialize=True,
        use_fallback_documents=True,
        internal_api_secret=None,
        sentry_dsn=None,
    )
