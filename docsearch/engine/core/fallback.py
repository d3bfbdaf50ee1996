"""Minimal built-in document set.

Used when neither a pre-generated index nor any crawlable content is
available, so the search box always has something to search.
"""

from datetime import UTC, datetime

from ...models import Difficulty, DocumentType, Heading, IndexedDocument
from .markdown import slugify


def _headings(*entries: tuple[int, str]) -> list[Heading]:
    return [Heading(level=level, text=text, id=slugify(text)) for level, text in entries]


def fallback_documents() -> list[IndexedDocument]:
    """Return a fresh copy of the built-in documents."""
    return [
        IndexedDocument(
            id="getting-started",
            title="Getting Started with FARM Framework",
            url="/docs/guide/getting-started",
            content=(
                "Learn how to get started with FARM Framework. Install the CLI, create your "
                "first project, and deploy to production. This comprehensive guide covers "
                "everything from initial setup to advanced configuration patterns."
            ),
            excerpt=(
                "Learn how to get started with FARM Framework. Install the CLI, create your "
                "first project..."
            ),
            category="Guides",
            type=DocumentType.TUTORIAL,
            difficulty=Difficulty.BEGINNER,
            tags=["quickstart", "installation", "cli", "setup"],
            last_modified=datetime(2025, 6, 10, tzinfo=UTC),
            breadcrumbs=["Docs", "Guide", "Getting Started"],
            headings=_headings(
                (1, "Getting Started with FARM Framework"),
                (2, "Installation"),
                (2, "Creating Your First Project"),
                (3, "Project Structure"),
            ),
        ),
        IndexedDocument(
            id="type-sync",
            title="Type-Sync: Automatic TypeScript Generation",
            url="/docs/guide/type-sync",
            content=(
                "Type-Sync automatically generates TypeScript types from your FastAPI backend. "
                "Features include incremental builds, React Query hooks, intelligent caching, "
                "and seamless integration with your development workflow."
            ),
            excerpt=(
                "Type-Sync automatically generates TypeScript types from your FastAPI backend "
                "with incremental builds..."
            ),
            category="Core Features",
            type=DocumentType.GUIDE,
            difficulty=Difficulty.INTERMEDIATE,
            tags=["typescript", "code-generation", "api", "fastapi", "react-query"],
            last_modified=datetime(2025, 6, 9, tzinfo=UTC),
            breadcrumbs=["Docs", "Guide", "Type-Sync"],
            headings=_headings(
                (1, "Type-Sync: Automatic TypeScript Generation"),
                (2, "How It Works"),
                (2, "Configuration"),
            ),
        ),
        IndexedDocument(
            id="database-integration",
            title="Database Integration Architecture",
            url="/docs/architectural-sketches-detailed/phase2/database-integration-architecture",
            content=(
                "Comprehensive guide to database integration with FARM Framework. Covers "
                "MongoDB, PostgreSQL, MySQL, and advanced features like full-text search, "
                "indexing strategies, and performance optimization."
            ),
            excerpt=(
                "Comprehensive guide to database integration with FARM Framework covering "
                "multiple databases..."
            ),
            category="Architecture",
            type=DocumentType.REFERENCE,
            difficulty=Difficulty.ADVANCED,
            tags=["database", "mongodb", "postgresql", "mysql", "architecture", "performance"],
            last_modified=datetime(2025, 6, 8, tzinfo=UTC),
            breadcrumbs=["Docs", "Architecture", "Database Integration"],
            headings=_headings(
                (1, "Database Integration Architecture"),
                (2, "Supported Databases"),
                (2, "Configuration"),
            ),
        ),
        IndexedDocument(
            id="ai-integration",
            title="AI Integration Guide",
            url="/docs/guide/ai-integration",
            content=(
                "Integrate AI and machine learning capabilities into your FARM applications. "
                "Covers OpenAI integration, local models with Ollama, vector search, "
                "embeddings, and building intelligent applications."
            ),
            excerpt=(
                "Integrate AI and machine learning capabilities into your FARM applications "
                "with OpenAI and Ollama..."
            ),
            category="Guides",
            type=DocumentType.GUIDE,
            difficulty=Difficulty.INTERMEDIATE,
            tags=["ai", "machine-learning", "openai", "ollama", "embeddings", "vector-search"],
            last_modified=datetime(2025, 6, 7, tzinfo=UTC),
            breadcrumbs=["Docs", "Guide", "AI Integration"],
            headings=_headings(
                (1, "AI Integration Guide"),
                (2, "OpenAI Setup"),
                (2, "Local Models with Ollama"),
            ),
        ),
        IndexedDocument(
            id="plugin-system",
            title="Plugin System Guide",
            url="/docs/guide/plugin-system",
            content=(
                "Learn how to extend FARM Framework with plugins. Create custom plugins, "
                "publish to the registry, and integrate third-party services. Includes plugin "
                "architecture, lifecycle hooks, and best practices."
            ),
            excerpt=(
                "Learn how to extend FARM Framework with plugins including creation, "
                "publishing, and integration..."
            ),
            category="Guides",
            type=DocumentType.GUIDE,
            difficulty=Difficulty.ADVANCED,
            tags=["plugins", "extensibility", "architecture", "registry", "hooks"],
            last_modified=datetime(2025, 6, 6, tzinfo=UTC),
            breadcrumbs=["Docs", "Guide", "Plugin System"],
            headings=_headings(
                (1, "Plugin System Guide"),
                (2, "Creating Plugins"),
                (2, "Plugin Registry"),
            ),
        ),
    ]
