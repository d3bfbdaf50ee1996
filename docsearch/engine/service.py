"""Search service: owns the document set, its indices and the query engine.

One instance is created per process (the FastAPI lifespan or a CLI command)
and passed to callers explicitly.
"""

import asyncio
import logging
from datetime import UTC, datetime
from pathlib import Path

from ..config import Settings, get_settings
from ..models import (
    Facets,
    IndexedDocument,
    IndexStatistics,
    SearchFilters,
    SearchIndexArtifact,
    SearchMetrics,
    SearchOptions,
    SearchResponse,
    Suggestion,
)
from .core import crawl_documents, fallback_documents, load_index, save_index
from .index import SearchIndex
from .query import QueryEngine

logger = logging.getLogger(__name__)

# Where the current document set came from
SOURCE_ARTIFACT = "artifact"
SOURCE_CRAWL = "crawl"
SOURCE_FALLBACK = "fallback"
SOURCE_EMPTY = "empty"
SOURCE_MEMORY = "memory"


class DocsSearchService:
    """Documentation search over a lazily initialized index.

    Initialization order: pre-generated artifact, then a live crawl of the
    content roots, then the built-in fallback documents.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self._index = SearchIndex()
        self._engine: QueryEngine | None = None
        self._lock = asyncio.Lock()
        self.source: str | None = None
        self.initialized_at: datetime | None = None

    @property
    def is_ready(self) -> bool:
        return self._engine is not None

    @property
    def index(self) -> SearchIndex:
        return self._index

    @property
    def documents(self) -> list[IndexedDocument]:
        return self._index.documents

    # ============ LIFECYCLE ============

    async def initialize(self) -> None:
        """Load the document set once; concurrent callers share the same load."""
        if self.is_ready:
            return

        async with self._lock:
            if self.is_ready:
                return

            try:
                documents, source = await self._load_initial_documents()
            except Exception as e:
                logger.error(f"Search initialization failed: {e}", exc_info=True)
                documents, source = self._fallback()

            self.load_documents(documents, source=source)

    async def _load_initial_documents(self) -> tuple[list[IndexedDocument], str]:
        artifact_source = self.settings.index_url or self.settings.index_path
        if artifact_source:
            documents = await load_index(artifact_source, timeout=self.settings.index_fetch_timeout)
            if documents:
                return documents, SOURCE_ARTIFACT

        documents = await self.crawl()
        if documents:
            return documents, SOURCE_CRAWL

        logger.warning("No documents found in content roots")
        return self._fallback()

    def _fallback(self) -> tuple[list[IndexedDocument], str]:
        if self.settings.use_fallback_documents:
            logger.info("Using built-in fallback documents")
            return fallback_documents(), SOURCE_FALLBACK
        return [], SOURCE_EMPTY

    async def crawl(self) -> list[IndexedDocument]:
        """Crawl the configured content roots."""
        return await crawl_documents(
            self.settings.content_roots,
            production=self.settings.is_production,
            url_prefix=self.settings.url_prefix,
            excerpt_length=self.settings.excerpt_length,
        )

    def load_documents(self, documents: list[IndexedDocument], source: str = SOURCE_MEMORY) -> None:
        """Replace the document set and rebuild every index."""
        index = SearchIndex.build(documents)
        self._engine = QueryEngine(
            index,
            default_limit=self.settings.default_limit,
            browse_limit=self.settings.browse_limit,
            fuzzy_threshold=self.settings.fuzzy_threshold,
            recency_days=self.settings.recency_days,
            highlight_tag=self.settings.highlight_tag,
            max_suggestions=self.settings.max_suggestions,
        )
        self._index = index
        self.source = source
        self.initialized_at = datetime.now(UTC)
        logger.info(f"Search index ready: {len(index)} documents (source: {source})")

    async def reload(self) -> None:
        """Discard the current index and initialize again."""
        async with self._lock:
            self._engine = None
            self._index = SearchIndex()
            self.source = None
        await self.initialize()

    async def reindex(self, output_path: str | Path | None = None) -> SearchIndexArtifact:
        """Re-crawl, write the artifact and serve the fresh documents.

        Raises:
            OSError: If the artifact cannot be written.
        """
        documents = await self.crawl()
        artifact = await asyncio.to_thread(
            save_index, documents, output_path or self.settings.index_path
        )
        async with self._lock:
            if documents:
                self.load_documents(documents, source=SOURCE_CRAWL)
            else:
                self.load_documents(*self._fallback())
        return artifact

    # ============ QUERIES ============

    async def ensure_ready(self) -> bool:
        """Initialize on demand when lazy initialization is enabled."""
        if not self.is_ready and self.settings.lazy_initialize:
            await self.initialize()
        return self.is_ready

    async def _ensure_engine(self) -> QueryEngine | None:
        await self.ensure_ready()
        return self._engine

    async def search(
        self,
        query: str = "",
        filters: SearchFilters | None = None,
        options: SearchOptions | None = None,
    ) -> SearchResponse:
        """Search the documentation; failures degrade to an empty response."""
        try:
            engine = await self._ensure_engine()
            if engine is not None:
                return engine.search(query, filters, options)
            logger.warning("Search requested before the index was initialized")
        except Exception as e:
            logger.error(f"Search failed for query '{query}': {e}", exc_info=True)
        return SearchResponse(metrics=SearchMetrics(query=query, filters=filters))

    async def suggest(self, partial: str) -> list[Suggestion]:
        """Autocomplete suggestions; failures degrade to an empty list."""
        try:
            engine = await self._ensure_engine()
            if engine is not None:
                return engine.suggestions.suggest(partial)
        except Exception as e:
            logger.error(f"Suggestions failed for '{partial}': {e}", exc_info=True)
        return []

    def get_document(self, doc_id: str) -> IndexedDocument | None:
        return self._index.get(doc_id)

    def facets(self) -> Facets:
        return Facets(
            categories=self._index.categories(),
            tags=self._index.tags(),
            types=self._index.types(),
        )

    def statistics(self) -> IndexStatistics:
        return self._index.statistics()
