"""Documentation search engine.

Components:
- core: crawling, front-matter and markdown parsing, artifact persistence
- scoring: tokenization, n-grams, similarity, relevance and highlights
- index: token, n-gram, tag and category indices
- query: ranked retrieval with filters and pagination
- suggestions: autocomplete over tags, categories, titles and headings
- service: the lifecycle-owning search service

Usage:
    from docsearch.engine import DocsSearchService

    service = DocsSearchService(settings)
    await service.initialize()
    response = await service.search("getting started")
"""

from .index import SearchIndex
from .query import QueryEngine
from .service import DocsSearchService
from .suggestions import SuggestionGenerator

__all__ = [
    "DocsSearchService",
    "QueryEngine",
    "SearchIndex",
    "SuggestionGenerator",
]
