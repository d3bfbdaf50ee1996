"""Pydantic models for the documentation search engine.

Re-exports every model so callers can import from ``docsearch.models``.
"""

from .documents import (
    Heading,
    IndexedDocument,
    IndexStatistics,
    SearchIndexArtifact,
)
from .enums import Difficulty, DocumentType, MatchKind, SuggestionType
from .health import HealthResponse, ReadyResponse, ReindexResponse
from .search import (
    DateRange,
    Facets,
    Highlight,
    SearchFilters,
    SearchMetrics,
    SearchOptions,
    SearchRequest,
    SearchResponse,
    SearchResult,
    Suggestion,
    SuggestResponse,
)

__all__ = [
    # Enums
    "Difficulty",
    "DocumentType",
    "MatchKind",
    "SuggestionType",
    # Documents
    "Heading",
    "IndexedDocument",
    "IndexStatistics",
    "SearchIndexArtifact",
    # Search
    "DateRange",
    "Facets",
    "Highlight",
    "SearchFilters",
    "SearchMetrics",
    "SearchOptions",
    "SearchRequest",
    "SearchResponse",
    "SearchResult",
    "Suggestion",
    "SuggestResponse",
    # Health
    "HealthResponse",
    "ReadyResponse",
    "ReindexResponse",
]
