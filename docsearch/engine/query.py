"""Query engine: candidate retrieval, filtering, ranking and pagination.

Retrieval strategy by query length:
- empty: browse listing (newest first, then type priority), no scoring
- 1-2 characters: case-insensitive substring match
- 3+ characters: n-gram overlap, plus documents containing every query
  token; substring match when that finds nothing
"""

import logging
import math
import time
from collections import Counter
from datetime import UTC, datetime

from ..models import (
    IndexedDocument,
    MatchKind,
    SearchFilters,
    SearchMetrics,
    SearchOptions,
    SearchResponse,
    SearchResult,
)
from .index import SearchIndex
from .scoring import (
    DEFAULT_FUZZY_THRESHOLD,
    MIN_NGRAM_QUERY_LENGTH,
    SHORT_QUERY_FUZZY_THRESHOLD,
    SHORT_QUERY_LENGTH,
    TYPE_PRIORITY,
    calculate_relevance_score,
    generate_highlights,
    generate_ngrams,
    unique_tokens,
)
from .scoring.constants import DEFAULT_RECENCY_DAYS
from .scoring.highlight import DEFAULT_HIGHLIGHT_TAG
from .suggestions import DEFAULT_MAX_SUGGESTIONS, SuggestionGenerator

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
DEFAULT_BROWSE_LIMIT = 10


def minimum_ngram_hits(ngram_count: int, threshold: float) -> int:
    """Hits a document needs: ``max(1, ceil(count × threshold))``."""
    # Rounding guards against float products like 10 * 0.7 == 7.000000000000001
    return max(1, math.ceil(round(ngram_count * threshold, 9)))


class QueryEngine:
    """Ranked search over a :class:`SearchIndex`.

    Args:
        index: The document set and its derived indices.
        default_limit: Page size for non-empty queries.
        browse_limit: Page size for the empty-query listing.
        fuzzy_threshold: Share of query n-grams a candidate must contain.
        recency_days: Window for the recency bonus.
        highlight_tag: Element name wrapped around highlighted terms.
        max_suggestions: Cap for suggestion lists.
    """

    def __init__(
        self,
        index: SearchIndex,
        default_limit: int = DEFAULT_LIMIT,
        browse_limit: int = DEFAULT_BROWSE_LIMIT,
        fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD,
        recency_days: int = DEFAULT_RECENCY_DAYS,
        highlight_tag: str = DEFAULT_HIGHLIGHT_TAG,
        max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
    ):
        self.index = index
        self.default_limit = default_limit
        self.browse_limit = browse_limit
        self.fuzzy_threshold = fuzzy_threshold
        self.recency_days = recency_days
        self.highlight_tag = highlight_tag
        self.suggestions = SuggestionGenerator(index, max_suggestions=max_suggestions)

    def search(
        self,
        query: str,
        filters: SearchFilters | None = None,
        options: SearchOptions | None = None,
        now: datetime | None = None,
    ) -> SearchResponse:
        """Search the index.

        Args:
            query: Free-text query.
            filters: Structured filters applied before scoring.
            options: Pagination, content and highlight options.
            now: Reference time for the recency bonus.

        Returns:
            SearchResponse with results (scores stripped), metrics and
            tag/category suggestions.
        """
        start_time = time.perf_counter()
        options = options or SearchOptions()
        now = now or datetime.now(UTC)
        query_text = query.strip()

        if not query_text:
            matches = self.browse(filters)
            limit = options.limit or self.browse_limit
            page = matches[options.offset : options.offset + limit]
            results = [self._to_result(doc, options, terms=[]) for doc in page]
        else:
            tokens = unique_tokens(query_text)
            candidates = self.find_candidates(query_text, tokens, options.fuzzy_threshold)
            matches = [doc for doc in candidates if filters is None or filters.matches(doc)]

            exact_ids = self.index.docs_with_any_token(tokens)
            scored = [
                (
                    calculate_relevance_score(
                        doc,
                        query_text,
                        tokens,
                        match_kind=MatchKind.EXACT if doc.id in exact_ids else MatchKind.FUZZY,
                        now=now,
                        recency_days=self.recency_days,
                    ),
                    doc,
                )
                for doc in matches
            ]
            # Stable sort: equal scores keep document order
            ranked = [doc for _, doc in sorted(scored, key=lambda item: item[0], reverse=True)]

            limit = options.limit or self.default_limit
            page = ranked[options.offset : options.offset + limit]
            terms = tokens or [query_text.lower()]
            results = [self._to_result(doc, options, terms) for doc in page]

        search_time = (time.perf_counter() - start_time) * 1000
        logger.debug(f"Search '{query_text}': {len(matches)} matches in {search_time:.1f}ms")

        return SearchResponse(
            results=results,
            metrics=SearchMetrics(
                total_results=len(matches),
                search_time=search_time,
                query=query,
                filters=filters,
            ),
            suggestions=self.suggestions.for_query(query_text),
        )

    # ============ RETRIEVAL ============

    def browse(self, filters: SearchFilters | None = None) -> list[IndexedDocument]:
        """Filtered documents, newest first, then by type priority."""
        docs = [doc for doc in self.index.documents if filters is None or filters.matches(doc)]
        return sorted(
            docs,
            key=lambda doc: (-doc.last_modified.timestamp(), -TYPE_PRIORITY.get(doc.type, 0)),
        )

    def find_candidates(
        self,
        query: str,
        tokens: list[str],
        fuzzy_threshold: float | None = None,
    ) -> list[IndexedDocument]:
        """Candidate documents for a non-empty query, in document order."""
        if len(query) < MIN_NGRAM_QUERY_LENGTH:
            return self.substring_matches(query)

        ids = self.ngram_candidates(query, fuzzy_threshold) | self.index.docs_with_all_tokens(tokens)
        if not ids:
            logger.debug(f"No n-gram candidates for '{query}', falling back to substring match")
            return self.substring_matches(query)
        return self.index.in_order(ids)

    def ngram_candidates(self, query: str, fuzzy_threshold: float | None = None) -> set[str]:
        """Ids of documents sharing enough 3-grams with ``query``."""
        ngrams = generate_ngrams(query)
        if not ngrams:
            return set()

        if len(query) <= SHORT_QUERY_LENGTH:
            threshold = SHORT_QUERY_FUZZY_THRESHOLD
        else:
            threshold = fuzzy_threshold or self.fuzzy_threshold
        min_hits = minimum_ngram_hits(len(ngrams), threshold)

        hits: Counter[str] = Counter()
        for ngram in ngrams:
            hits.update(self.index.docs_for_ngram(ngram))
        return {doc_id for doc_id, count in hits.items() if count >= min_hits}

    def substring_matches(self, query: str) -> list[IndexedDocument]:
        """Documents containing ``query`` in title, content, excerpt or tags."""
        needle = query.lower()
        return [
            doc
            for doc in self.index.documents
            if needle in doc.title.lower()
            or needle in doc.content.lower()
            or needle in doc.excerpt.lower()
            or any(needle in tag.lower() for tag in doc.tags)
        ]

    # ============ OUTPUT ============

    def _to_result(
        self,
        doc: IndexedDocument,
        options: SearchOptions,
        terms: list[str],
    ) -> SearchResult:
        highlights = None
        if options.include_highlights and terms:
            highlights = generate_highlights(doc, terms, self.highlight_tag)
        result = SearchResult(**doc.model_dump(), highlights=highlights)
        if not options.include_content:
            result.content = ""
        return result
