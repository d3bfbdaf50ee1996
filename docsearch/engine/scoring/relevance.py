"""Relevance scoring for search results.

Scoring factors (higher is more relevant):
- Exact title match, title substring match, query tokens in the title
- Token occurrences in the body (capped per token)
- Category and tag matches
- Featured / beginner boosts and a deprecated penalty
- Edit-distance similarity between title and query (rewards near-miss spelling)
- Recently modified documents
- A reduced multiplier for fuzzy or substring-only candidates
"""

from datetime import UTC, datetime, timedelta

from ...models import Difficulty, IndexedDocument, MatchKind
from .constants import (
    BEGINNER_BONUS,
    CATEGORY_MATCH_BONUS,
    CONTENT_OCCURRENCE_CAP,
    CONTENT_OCCURRENCE_WEIGHT,
    DEFAULT_RECENCY_DAYS,
    DEPRECATED_PENALTY,
    EXACT_MATCH_MULTIPLIER,
    FEATURED_BONUS,
    FUZZY_MATCH_MULTIPLIER,
    RECENCY_BONUS,
    TAG_MATCH_BONUS,
    TITLE_CONTAINS_BONUS,
    TITLE_EXACT_BONUS,
    TITLE_EXACT_CASE_BONUS,
    TITLE_SIMILARITY_WEIGHT,
    TITLE_TOKEN_BONUS,
)
from .similarity import similarity


def match_multiplier(match_kind: MatchKind) -> float:
    """Full weight for exact token matches, reduced weight for fuzzy ones."""
    return EXACT_MATCH_MULTIPLIER if match_kind == MatchKind.EXACT else FUZZY_MATCH_MULTIPLIER


def is_recent(doc: IndexedDocument, now: datetime, recency_days: int = DEFAULT_RECENCY_DAYS) -> bool:
    return now - doc.last_modified <= timedelta(days=recency_days)


def calculate_relevance_score(
    doc: IndexedDocument,
    query: str,
    tokens: list[str],
    match_kind: MatchKind = MatchKind.EXACT,
    now: datetime | None = None,
    recency_days: int = DEFAULT_RECENCY_DAYS,
) -> float:
    """Calculate the relevance score of a document for a query.

    Args:
        doc: The document to score.
        query: The raw query string.
        tokens: Query tokens (see ``tokenizer.tokenize``).
        match_kind: How the document was matched.
        now: Reference time for the recency bonus.
        recency_days: Size of the recency window.

    Returns:
        Relevance score (higher is better).
    """
    query = query.strip()
    query_lower = query.lower()
    title_lower = doc.title.lower()
    score = 0.0

    # Title matches
    if title_lower == query_lower:
        score += TITLE_EXACT_BONUS
        if doc.title == query:
            score += TITLE_EXACT_CASE_BONUS
    if query_lower and query_lower in title_lower:
        score += TITLE_CONTAINS_BONUS
    for token in tokens:
        if token in title_lower:
            score += TITLE_TOKEN_BONUS

    # Body matches, capped per token
    content_lower = doc.content.lower()
    for token in tokens:
        occurrences = min(content_lower.count(token), CONTENT_OCCURRENCE_CAP)
        score += occurrences * CONTENT_OCCURRENCE_WEIGHT

    # Category and tag matches
    terms = [term for term in (query_lower, *tokens) if term]
    if any(term in doc.category.lower() for term in terms):
        score += CATEGORY_MATCH_BONUS
    if any(term in tag.lower() for tag in doc.tags for term in terms):
        score += TAG_MATCH_BONUS

    # Editorial flags
    if doc.featured:
        score += FEATURED_BONUS
    if doc.difficulty == Difficulty.BEGINNER:
        score += BEGINNER_BONUS
    if doc.deprecated:
        score -= DEPRECATED_PENALTY

    score += similarity(title_lower, query_lower) * TITLE_SIMILARITY_WEIGHT

    if is_recent(doc, now or datetime.now(UTC), recency_days):
        score += RECENCY_BONUS

    return score * match_multiplier(match_kind)
