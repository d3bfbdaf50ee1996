"""Scoring constants for the documentation search engine.

This module contains all constants used by indexing and relevance scoring:
- Stop words for tokenization
- N-gram width and fuzzy-match thresholds
- Relevance weights
- Document type priority for the browse listing
"""

from ...models import DocumentType

# ---------------------------------------------------------------------------
# Stop words: dropped by the tokenizer at index and query time.
# ---------------------------------------------------------------------------
STOP_WORDS = frozenset(
    {
        # Articles and conjunctions
        "a",
        "an",
        "the",
        "and",
        "or",
        "but",
        "nor",
        "so",
        "yet",
        # Prepositions
        "in",
        "on",
        "at",
        "to",
        "for",
        "of",
        "with",
        "by",
        "from",
        "up",
        "about",
        "into",
        "through",
        "during",
        "before",
        "after",
        "above",
        "below",
        "between",
        "among",
        "over",
        "under",
        "as",
        # Determiners and pronouns
        "this",
        "that",
        "these",
        "those",
        "it",
        "its",
        # Auxiliary and modal verbs
        "is",
        "are",
        "was",
        "were",
        "be",
        "been",
        "being",
        "have",
        "has",
        "had",
        "do",
        "does",
        "did",
        "will",
        "would",
        "could",
        "should",
        "may",
        "might",
        "must",
        "can",
        "shall",
    }
)


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------
NGRAM_SIZE = 3
# Queries shorter than this skip n-gram matching (trigrams of 1-2 chars are noise)
MIN_NGRAM_QUERY_LENGTH = 3
DEFAULT_FUZZY_THRESHOLD = 0.6
# Queries of at most SHORT_QUERY_LENGTH chars have only 1-2 trigrams
SHORT_QUERY_LENGTH = 4
SHORT_QUERY_FUZZY_THRESHOLD = 0.4


# ---------------------------------------------------------------------------
# Relevance weights
# ---------------------------------------------------------------------------
TITLE_EXACT_BONUS = 100.0
TITLE_EXACT_CASE_BONUS = 25.0
TITLE_CONTAINS_BONUS = 50.0
TITLE_TOKEN_BONUS = 20.0
CONTENT_OCCURRENCE_WEIGHT = 2.0
# Occurrences beyond this per token add nothing
CONTENT_OCCURRENCE_CAP = 10
CATEGORY_MATCH_BONUS = 15.0
TAG_MATCH_BONUS = 10.0
FEATURED_BONUS = 20.0
BEGINNER_BONUS = 5.0
DEPRECATED_PENALTY = 20.0
TITLE_SIMILARITY_WEIGHT = 30.0
RECENCY_BONUS = 5.0
DEFAULT_RECENCY_DAYS = 30

EXACT_MATCH_MULTIPLIER = 1.0
FUZZY_MATCH_MULTIPLIER = 0.8


# ---------------------------------------------------------------------------
# Browse ordering (empty query): newest first, then by type priority
# ---------------------------------------------------------------------------
TYPE_PRIORITY: dict[DocumentType, int] = {
    DocumentType.GUIDE: 7,
    DocumentType.TUTORIAL: 6,
    DocumentType.API: 5,
    DocumentType.REFERENCE: 4,
    DocumentType.EXAMPLE: 3,
    DocumentType.BLOG: 2,
    DocumentType.CHANGELOG: 1,
    DocumentType.OTHER: 0,
}
