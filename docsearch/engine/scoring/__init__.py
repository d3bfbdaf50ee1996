"""Scoring engine for documentation search.

This package provides tokenization and relevance scoring:
- Tokenizer and character n-grams shared by indexing and querying
- Levenshtein-based string similarity
- Multi-factor relevance scoring
- Highlight fragments

Usage:
    from docsearch.engine.scoring import (
        calculate_relevance_score,
        generate_ngrams,
        tokenize,
    )
"""

from .constants import (
    DEFAULT_FUZZY_THRESHOLD,
    MIN_NGRAM_QUERY_LENGTH,
    NGRAM_SIZE,
    SHORT_QUERY_FUZZY_THRESHOLD,
    SHORT_QUERY_LENGTH,
    STOP_WORDS,
    TYPE_PRIORITY,
)
from .highlight import generate_highlights, highlight_terms
from .relevance import calculate_relevance_score, is_recent, match_multiplier
from .similarity import levenshtein_distance, similarity
from .tokenizer import generate_ngrams, normalize_text, tokenize, unique_tokens

__all__ = [
    # Constants
    "DEFAULT_FUZZY_THRESHOLD",
    "MIN_NGRAM_QUERY_LENGTH",
    "NGRAM_SIZE",
    "SHORT_QUERY_FUZZY_THRESHOLD",
    "SHORT_QUERY_LENGTH",
    "STOP_WORDS",
    "TYPE_PRIORITY",
    # Tokenizer
    "generate_ngrams",
    "normalize_text",
    "tokenize",
    "unique_tokens",
    # Similarity
    "levenshtein_distance",
    "similarity",
    # Relevance
    "calculate_relevance_score",
    "is_recent",
    "match_multiplier",
    # Highlights
    "generate_highlights",
    "highlight_terms",
]
