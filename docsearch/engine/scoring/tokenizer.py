"""Tokenization and n-gram generation.

The same functions are used at index time and at query time so that both
sides agree on normalization.
"""

import re

from .constants import NGRAM_SIZE, STOP_WORDS

_NON_WORD_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Lower-case, turn punctuation into spaces and collapse whitespace."""
    text = _NON_WORD_RE.sub(" ", text.lower())
    return _WHITESPACE_RE.sub(" ", text).strip()


def tokenize(text: str) -> list[str]:
    """Split text into index tokens, in order, duplicates kept.

    Tokens of a single character and stop words are dropped.
    """
    return [word for word in normalize_text(text).split(" ") if len(word) > 1 and word not in STOP_WORDS]


def unique_tokens(text: str) -> list[str]:
    """Tokens of ``text`` with duplicates removed, first occurrence kept."""
    return list(dict.fromkeys(tokenize(text)))


def generate_ngrams(text: str, n: int = NGRAM_SIZE) -> list[str]:
    """Distinct character n-grams of the normalized text, in first-seen order."""
    clean = normalize_text(text)
    return list(dict.fromkeys(clean[i : i + n] for i in range(len(clean) - n + 1)))
