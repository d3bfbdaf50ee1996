"""Highlight fragments for search results."""

import re

from ...models import Highlight, IndexedDocument

DEFAULT_HIGHLIGHT_TAG = "mark"
# Only the first few sentences are considered for a content fragment
MAX_HIGHLIGHT_SENTENCES = 3
MIN_SENTENCE_LENGTH = 20

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


def highlight_terms(text: str, terms: list[str], tag: str = DEFAULT_HIGHLIGHT_TAG) -> str:
    """Wrap every case-insensitive occurrence of ``terms`` in ``<tag>``.

    A single alternation pass (longest term first) keeps markers from nesting.
    """
    terms = sorted({term for term in terms if term}, key=len, reverse=True)
    if not terms:
        return text
    pattern = re.compile("|".join(re.escape(term) for term in terms), re.IGNORECASE)
    return pattern.sub(lambda m: f"<{tag}>{m.group(0)}</{tag}>", text)


def generate_highlights(
    doc: IndexedDocument,
    terms: list[str],
    tag: str = DEFAULT_HIGHLIGHT_TAG,
) -> list[Highlight]:
    """Highlight the title and the first matching content sentence."""
    highlights = []

    title = highlight_terms(doc.title, terms, tag)
    if title != doc.title:
        highlights.append(Highlight(field="title", value=title))

    sentences = [s for s in _SENTENCE_SPLIT_RE.split(doc.content) if len(s.strip()) > MIN_SENTENCE_LENGTH]
    lowered_terms = [term.lower() for term in terms if term]
    for sentence in sentences[:MAX_HIGHLIGHT_SENTENCES]:
        sentence_lower = sentence.lower()
        if any(term in sentence_lower for term in lowered_terms):
            value = highlight_terms(sentence.strip(), terms, tag)
            highlights.append(Highlight(field="content", value=f"{value}..."))
            break

    return highlights
