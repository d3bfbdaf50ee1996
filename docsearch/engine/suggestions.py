"""Autocomplete suggestions drawn from tags, categories, titles and headings."""

from ..models import Suggestion, SuggestionType
from .index import SearchIndex
from .scoring import similarity

DEFAULT_MAX_SUGGESTIONS = 8
MAX_TAG_SUGGESTIONS = 5
MAX_CATEGORY_SUGGESTIONS = 3

# Relevance bands: popular tags outrank categories, prefix hits lift titles
TAG_BASE_RELEVANCE = 0.6
CATEGORY_BASE_RELEVANCE = 0.5
POPULARITY_WEIGHT = 0.4
PREFIX_BONUS = 0.5


class SuggestionGenerator:
    """Propose completions for a partial query.

    Args:
        index: Index whose tags, categories and documents are suggested.
        max_suggestions: Cap on the returned list.
    """

    def __init__(self, index: SearchIndex, max_suggestions: int = DEFAULT_MAX_SUGGESTIONS):
        self.index = index
        self.max_suggestions = max_suggestions

    def suggest(self, partial: str) -> list[Suggestion]:
        """Ranked, deduplicated suggestions for ``partial``.

        A blank partial query yields only the most used tags and categories.
        """
        needle = partial.strip().lower()
        scored = self._tag_suggestions(needle) + self._category_suggestions(needle)
        if needle:
            scored += self._query_suggestions(needle)
        return self._rank(scored)

    def for_query(self, query: str) -> list[Suggestion]:
        """Tag and category suggestions to accompany search results."""
        needle = query.strip().lower()
        return self._rank(self._tag_suggestions(needle) + self._category_suggestions(needle))

    # ============ SOURCES ============

    def _tag_suggestions(self, needle: str) -> list[tuple[float, Suggestion]]:
        matches = [(tag, count) for tag, count in self.index.tag_counts() if needle in tag.lower()]
        if not matches:
            return []
        top = matches[0][1]
        return [
            (
                TAG_BASE_RELEVANCE + POPULARITY_WEIGHT * count / top,
                Suggestion(text=tag, type=SuggestionType.TAG, count=count),
            )
            for tag, count in matches[:MAX_TAG_SUGGESTIONS]
        ]

    def _category_suggestions(self, needle: str) -> list[tuple[float, Suggestion]]:
        matches = [
            (category, count)
            for category, count in self.index.category_counts()
            if needle in category.lower()
        ]
        if not matches:
            return []
        top = matches[0][1]
        return [
            (
                CATEGORY_BASE_RELEVANCE + POPULARITY_WEIGHT * count / top,
                Suggestion(text=category, type=SuggestionType.CATEGORY, count=count),
            )
            for category, count in matches[:MAX_CATEGORY_SUGGESTIONS]
        ]

    def _query_suggestions(self, needle: str) -> list[tuple[float, Suggestion]]:
        suggestions = []
        for doc in self.index.documents:
            for text in (doc.title, *(heading.text for heading in doc.headings)):
                text_lower = text.lower()
                if needle not in text_lower:
                    continue
                score = similarity(text_lower, needle)
                if text_lower.startswith(needle):
                    score += PREFIX_BONUS
                suggestions.append((score, Suggestion(text=text, type=SuggestionType.QUERY)))
        return suggestions

    # ============ RANKING ============

    def _rank(self, scored: list[tuple[float, Suggestion]]) -> list[Suggestion]:
        seen: set[str] = set()
        ranked: list[Suggestion] = []
        for _, suggestion in sorted(scored, key=lambda item: item[0], reverse=True):
            key = suggestion.text.lower()
            if key in seen:
                continue
            seen.add(key)
            ranked.append(suggestion)
            if len(ranked) >= self.max_suggestions:
                break
        return ranked
