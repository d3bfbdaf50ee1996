"""Tests for autocomplete suggestions."""

from docsearch.engine import SearchIndex, SuggestionGenerator
from docsearch.models import SuggestionType


class TestSuggest:
    """Suggestion ranking and deduplication."""

    def test_popular_tag_ranks_first(self, index):
        suggestions = SuggestionGenerator(index).suggest("arch")

        assert suggestions[0].text == "architecture"
        assert suggestions[0].type == SuggestionType.TAG
        assert suggestions[0].count == 2

    def test_no_duplicate_text(self, index):
        """Tag "architecture" and category "Architecture" collapse to one entry."""
        for partial in ("arch", "guide", "plugin", "in", ""):
            texts = [s.text.lower() for s in SuggestionGenerator(index).suggest(partial)]
            assert len(texts) == len(set(texts))

    def test_titles_and_headings_suggested(self, index):
        suggestions = SuggestionGenerator(index).suggest("plugin")
        query_texts = [s.text for s in suggestions if s.type == SuggestionType.QUERY]

        assert "Plugin System Guide" in query_texts
        assert "Plugin Registry" in query_texts

    def test_blank_partial_only_tags_and_categories(self, index):
        suggestions = SuggestionGenerator(index).suggest("   ")

        assert suggestions
        assert {s.type for s in suggestions} <= {SuggestionType.TAG, SuggestionType.CATEGORY}

    def test_capped(self, index):
        assert len(SuggestionGenerator(index, max_suggestions=3).suggest("a")) == 3
        assert len(SuggestionGenerator(index).suggest("a")) <= 8

    def test_no_match(self, index):
        assert SuggestionGenerator(index).suggest("zzzz") == []

    def test_empty_index(self):
        assert SuggestionGenerator(SearchIndex.build([])).suggest("any") == []


def test_for_query_excludes_titles(index):
    suggestions = SuggestionGenerator(index).for_query("plugin")

    assert [s.text for s in suggestions] == ["plugins"]
    assert suggestions[0].type == SuggestionType.TAG
