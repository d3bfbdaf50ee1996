"""Tests for the search index builder."""

from docsearch.engine import SearchIndex
from docsearch.engine.scoring import generate_ngrams, tokenize


class TestTokenizer:
    """Tokenization shared by indexing and querying."""

    def test_tokenize_drops_stop_words_and_single_chars(self):
        assert tokenize("The Plugin-System is a FARM feature!") == ["plugin", "system", "farm", "feature"]

    def test_ngrams_are_distinct_and_ordered(self):
        assert generate_ngrams("abab") == ["aba", "bab"]
        assert generate_ngrams("ab") == []


class TestSearchIndex:
    """Derived index structures."""

    def test_token_index(self, index):
        assert index.docs_for_token("plugins") == {"plugin-system"}
        assert "the" not in index.token_index
        # category and tags are tokenized too
        assert "guides" in index.token_index
        assert "quickstart" in index.token_index

    def test_ngram_index(self, index):
        assert "plu" in index.ngram_index
        assert "plugin-system" in index.docs_for_ngram("plu")

    def test_tag_and_category_indices_are_case_insensitive(self, make_document):
        index = SearchIndex.build(
            [
                make_document("a", tags=["CLI"], category="Guides"),
                make_document("b", tags=["cli"], category="guides"),
            ]
        )
        assert index.tag_index == {"cli": {"a", "b"}}
        assert index.category_index == {"guides": {"a", "b"}}
        # display labels keep the first spelling seen
        assert index.tag_counts() == [("CLI", 2)]
        assert index.category_counts() == [("Guides", 2)]

    def test_duplicate_ids_keep_first(self, make_document):
        index = SearchIndex.build(
            [
                make_document("same", title="First"),
                make_document("same", title="Second"),
                make_document("other"),
            ]
        )
        assert [doc.title for doc in index.documents] == ["First", "Other"]
        assert index.position("other") == 1

    def test_all_and_any_tokens(self, index):
        assert index.docs_with_all_tokens(["getting", "started"]) == {"getting-started"}
        assert index.docs_with_all_tokens([]) == set()
        assert index.docs_with_any_token(["ollama", "mongodb"]) == {
            "ai-integration",
            "database-integration",
        }

    def test_in_order_follows_document_order(self, index):
        docs = index.in_order({"plugin-system", "getting-started"})
        assert [doc.id for doc in docs] == ["getting-started", "plugin-system"]

    def test_tag_counts_most_used_first(self, index):
        counts = index.tag_counts()
        assert counts[0] == ("architecture", 2)
        assert all(counts[i][1] >= counts[i + 1][1] for i in range(len(counts) - 1))

    def test_statistics(self, index):
        stats = index.statistics()
        assert stats.total_documents == 5
        assert stats.categories == ["Architecture", "Core Features", "Guides"]
        assert "architecture" in stats.tags
        assert stats.average_content_length > 0

    def test_empty_index(self):
        index = SearchIndex.build([])
        assert index.is_empty
        assert index.statistics().total_documents == 0
        assert index.statistics().average_content_length == 0
