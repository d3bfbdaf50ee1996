"""In-memory search indices.

Built wholesale from a document set and read-only afterwards:
- token index: token → document ids (title, content, category, tags)
- n-gram index: 3-gram → document ids (title, content)
- tag index and category index: lower-cased label → document ids
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from ..models import DocumentType, IndexedDocument, IndexStatistics
from .scoring import NGRAM_SIZE, generate_ngrams, tokenize

logger = logging.getLogger(__name__)


def _add(index: dict[str, set[str]], key: str, doc_id: str) -> None:
    index.setdefault(key, set()).add(doc_id)


@dataclass
class SearchIndex:
    """Derived lookup structures over a document set.

    Attributes:
        documents: Documents in their original (stable) order
        token_index: Token → ids of documents containing it
        ngram_index: Character 3-gram → ids of documents containing it
        tag_index: Lower-cased tag → ids of documents carrying it
        category_index: Lower-cased category → ids of documents in it
        tag_labels: Lower-cased tag → display form (first seen)
        category_labels: Lower-cased category → display form (first seen)
    """

    documents: list[IndexedDocument] = field(default_factory=list)
    token_index: dict[str, set[str]] = field(default_factory=dict)
    ngram_index: dict[str, set[str]] = field(default_factory=dict)
    tag_index: dict[str, set[str]] = field(default_factory=dict)
    category_index: dict[str, set[str]] = field(default_factory=dict)
    tag_labels: dict[str, str] = field(default_factory=dict)
    category_labels: dict[str, str] = field(default_factory=dict)
    # id → document and id → position in ``documents``
    by_id: dict[str, IndexedDocument] = field(default_factory=dict)
    positions: dict[str, int] = field(default_factory=dict)

    @classmethod
    def build(cls, documents: Iterable[IndexedDocument]) -> "SearchIndex":
        """Build every index from scratch for ``documents``."""
        index = cls(documents=list(documents))

        for position, doc in enumerate(index.documents):
            if doc.id in index.by_id:
                logger.warning(f"Duplicate document id {doc.id!r} in index input; keeping first")
                continue
            index.by_id[doc.id] = doc
            index.positions[doc.id] = position

            token_text = " ".join([doc.title, doc.content, doc.category, *doc.tags])
            for token in tokenize(token_text):
                _add(index.token_index, token, doc.id)

            for ngram in generate_ngrams(f"{doc.title} {doc.content}", NGRAM_SIZE):
                _add(index.ngram_index, ngram, doc.id)

            for tag in doc.tags:
                key = tag.lower()
                _add(index.tag_index, key, doc.id)
                index.tag_labels.setdefault(key, tag)

            category_key = doc.category.lower()
            _add(index.category_index, category_key, doc.id)
            index.category_labels.setdefault(category_key, doc.category)

        if len(index.by_id) != len(index.documents):
            index.documents = [doc for doc in index.documents if index.by_id.get(doc.id) is doc]
            index.positions = {doc.id: i for i, doc in enumerate(index.documents)}

        logger.debug(
            f"Built search index: {len(index.documents)} documents, "
            f"{len(index.token_index)} tokens, {len(index.ngram_index)} n-grams"
        )
        return index

    def __len__(self) -> int:
        return len(self.documents)

    @property
    def is_empty(self) -> bool:
        return not self.documents

    # ============ LOOKUPS ============

    def get(self, doc_id: str) -> IndexedDocument | None:
        return self.by_id.get(doc_id)

    def position(self, doc_id: str) -> int:
        return self.positions[doc_id]

    def docs_for_token(self, token: str) -> set[str]:
        return self.token_index.get(token, set())

    def docs_for_ngram(self, ngram: str) -> set[str]:
        return self.ngram_index.get(ngram, set())

    def docs_with_any_token(self, tokens: Sequence[str]) -> set[str]:
        ids: set[str] = set()
        for token in tokens:
            ids |= self.docs_for_token(token)
        return ids

    def docs_with_all_tokens(self, tokens: Sequence[str]) -> set[str]:
        if not tokens:
            return set()
        ids = set(self.docs_for_token(tokens[0]))
        for token in tokens[1:]:
            ids &= self.docs_for_token(token)
        return ids

    def in_order(self, doc_ids: Iterable[str]) -> list[IndexedDocument]:
        """Documents for ``doc_ids`` in original document order."""
        return [self.by_id[doc_id] for doc_id in sorted(set(doc_ids), key=self.position)]

    # ============ FACETS ============

    def tag_counts(self) -> list[tuple[str, int]]:
        """(display tag, document count), most used first; ties keep first-seen order."""
        counts = [(self.tag_labels[key], len(ids)) for key, ids in self.tag_index.items()]
        return sorted(counts, key=lambda item: item[1], reverse=True)

    def category_counts(self) -> list[tuple[str, int]]:
        """(display category, document count), most used first."""
        counts = [(self.category_labels[key], len(ids)) for key, ids in self.category_index.items()]
        return sorted(counts, key=lambda item: item[1], reverse=True)

    def categories(self) -> list[str]:
        return sorted(self.category_labels.values())

    def tags(self) -> list[str]:
        return sorted(self.tag_labels.values())

    def types(self) -> list[DocumentType]:
        return sorted({doc.type for doc in self.documents})

    def statistics(self) -> IndexStatistics:
        """Summary of the indexed document set."""
        total = len(self.documents)
        content_length = sum(len(doc.content) for doc in self.documents)
        return IndexStatistics(
            total_documents=total,
            categories=self.categories(),
            types=self.types(),
            tags=self.tags(),
            average_content_length=round(content_length / total) if total else 0,
        )
