"""Query-time models: filters, options, results and suggestions."""

import re
from datetime import UTC, date, datetime, time
from typing import Any

from pydantic import Field, field_validator

from .base import CamelModel
from .documents import IndexedDocument
from .enums import Difficulty, DocumentType, SuggestionType

_DATE_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class DateRange(CamelModel):
    """Inclusive last-modified window; either end may be open.

    A date-only ``to`` (``2025-06-10``) covers the whole of that day.
    """

    from_: datetime | None = Field(default=None, alias="from")
    to: datetime | None = Field(default=None, alias="to")

    @field_validator("to", mode="before")
    @classmethod
    def _end_of_day(cls, value: Any) -> Any:
        if isinstance(value, str) and _DATE_ONLY_RE.match(value.strip()):
            value = date.fromisoformat(value.strip())
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time.max, tzinfo=UTC)
        return value

    @field_validator("from_", "to")
    @classmethod
    def _aware_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    def contains(self, moment: datetime) -> bool:
        if self.from_ is not None and moment < self.from_:
            return False
        if self.to is not None and moment > self.to:
            return False
        return True


class SearchFilters(CamelModel):
    """Structured filters; a document must satisfy every field that is set."""

    category: str | None = Field(default=None, description="Exact category")
    type: list[DocumentType] | None = Field(default=None, description="Allowed document types")
    difficulty: Difficulty | None = Field(default=None, description="Exact difficulty")
    tags: list[str] | None = Field(default=None, description="Any of these tags (substring match)")
    date_range: DateRange | None = Field(default=None, description="Last-modified window")
    featured: bool | None = None
    deprecated: bool | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _single_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _single_tag(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    def matches(self, doc: IndexedDocument) -> bool:
        """Return True when ``doc`` satisfies all specified filters."""
        if self.category and doc.category != self.category:
            return False
        if self.type and doc.type not in self.type:
            return False
        if self.difficulty and doc.difficulty != self.difficulty:
            return False
        if self.tags:
            doc_tags = [tag.lower() for tag in doc.tags]
            wanted = [tag.lower() for tag in self.tags]
            if not any(w in doc_tag for w in wanted for doc_tag in doc_tags):
                return False
        if self.featured is not None and doc.featured != self.featured:
            return False
        if self.deprecated is not None and doc.deprecated != self.deprecated:
            return False
        if self.date_range and not self.date_range.contains(doc.last_modified):
            return False
        return True


class SearchOptions(CamelModel):
    """Pagination and presentation options for a search."""

    limit: int | None = Field(default=None, ge=1, le=100, description="Page size")
    offset: int = Field(default=0, ge=0, description="Results to skip")
    include_content: bool = Field(default=False, description="Return full document bodies")
    include_highlights: bool = Field(default=False, description="Return highlight fragments")
    fuzzy_threshold: float | None = Field(
        default=None, gt=0.0, le=1.0, description="Share of query n-grams a document must contain"
    )


class Highlight(CamelModel):
    """A fragment of a document field with query terms wrapped in markers."""

    field: str
    value: str


class SearchResult(IndexedDocument):
    """A document returned by a search (never carries a score)."""

    highlights: list[Highlight] | None = None


class Suggestion(CamelModel):
    """An autocomplete suggestion."""

    text: str
    type: SuggestionType
    count: int | None = None


class SearchMetrics(CamelModel):
    """Timing and size information about a search."""

    total_results: int = Field(default=0, ge=0)
    search_time: float = Field(default=0.0, ge=0.0, description="Milliseconds")
    query: str = ""
    filters: SearchFilters | None = None


class SearchResponse(CamelModel):
    """Result of a search: ``{results, metrics, suggestions}``."""

    results: list[SearchResult] = Field(default_factory=list)
    metrics: SearchMetrics = Field(default_factory=SearchMetrics)
    suggestions: list[Suggestion] = Field(default_factory=list)


class SearchRequest(CamelModel):
    """Body of ``POST /v1/search``."""

    query: str = Field(default="", max_length=500)
    filters: SearchFilters | None = None
    options: SearchOptions | None = None


class SuggestResponse(CamelModel):
    """Body of ``GET /v1/suggest``."""

    query: str
    suggestions: list[Suggestion] = Field(default_factory=list)


class Facets(CamelModel):
    """Available filter values across the document set."""

    categories: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    types: list[DocumentType] = Field(default_factory=list)
