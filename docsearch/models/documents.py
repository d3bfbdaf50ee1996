"""Document models for the documentation search engine."""

from datetime import UTC, datetime
from typing import Any

from pydantic import Field, field_validator

from .base import CamelModel
from .enums import Difficulty, DocumentType

_DOCUMENT_TYPES = frozenset(t.value for t in DocumentType)
_DIFFICULTIES = frozenset(d.value for d in Difficulty)


class Heading(CamelModel):
    """A markdown heading extracted from a document body."""

    level: int = Field(..., ge=1, le=6, description="Heading level (1-6)")
    text: str = Field(..., description="Heading text")
    id: str = Field(..., description="Slugified anchor id")


class IndexedDocument(CamelModel):
    """One crawled content file, as stored in the search index artifact."""

    id: str = Field(..., min_length=1, description="Stable slug derived from the file path")
    title: str = Field(..., description="Document title")
    url: str = Field(..., description="Route path, always starting with '/'")
    content: str = Field(default="", description="Markdown body without front-matter")
    excerpt: str = Field(default="", description="Plain-text summary")
    description: str | None = Field(default=None, description="Front-matter description")
    category: str = Field(default="General", description="Display category")
    type: DocumentType = Field(default=DocumentType.REFERENCE, description="Document type")
    difficulty: Difficulty | None = Field(default=None, description="Audience level")
    tags: list[str] = Field(default_factory=list, description="Free-text labels")
    breadcrumbs: list[str] = Field(default_factory=list, description="Humanized path trail")
    headings: list[Heading] = Field(default_factory=list, description="Headings in document order")
    last_modified: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Front-matter timestamp or crawl time",
    )
    sidebar_title: str | None = None
    icon: str | None = None
    order: int | None = None
    author: str | None = None
    version: str | None = None
    featured: bool = False
    deprecated: bool = False

    @field_validator("url")
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        return value if value.startswith("/") else f"/{value}"

    @field_validator("tags")
    @classmethod
    def _unique_tags(cls, value: list[str]) -> list[str]:
        seen: set[str] = set()
        unique: list[str] = []
        for tag in value:
            tag = tag.strip()
            if tag and tag.lower() not in seen:
                seen.add(tag.lower())
                unique.append(tag)
        return unique

    @field_validator("type", mode="before")
    @classmethod
    def _known_type(cls, value: Any) -> Any:
        if isinstance(value, str) and value.lower() not in _DOCUMENT_TYPES:
            return DocumentType.OTHER
        return value.lower() if isinstance(value, str) else value

    @field_validator("difficulty", mode="before")
    @classmethod
    def _known_difficulty(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.lower()
            return value if value in _DIFFICULTIES else None
        return value

    @field_validator("last_modified")
    @classmethod
    def _aware_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class SearchIndexArtifact(CamelModel):
    """The persisted search index: ``{documents, generated, total}``."""

    documents: list[IndexedDocument] = Field(default_factory=list)
    generated: datetime = Field(default_factory=lambda: datetime.now(UTC))
    total: int = Field(default=0, ge=0)


class IndexStatistics(CamelModel):
    """Summary of an indexed document set."""

    total_documents: int = Field(default=0, ge=0)
    categories: list[str] = Field(default_factory=list)
    types: list[DocumentType] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    average_content_length: int = Field(default=0, ge=0)
