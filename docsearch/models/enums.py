"""Enumeration types for the documentation search engine."""

from enum import StrEnum


class DocumentType(StrEnum):
    """Kind of documentation page."""

    GUIDE = "guide"
    API = "api"
    TUTORIAL = "tutorial"
    REFERENCE = "reference"
    EXAMPLE = "example"
    BLOG = "blog"
    CHANGELOG = "changelog"
    OTHER = "other"


class Difficulty(StrEnum):
    """Audience level declared in front-matter."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class SuggestionType(StrEnum):
    """Source of an autocomplete suggestion."""

    QUERY = "query"
    TAG = "tag"
    CATEGORY = "category"


class MatchKind(StrEnum):
    """How a candidate document was matched against a query."""

    EXACT = "exact"
    FUZZY = "fuzzy"
