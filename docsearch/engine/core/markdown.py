"""Markdown text utilities used while crawling.

Heading extraction, anchor slugs, excerpts and the humanized labels used for
titles, categories and breadcrumbs.
"""

import re

from ...models import Heading

DEFAULT_EXCERPT_LENGTH = 160

HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$", re.MULTILINE)
MARKDOWN_EXTENSION_RE = re.compile(r"\.(md|mdx)$", re.IGNORECASE)

_CODE_FENCE_RE = re.compile(r"```.*?```", re.DOTALL)
_INLINE_CODE_RE = re.compile(r"`[^`]+`")
_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]+\)")
_EMPHASIS_RE = re.compile(r"[*_]{1,2}([^*_]+)[*_]{1,2}")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_WORD_START_RE = re.compile(r"\b\w")


def slugify(text: str) -> str:
    """Build an anchor id: lower-case, drop punctuation, hyphenate whitespace."""
    slug = re.sub(r"[^\w\s-]", "", text.lower())
    return re.sub(r"\s+", "-", slug.strip())


def extract_headings(content: str) -> list[Heading]:
    """Return every ``#``..``######`` heading in document order."""
    headings = []
    for match in HEADING_RE.finditer(content):
        text = match.group(2).strip()
        headings.append(Heading(level=len(match.group(1)), text=text, id=slugify(text)))
    return headings


def first_title_heading(content: str) -> str | None:
    """Return the text of the first level-1 heading, if any."""
    for match in HEADING_RE.finditer(content):
        if len(match.group(1)) == 1:
            return match.group(2).strip()
    return None


def humanize(segment: str) -> str:
    """Turn a path segment like ``getting-started.mdx`` into ``Getting Started``."""
    label = MARKDOWN_EXTENSION_RE.sub("", segment)
    label = re.sub(r"[-_]+", " ", label).strip()
    return _WORD_START_RE.sub(lambda m: m.group(0).upper(), label)


def strip_markdown(content: str) -> str:
    """Reduce markdown to plain prose for excerpts."""
    text = HEADING_RE.sub("", content)
    text = _CODE_FENCE_RE.sub("", text)
    text = _INLINE_CODE_RE.sub("", text)
    text = _LINK_RE.sub(r"\1", text)
    text = _EMPHASIS_RE.sub(r"\1", text)
    return re.sub(r"\s+", " ", text).strip()


def generate_excerpt(content: str, max_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    """Build a summary of whole sentences within ``max_length`` characters.

    Sentences are accumulated greedily until the next one would exceed the
    budget. When not even the first sentence fits, the cleaned text is
    hard-truncated and an ellipsis appended.
    """
    clean = strip_markdown(content)
    if not clean:
        return ""

    excerpt = ""
    for sentence in _SENTENCE_SPLIT_RE.split(clean):
        trimmed = sentence.strip()
        if not trimmed:
            continue
        if len(excerpt) + len(trimmed) > max_length:
            break
        excerpt += f"{trimmed}. "

    excerpt = excerpt.strip()
    if excerpt:
        return excerpt
    return clean[:max_length] + "..."
