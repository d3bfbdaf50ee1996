"""Document crawler.

Walks one or more content roots, parses every ``.md`` / ``.mdx`` file and
produces :class:`IndexedDocument` records. The crawl is partial-failure
tolerant: unreadable directories and files are logged and skipped.
"""

import asyncio
import logging
import re
from collections.abc import Iterable
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

from ...models import DocumentType, IndexedDocument
from .frontmatter import FrontmatterError, parse_frontmatter, parse_scalar
from .markdown import (
    DEFAULT_EXCERPT_LENGTH,
    MARKDOWN_EXTENSION_RE,
    extract_headings,
    first_title_heading,
    generate_excerpt,
    humanize,
)

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = frozenset({".md", ".mdx"})

# Path keywords checked in order; the first hit decides the document type
TYPE_KEYWORDS: tuple[tuple[str, DocumentType], ...] = (
    ("api", DocumentType.API),
    ("guide", DocumentType.GUIDE),
    ("tutorial", DocumentType.TUTORIAL),
    ("example", DocumentType.EXAMPLE),
    ("blog", DocumentType.BLOG),
    ("changelog", DocumentType.CHANGELOG),
)

TAG_VOCABULARY: tuple[str, ...] = (
    "fastapi",
    "react",
    "mongodb",
    "farm",
    "typescript",
    "python",
    "authentication",
    "database",
    "api",
    "frontend",
    "backend",
    "deployment",
    "configuration",
    "cli",
    "hooks",
    "components",
)
MAX_INFERRED_TAGS = 5

DEFAULT_CATEGORY = "General"

_SEPARATOR_RE = re.compile(r"[\\/]+")


# ============ PATH-DERIVED FIELDS ============


def _path_parts(relative_path: str) -> list[str]:
    return [part for part in _SEPARATOR_RE.split(relative_path) if part]


def _stem(segment: str) -> str:
    return MARKDOWN_EXTENSION_RE.sub("", segment)


def generate_id(relative_path: str) -> str:
    """Slug-safe identifier: ``guide/Getting Started.md`` → ``guide-getting-started``."""
    slug = _SEPARATOR_RE.sub("-", _stem(relative_path)).lower()
    slug = re.sub(r"[^a-z0-9_-]+", "-", slug)
    slug = re.sub(r"-{2,}", "-", slug).strip("-")
    return slug or "index"


def generate_url(relative_path: str, url_prefix: str = "") -> str:
    """Route path for a content file, without extension or trailing ``/index``."""
    url = "/" + "/".join(_path_parts(_stem(relative_path)))
    if url == "/index":
        url = "/"
    elif url.endswith("/index"):
        url = url[: -len("/index")]

    prefix = url_prefix.strip("/")
    if prefix:
        url = f"/{prefix}" if url == "/" else f"/{prefix}{url}"
    return url


def generate_breadcrumbs(relative_path: str, title: str | None) -> list[str]:
    """Humanized path segments (``index`` dropped) followed by the title."""
    crumbs = [humanize(part) for part in _path_parts(relative_path) if _stem(part).lower() != "index"]
    if title and title not in crumbs:
        crumbs.append(title)
    return crumbs


def infer_title(relative_path: str) -> str:
    parts = _path_parts(relative_path)
    if not parts:
        return ""
    name = _stem(parts[-1])
    if name.lower() == "index" and len(parts) > 1:
        name = parts[-2]
    return humanize(name)


def infer_category(relative_path: str) -> str:
    parts = _path_parts(relative_path)
    if len(parts) > 1:
        return humanize(parts[-2])
    return DEFAULT_CATEGORY


def infer_type(relative_path: str) -> DocumentType:
    path_lower = relative_path.lower()
    for keyword, doc_type in TYPE_KEYWORDS:
        if keyword in path_lower:
            return doc_type
    return DocumentType.REFERENCE


def infer_tags(content: str, relative_path: str) -> list[str]:
    """Vocabulary terms found in the content or path, in vocabulary order."""
    content_lower = content.lower()
    path_lower = relative_path.lower()
    tags = [term for term in TAG_VOCABULARY if term in content_lower or term in path_lower]
    return tags[:MAX_INFERRED_TAGS]


# ============ FRONT-MATTER COERCION ============


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a front-matter date or datetime into an aware UTC datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    return parsed.replace(tzinfo=UTC) if parsed.tzinfo is None else parsed.astimezone(UTC)


def _text(value: Any) -> str | None:
    if value is None or isinstance(value, (list, dict)):
        return None
    text = str(value).strip()
    return text or None


def _flag(value: Any) -> bool:
    """Booleans, including quoted ones such as ``draft: "true"``."""
    if isinstance(value, str):
        value = parse_scalar(value)
    return value is True


def _tag_list(value: Any) -> list[str] | None:
    if isinstance(value, list):
        return [str(tag).strip() for tag in value if str(tag).strip()]
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    return None


# ============ CRAWLER ============


def _list_directory(directory: Path) -> list[tuple[Path, bool, bool]]:
    """Return (path, is_dir, is_file) for each entry, sorted by name."""
    entries = []
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        is_dir = entry.is_dir() and not entry.is_symlink()
        entries.append((entry, is_dir, entry.is_file()))
    return entries


class DocumentCrawler:
    """Crawl content roots into :class:`IndexedDocument` records.

    Args:
        roots: Content directories to walk.
        production: Exclude documents whose front-matter sets ``draft: true``.
        url_prefix: Route prefix prepended to every document URL.
        excerpt_length: Character budget for generated excerpts.
    """

    def __init__(
        self,
        roots: Iterable[str | Path],
        production: bool = False,
        url_prefix: str = "",
        excerpt_length: int = DEFAULT_EXCERPT_LENGTH,
    ):
        self.roots = [Path(root) for root in roots]
        self.production = production
        self.url_prefix = url_prefix
        self.excerpt_length = excerpt_length

    async def crawl(self) -> list[IndexedDocument]:
        """Crawl every root and return the documents with unique ids."""
        documents: list[IndexedDocument] = []
        for root in self.roots:
            if not await asyncio.to_thread(root.is_dir):
                logger.warning(f"Content root {root} does not exist, skipping")
                continue
            logger.info(f"Crawling content root {root}")
            await self._crawl_directory(root, root, documents)

        documents = _ensure_unique_ids(documents)
        logger.info(f"Crawled {len(documents)} documents from {len(self.roots)} root(s)")
        return documents

    async def _crawl_directory(
        self,
        directory: Path,
        root: Path,
        documents: list[IndexedDocument],
    ) -> None:
        try:
            entries = await asyncio.to_thread(_list_directory, directory)
        except OSError as e:
            logger.warning(f"Could not read directory {directory}: {e}")
            return

        for path, is_dir, is_file in entries:
            if is_dir:
                await self._crawl_directory(path, root, documents)
            elif is_file and path.suffix.lower() in MARKDOWN_EXTENSIONS:
                doc = await self.parse_file(path, root)
                if doc is not None:
                    documents.append(doc)

    async def parse_file(self, path: Path, root: Path) -> IndexedDocument | None:
        """Read and parse one content file; unreadable files yield None."""
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {path}: {e}")
            return None
        return self.parse_document(text, path.relative_to(root).as_posix())

    def parse_document(
        self,
        text: str,
        relative_path: str,
        crawled_at: datetime | None = None,
    ) -> IndexedDocument | None:
        """Build a document from file contents and its path relative to the root.

        Returns None for empty bodies and, in production mode, for drafts.
        """
        try:
            frontmatter, body = parse_frontmatter(text)
        except FrontmatterError as e:
            logger.warning(f"Malformed front-matter in {relative_path} ({e}); indexing whole file")
            frontmatter, body = {}, text

        if not body.strip():
            logger.debug(f"Skipping {relative_path}: empty body")
            return None

        if self.production and _flag(frontmatter.get("draft")):
            logger.info(f"Skipping draft {relative_path}")
            return None

        title = _text(frontmatter.get("title")) or first_title_heading(body) or infer_title(relative_path)
        tags = _tag_list(frontmatter.get("tags"))
        last_modified = parse_timestamp(
            frontmatter.get("lastUpdated") or frontmatter.get("lastModified")
        )
        order = frontmatter.get("order")

        return IndexedDocument(
            id=generate_id(relative_path),
            title=title,
            url=generate_url(relative_path, self.url_prefix),
            content=body,
            excerpt=generate_excerpt(body, self.excerpt_length),
            description=_text(frontmatter.get("description")),
            category=_text(frontmatter.get("category")) or infer_category(relative_path),
            type=_text(frontmatter.get("type")) or infer_type(relative_path),
            difficulty=_text(frontmatter.get("difficulty")),
            tags=tags if tags is not None else infer_tags(body, relative_path),
            breadcrumbs=generate_breadcrumbs(relative_path, title),
            headings=extract_headings(body),
            last_modified=last_modified or crawled_at or datetime.now(UTC),
            sidebar_title=_text(frontmatter.get("sidebarTitle")),
            icon=_text(frontmatter.get("icon")),
            order=order if isinstance(order, int) and not isinstance(order, bool) else None,
            author=_text(frontmatter.get("author")),
            version=_text(frontmatter.get("version")),
            featured=_flag(frontmatter.get("featured")),
            deprecated=_flag(frontmatter.get("deprecated")),
        )


def _ensure_unique_ids(documents: list[IndexedDocument]) -> list[IndexedDocument]:
    """Suffix colliding ids (same relative path under two roots) with -2, -3, ..."""
    seen: set[str] = set()
    unique: list[IndexedDocument] = []
    for doc in documents:
        doc_id = doc.id
        suffix = 2
        while doc_id in seen:
            doc_id = f"{doc.id}-{suffix}"
            suffix += 1
        if doc_id != doc.id:
            logger.warning(f"Duplicate document id {doc.id!r}, renamed to {doc_id!r}")
            doc = doc.model_copy(update={"id": doc_id})
        seen.add(doc_id)
        unique.append(doc)
    return unique


async def crawl_documents(
    roots: Iterable[str | Path],
    production: bool = False,
    url_prefix: str = "",
    excerpt_length: int = DEFAULT_EXCERPT_LENGTH,
) -> list[IndexedDocument]:
    """Convenience wrapper: crawl ``roots`` with a fresh crawler."""
    crawler = DocumentCrawler(
        roots,
        production=production,
        url_prefix=url_prefix,
        excerpt_length=excerpt_length,
    )
    return await crawler.crawl()
