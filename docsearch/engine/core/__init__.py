"""Content ingestion: front-matter, markdown helpers, crawling and persistence."""

from .crawler import (
    DocumentCrawler,
    crawl_documents,
    generate_id,
    generate_url,
    infer_category,
    infer_tags,
    infer_title,
    infer_type,
)
from .fallback import fallback_documents
from .frontmatter import FrontmatterError, parse_frontmatter
from .markdown import extract_headings, generate_excerpt, humanize, slugify, strip_markdown
from .persistence import (
    DEFAULT_INDEX_PATH,
    build_artifact,
    fetch_index,
    load_index,
    read_index_file,
    save_index,
)

__all__ = [
    # Crawler
    "DocumentCrawler",
    "crawl_documents",
    "generate_id",
    "generate_url",
    "infer_category",
    "infer_tags",
    "infer_title",
    "infer_type",
    "fallback_documents",
    # Parsing
    "FrontmatterError",
    "parse_frontmatter",
    "extract_headings",
    "generate_excerpt",
    "humanize",
    "slugify",
    "strip_markdown",
    # Persistence
    "DEFAULT_INDEX_PATH",
    "build_artifact",
    "fetch_index",
    "load_index",
    "read_index_file",
    "save_index",
]
