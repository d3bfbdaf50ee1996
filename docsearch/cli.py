"""Command-line interface: build the index artifact, query it, or serve the API."""

import argparse
import asyncio
import json
import logging
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ValidationError

from .config import Settings, configure_logging, get_settings
from .engine import DocsSearchService
from .engine.core import crawl_documents, save_index
from .engine.index import SearchIndex
from .models import SearchFilters, SearchOptions

logger = logging.getLogger(__name__)


def _print_json(payload: Any) -> None:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json", by_alias=True, exclude_none=True)
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _settings_from_args(args: argparse.Namespace) -> Settings:
    """Apply command-line overrides on top of the environment settings."""
    overrides: dict[str, Any] = {}
    if getattr(args, "root", None):
        overrides["content_roots_str"] = ",".join(args.root)
        # Explicit roots are crawled, not shadowed by a configured artifact
        overrides["index_path"] = ""
        overrides["index_url"] = None
    if getattr(args, "index", None):
        overrides["index_path"] = args.index
        overrides["index_url"] = None
    if getattr(args, "url_prefix", None) is not None:
        overrides["url_prefix"] = args.url_prefix
    if getattr(args, "production", False):
        overrides["environment"] = "production"
    if getattr(args, "no_fallback", False):
        overrides["use_fallback_documents"] = False
    return get_settings().model_copy(update=overrides)


# ============ COMMANDS ============


def cmd_index(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    output = args.output or get_settings().index_path

    documents = asyncio.run(
        crawl_documents(
            settings.content_roots,
            production=settings.is_production,
            url_prefix=settings.url_prefix,
            excerpt_length=settings.excerpt_length,
        )
    )
    try:
        artifact = save_index(documents, output)
    except OSError as exc:
        logger.error(f"Failed to write search index to {output}: {exc}")
        _print_json({"ok": False, "stage": "index", "error": str(exc), "output": output})
        return 1

    stats = SearchIndex.build(documents).statistics()
    _print_json(
        {
            "ok": True,
            "output": output,
            "generated": artifact.generated.isoformat(),
            "stats": stats.model_dump(mode="json", by_alias=True),
        }
    )
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    try:
        filters = None
        if any(value is not None for value in (args.category, args.type, args.difficulty, args.tags)):
            filters = SearchFilters(
                category=args.category,
                type=args.type,
                difficulty=args.difficulty,
                tags=args.tags,
            )
        options = SearchOptions(
            limit=args.limit,
            offset=args.offset,
            include_content=args.content,
            include_highlights=args.highlights,
        )
    except ValidationError as exc:
        _print_json({"ok": False, "stage": "search", "error": "invalid_arguments", "message": str(exc)})
        return 2

    async def run():
        service = DocsSearchService(settings)
        await service.initialize()
        return await service.search(args.query, filters, options)

    _print_json(asyncio.run(run()))
    return 0


def cmd_suggest(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)

    async def run():
        service = DocsSearchService(settings)
        await service.initialize()
        return await service.suggest(args.query)

    suggestions = asyncio.run(run())
    _print_json(
        {
            "query": args.query,
            "suggestions": [s.model_dump(mode="json", by_alias=True, exclude_none=True) for s in suggestions],
        }
    )
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "docsearch.server:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
        log_level=(args.log_level or settings.log_level).lower(),
    )
    return 0


# ============ PARSER ============


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        action="append",
        help="Content root to crawl (repeatable; defaults to DOCSEARCH_CONTENT_ROOTS)",
    )
    parser.add_argument("--url-prefix", default=None, help="Route prefix for document URLs")
    parser.add_argument("--production", action="store_true", help="Exclude draft documents")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docsearch",
        description="Documentation search: crawl markdown, build the index, query it",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: DOCSEARCH_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    index = sub.add_parser("index", help="Crawl content roots and write the search index artifact")
    _add_source_arguments(index)
    index.add_argument("--output", "-o", default=None, help="Artifact path (default: DOCSEARCH_INDEX_PATH)")
    index.set_defaults(func=cmd_index)

    search = sub.add_parser("search", help="Search the documentation")
    search.add_argument("query", nargs="?", default="", help="Search query (empty lists recent documents)")
    _add_source_arguments(search)
    search.add_argument("--index", default=None, help="Artifact path to load instead of the configured one")
    search.add_argument("--no-fallback", action="store_true", help="Do not fall back to built-in documents")
    search.add_argument("--category", default=None)
    search.add_argument("--type", default=None, help="Comma-separated document types")
    search.add_argument("--difficulty", default=None)
    search.add_argument("--tags", default=None, help="Comma-separated tags")
    search.add_argument("--limit", type=int, default=None)
    search.add_argument("--offset", type=int, default=0)
    search.add_argument("--content", action="store_true", help="Include document bodies")
    search.add_argument("--highlights", action="store_true", help="Include highlight fragments")
    search.set_defaults(func=cmd_search)

    suggest = sub.add_parser("suggest", help="Autocomplete suggestions for a partial query")
    suggest.add_argument("query", help="Partial query")
    _add_source_arguments(suggest)
    suggest.add_argument("--index", default=None, help="Artifact path to load instead of the configured one")
    suggest.add_argument("--no-fallback", action="store_true", help="Do not fall back to built-in documents")
    suggest.set_defaults(func=cmd_suggest)

    serve = sub.add_parser("serve", help="Run the HTTP API with uvicorn")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--reload", action="store_true")
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
