"""FastAPI server for documentation search."""

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from pydantic import ValidationError

from . import __version__
from .api.deps import get_search_service, sanitize_error_message, verify_internal_secret
from .config import Settings, configure_logging, get_settings
from .engine import DocsSearchService
from .middleware import RequestContextMiddleware
from .models import (
    Facets,
    HealthResponse,
    IndexedDocument,
    IndexStatistics,
    ReadyResponse,
    ReindexResponse,
    SearchFilters,
    SearchOptions,
    SearchRequest,
    SearchResponse,
    SuggestResponse,
)

logger = logging.getLogger(__name__)

ServiceDep = Annotated[DocsSearchService, Depends(get_search_service)]

# ============ SENTRY INITIALIZATION ============


def _filter_sentry_event(event: dict) -> dict:
    """Remove sensitive data from Sentry events."""
    if "request" in event and "headers" in event["request"]:
        headers = event["request"]["headers"]
        for key in ["authorization", "x-internal-secret"]:
            if key in headers:
                headers[key] = "[REDACTED]"
    return event


def init_sentry(settings: Settings) -> None:
    """Initialize Sentry error tracking if a DSN is configured."""
    if not settings.sentry_dsn:
        logger.debug("Sentry DSN not configured - error tracking disabled")
        return

    try:
        import sentry_sdk
        from sentry_sdk.integrations.fastapi import FastApiIntegration
        from sentry_sdk.integrations.starlette import StarletteIntegration

        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1 if settings.is_production else 1.0,
            integrations=[
                FastApiIntegration(),
                StarletteIntegration(),
            ],
            before_send=lambda event, hint: _filter_sentry_event(event),
        )
        logger.info("Sentry error tracking initialized")
    except ImportError:
        logger.warning("Sentry DSN configured but sentry-sdk not installed")


# ============ APPLICATION ============


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.app_name} v{__version__}")

    if not settings.debug and settings.cors_allowed_origins == "*":
        logger.warning(
            "SECURITY WARNING: CORS is configured to allow all origins ('*'). "
            "Set DOCSEARCH_CORS_ALLOWED_ORIGINS to specific domains in production."
        )

    service = DocsSearchService(settings)
    app.state.search_service = service
    if not settings.lazy_initialize:
        await service.initialize()

    yield

    app.state.search_service = None
    logger.info(f"Stopped {settings.app_name}")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application for ``settings``."""
    settings = settings or get_settings()
    init_sentry(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Full-text and fuzzy search over markdown documentation",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.cors_allowed_origins != "*",
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Internal-Secret", "X-Request-Id"],
    )

    _register_exception_handlers(app)
    _register_routes(app)
    return app


# ============ EXCEPTION HANDLERS ============


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions with consistent response format."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": exc.detail},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with sanitized error messages."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "An internal server error occurred. Please try again.",
            },
        )


# ============ ENDPOINTS ============


def _register_routes(app: FastAPI) -> None:
    settings: Settings = app.state.settings

    # ---- Health ----

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": settings.app_name,
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
            "search": "/v1/search",
        }

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint (lightweight liveness check)."""
        return HealthResponse(
            status="healthy",
            version=__version__,
            timestamp=datetime.now(UTC),
        )

    @app.get("/ready", tags=["Health"])
    async def readiness_check(request: Request):
        """Readiness check - 503 until the search index is loaded."""
        service: DocsSearchService | None = getattr(request.app.state, "search_service", None)
        ready = service is not None and service.is_ready
        response = ReadyResponse(
            status="ready" if ready else "not_ready",
            version=__version__,
            documents=len(service.documents) if ready else 0,
            source=service.source if ready else None,
        )
        return JSONResponse(
            content=response.model_dump(mode="json", by_alias=True),
            status_code=200 if ready else 503,
        )

    # ---- Search ----

    @app.post("/v1/search", response_model=SearchResponse, tags=["Search"])
    async def search_post(body: SearchRequest, service: ServiceDep) -> SearchResponse:
        """Search with structured filters and options."""
        return await service.search(body.query, body.filters, body.options)

    @app.get("/v1/search", response_model=SearchResponse, tags=["Search"])
    async def search_get(
        service: ServiceDep,
        q: str = Query(default="", max_length=500, description="Search query"),
        category: str | None = Query(default=None),
        type: str | None = Query(default=None, description="Comma-separated document types"),
        difficulty: str | None = Query(default=None),
        tags: str | None = Query(default=None, description="Comma-separated tags"),
        limit: int | None = Query(default=None, ge=1, le=100),
        offset: int = Query(default=0, ge=0),
        content: bool = Query(default=False, description="Include document bodies"),
        highlights: bool = Query(default=False, description="Include highlight fragments"),
    ) -> SearchResponse:
        """Search with query-string filters."""
        filters = None
        if any(value is not None for value in (category, type, difficulty, tags)):
            try:
                filters = SearchFilters(
                    category=category,
                    type=type,
                    difficulty=difficulty,
                    tags=tags,
                )
            except ValidationError as e:
                raise HTTPException(
                    status_code=422,
                    detail=f"Invalid filter: {e.errors()[0]['msg']}",
                ) from e

        options = SearchOptions(
            limit=limit,
            offset=offset,
            include_content=content,
            include_highlights=highlights,
        )
        return await service.search(q, filters, options)

    @app.get("/v1/suggest", response_model=SuggestResponse, tags=["Search"])
    async def suggest(
        service: ServiceDep,
        q: str = Query(default="", max_length=200, description="Partial query"),
    ) -> SuggestResponse:
        """Autocomplete suggestions for a partial query."""
        return SuggestResponse(query=q, suggestions=await service.suggest(q))

    # ---- Documents ----

    @app.get("/v1/documents/{doc_id}", response_model=IndexedDocument, tags=["Documents"])
    async def get_document(doc_id: str, service: ServiceDep) -> IndexedDocument:
        """Fetch a single indexed document by id."""
        await service.ensure_ready()
        doc = service.get_document(doc_id)
        if doc is None:
            raise HTTPException(status_code=404, detail="Document not found")
        return doc

    @app.get("/v1/facets", response_model=Facets, tags=["Documents"])
    async def get_facets(service: ServiceDep) -> Facets:
        """Available categories, tags and types for filter UIs."""
        await service.ensure_ready()
        return service.facets()

    @app.get("/v1/stats", response_model=IndexStatistics, tags=["Documents"])
    async def get_stats(service: ServiceDep) -> IndexStatistics:
        """Summary statistics of the loaded index."""
        await service.ensure_ready()
        return service.statistics()

    @app.get("/search-index.json", tags=["Documents"])
    async def search_index_artifact():
        """Serve the pre-generated search index artifact."""
        path = Path(settings.index_path)
        if not path.is_file():
            raise HTTPException(status_code=404, detail="Search index artifact not found")
        return FileResponse(path, media_type="application/json")

    # ---- Maintenance ----

    @app.post(
        "/v1/reindex",
        response_model=ReindexResponse,
        tags=["Maintenance"],
        dependencies=[Depends(verify_internal_secret)],
    )
    async def reindex(service: ServiceDep) -> ReindexResponse:
        """
        Re-crawl the content roots, rewrite the artifact and reload the index.

        Requires the X-Internal-Secret header (server-to-server calls only).
        """
        try:
            artifact = await service.reindex()
        except OSError as e:
            raise HTTPException(status_code=500, detail=sanitize_error_message(e)) from e

        logger.info(f"Reindexed {artifact.total} documents into {settings.index_path}")
        return ReindexResponse(
            success=True,
            total=artifact.total,
            index_path=settings.index_path,
            message=f"Indexed {artifact.total} documents",
        )


app = create_app()


# ============ MAIN ============


def main():
    """Run the server with uvicorn."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "docsearch.server:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
