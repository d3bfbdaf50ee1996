"""Application configuration.

Settings are loaded from environment variables (prefix ``DOCSEARCH_``) or a
``.env`` file using Pydantic Settings.

Example ``.env``:
    DOCSEARCH_CONTENT_ROOTS=docs,docs-site/pages
    DOCSEARCH_INDEX_PATH=public/search-index.json
    DOCSEARCH_ENVIRONMENT=production
"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Search service settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DOCSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------
    app_name: str = "Docs Search"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # -------------------------------------------------------------------------
    # Content and index artifact
    # -------------------------------------------------------------------------
    # Comma-separated list of directories crawled for .md/.mdx files
    content_roots_str: str = Field(default="docs", alias="DOCSEARCH_CONTENT_ROOTS")
    url_prefix: str = ""
    index_path: str = "public/search-index.json"
    # When set, the artifact is fetched over HTTP instead of read from index_path
    index_url: str | None = None
    index_fetch_timeout: float = 10.0
    use_fallback_documents: bool = True
    lazy_initialize: bool = True

    # -------------------------------------------------------------------------
    # Query tuning
    # -------------------------------------------------------------------------
    default_limit: int = Field(default=20, ge=1)
    browse_limit: int = Field(default=10, ge=1)
    fuzzy_threshold: float = Field(default=0.6, gt=0.0, le=1.0)
    excerpt_length: int = Field(default=160, ge=20)
    max_suggestions: int = Field(default=8, ge=1)
    recency_days: int = Field(default=30, ge=0)
    highlight_tag: str = "mark"

    # -------------------------------------------------------------------------
    # HTTP layer
    # -------------------------------------------------------------------------
    host: str = "0.0.0.0"
    port: int = 8000
    cors_allowed_origins: str = "*"
    internal_api_secret: str | None = None
    sentry_dsn: str | None = None

    @property
    def content_roots(self) -> list[str]:
        """Parse content roots from the comma-separated string."""
        return [root.strip() for root in self.content_roots_str.split(",") if root.strip()]

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from the comma-separated string."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Drafts are excluded from crawls in production."""
        return self.environment == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the CLI and the HTTP server."""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


settings = get_settings()
