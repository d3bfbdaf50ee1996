"""Health, readiness and maintenance response models."""

from datetime import datetime

from pydantic import Field

from .base import CamelModel


class HealthResponse(CamelModel):
    """Liveness check response."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="Server version")
    timestamp: datetime = Field(..., description="Current server time")


class ReadyResponse(CamelModel):
    """Readiness check response."""

    status: str = Field(..., description="'ready' or 'not_ready'")
    version: str = Field(..., description="Server version")
    documents: int = Field(default=0, ge=0, description="Documents in the loaded index")
    source: str | None = Field(default=None, description="Where the document set came from")


class ReindexResponse(CamelModel):
    """Result of ``POST /v1/reindex``."""

    success: bool
    total: int = Field(default=0, ge=0, description="Documents written to the artifact")
    index_path: str = Field(..., description="Artifact location")
    message: str
