"""Search index artifact persistence.

The crawled document set is written to a single JSON file
(``{documents, generated, total}``) that the runtime service loads instead of
re-crawling. A missing or unreadable artifact is not an error: loaders return
None so the caller can fall back to live crawling.
"""

import asyncio
import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

import httpx
from pydantic import ValidationError

from ...models import IndexedDocument, SearchIndexArtifact

logger = logging.getLogger(__name__)

DEFAULT_INDEX_PATH = "public/search-index.json"


def build_artifact(documents: Sequence[IndexedDocument]) -> SearchIndexArtifact:
    """Wrap a document set with its generation timestamp and count."""
    return SearchIndexArtifact(
        documents=list(documents),
        generated=datetime.now(UTC),
        total=len(documents),
    )


def save_index(
    documents: Sequence[IndexedDocument],
    path: str | Path = DEFAULT_INDEX_PATH,
) -> SearchIndexArtifact:
    """Write the search index artifact, creating parent directories.

    Raises:
        OSError: If the file cannot be written.
    """
    artifact = build_artifact(documents)
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(artifact.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
    logger.info(f"Search index saved to {output} ({artifact.total} documents)")
    return artifact


def parse_artifact(payload: str | bytes) -> list[IndexedDocument] | None:
    """Parse artifact JSON; malformed payloads yield None."""
    try:
        artifact = SearchIndexArtifact.model_validate_json(payload)
    except ValidationError as e:
        logger.warning(f"Search index artifact is malformed: {e.error_count()} validation error(s)")
        return None
    return artifact.documents


def read_index_file(path: str | Path = DEFAULT_INDEX_PATH) -> list[IndexedDocument] | None:
    """Read the artifact from disk; None when absent or malformed."""
    source = Path(path)
    try:
        payload = source.read_bytes()
    except FileNotFoundError:
        logger.info(f"No pre-generated search index at {source}")
        return None
    except OSError as e:
        logger.warning(f"Could not read search index {source}: {e}")
        return None

    documents = parse_artifact(payload)
    if documents is not None:
        logger.info(f"Loaded {len(documents)} documents from pre-generated index {source}")
    return documents


async def fetch_index(url: str, timeout: float = 10.0) -> list[IndexedDocument] | None:
    """Fetch the artifact over plain HTTP GET; None on any transport failure."""
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url)
    except httpx.HTTPError as e:
        logger.info(f"No pre-generated search index at {url}: {e}")
        return None

    if response.status_code != 200:
        logger.info(f"No pre-generated search index at {url} (HTTP {response.status_code})")
        return None

    documents = parse_artifact(response.content)
    if documents is not None:
        logger.info(f"Loaded {len(documents)} documents from pre-generated index {url}")
    return documents


async def load_index(source: str | Path, timeout: float = 10.0) -> list[IndexedDocument] | None:
    """Load the artifact from a filesystem path or an ``http(s)://`` URL."""
    if isinstance(source, str) and source.startswith(("http://", "https://")):
        return await fetch_index(source, timeout=timeout)
    return await asyncio.to_thread(read_index_file, source)

