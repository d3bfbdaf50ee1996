"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from docsearch.engine.core import save_index
from docsearch.server import create_app

SECRET = "test-internal-secret"


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def secured_client(settings):
    app = create_app(settings.model_copy(update={"internal_api_secret": SECRET}))
    with TestClient(app) as test_client:
        yield test_client


class TestHealth:
    """Liveness and readiness."""

    def test_root(self, client):
        r = client.get("/")
        assert r.status_code == 200
        assert r.json()["search"] == "/v1/search"

    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "healthy"

    def test_ready_after_first_search(self, client):
        """With lazy initialization the index loads on first use."""
        assert client.get("/ready").status_code == 503

        client.get("/v1/search", params={"q": "plugin"})
        r = client.get("/ready")

        assert r.status_code == 200
        assert r.json() == {"status": "ready", "version": r.json()["version"], "documents": 5, "source": "fallback"}

    def test_ready_immediately_when_eager(self, settings):
        app = create_app(settings.model_copy(update={"lazy_initialize": False}))
        with TestClient(app) as test_client:
            assert test_client.get("/ready").status_code == 200

    def test_request_id_header(self, client):
        r = client.get("/health", headers={"X-Request-Id": "abc-123"})
        assert r.headers["x-request-id"] == "abc-123"
        assert r.headers["x-content-type-options"] == "nosniff"
        assert r.headers["server-timing"].startswith("app;dur=")


class TestSearch:
    """Search endpoints."""

    def test_get_search(self, client):
        r = client.get("/v1/search", params={"q": "getting started"})
        body = r.json()

        assert r.status_code == 200
        assert body["results"][0]["id"] == "getting-started"
        assert body["results"][0]["content"] == ""
        assert body["metrics"]["totalResults"] >= 1
        assert body["metrics"]["query"] == "getting started"
        assert "searchTime" in body["metrics"]
        assert "score" not in body["results"][0]

    def test_get_search_with_filters(self, client):
        r = client.get("/v1/search", params={"q": "guide", "category": "Guides", "type": "guide,tutorial"})
        results = r.json()["results"]

        assert results
        assert all(result["category"] == "Guides" for result in results)
        assert all(result["type"] in ("guide", "tutorial") for result in results)

    def test_get_search_invalid_filter(self, client):
        r = client.get("/v1/search", params={"q": "guide", "type": "podcast"})

        assert r.status_code == 422
        assert r.json()["success"] is False
        assert r.json()["error"].startswith("Invalid filter")

    def test_post_search(self, client):
        r = client.post(
            "/v1/search",
            json={
                "query": "plugin",
                "filters": {"tags": ["hooks"]},
                "options": {"includeHighlights": True, "includeContent": True, "limit": 5},
            },
        )
        body = r.json()

        assert r.status_code == 200
        assert [result["id"] for result in body["results"]] == ["plugin-system"]
        assert body["results"][0]["highlights"][0] == {
            "field": "title",
            "value": "<mark>Plugin</mark> System Guide",
        }
        assert body["results"][0]["content"]
        assert body["metrics"]["filters"]["tags"] == ["hooks"]

    def test_empty_query_lists_documents(self, client):
        body = client.get("/v1/search").json()
        assert len(body["results"]) == 5
        assert body["results"][0]["id"] == "getting-started"

    def test_suggest(self, client):
        r = client.get("/v1/suggest", params={"q": "arch"})
        body = r.json()

        assert r.status_code == 200
        assert body["query"] == "arch"
        assert body["suggestions"][0] == {"text": "architecture", "type": "tag", "count": 2}


class TestDocuments:
    """Document, facet and artifact endpoints."""

    def test_get_document(self, client):
        r = client.get("/v1/documents/plugin-system")
        assert r.status_code == 200
        assert r.json()["title"] == "Plugin System Guide"
        assert r.json()["lastModified"].startswith("2025-06-06")

    def test_missing_document(self, client):
        r = client.get("/v1/documents/nope")
        assert r.status_code == 404
        assert r.json() == {"success": False, "error": "Document not found"}

    def test_facets(self, client):
        body = client.get("/v1/facets").json()
        assert body["categories"] == ["Architecture", "Core Features", "Guides"]
        assert "reference" in body["types"]

    def test_stats(self, client):
        body = client.get("/v1/stats").json()
        assert body["totalDocuments"] == 5
        assert body["averageContentLength"] > 0

    def test_artifact_endpoint(self, client, settings, documents):
        assert client.get("/search-index.json").status_code == 404

        save_index(documents, settings.index_path)
        r = client.get("/search-index.json")

        assert r.status_code == 200
        assert r.json()["total"] == 5


class TestReindex:
    """Maintenance endpoint authentication and behaviour."""

    def test_forbidden_without_configured_secret(self, client):
        r = client.post("/v1/reindex", headers={"X-Internal-Secret": "anything"})
        assert r.status_code == 403

    def test_forbidden_with_wrong_secret(self, secured_client):
        assert secured_client.post("/v1/reindex").status_code == 403
        assert secured_client.post("/v1/reindex", headers={"X-Internal-Secret": "wrong"}).status_code == 403

    def test_reindex(self, secured_client, settings, content_tree):
        r = secured_client.post("/v1/reindex", headers={"X-Internal-Secret": SECRET})
        body = r.json()

        assert r.status_code == 200
        assert body["success"] is True
        assert body["total"] == 4
        assert body["indexPath"] == settings.index_path

        doc = secured_client.get("/v1/documents/guide-getting-started")
        assert doc.status_code == 200
