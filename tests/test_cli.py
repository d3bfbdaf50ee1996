"""Tests for the command-line interface."""

import json

import pytest
import uvicorn

from docsearch import cli
from docsearch.config import Settings
from docsearch.engine.core import save_index


def _output(capsys) -> dict:
    return json.loads(capsys.readouterr().out)


@pytest.fixture
def artifact(tmp_path, content_tree, capsys):
    output = tmp_path / "out" / "search-index.json"
    assert cli.main(["index", "--root", str(content_tree), "--output", str(output)]) == 0
    capsys.readouterr()
    return output


class TestIndexCommand:
    """Building the artifact."""

    def test_index_writes_artifact_and_reports(self, tmp_path, content_tree, capsys):
        output = tmp_path / "out" / "search-index.json"

        code = cli.main(["index", "--root", str(content_tree), "--output", str(output)])
        report = _output(capsys)

        assert code == 0
        assert output.is_file()
        assert report["ok"] is True
        assert report["stats"]["totalDocuments"] == 4
        assert "Guides" in report["stats"]["categories"]

    def test_production_excludes_drafts(self, tmp_path, content_tree, capsys):
        output = tmp_path / "prod.json"

        cli.main(["index", "--root", str(content_tree), "--output", str(output), "--production"])

        assert _output(capsys)["stats"]["totalDocuments"] == 3

    def test_unwritable_output_fails(self, tmp_path, content_tree, capsys):
        code = cli.main(["index", "--root", str(content_tree), "--output", str(tmp_path)])

        assert code == 1
        assert _output(capsys)["ok"] is False


class TestQueryCommands:
    """Searching and suggesting against an artifact."""

    def test_search(self, artifact, capsys):
        code = cli.main(["search", "getting started", "--index", str(artifact), "--no-fallback"])
        body = _output(capsys)

        assert code == 0
        assert body["results"][0]["id"] == "guide-getting-started"
        assert body["metrics"]["totalResults"] >= 1

    def test_search_with_filters(self, artifact, capsys):
        cli.main(["search", "", "--index", str(artifact), "--type", "api", "--highlights"])
        body = _output(capsys)

        assert [result["id"] for result in body["results"]] == ["api-endpoints"]

    def test_search_invalid_filter(self, artifact, capsys):
        code = cli.main(["search", "x", "--index", str(artifact), "--type", "podcast"])

        assert code == 2
        assert _output(capsys)["error"] == "invalid_arguments"

    def test_suggest(self, artifact, capsys):
        code = cli.main(["suggest", "get", "--index", str(artifact)])
        body = _output(capsys)

        assert code == 0
        assert body["query"] == "get"
        assert "Getting Started" in [s["text"] for s in body["suggestions"]]


def test_command_required():
    with pytest.raises(SystemExit):
        cli.main([])


class TestSourceSelection:
    """Which documents a query command loads."""

    def test_root_is_crawled_even_when_an_artifact_exists(self, tmp_path, make_document, monkeypatch, capsys):
        stale = tmp_path / "public" / "search-index.json"
        save_index([make_document("stale-artifact", content="Old text.")], stale)
        monkeypatch.setattr(cli, "get_settings", lambda: Settings(_env_file=None, index_path=str(stale)))
        fresh = tmp_path / "fresh"
        fresh.mkdir()
        (fresh / "new.md").write_text("# New\n\nFresh content.\n", encoding="utf-8")

        code = cli.main(["search", "", "--root", str(fresh), "--no-fallback"])

        assert code == 0
        assert [result["id"] for result in _output(capsys)["results"]] == ["new"]

    def test_configured_artifact_used_without_root(self, tmp_path, make_document, monkeypatch, capsys):
        stale = tmp_path / "public" / "search-index.json"
        save_index([make_document("stale-artifact", content="Old text.")], stale)
        monkeypatch.setattr(cli, "get_settings", lambda: Settings(_env_file=None, index_path=str(stale)))

        cli.main(["search", "", "--no-fallback"])

        assert [result["id"] for result in _output(capsys)["results"]] == ["stale-artifact"]


class TestServeCommand:
    """Launching uvicorn."""

    def test_serve_passes_options_to_uvicorn(self, monkeypatch):
        calls = []
        monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
        monkeypatch.setattr(cli, "configure_logging", lambda level=None: None)

        code = cli.main(["--log-level", "DEBUG", "serve", "--port", "9001"])

        assert code == 0
        app, kwargs = calls[0]
        assert app == "docsearch.server:app"
        assert kwargs["port"] == 9001
        assert kwargs["log_level"] == "debug"
