"""Tests for markdown helpers."""

from docsearch.engine.core.markdown import (
    extract_headings,
    first_title_heading,
    generate_excerpt,
    humanize,
    slugify,
    strip_markdown,
)


def test_slugify():
    assert slugify("Hello, World!") == "hello-world"
    assert slugify("  Plugin   Registry ") == "plugin-registry"


def test_extract_headings_in_order():
    content = "# Title\n\nText\n\n## Install\n\n### From Source\n"
    headings = extract_headings(content)

    assert [(h.level, h.text, h.id) for h in headings] == [
        (1, "Title", "title"),
        (2, "Install", "install"),
        (3, "From Source", "from-source"),
    ]


def test_first_title_heading_skips_lower_levels():
    assert first_title_heading("## Section\n\n# Real Title\n") == "Real Title"
    assert first_title_heading("No headings here.") is None


def test_humanize():
    assert humanize("getting-started.mdx") == "Getting Started"
    assert humanize("api_reference") == "Api Reference"


def test_strip_markdown():
    """Code, links and emphasis are reduced to prose."""
    text = "# Heading\n\nUse `code` and [the link](http://example.com) with **bold** text."
    assert strip_markdown(text) == "Use and the link with bold text."


class TestGenerateExcerpt:
    """Excerpt generation."""

    def test_whole_sentences_within_budget(self):
        assert generate_excerpt("First sentence. Second sentence.") == "First sentence. Second sentence."

    def test_stops_before_exceeding_budget(self):
        excerpt = generate_excerpt("Short one. " + "x" * 50 + ".", max_length=30)
        assert excerpt == "Short one."

    def test_hard_truncates_long_first_sentence(self):
        excerpt = generate_excerpt("a" * 300, max_length=160)
        assert excerpt == "a" * 160 + "..."

    def test_empty_content(self):
        assert generate_excerpt("") == ""
        assert generate_excerpt("# Only A Heading\n") == ""
