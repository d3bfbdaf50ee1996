"""Tests for the front-matter parser."""

import pytest

from docsearch.engine.core.frontmatter import FrontmatterError, parse_frontmatter, parse_scalar


class TestParseFrontmatter:
    """Splitting a file into fields and body."""

    def test_scalar_and_list_fields(self):
        """Quoted strings, inline lists, block lists, bools and ints are parsed."""
        text = (
            "---\n"
            'title: "Hello: World"\n'
            "tags: [a, b]\n"
            "draft: true\n"
            "order: 3\n"
            "categories:\n"
            "  - one\n"
            "  - 'two'\n"
            "empty:\n"
            "---\n"
            "Body\n"
        )
        data, body = parse_frontmatter(text)

        assert data == {
            "title": "Hello: World",
            "tags": ["a", "b"],
            "draft": True,
            "order": 3,
            "categories": ["one", "two"],
            "empty": None,
        }
        assert body == "Body\n"

    def test_no_frontmatter_returns_text_unchanged(self):
        """Files without a leading delimiter have no fields."""
        data, body = parse_frontmatter("# Title\n\nText.\n")
        assert data == {}
        assert body == "# Title\n\nText.\n"

    def test_byte_order_mark_is_ignored(self):
        data, body = parse_frontmatter("\ufeff---\ntitle: A\n---\nx")
        assert data == {"title": "A"}
        assert body == "x"

    def test_trailing_comment_is_stripped(self):
        data, _ = parse_frontmatter("---\ntitle: Hello # internal note\n---\nx\n")
        assert data["title"] == "Hello"

    def test_missing_closing_delimiter_raises(self):
        with pytest.raises(FrontmatterError):
            parse_frontmatter("---\ntitle: Broken\n# Heading\n")

    def test_invalid_line_raises(self):
        """A line that is neither key: value nor a list item is rejected."""
        with pytest.raises(FrontmatterError):
            parse_frontmatter("---\ntitle: Fine\nthis is not valid\n---\nBody\n")


class TestParseScalar:
    """Scalar coercion."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("yes", True),
            ("Off", False),
            ("~", None),
            ("null", None),
            ("-5", -5),
            ("[]", []),
            ("'quoted # not a comment'", "quoted # not a comment"),
            ("2025-06-10", "2025-06-10"),
        ],
    )
    def test_values(self, raw, expected):
        assert parse_scalar(raw) == expected
