"""Line-oriented front-matter parser.

Content files may start with a metadata block delimited by ``---`` lines.
Only flat fields are consumed, so the block is read as ``key: value`` pairs
rather than full YAML. Supported value forms:

- quoted or bare strings
- ``true`` / ``false`` / ``yes`` / ``no`` booleans
- integers
- inline lists: ``tags: [cli, setup]``
- block lists: ``tags:`` followed by ``- item`` lines
"""

import re
from typing import Any

DELIMITER = "---"

_KEY_VALUE_RE = re.compile(r"^([A-Za-z_][\w-]*)\s*:\s*(.*)$")
_LIST_ITEM_RE = re.compile(r"^\s*-\s+(.*)$")
_INT_RE = re.compile(r"^[+-]?\d+$")

_TRUE = {"true", "yes", "on"}
_FALSE = {"false", "no", "off"}


class FrontmatterError(ValueError):
    """Raised when a front-matter block cannot be parsed."""


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _strip_comment(value: str) -> str:
    # Only unquoted values can carry a trailing comment
    if value[:1] in ("'", '"'):
        return value
    return re.sub(r"\s+#.*$", "", value)


def parse_scalar(raw: str) -> Any:
    """Convert a raw front-matter value to str, bool, int, list or None."""
    value = _strip_comment(raw.strip())
    if not value:
        return None
    if value.startswith("[") and value.endswith("]"):
        inner = value[1:-1].strip()
        if not inner:
            return []
        return [_unquote(item) for item in inner.split(",") if _unquote(item)]
    if value[:1] in ("'", '"'):
        return _unquote(value)
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    if lowered in ("null", "~"):
        return None
    if _INT_RE.match(value):
        return int(value)
    return value


def parse_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split a content file into front-matter fields and body.

    Args:
        text: Full file contents.

    Returns:
        Tuple of (fields, body). Files without a leading ``---`` line return
        an empty dict and the unchanged text.

    Raises:
        FrontmatterError: If the block is not closed or contains a line that
            is neither a ``key: value`` pair nor a list item.
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != DELIMITER:
        return {}, text

    data: dict[str, Any] = {}
    current_list_key: str | None = None
    block_keys: set[str] = set()

    for number, line in enumerate(lines[1:], start=2):
        stripped = line.strip()
        if stripped == DELIMITER:
            for key in block_keys:
                if not data[key]:
                    # A bare "key:" with no list items is an empty value
                    data[key] = None
            body = "".join(lines[number:])
            return data, body
        if not stripped or stripped.startswith("#"):
            continue

        item = _LIST_ITEM_RE.match(line)
        if item and current_list_key is not None:
            value = _unquote(_strip_comment(item.group(1)))
            if value:
                data[current_list_key].append(value)
            continue

        pair = _KEY_VALUE_RE.match(stripped)
        if not pair:
            raise FrontmatterError(f"line {number}: expected 'key: value', got {stripped!r}")

        key, raw = pair.group(1), pair.group(2)
        value = parse_scalar(raw)
        if value is None and not raw.strip():
            # Possibly the header of a block list
            data[key] = []
            current_list_key = key
            block_keys.add(key)
        else:
            data[key] = value
            block_keys.discard(key)
            current_list_key = None

    raise FrontmatterError("front-matter block is missing its closing '---'")
