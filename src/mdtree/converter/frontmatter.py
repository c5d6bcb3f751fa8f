"""Frontmatter extraction for markdown notes."""

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from frontmatter.default_handlers import YAMLHandler

logger = logging.getLogger(__name__)

_DELIMITER = "---"
_LEADING_BLANK_LINES_RE = re.compile(r"\A(?:[ \t]*\r?\n)+")
_H1_RE = re.compile(r"^#\s+(.+)$")
_HEADING_MARKER_RE = re.compile(r"^#+\s*")

_yaml_handler = YAMLHandler()


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split a leading ``---`` block off the text.

    The block must open on the very first line and close on a later line that
    is exactly ``---``; otherwise no frontmatter is extracted and the text is
    returned unchanged.

    Returns:
        (frontmatter, body) where body has leading blank lines removed.
    """
    lines = text.split("\n")
    if lines[0].rstrip("\r") != _DELIMITER:
        return {}, text

    for idx in range(1, len(lines)):
        if lines[idx].rstrip("\r") == _DELIMITER:
            block = "\n".join(lines[1:idx])
            rest = "\n".join(lines[idx + 1 :])
            return parse_frontmatter_block(block), _LEADING_BLANK_LINES_RE.sub("", rest)

    # No closing delimiter: treat the whole text as body
    return {}, text


def parse_frontmatter_block(block: str) -> dict[str, Any]:
    """Decode the text between the delimiters.

    YAML is tried first; if it fails or does not produce a mapping, the block
    is read line by line as simple ``key: value`` pairs.
    """
    try:
        data = _yaml_handler.load(block)
    except yaml.YAMLError:
        logger.debug("Frontmatter is not valid YAML, falling back to key: value lines")
        return _parse_simple(block)

    if data is None:
        return {}
    if not isinstance(data, dict):
        return _parse_simple(block)
    return {str(k): v for k, v in data.items()}


def _parse_simple(block: str) -> dict[str, Any]:
    """Best-effort ``key: value`` parsing; malformed lines are skipped."""
    result: dict[str, Any] = {}
    for line in block.splitlines():
        if not line.strip() or line[:1].isspace() or line.lstrip().startswith("#"):
            continue
        key, sep, value = line.partition(":")
        key = key.strip()
        if not sep or not key:
            continue
        result[key] = _parse_simple_value(value.strip())
    return result


def _parse_simple_value(value: str) -> str | list[str]:
    if value.startswith("[") and value.endswith("]"):
        items = (_strip_quotes(part.strip()) for part in value[1:-1].split(","))
        return [item for item in items if item]
    return _strip_quotes(value)


def _strip_quotes(value: str) -> str:
    return value.strip().strip("\"'").strip()


def extract_title(
    body: str, frontmatter: dict[str, Any], filename: str | None = None
) -> str:
    """Pick a display title for a note.

    Priority:
    1. Frontmatter 'title' field (strings only)
    2. First H1 heading in the body
    3. Filename without extension
    4. First line of the body, if short
    5. "Untitled Note"
    """
    title = frontmatter.get("title")
    if isinstance(title, str) and title.strip():
        return title.strip()

    for line in body.split("\n"):
        match = _H1_RE.match(line.strip())
        if match:
            return match.group(1).strip()

    if filename:
        return Path(filename).stem

    first_line = body.split("\n", 1)[0].strip()
    if first_line and len(first_line) < 100:
        stripped = _HEADING_MARKER_RE.sub("", first_line).strip()
        if stripped:
            return stripped

    return "Untitled Note"
