"""Aggregate note metadata from frontmatter and body text."""

import logging
import re
from datetime import UTC, date, datetime
from typing import Any

from mdtree.converter.frontmatter import extract_title
from mdtree.converter.links import (
    extract_external_links,
    extract_hashtags,
    extract_wiki_links,
    strip_fenced_code,
)
from mdtree.converter.wordcount import count_words, reading_time
from mdtree.models import NoteMetadata

logger = logging.getLogger(__name__)

# Frontmatter keys folded into computed fields instead of being passed through
CONSUMED_KEYS = frozenset({"title", "tags", "alias", "aliases", "created", "modified"})

CREATED_KEYS = ("created", "created_at")
UPDATED_KEYS = ("modified", "updated", "updated_at")

_TAG_SPLIT_RE = re.compile(r"[,\s]+")


def format_timestamp(value: datetime) -> str:
    """Format as UTC ISO-8601 with millisecond precision, e.g. 2024-01-01T00:00:00.000Z."""
    value = value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Any) -> datetime | None:
    """Interpret a frontmatter value as a point in time, normalised to UTC.

    Naive values are taken as UTC. Returns None for anything unparseable,
    including offsets that push the instant outside the datetime range.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    try:
        return parsed.astimezone(UTC)
    except (OverflowError, ValueError):
        return None


def _first_timestamp(frontmatter: dict[str, Any], keys: tuple[str, ...]) -> datetime | None:
    for key in keys:
        if key in frontmatter:
            parsed = parse_timestamp(frontmatter[key])
            if parsed is not None:
                return parsed
            logger.debug("Ignoring unparseable %s value: %r", key, frontmatter[key])
    return None


def _clean_tag(tag: str) -> str:
    return tag.strip().strip("\"'").strip().lstrip("#")


def frontmatter_tags(frontmatter: dict[str, Any]) -> list[str]:
    """Tags from the frontmatter ``tags`` field (list, or comma/space separated string)."""
    raw = frontmatter.get("tags")
    if raw is None:
        return []
    if isinstance(raw, list | tuple):
        candidates = [str(item) for item in raw if item is not None]
    else:
        candidates = _TAG_SPLIT_RE.split(str(raw))
    return [tag for tag in (_clean_tag(c) for c in candidates) if tag]


def frontmatter_aliases(frontmatter: dict[str, Any]) -> list[str]:
    aliases: list[str] = []
    for key in ("alias", "aliases"):
        raw = frontmatter.get(key)
        if raw is None:
            continue
        values = raw if isinstance(raw, list | tuple) else [raw]
        for value in values:
            text = str(value).strip()
            if text and text not in aliases:
                aliases.append(text)
    return aliases


def merge_unique(*groups: list[str]) -> list[str]:
    """Concatenate lists, dropping duplicates while keeping first-seen order."""
    merged: list[str] = []
    seen: set[str] = set()
    for group in groups:
        for value in group:
            if value not in seen:
                seen.add(value)
                merged.append(value)
    return merged


def aggregate_metadata(
    body: str,
    frontmatter: dict[str, Any],
    now: datetime,
    filename: str | None = None,
) -> NoteMetadata:
    """Build the metadata record for a note body.

    Args:
        body: Markdown with the frontmatter block already removed.
        frontmatter: Decoded frontmatter mapping.
        now: Fallback for created_at/updated_at when frontmatter has no usable date.
        filename: Optional source filename, used as a title fallback.
    """
    scannable = strip_fenced_code(body)

    words = count_words(body)
    created = _first_timestamp(frontmatter, CREATED_KEYS) or now
    updated = _first_timestamp(frontmatter, UPDATED_KEYS) or now

    passthrough = {
        key: value
        for key, value in frontmatter.items()
        if key not in CONSUMED_KEYS and key not in NoteMetadata.model_fields
    }

    return NoteMetadata(
        title=extract_title(body, frontmatter, filename),
        tags=merge_unique(frontmatter_tags(frontmatter), extract_hashtags(scannable)),
        aliases=frontmatter_aliases(frontmatter),
        wikilinks=extract_wiki_links(scannable),
        external_links=extract_external_links(scannable),
        word_count=words,
        reading_time=reading_time(words),
        created_at=format_timestamp(created),
        updated_at=format_timestamp(updated),
        **passthrough,
    )
