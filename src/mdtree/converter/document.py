"""Assemble blocks and metadata into a conversion result."""

import json
import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime

from mdtree.converter.blocks import parse_blocks
from mdtree.converter.frontmatter import split_frontmatter
from mdtree.converter.metadata import aggregate_metadata
from mdtree.models import ConversionResult, ConversionStats, Document

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


def serialize_document(document: Document, indent: int | None = 2) -> str:
    """Serialize a document tree to JSON using its public field names."""
    payload = document.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(payload, indent=indent, ensure_ascii=False)


def format_size(serialized: str) -> str:
    size = len(serialized.encode("utf-8"))
    return f"{size / 1024:.1f} KB"


def format_duration(seconds: float) -> str:
    return f"{seconds:.3f}s"


def convert_markdown(
    text: str,
    clock: Clock | None = None,
    filename: str | None = None,
) -> ConversionResult:
    """Convert markdown (optionally with frontmatter) into a structured document.

    Never raises on string input; malformed markdown degrades to the closest
    reasonable structure.

    Args:
        text: Raw markdown text, possibly empty.
        clock: Source of the current time for default created/updated
            timestamps. Defaults to the system clock in UTC.
        filename: Optional source filename, used as a title fallback.

    Returns:
        The document tree, display statistics, and metadata.
    """
    started = time.perf_counter()
    now = (clock or utc_now)()

    frontmatter, body = split_frontmatter(text)
    blocks = parse_blocks(body)
    metadata = aggregate_metadata(body, frontmatter, now, filename=filename)

    document = Document(children=blocks)
    stats = ConversionStats(
        elements=len(blocks),
        json_size=format_size(serialize_document(document)),
        process_time=format_duration(time.perf_counter() - started),
    )
    logger.debug(
        "Converted %d chars into %d blocks (%d words)",
        len(text),
        stats.elements,
        metadata.word_count,
    )
    return ConversionResult(document=document, stats=stats, metadata=metadata)
