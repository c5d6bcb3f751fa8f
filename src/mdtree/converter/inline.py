"""Inline span parser for a single line of markdown."""

import re
from dataclasses import dataclass

from mdtree.converter.links import HTML_TAG_RE, LINK_RE, WIKILINK_RE, is_external, split_wikilink
from mdtree.models import (
    BoldSpan,
    CodeSpan,
    ExternalLinkSpan,
    InternalLinkSpan,
    ItalicSpan,
    LinkSpan,
    Span,
    TextSpan,
)

_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")
_ITALIC_RE = re.compile(r"(?<!\*)\*([^*]+)\*(?!\*)")
_CODE_RE = re.compile(r"`([^`]+)`")


@dataclass(frozen=True)
class _Match:
    start: int
    end: int
    span: Span


def _collect_matches(line: str) -> list[_Match]:
    """Run one scan per construct and return the surviving matches by position."""
    matches: list[_Match] = [
        _Match(m.start(), m.end(), BoldSpan(content=m.group(1))) for m in _BOLD_RE.finditer(line)
    ]

    # Bold wins over italic: drop italics that start inside a bold match
    bold_ranges = [(m.start, m.end) for m in matches]
    for m in _ITALIC_RE.finditer(line):
        if not any(start <= m.start() < end for start, end in bold_ranges):
            matches.append(_Match(m.start(), m.end(), ItalicSpan(content=m.group(1))))

    for m in _CODE_RE.finditer(line):
        matches.append(_Match(m.start(), m.end(), CodeSpan(content=m.group(1))))

    for m in LINK_RE.finditer(line):
        text, url = m.group(1), m.group(2).strip()
        link: Span = (
            ExternalLinkSpan(text=text, url=url) if is_external(url) else LinkSpan(text=text, url=url)
        )
        matches.append(_Match(m.start(), m.end(), link))

    for m in WIKILINK_RE.finditer(line):
        target, display = split_wikilink(m.group(1))
        matches.append(_Match(m.start(), m.end(), InternalLinkSpan(text=display, target_note=target)))

    return sorted(matches, key=lambda match: match.start)


def parse_inline(line: str) -> list[Span]:
    """Parse one line into an ordered, non-overlapping list of spans.

    Gaps between recognized constructs become TextSpans. A line without any
    inline markup yields a single TextSpan with HTML tags removed; a blank
    line yields no spans.
    """
    matches = _collect_matches(line)
    if not matches:
        if not line.strip():
            return []
        return [TextSpan(content=HTML_TAG_RE.sub("", line))]

    spans: list[Span] = []
    cursor = 0
    for match in matches:
        if match.start < cursor:
            # Overlaps a match that was already emitted
            continue
        if match.start > cursor:
            spans.append(TextSpan(content=line[cursor : match.start]))
        spans.append(match.span)
        cursor = match.end

    if cursor < len(line):
        spans.append(TextSpan(content=line[cursor:]))
    return spans
