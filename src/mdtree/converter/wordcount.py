"""Word counting on markdown with syntax removed."""

import math
import re

from mdtree.converter.links import HTML_TAG_RE, WIKILINK_RE, split_wikilink, strip_fenced_code

WORDS_PER_MINUTE = 200

_INLINE_CODE_RE = re.compile(r"`[^`]*`")
_IMAGE_RE = re.compile(r"!\[[^\]]*\]\([^)]*\)")
_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]*\)")
_BLOCKQUOTE_RE = re.compile(r"^\s*>\s?", re.MULTILINE)
_HEADING_RE = re.compile(r"^\s{0,3}#{1,6}\s+", re.MULTILINE)
_UNORDERED_RE = re.compile(r"^\s*[-*+]\s+", re.MULTILINE)
_ORDERED_RE = re.compile(r"^\s*\d+\.\s+", re.MULTILINE)
_EMPHASIS_RE = re.compile(r"[*_~]")
_WHITESPACE_RE = re.compile(r"\s+")
_WORD_CHAR_RE = re.compile(r"\w")


def strip_markdown(text: str) -> str:
    """Reduce markdown to its visible words.

    The steps run in a fixed order; e.g. links are unwrapped before list
    markers are removed, so a link inside a list item keeps its text.
    """
    text = strip_fenced_code(text)
    text = _INLINE_CODE_RE.sub(" ", text)
    text = _IMAGE_RE.sub(" ", text)
    text = _LINK_RE.sub(r"\1", text)
    text = WIKILINK_RE.sub(lambda m: split_wikilink(m.group(1))[1], text)
    text = _BLOCKQUOTE_RE.sub("", text)
    text = _HEADING_RE.sub("", text)
    text = _UNORDERED_RE.sub("", text)
    text = _ORDERED_RE.sub("", text)
    text = _EMPHASIS_RE.sub("", text)
    text = HTML_TAG_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def count_words(text: str) -> int:
    """Count words in markdown text.

    Tokens made only of punctuation (left over once markup is removed) are
    not words.
    """
    cleaned = strip_markdown(text)
    if not cleaned:
        return 0
    return sum(1 for token in cleaned.split(" ") if _WORD_CHAR_RE.search(token))


def reading_time(word_count: int) -> int:
    """Minutes to read at WORDS_PER_MINUTE, never less than one."""
    return max(1, math.ceil(word_count / WORDS_PER_MINUTE))
