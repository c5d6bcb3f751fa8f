"""Markdown to structured document conversion."""

from mdtree.converter.blocks import parse_blocks
from mdtree.converter.document import convert_markdown, serialize_document
from mdtree.converter.frontmatter import split_frontmatter
from mdtree.converter.inline import parse_inline
from mdtree.converter.metadata import aggregate_metadata
from mdtree.converter.wordcount import count_words

__all__ = [
    "aggregate_metadata",
    "convert_markdown",
    "count_words",
    "parse_blocks",
    "parse_inline",
    "serialize_document",
    "split_frontmatter",
]
