"""Line-oriented block parser."""

import re
from typing import Any

from mdtree.converter.inline import parse_inline
from mdtree.converter.links import FENCE_RE
from mdtree.models import (
    Block,
    Blockquote,
    CodeBlock,
    Heading,
    HorizontalRule,
    ListBlock,
    ListItem,
    Paragraph,
    TextSpan,
)

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
_HR_RE = re.compile(r"^(?:-{3,}|\*{3,}|_{3,})$")
_UNORDERED_RE = re.compile(r"^[-*+]\s+(.+)$")
_ORDERED_RE = re.compile(r"^\d+\.\s+(.+)$")


def _inline_fields(text: str) -> dict[str, Any]:
    """Store a single plain-text span as ``text``, anything richer as ``spans``."""
    spans = parse_inline(text)
    if len(spans) == 1 and isinstance(spans[0], TextSpan):
        return {"text": spans[0].content}
    return {"spans": spans}


class BlockParser:
    """Single-pass parser over the lines of a markdown body.

    The cursor only moves forward. Malformed input never raises: an unclosed
    fence runs to the end of the text and a list ends at the last line.
    """

    def __init__(self, body: str) -> None:
        self.lines = body.split("\n") if body else []
        self.pos = 0

    def parse(self) -> list[Block]:
        blocks: list[Block] = []
        while self.pos < len(self.lines):
            block = self._next_block()
            if block is not None:
                blocks.append(block)
        return blocks

    def _next_block(self) -> Block | None:
        line = self.lines[self.pos].strip()

        if not line:
            self.pos += 1
            return None

        heading = _HEADING_RE.match(line)
        if heading:
            self.pos += 1
            return Heading(level=len(heading.group(1)), text=heading.group(2).strip())

        fence = FENCE_RE.match(line)
        if fence:
            return self._code_block(fence.group(1), fence.group(2))

        if line.startswith(">"):
            self.pos += 1
            text = line[1:]
            if text.startswith(" "):
                text = text[1:]
            return Blockquote(text=text)

        if _HR_RE.match(line):
            self.pos += 1
            return HorizontalRule()

        if _UNORDERED_RE.match(line):
            return self._list(_UNORDERED_RE, ordered=False)

        if _ORDERED_RE.match(line):
            return self._list(_ORDERED_RE, ordered=True)

        self.pos += 1
        return Paragraph(**_inline_fields(line))

    def _code_block(self, fence: str, language: str) -> CodeBlock:
        self.pos += 1
        code_lines: list[str] = []
        while self.pos < len(self.lines):
            raw = self.lines[self.pos]
            self.pos += 1
            if raw.strip().startswith(fence):
                break
            code_lines.append(raw.rstrip("\r"))
        return CodeBlock(language=language or "text", code="\n".join(code_lines), fence=fence)

    def _list(self, pattern: re.Pattern[str], ordered: bool) -> ListBlock:
        # Any of -, * and + continue an unordered run; the marker itself is not kept
        items: list[ListItem] = []
        while self.pos < len(self.lines):
            line = self.lines[self.pos].strip()
            if not line:
                self.pos += 1
                continue
            match = pattern.match(line)
            if not match:
                break
            items.append(ListItem(**_inline_fields(match.group(1))))
            self.pos += 1
        return ListBlock(ordered=ordered, items=items)


def parse_blocks(body: str) -> list[Block]:
    """Parse a markdown body (frontmatter already removed) into blocks."""
    return BlockParser(body).parse()
