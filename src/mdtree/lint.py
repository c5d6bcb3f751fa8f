"""Pre-flight markdown linter.

The converter accepts any input; this module is what flags syntax problems
to the user before conversion, optionally with an automatic fix.
"""

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from mdtree.models import Autofix, Finding, MarkdownStats, ValidationReport

_MALFORMED_LINK_RE = re.compile(r"\[[^\]]*\]\([^)]*$")
_UNCLOSED_BRACKET_RE = re.compile(r"\[[^\]]*$")
_DEEP_HEADING_RE = re.compile(r"^(#{7,})\s")
_HEADING_NO_SPACE_RE = re.compile(r"^(#{1,6})([^#\s].*)")
_EMPTY_HEADING_RE = re.compile(r"^#{1,6}\s*$")
_UNORDERED_MARKER_RE = re.compile(r"^\s*([-*+])\s")
_IMAGE_NO_ALT_RE = re.compile(r"!\[\]\(([^)]+)\)")


@dataclass(frozen=True)
class SourceLine:
    number: int  # 1-based
    offset: int  # index of the first character in the full text
    text: str


def _split_lines(text: str) -> list[SourceLine]:
    lines: list[SourceLine] = []
    offset = 0
    for number, line in enumerate(text.split("\n"), start=1):
        lines.append(SourceLine(number=number, offset=offset, text=line))
        offset += len(line) + 1
    return lines


def check_fences(lines: list[SourceLine]) -> list[Finding]:
    fences = [line for line in lines if line.text.strip().startswith("```")]
    if len(fences) % 2 == 0:
        return []
    return [
        Finding(
            severity="error",
            message="Unclosed code block detected",
            suggestion="Add closing ``` to complete the code block",
        )
    ]


def check_links(lines: list[SourceLine]) -> list[Finding]:
    findings: list[Finding] = []
    for line in lines:
        if _MALFORMED_LINK_RE.search(line.text):
            findings.append(
                Finding(
                    severity="error",
                    message="Malformed link detected",
                    line=line.number,
                    suggestion="Ensure link syntax is [text](url) with closing parenthesis",
                )
            )
        if _UNCLOSED_BRACKET_RE.search(line.text):
            findings.append(
                Finding(
                    severity="error",
                    message="Unclosed link bracket",
                    line=line.number,
                    suggestion="Add closing ] bracket",
                )
            )
    return findings


def check_headings(lines: list[SourceLine]) -> list[Finding]:
    findings: list[Finding] = []
    for line in lines:
        deep = _DEEP_HEADING_RE.match(line.text)
        if deep:
            hashes = deep.group(1)
            findings.append(
                Finding(
                    severity="error",
                    message="Header nesting too deep (max 6 levels)",
                    line=line.number,
                    suggestion=f"Use {hashes[:6]} instead of {hashes}",
                )
            )

        no_space = _HEADING_NO_SPACE_RE.match(line.text)
        if no_space:
            old = no_space.group(0)
            findings.append(
                Finding(
                    severity="warning",
                    message="Header should have space after #",
                    line=line.number,
                    suggestion="Add space after # symbols",
                    autofix=Autofix(
                        old_text=old,
                        new_text=f"{no_space.group(1)} {no_space.group(2)}",
                        start_index=line.offset,
                        end_index=line.offset + len(old),
                    ),
                )
            )
    return findings


def check_empty_headings(lines: list[SourceLine]) -> list[Finding]:
    return [
        Finding(
            severity="warning",
            message="Empty header detected",
            line=line.number,
            suggestion="Add text content after the header",
        )
        for line in lines
        if _EMPTY_HEADING_RE.match(line.text)
    ]


def check_list_markers(lines: list[SourceLine]) -> list[Finding]:
    # Mixed - / * / + still convert to a single list; this only warns
    markers: set[str] = set()
    for line in lines:
        match = _UNORDERED_MARKER_RE.match(line.text)
        if match:
            markers.add(match.group(1))
    if len(markers) <= 1:
        return []
    return [
        Finding(
            severity="warning",
            message="Inconsistent list markers",
            suggestion="Use consistent markers (-, *, or +) for unordered lists",
        )
    ]


def check_image_alt_text(lines: list[SourceLine]) -> list[Finding]:
    findings: list[Finding] = []
    for line in lines:
        for match in _IMAGE_NO_ALT_RE.finditer(line.text):
            url = match.group(1)
            name = url.split("/")[-1].split(".")[0] or "image"
            start = line.offset + match.start()
            findings.append(
                Finding(
                    severity="warning",
                    message="Image missing alt text",
                    line=line.number,
                    suggestion="Add descriptive alt text: ![description](url)",
                    autofix=Autofix(
                        old_text=match.group(0),
                        new_text=f"![{name}]({url})",
                        start_index=start,
                        end_index=start + len(match.group(0)),
                    ),
                )
            )
    return findings


def check_trailing_whitespace(lines: list[SourceLine]) -> list[Finding]:
    findings: list[Finding] = []
    for line in lines:
        if line.text.endswith(" ") and line.text.strip():
            findings.append(
                Finding(
                    severity="warning",
                    message="Trailing whitespace",
                    line=line.number,
                    suggestion="Remove trailing spaces",
                    autofix=Autofix(
                        old_text=line.text,
                        new_text=line.text.rstrip(),
                        start_index=line.offset,
                        end_index=line.offset + len(line.text),
                    ),
                )
            )
    return findings


Rule = Callable[[list[SourceLine]], list[Finding]]

RULES: tuple[Rule, ...] = (
    check_fences,
    check_links,
    check_headings,
    check_empty_headings,
    check_list_markers,
    check_image_alt_text,
    check_trailing_whitespace,
)


def validate_markdown(text: str, rules: Iterable[Rule] = RULES) -> ValidationReport:
    """Run every rule over the text and split the findings by severity."""
    lines = _split_lines(text)
    findings = [finding for rule in rules for finding in rule(lines)]
    errors = [f for f in findings if f.severity == "error"]
    warnings = [f for f in findings if f.severity == "warning"]
    return ValidationReport(is_valid=not errors, errors=errors, warnings=warnings)


def apply_autofix(text: str, autofix: Autofix | None) -> str:
    """Replace the autofix range with its new text."""
    if autofix is None:
        return text
    return text[: autofix.start_index] + autofix.new_text + text[autofix.end_index :]


def apply_all_autofixes(text: str, findings: Iterable[Finding]) -> str:
    """Apply every available autofix, last position first so earlier offsets stay valid.

    A fix overlapping one that was already applied is skipped.
    """
    fixes = sorted(
        (f.autofix for f in findings if f.autofix is not None),
        key=lambda fix: fix.start_index,
        reverse=True,
    )
    boundary = len(text)
    for fix in fixes:
        if fix.end_index > boundary:
            continue
        text = apply_autofix(text, fix)
        boundary = fix.start_index
    return text


_ELEMENT_PATTERNS = (
    re.compile(r"^#+\s", re.MULTILINE),
    re.compile(r"^\s*[-*+]\s", re.MULTILINE),
    re.compile(r"^\s*\d+\.\s", re.MULTILINE),
    re.compile(r"\[.*?\]\(.*?\)"),
    re.compile(r"```[\s\S]*?```"),
    re.compile(r"`[^`]+`"),
    re.compile(r"^>\s", re.MULTILINE),
)


def markdown_stats(text: str) -> MarkdownStats:
    """Editor statistics on the raw text (no markup removal)."""
    return MarkdownStats(
        characters=len(text),
        words=len(text.split()),
        lines=len(text.split("\n")),
        elements=sum(len(pattern.findall(text)) for pattern in _ELEMENT_PATTERNS),
    )
