"""Link, hashtag and code-fence patterns shared by the converter."""

import re

# Match [[target]], [[target|alias]], [[target#heading]], [[target#heading|alias]]
WIKILINK_RE = re.compile(r"\[\[([^\]]+)\]\]")

# Match [text](url) but not ![alt](url)
LINK_RE = re.compile(r"(?<!!)\[([^\]]+)\]\(([^)]+)\)")

# Match #tag at the start of the text or after whitespace
HASHTAG_RE = re.compile(r"(?<!\S)#([\w/-]+)")

# Raw HTML tag, e.g. <br/> or <span class="x">
HTML_TAG_RE = re.compile(r"<[^>]+>")

# Opening/closing code fence: a run of 3+ backticks and an optional info string
FENCE_RE = re.compile(r"^(`{3,})\s*([^\s`]*)")

_EXTERNAL_SCHEMES = ("http://", "https://")


def is_external(url: str) -> bool:
    """True for http:// and https:// urls."""
    return url.startswith(_EXTERNAL_SCHEMES)


def split_wikilink(inner: str) -> tuple[str, str]:
    """Split the inside of a ``[[...]]`` into (target, display text).

    The ``#section`` suffix is dropped from the target; the alias after ``|``
    becomes the display text, otherwise the target is displayed.
    """
    target_part, _, alias = inner.partition("|")
    target = target_part.split("#", 1)[0].strip()
    display = alias.strip() or target or inner.strip()
    return target, display


def strip_fenced_code(text: str) -> str:
    """Remove fenced code blocks, fence lines included.

    Fences are recognized the way the block parser recognizes them, so an
    unclosed fence swallows the rest of the text.
    """
    kept: list[str] = []
    fence: str | None = None
    for line in text.split("\n"):
        stripped = line.strip()
        if fence is None:
            match = FENCE_RE.match(stripped)
            if match:
                fence = match.group(1)
                continue
            kept.append(line)
        elif stripped.startswith(fence):
            fence = None
    return "\n".join(kept)


def _dedupe(values: list[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result


def extract_wiki_links(text: str) -> list[str]:
    """Extract deduplicated [[wiki link]] targets in first-seen order."""
    return _dedupe([split_wikilink(m.group(1))[0] for m in WIKILINK_RE.finditer(text)])


def extract_external_links(text: str) -> list[str]:
    """Extract deduplicated http(s) urls from [text](url) links."""
    urls = (m.group(2).strip() for m in LINK_RE.finditer(text))
    return _dedupe([url for url in urls if is_external(url)])


def extract_hashtags(text: str) -> list[str]:
    """Extract deduplicated #hashtags (case-sensitive) in first-seen order."""
    return _dedupe([m.group(1) for m in HASHTAG_RE.finditer(text)])
