"""Tests for link, hashtag and code fence helpers."""

from mdtree.converter.links import (
    extract_external_links,
    extract_hashtags,
    extract_wiki_links,
    is_external,
    split_wikilink,
    strip_fenced_code,
)


class TestExtractWikiLinks:
    def test_simple_link(self) -> None:
        assert extract_wiki_links("See [[Simple Note]] for details") == ["Simple Note"]

    def test_link_with_alias(self) -> None:
        assert extract_wiki_links("See [[Note Title|alias]] here") == ["Note Title"]

    def test_link_with_heading_and_alias(self) -> None:
        assert extract_wiki_links("See [[Note Title#heading|alias]]") == ["Note Title"]

    def test_deduplication_keeps_first_seen_order(self) -> None:
        text = "[[B]] then [[A]] then [[B|again]]"
        assert extract_wiki_links(text) == ["B", "A"]

    def test_no_links(self) -> None:
        assert extract_wiki_links("") == []


class TestSplitWikilink:
    def test_target_only(self) -> None:
        assert split_wikilink("Page") == ("Page", "Page")

    def test_alias(self) -> None:
        assert split_wikilink("Target Page|Display") == ("Target Page", "Display")

    def test_section_dropped_from_target(self) -> None:
        assert split_wikilink("Page#Section") == ("Page", "Page")


class TestExternalLinks:
    def test_only_http_urls(self) -> None:
        text = "[site](https://example.com) [doc](docs/readme.md) [plain](http://x.org)"
        assert extract_external_links(text) == ["https://example.com", "http://x.org"]

    def test_images_are_not_links(self) -> None:
        assert extract_external_links("![alt](https://example.com/a.png)") == []

    def test_is_external(self) -> None:
        assert is_external("https://a.b")
        assert not is_external("mailto:me@example.com")


class TestExtractHashtags:
    def test_tags_after_whitespace(self) -> None:
        assert extract_hashtags("#start middle #project/sub end#not") == ["start", "project/sub"]

    def test_heading_marker_is_not_a_tag(self) -> None:
        assert extract_hashtags("# Heading\n## Sub") == []

    def test_case_sensitive_dedupe(self) -> None:
        assert extract_hashtags("#Tag #tag #Tag") == ["Tag", "tag"]


class TestStripFencedCode:
    def test_removes_block_and_fences(self) -> None:
        text = "before\n```python\n#notatag\n```\nafter"
        assert strip_fenced_code(text) == "before\nafter"

    def test_unclosed_fence_runs_to_end(self) -> None:
        assert strip_fenced_code("keep\n```\ngone\nalso gone") == "keep"

    def test_longer_fence_needs_matching_close(self) -> None:
        text = "````\n```\ninner\n````\nafter"
        assert strip_fenced_code(text) == "after"
