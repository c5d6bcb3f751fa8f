"""Tests for metadata aggregation."""

from datetime import UTC, date, datetime, timedelta, timezone

from mdtree.converter.metadata import (
    aggregate_metadata,
    format_timestamp,
    frontmatter_aliases,
    frontmatter_tags,
    merge_unique,
    parse_timestamp,
)

NOW = datetime(2025, 6, 1, 8, 0, 0, tzinfo=UTC)
NOW_ISO = "2025-06-01T08:00:00.000Z"


class TestTimestamps:
    def test_format_millisecond_precision(self) -> None:
        value = datetime(2024, 1, 2, 3, 4, 5, 678901, tzinfo=UTC)
        assert format_timestamp(value) == "2024-01-02T03:04:05.678Z"

    def test_format_converts_to_utc(self) -> None:
        value = datetime(2024, 1, 1, 2, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(value) == "2024-01-01T00:00:00.000Z"

    def test_naive_treated_as_utc(self) -> None:
        assert format_timestamp(datetime(2024, 1, 1)) == "2024-01-01T00:00:00.000Z"

    def test_parse_date(self) -> None:
        assert parse_timestamp(date(2024, 1, 1)) == datetime(2024, 1, 1, tzinfo=UTC)

    def test_parse_iso_string(self) -> None:
        assert parse_timestamp("2024-05-06T07:08:09") == datetime(2024, 5, 6, 7, 8, 9, tzinfo=UTC)

    def test_format_pads_small_years(self) -> None:
        assert format_timestamp(datetime(99, 1, 1)) == "0099-01-01T00:00:00.000Z"

    def test_parse_offset_outside_range(self) -> None:
        assert parse_timestamp("0001-01-01T00:00:00+01:00") is None
        late = datetime(9999, 12, 31, 23, 59, 59, tzinfo=timezone(timedelta(hours=-5)))
        assert parse_timestamp(late) is None

    def test_parse_normalises_to_utc(self) -> None:
        value = datetime(2024, 1, 1, 2, 0, tzinfo=timezone(timedelta(hours=2)))
        assert parse_timestamp(value) == datetime(2024, 1, 1, tzinfo=UTC)
        assert parse_timestamp(value).tzinfo is UTC

    def test_parse_garbage(self) -> None:
        assert parse_timestamp("next tuesday") is None
        assert parse_timestamp(12) is None
        assert parse_timestamp("") is None


class TestFrontmatterFields:
    def test_tags_list(self) -> None:
        assert frontmatter_tags({"tags": ["a", "#b", 3]}) == ["a", "b", "3"]

    def test_tags_string(self) -> None:
        assert frontmatter_tags({"tags": "one, two three"}) == ["one", "two", "three"]

    def test_tags_missing(self) -> None:
        assert frontmatter_tags({}) == []

    def test_alias_and_aliases(self) -> None:
        assert frontmatter_aliases({"alias": "A", "aliases": ["B", "A"]}) == ["A", "B"]

    def test_merge_unique(self) -> None:
        assert merge_unique(["a", "b"], ["b", "c"], ["a"]) == ["a", "b", "c"]


class TestAggregateMetadata:
    def test_defaults(self) -> None:
        meta = aggregate_metadata("", {}, NOW)
        assert meta.title == "Untitled Note"
        assert meta.tags == []
        assert meta.wikilinks == []
        assert meta.word_count == 0
        assert meta.reading_time == 1
        assert meta.created_at == NOW_ISO
        assert meta.updated_at == NOW_ISO

    def test_frontmatter_dates(self) -> None:
        fm = {"created": date(2024, 1, 1), "modified": "2024-02-03T04:05:06Z"}
        meta = aggregate_metadata("body", fm, NOW)
        assert meta.created_at == "2024-01-01T00:00:00.000Z"
        assert meta.updated_at == "2024-02-03T04:05:06.000Z"

    def test_out_of_range_dates_use_now(self) -> None:
        fm = {
            "created": "0001-01-01T00:00:00+01:00",
            "modified": datetime(9999, 12, 31, 23, 59, 59, tzinfo=timezone(timedelta(hours=-5))),
        }
        meta = aggregate_metadata("body", fm, NOW)
        assert meta.created_at == NOW_ISO
        assert meta.updated_at == NOW_ISO

    def test_early_year_date(self) -> None:
        meta = aggregate_metadata("body", {"created": date(99, 1, 1)}, NOW)
        assert meta.created_at == "0099-01-01T00:00:00.000Z"

    def test_unparseable_date_uses_now(self) -> None:
        meta = aggregate_metadata("body", {"created": "someday"}, NOW)
        assert meta.created_at == NOW_ISO

    def test_tags_merge_frontmatter_first(self) -> None:
        body = "Text #inline and #a again"
        meta = aggregate_metadata(body, {"tags": ["a", "b"]}, NOW)
        assert meta.tags == ["a", "b", "inline"]

    def test_code_is_not_scanned(self) -> None:
        body = "```\n#hidden [[Hidden]] [x](https://hidden.example)\n```\n#shown [[Shown]]"
        meta = aggregate_metadata(body, {}, NOW)
        assert meta.tags == ["shown"]
        assert meta.wikilinks == ["Shown"]
        assert meta.external_links == []

    def test_links(self) -> None:
        body = "[[A|alias]] [[B#part]] [site](https://example.com) [local](notes.md)"
        meta = aggregate_metadata(body, {}, NOW)
        assert meta.wikilinks == ["A", "B"]
        assert meta.external_links == ["https://example.com"]

    def test_passthrough_keys(self) -> None:
        fm = {"title": "T", "status": "draft", "word_count": 999, "aliases": ["x"]}
        meta = aggregate_metadata("one two", fm, NOW)
        dumped = meta.model_dump()
        assert dumped["status"] == "draft"
        assert dumped["word_count"] == 2
        assert dumped["aliases"] == ["x"]
        assert meta.title == "T"

    def test_filename_title(self) -> None:
        meta = aggregate_metadata("plain body", {}, NOW, filename="ideas.md")
        assert meta.title == "ideas"
