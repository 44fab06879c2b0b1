"""Tests for the funnel copy chunk merger."""

from tedos.mergers.funnel_copy import (
    FUNNEL_PAGES,
    get_field_counts,
    merge_funnel_copy_chunks,
    validate_merged_funnel_copy,
)
from tests.fixtures_chunks import funnel_chunks


class TestMergeFunnelCopyChunks:
    def test_merges_four_pages(self):
        merged = merge_funnel_copy_chunks(*funnel_chunks())
        assert list(merged) == ["funnelCopy"]
        assert tuple(merged["funnelCopy"]) == FUNNEL_PAGES
        assert merged["funnelCopy"]["optinPage"]["cta_text"] == "Get Instant Access"

    def test_unwraps_funnel_copy(self):
        c1, c2, c3, c4 = funnel_chunks()
        merged = merge_funnel_copy_chunks({"funnelCopy": c1}, c2, c3, {"funnelCopy": c4})
        assert merged == merge_funnel_copy_chunks(c1, c2, c3, c4)

    def test_legacy_calendar_page(self):
        c1, c2, c3, c4 = funnel_chunks()
        legacy = {"calendarPage": c3["bookingPage"]}
        merged = merge_funnel_copy_chunks(c1, c2, legacy, c4)
        assert merged["funnelCopy"]["bookingPage"] == c3["bookingPage"]

    def test_missing_chunks_give_empty_pages(self):
        merged = merge_funnel_copy_chunks(None, None, None, None)
        assert merged == {"funnelCopy": {page: {} for page in FUNNEL_PAGES}}

    def test_field_counts(self):
        counts = get_field_counts(merge_funnel_copy_chunks(*funnel_chunks()))
        assert counts == {
            "optinPage": 4,
            "salesPage": 22,
            "bookingPage": 2,
            "thankYouPage": 5,
            "total": 33,
        }

    def test_field_counts_without_wrapper(self):
        assert get_field_counts({})["total"] == 0


class TestValidateMergedFunnelCopy:
    def test_complete(self):
        result = validate_merged_funnel_copy(merge_funnel_copy_chunks(*funnel_chunks()))
        assert result.valid
        assert result.issues == []
        assert result.warnings == []
        assert result.page_count == 4
        assert result.field_count == 33
        assert result.empty_field_count == 0

    def test_missing_wrapper_is_an_issue(self):
        result = validate_merged_funnel_copy({"optinPage": {}})
        assert not result.valid
        assert result.issues == ["Missing funnelCopy wrapper"]

    def test_missing_page_is_an_issue(self):
        merged = merge_funnel_copy_chunks(*funnel_chunks())
        del merged["funnelCopy"]["salesPage"]
        result = validate_merged_funnel_copy(merged)
        assert not result.valid
        assert result.issues == ["Missing salesPage"]
        assert result.page_count == 3

    def test_thin_and_empty_pages_are_warnings(self):
        c1, _, c3, c4 = funnel_chunks()
        c4["thankYouPage"] = {"headline": "Thanks"}
        result = validate_merged_funnel_copy(merge_funnel_copy_chunks(c1, None, c3, c4))

        assert result.valid
        assert result.issues == []
        assert "salesPage is empty" in result.warnings
        assert "thankYouPage has 1 fields (minimum: 5)" in result.warnings

    def test_empty_text_fields(self):
        c1, c2, c3, c4 = funnel_chunks()
        c1["optinPage"]["subheadline_text"] = ""
        c3["bookingPage"]["headline"] = "  "
        result = validate_merged_funnel_copy(merge_funnel_copy_chunks(c1, c2, c3, c4))

        assert result.valid
        assert result.empty_field_count == 2
        assert result.warnings == [
            "Found 2 empty text fields: optinPage.subheadline_text, bookingPage.headline"
        ]

    def test_calendar_embed_may_be_blank(self):
        result = validate_merged_funnel_copy(merge_funnel_copy_chunks(*funnel_chunks()))
        assert result.empty_field_count == 0

    def test_payload_uses_camel_case(self):
        payload = validate_merged_funnel_copy(merge_funnel_copy_chunks(*funnel_chunks())).to_payload()
        assert payload["pageCount"] == 4
        assert payload["emptyFieldCount"] == 0

    def test_idempotent(self):
        merged = merge_funnel_copy_chunks(*funnel_chunks()[:2], None, None)
        assert validate_merged_funnel_copy(merged) == validate_merged_funnel_copy(merged)
