"""Tests for the Trustpilot record extractor."""

import asyncio
import json

import pytest

from tpscraper.exceptions import ExtractionError
from tpscraper.scrapers.trustpilot import (
    TrustpilotExtractor,
    format_experience_date,
    format_rating,
)


@pytest.fixture
def extractor():
    return TrustpilotExtractor()


class TestParsePayload:
    """Tests for TrustpilotExtractor.parse_payload."""

    def test_missing_payload_is_empty(self, extractor):
        """A page without embedded data is an empty result, not an error."""
        result = extractor.parse_payload(None)
        assert result.records == []
        assert result.total_pages == 0

    def test_missing_page_props_is_empty(self, extractor):
        """A payload without pageProps carries no reviews."""
        result = extractor.parse_payload(json.dumps({"props": {}}))
        assert result.records == []
        assert result.total_pages == 0

    def test_extracts_fields(self, extractor, make_payload, make_raw_review):
        """Fields are normalized into the review record."""
        result = extractor.parse_payload(make_payload([make_raw_review(1)], total_pages=7))

        assert result.total_pages == 7
        assert len(result.records) == 1
        review = result.records[0]
        assert review.reviewer_name == "Reviewer 1"
        assert review.date_experience == "January 5, 2024"
        assert review.rating == "5"
        assert review.title == "Title 1"
        assert review.review_text == "Review number 1 with enough text."

    def test_missing_fields_fall_back_to_na(self, extractor, make_payload):
        """Absent optional fields become 'N/A'."""
        result = extractor.parse_payload(make_payload([{"text": "Only the text is here."}]))

        review = result.records[0]
        assert review.reviewer_name == "N/A"
        assert review.date_experience == "N/A"
        assert review.rating == "N/A"
        assert review.title == "N/A"

    def test_blank_name_and_empty_title(self, extractor, make_payload, make_raw_review):
        """Whitespace-only names and empty titles fall back to 'N/A'."""
        raw = make_raw_review(1, consumer={"displayName": "   "}, title="")
        review = extractor.parse_payload(make_payload([raw])).records[0]
        assert review.reviewer_name == "N/A"
        assert review.title == "N/A"

    def test_short_text_is_filtered(self, extractor, make_payload, make_raw_review):
        """Reviews with less than 10 characters of text are dropped."""
        reviews = [
            make_raw_review(1, text="Too short"),
            make_raw_review(2),
            make_raw_review(3, text="   tiny     "),
            make_raw_review(4) | {"text": None},
            make_raw_review(5, text="Exactly 10"),
        ]
        result = extractor.parse_payload(make_payload(reviews))

        texts = [r.review_text for r in result.records]
        assert texts == ["Review number 2 with enough text.", "Exactly 10"]
        assert all(len(t) >= 10 for t in texts)

    def test_order_is_preserved(self, extractor, make_payload, make_raw_review):
        """Records keep the payload order."""
        result = extractor.parse_payload(make_payload([make_raw_review(i) for i in (3, 1, 2)]))
        assert [r.title for r in result.records] == ["Title 3", "Title 1", "Title 2"]

    def test_null_total_pages(self, extractor, make_payload, make_raw_review):
        """A null page count is treated as 0."""
        result = extractor.parse_payload(make_payload([make_raw_review(1)], total_pages=None))
        assert result.total_pages == 0

    @pytest.mark.parametrize("raw", [
        "{not json",
        "[]",
        json.dumps({"props": {"pageProps": {"reviews": "nope"}}}),
        json.dumps({"props": {"pageProps": {"reviews": [], "filters": {"pagination": {"totalPages": "many"}}}}}),
        json.dumps({"props": {"pageProps": {"reviews": [], "filters": {"pagination": {"totalPages": -1}}}}}),
    ])
    def test_malformed_payload_raises(self, extractor, raw):
        """Payloads that do not match the expected structure are extraction errors."""
        with pytest.raises(ExtractionError):
            extractor.parse_payload(raw)


class TestExtract:
    """Tests for the async document-level entry point."""

    def test_reads_next_data_script(self, extractor, make_document, make_page):
        """The extractor asks the document for the __NEXT_DATA__ script."""
        document = make_document(make_page(2, total_pages=3))
        result = asyncio.run(extractor.extract(document))

        assert document.selectors == ["script#__NEXT_DATA__"]
        assert len(result.records) == 2
        assert result.total_pages == 3


class TestFormatting:
    """Tests for the field formatting helpers."""

    @pytest.mark.parametrize("value,expected", [
        ("2024-01-05T00:00:00.000Z", "January 5, 2024"),
        ("2023-12-25T18:30:00+00:00", "December 25, 2023"),
        ("2024-03-10", "March 10, 2024"),
        ("last tuesday", "N/A"),
        ("", "N/A"),
        (None, "N/A"),
    ])
    def test_experience_date(self, value, expected):
        assert format_experience_date(value) == expected

    @pytest.mark.parametrize("value,expected", [
        (5, "5"),
        (4.0, "4"),
        (4.5, "4.5"),
        (0, "0"),
        (None, "N/A"),
    ])
    def test_rating(self, value, expected):
        assert format_rating(value) == expected
