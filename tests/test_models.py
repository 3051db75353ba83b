"""Tests for data models."""

import pytest
from pydantic import ValidationError

from tpscraper.models.review import NOT_AVAILABLE, PageExtractionResult, Review


class TestReview:
    """Tests for the Review model."""

    def test_defaults_to_not_available(self):
        """Optional fields default to 'N/A'."""
        review = Review(review_text="Solid product overall.")
        assert review.reviewer_name == NOT_AVAILABLE
        assert review.date_experience == NOT_AVAILABLE
        assert review.rating == NOT_AVAILABLE
        assert review.title == NOT_AVAILABLE

    def test_accepts_aliases(self):
        """Reviews can be built from the exported camelCase keys."""
        review = Review(
            reviewerName="Jane",
            dateExperience="March 1, 2024",
            rating="4",
            title="Fine",
            reviewText="Worked as advertised.",
        )
        assert review.reviewer_name == "Jane"
        assert review.review_text == "Worked as advertised."

    def test_export_dict(self):
        """Export uses the camelCase output keys in field order."""
        export = Review(reviewer_name="Jane", review_text="Worked as advertised.").to_export_dict()
        assert list(export) == ["reviewerName", "dateExperience", "rating", "title", "reviewText"]

    def test_text_is_trimmed(self):
        assert Review(review_text="   padded review text   ").review_text == "padded review text"

    @pytest.mark.parametrize("text", ["", "short", "   nine 9   "])
    def test_short_text_rejected(self, text):
        """Text shorter than 10 characters after trimming is rejected."""
        with pytest.raises(ValidationError):
            Review(review_text=text)

    def test_frozen_and_hashable(self):
        review = Review(review_text="Worked as advertised.")
        with pytest.raises(ValidationError):
            review.title = "Changed"
        assert review == Review(review_text="Worked as advertised.")
        assert len({review, Review(review_text="Worked as advertised.")}) == 1


class TestPageExtractionResult:
    """Tests for PageExtractionResult."""

    def test_empty(self):
        result = PageExtractionResult.empty()
        assert len(result) == 0
        assert result.total_pages == 0

    def test_negative_total_pages_rejected(self):
        with pytest.raises(ValidationError):
            PageExtractionResult(total_pages=-1)
