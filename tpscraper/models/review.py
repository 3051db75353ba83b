"""Review data model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

NOT_AVAILABLE = "N/A"
MIN_REVIEW_TEXT_LENGTH = 10


class Review(BaseModel):
    """
    One extracted review.

    Serialized with the camelCase keys of the output format
    (``reviewerName``, ``dateExperience``, ...). Every optional field falls
    back to ``"N/A"``; the review text is mandatory.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    reviewer_name: str = Field(default=NOT_AVAILABLE, alias="reviewerName")
    date_experience: str = Field(default=NOT_AVAILABLE, alias="dateExperience")
    rating: str = Field(default=NOT_AVAILABLE, description="Rating rendered as text")
    title: str = Field(default=NOT_AVAILABLE)
    review_text: str = Field(..., alias="reviewText")

    @field_validator("review_text")
    @classmethod
    def check_text_length(cls, v: str) -> str:
        """Reject reviews whose text is too short to be meaningful."""
        v = v.strip()
        if len(v) < MIN_REVIEW_TEXT_LENGTH:
            raise ValueError(
                f"Review text must be at least {MIN_REVIEW_TEXT_LENGTH} characters"
            )
        return v

    def to_export_dict(self) -> dict[str, Any]:
        """Convert to the JSON export format."""
        return self.model_dump(by_alias=True)


class PageExtractionResult(BaseModel):
    """Reviews and pagination metadata extracted from a single page."""

    records: list[Review] = Field(default_factory=list)
    total_pages: int = Field(default=0, ge=0)

    def __len__(self) -> int:
        return len(self.records)

    @classmethod
    def empty(cls) -> "PageExtractionResult":
        """Result for a page that carries no review data."""
        return cls(records=[], total_pages=0)
