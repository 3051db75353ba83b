"""Data models for the review scraper."""

from tpscraper.models.payload import EmbeddedPayload, RawReview
from tpscraper.models.review import PageExtractionResult, Review
from tpscraper.models.run_config import DelayWindow, RunConfig

__all__ = [
    "EmbeddedPayload",
    "RawReview",
    "PageExtractionResult",
    "Review",
    "DelayWindow",
    "RunConfig",
]
