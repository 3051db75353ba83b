"""Trustpilot review scraper.

Trustpilot renders its listing with Next.js and ships the page data as JSON
in a ``<script id="__NEXT_DATA__">`` element. Reading that payload is faster
and more stable than parsing the rendered markup.

URL format: https://www.trustpilot.com/review/{company-domain}
Filtering: ?search={term}
Pagination: page=N
"""

from datetime import datetime

from loguru import logger
from pydantic import ValidationError

from tpscraper.core.base_scraper import BaseScraper
from tpscraper.core.extractor import RecordExtractor
from tpscraper.exceptions import ExtractionError
from tpscraper.models.payload import EmbeddedPayload, RawReview
from tpscraper.models.review import (
    MIN_REVIEW_TEXT_LENGTH,
    NOT_AVAILABLE,
    PageExtractionResult,
    Review,
)


def format_experience_date(value: str | None) -> str:
    """Format an ISO-8601 timestamp as e.g. 'January 5, 2024'."""
    if not value:
        return NOT_AVAILABLE
    try:
        date = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return NOT_AVAILABLE
    return f"{date:%B} {date.day}, {date.year}"


def format_rating(value: int | float | None) -> str:
    """Render a numeric rating as text ('5', '4.5')."""
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


class TrustpilotExtractor(RecordExtractor):
    """Extracts reviews from the ``__NEXT_DATA__`` payload of a Trustpilot page."""

    name = "trustpilot"
    payload_selector = "script#__NEXT_DATA__"
    consent_selector = (
        'button#onetrust-accept-btn-handler, button.cookie-consent-button, '
        'button[aria-label="Accept All Cookies"]'
    )

    def parse_payload(self, raw: str | None) -> PageExtractionResult:
        if raw is None:
            logger.debug(f"[{self.name}] No embedded payload on page")
            return PageExtractionResult.empty()

        try:
            payload = EmbeddedPayload.model_validate_json(raw)
        except ValidationError as e:
            raise ExtractionError(f"Malformed embedded payload: {e}") from e

        page_props = payload.page_props
        if page_props is None:
            return PageExtractionResult.empty()

        records = []
        skipped = 0
        for raw_review in page_props.reviews or []:
            review = self.parse_review(raw_review)
            if review is None:
                skipped += 1
                continue
            records.append(review)

        if skipped:
            logger.debug(f"[{self.name}] Skipped {skipped} reviews with too little text")

        try:
            return PageExtractionResult(records=records, total_pages=page_props.total_pages)
        except ValidationError as e:
            raise ExtractionError(f"Invalid pagination data: {e}") from e

    def parse_review(self, raw: RawReview) -> Review | None:
        """
        Normalize a raw review.

        Returns:
            Review, or None if the text is shorter than the minimum length
        """
        text = (raw.text or "").strip()
        if len(text) < MIN_REVIEW_TEXT_LENGTH:
            return None

        display_name = raw.consumer.display_name if raw.consumer else None
        experienced = raw.dates.experienced_date if raw.dates else None

        return Review(
            reviewer_name=(display_name or "").strip() or NOT_AVAILABLE,
            date_experience=format_experience_date(experienced),
            rating=format_rating(raw.rating),
            title=raw.title or NOT_AVAILABLE,
            review_text=text,
        )


class TrustpilotScraper(BaseScraper):
    """
    Scraper for Trustpilot company review listings.

    Usage:
        config = RunConfig.for_domain("example.com", max_records=50)
        async with TrustpilotScraper(config) as scraper:
            outcome = await scraper.scrape()
    """

    name = "trustpilot"

    def create_extractor(self) -> TrustpilotExtractor:
        return TrustpilotExtractor()
