"""Base class for page record extractors."""

from abc import ABC, abstractmethod

from tpscraper.core.page_driver import DocumentHandle
from tpscraper.models.review import PageExtractionResult


class RecordExtractor(ABC):
    """
    Pulls reviews and pagination metadata out of a rendered page.

    Subclasses name the element holding the embedded payload and implement
    ``parse_payload``. A page without payload is a valid empty result; a
    payload that cannot be parsed raises ``ExtractionError``.
    """

    name: str = "extractor"
    payload_selector: str = ""
    consent_selector: str | None = None

    async def extract(self, document: DocumentHandle) -> PageExtractionResult:
        """Extract the reviews of a rendered page."""
        raw = await document.extract_embedded(self.payload_selector)
        return self.parse_payload(raw)

    @abstractmethod
    def parse_payload(self, raw: str | None) -> PageExtractionResult:
        """
        Parse the raw embedded payload of one page.

        Args:
            raw: Payload text, or None when the page has no payload element

        Returns:
            Reviews in payload order plus the total page count
        """
        pass
