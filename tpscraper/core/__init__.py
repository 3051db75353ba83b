"""Core scraping engine components."""

from tpscraper.core.base_scraper import BaseScraper, ScrapeOutcome
from tpscraper.core.extractor import RecordExtractor
from tpscraper.core.page_driver import DocumentHandle, NavigationResponse, PageDriver
from tpscraper.core.playwright_driver import PlaywrightPageDriver
from tpscraper.core.retry_handler import RetryHandler
from tpscraper.core.traversal import (
    TerminationReason,
    TraversalController,
    TraversalResult,
    TraversalState,
)

__all__ = [
    "BaseScraper",
    "ScrapeOutcome",
    "RecordExtractor",
    "DocumentHandle",
    "NavigationResponse",
    "PageDriver",
    "PlaywrightPageDriver",
    "RetryHandler",
    "TerminationReason",
    "TraversalController",
    "TraversalResult",
    "TraversalState",
]
