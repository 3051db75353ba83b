"""Site-specific scrapers."""

from tpscraper.scrapers.trustpilot import TrustpilotExtractor, TrustpilotScraper

__all__ = [
    "TrustpilotExtractor",
    "TrustpilotScraper",
]
