"""Exception hierarchy for the scraping engine."""

from typing import Any


class ScraperError(Exception):
    """Base class for all scraper errors."""


class ConfigurationError(ScraperError):
    """Invalid or missing run configuration (raised before any navigation)."""


class NavigationError(ScraperError):
    """Base class for navigation failures."""


class TransientNavigationError(NavigationError):
    """A single navigation attempt failed; the attempt may be retried."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class RetryExhaustedError(ScraperError):
    """Raised by the retry handler once every attempt has failed."""

    def __init__(self, label: str, attempts: int, last_error: BaseException):
        super().__init__(f"{label} failed after {attempts} attempts: {last_error}")
        self.label = label
        self.attempts = attempts
        self.last_error = last_error


class FatalNavigationError(NavigationError):
    """
    Navigation could not be completed within the retry budget.

    Carries the reviews accumulated before the failure so callers can
    still persist partial results.
    """

    def __init__(
        self,
        url: str,
        page: int,
        attempts: int,
        records: list[Any] | None = None,
        status: int | None = None,
    ):
        super().__init__(f"Failed to load page {page} ({url}) after {attempts} attempts")
        self.url = url
        self.page = page
        self.attempts = attempts
        self.records = list(records or [])
        self.status = status
        self.saved_files: list[Any] = []


class ExtractionError(ScraperError):
    """The embedded page payload could not be parsed."""


class DriverStartError(ScraperError):
    """The page driver could not be started."""


class ScrapeAbortedError(ScraperError):
    """
    An unexpected error ended the run.

    Like ``FatalNavigationError`` it carries the reviews accumulated before
    the failure and the files they were saved to. The original exception is
    chained as ``__cause__``.
    """

    def __init__(self, message: str, page: int, records: list[Any] | None = None):
        super().__init__(message)
        self.page = page
        self.records = list(records or [])
        self.saved_files: list[Any] = []


class StorageError(ScraperError):
    """A saved dataset could not be read back."""
